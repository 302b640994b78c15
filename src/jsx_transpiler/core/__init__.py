"""
Core Package.

Contains the transpilation logic:
- Markup lexer, parser and nodes
- Host parser collaborator (esprima with fragment recovery)
- Boundary detector, code generator and display name annotator
- Transpile Engine
"""
