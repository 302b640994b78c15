"""
Markup Core Package.

Lexer, parser and node definitions for the embedded tag language. This
package has no knowledge of JavaScript beyond locating the end of a
brace-delimited embedded expression.
"""

from jsx_transpiler.core.markup.nodes import Attr, AttrKind, Element, EmbeddedCode, Node, Text
from jsx_transpiler.core.markup.tokens import Token, TokenKind
from jsx_transpiler.core.markup.lexer import MarkupLexer
from jsx_transpiler.core.markup.parser import MarkupParser, parse_fragment

__all__ = [
  "Attr",
  "AttrKind",
  "Element",
  "EmbeddedCode",
  "MarkupLexer",
  "MarkupParser",
  "Node",
  "Text",
  "Token",
  "TokenKind",
  "parse_fragment",
]
