"""
Entry point for module execution (``python -m jsx_transpiler``).

This module delegates execution to the CLI handler in ``jsx_transpiler.cli.__main__``.
"""

import sys
from jsx_transpiler.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
