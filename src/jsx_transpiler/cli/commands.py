"""
CLI Command Handlers Facade.

Re-exports handlers from `jsx_transpiler.cli.handlers` so the dispatcher and
tests have one place to patch.
"""

from jsx_transpiler.cli.handlers.convert import (
  handle_convert,
  _convert_single_file,
  _print_batch_summary,
)

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
]
