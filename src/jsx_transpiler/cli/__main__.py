"""
Main Entry Point for the jsx-transpiler CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `jsx_transpiler.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from jsx_transpiler.cli import commands
from jsx_transpiler import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="jsx-transpiler: Markup-in-JavaScript to plain JavaScript")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Transpile a .jsx file, a directory, or stdin")
  cmd_conv.add_argument("path", help="Input file, directory, or '-' for stdin")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument("--factory", default=None, help="Element factory callee (default: from toml)")
  cmd_conv.add_argument("--spread-helper", default=None, help="Spread merge callee (default: from toml)")
  cmd_conv.add_argument(
    "--no-display-name",
    action="store_false",
    dest="display_name",
    default=None,
    help="Do not inject display names into class factory calls (Overrides config)",
  )
  cmd_conv.add_argument(
    "--module",
    action="store_const",
    const="module",
    dest="source_type",
    default=None,
    help="Parse input as an ES module instead of a script",
  )
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace (phases, fragments) to a JSON file."
  )
  cmd_conv.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

  args = parser.parse_args(argv)

  if args.command == "convert":
    return commands.handle_convert(
      args.path,
      args.out,
      factory=args.factory,
      spread_helper=args.spread_helper,
      display_name=args.display_name,
      source_type=args.source_type,
      json_trace_path=args.json_trace,
      verbose=args.verbose,
    )

  return 0


if __name__ == "__main__":
  sys.exit(main())
