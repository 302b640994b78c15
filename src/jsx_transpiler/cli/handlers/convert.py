"""
Convert Command Handler.

This module implements the logic for the `jsx-transpiler convert` command.
It orchestrates:
1. Configuration loading (pyproject.toml plus CLI overrides).
2. Transpilation of stdin, a single file, or a directory of ``.jsx`` files.
3. Output writing and trace logging.
"""

import json
import sys
from pathlib import Path
from typing import Dict, Optional

from rich.table import Table

from jsx_transpiler.config import RuntimeConfig
from jsx_transpiler.core.engine import TranspileEngine
from jsx_transpiler.core.conversion_result import ConversionResult
from jsx_transpiler.core.tracer import TraceEventType
from jsx_transpiler.utils.console import (
  console,
  log_info,
  log_success,
  log_error,
  log_warning,
  set_verbose,
)

STDIN_MARKER = "-"
SOURCE_GLOB = "*.jsx"
OUTPUT_SUFFIX = ".js"


def handle_convert(
  input_path: str,
  output_path: Optional[Path],
  factory: Optional[str] = None,
  spread_helper: Optional[str] = None,
  display_name: Optional[bool] = None,
  source_type: Optional[str] = None,
  json_trace_path: Optional[Path] = None,
  verbose: bool = False,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: A file, a directory, or ``-`` to read from stdin.
      output_path: Where generated code is saved. Required for directories.
      factory: Override for the element factory callee.
      spread_helper: Override for the spread helper callee.
      display_name: False disables display name injection.
      source_type: 'module' to parse ES modules.
      json_trace_path: Optional path to dump execution trace JSON.
      verbose: Enables debug logging.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  set_verbose(verbose)

  from_stdin = input_path == STDIN_MARKER
  path = Path.cwd() if from_stdin else Path(input_path)
  if not path.exists():
    log_error(f"Input not found: {path}")
    return 1

  try:
    config = _load_config(path if path.is_dir() else path.parent, factory, spread_helper, display_name, source_type)
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1
  engine = TranspileEngine(config)

  if from_stdin:
    result = _convert_text(sys.stdin.read(), "<stdin>", output_path, engine, json_trace_path)
    return 0 if result.success else 1

  if path.is_file():
    result = _convert_single_file(path, output_path, engine, json_trace_path)
    return 0 if result.success else 1

  if not output_path:
    log_error("Directory conversion requires --out destination directory.")
    return 1

  jsx_files = sorted(path.rglob(SOURCE_GLOB))
  if not jsx_files:
    log_warning(f"No {SOURCE_GLOB} files found in {path}")
    return 0

  log_info(f"Processing {len(jsx_files)} files from {path}...")

  batch_results: Dict[str, ConversionResult] = {}
  for src_file in jsx_files:
    rel_path = src_file.relative_to(path)
    dest_file = (output_path / rel_path).with_suffix(OUTPUT_SUFFIX)
    batch_trace = (output_path / rel_path).with_suffix(".trace.json") if json_trace_path else None
    batch_results[str(rel_path)] = _convert_single_file(src_file, dest_file, engine, batch_trace)

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _load_config(
  search_path: Path,
  factory: Optional[str],
  spread_helper: Optional[str],
  display_name: Optional[bool],
  source_type: Optional[str],
) -> RuntimeConfig:
  return RuntimeConfig.load(
    element_factory=factory,
    spread_helper=spread_helper,
    annotate_display_names=display_name,
    source_type=source_type,
    search_path=search_path,
  )


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: TranspileEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute transpilation logic on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Prints to stdout if None.
      engine: Configured engine.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])
  return _convert_text(code, str(input_path), output_path, engine, json_trace_path)


def _convert_text(
  code: str,
  label: str,
  output_path: Optional[Path],
  engine: TranspileEngine,
  json_trace_path: Optional[Path],
) -> ConversionResult:
  result = engine.run(code)

  if json_trace_path and result.trace_events:
    _write_trace(result, json_trace_path)

  if not result.success:
    log_error(f"Failed to convert {label}: {result.errors[0]}")
    return result

  if output_path:
    try:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
    except OSError as e:
      log_error(f"Failed to write {output_path}: {e}")
      return ConversionResult(success=False, errors=[str(e)], trace_events=result.trace_events)
    log_success(f"Transpiled: [path]{label}[/path] -> [path]{output_path}[/path]")
  else:
    sys.stdout.write(result.code)

  return result


def _write_trace(result: ConversionResult, json_trace_path: Path) -> None:
  try:
    json_trace_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_trace_path, "wt", encoding="utf-8") as f:
      json.dump(result.trace_events, f, indent=2)
    log_info(f"Trace saved to [path]{json_trace_path}[/path]")
  except OSError as e:
    log_error(f"Failed to write trace: {e}")


def _count_fragments(result: ConversionResult) -> int:
  return sum(1 for event in result.trace_events if event.get("type") == TraceEventType.FRAGMENT)


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Prints a summary table of the batch conversion.

  Args:
      results: Mapping of relative file paths to their conversion results.
  """
  table = Table(title="Batch Conversion Summary")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Fragments", justify="right")
  table.add_column("Details", style="dim")

  for fname, res in results.items():
    if res.success:
      status = "[green]Success[/green]"
      details = ""
    else:
      status = "[red]Failed[/red]"
      details = res.errors[0] if res.errors else "Unknown error"
    table.add_row(fname, status, str(_count_fragments(res)), details)

  console.print(table)
