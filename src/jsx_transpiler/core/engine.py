"""
Orchestration Engine for Markup Transpilation.

This module provides the `TranspileEngine`, the driver for one full pass over a
JavaScript source that may contain markup fragments.

The pipeline consists of:

1.  **Host Parse**: The source is parsed with esprima. Each failure carrying the
    markup signature is measured by the markup parser and masked, so the
    parse always yields a complete tree (or a `HostParseError`).
2.  **Short Circuit**: If the first parse succeeded, the input is returned
    unchanged.
3.  **Boundary Walk**: `BoundaryDetector` walks the tree once, replacing each
    fragment with generated calls and injecting display names.
4.  **Re-entry**: Embedded expressions inside fragments are transpiled through
    `transpile_expression`, recursively, as plain nested calls.

Every failure aborts the whole call; a failed run never yields partial output.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from jsx_transpiler.config import RuntimeConfig
from jsx_transpiler.core.annotator import DisplayNameAnnotator
from jsx_transpiler.core.conversion_result import ConversionResult
from jsx_transpiler.core.detector import BoundaryDetector
from jsx_transpiler.core.errors import InternalError, TranspileError
from jsx_transpiler.core.generator import CodeGenerator
from jsx_transpiler.core.host import HostParser
from jsx_transpiler.core.markup.parser import is_empty_expression, parse_fragment
from jsx_transpiler.core.tracer import TraceLogger

logger = logging.getLogger(__name__)

_EXPR_OPEN = "("
_EXPR_CLOSE = "\n)"


def measure_fragment(source: str, index: int) -> int:
  """
  Returns the end offset of the markup fragment starting at `index`.

  Args:
      source (str): The full host source.
      index (int): Offset of the fragment's ``<``.

  Returns:
      int: Offset just past the fragment's last token.

  Raises:
      LexError, ParseError: If the fragment is malformed.
  """
  return index + parse_fragment(source, index).last_pos


class TranspileEngine:
  """
  The main transpilation unit.

  Holds only configuration; every call builds its own parser, walker and trace
  state, so an engine can be reused freely.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration. Defaults apply if None.
    """
    self.config = config or RuntimeConfig()

  def transpile_source(self, code: str, tracer: Optional[TraceLogger] = None) -> str:
    """
    Transpiles a complete JavaScript program.

    Args:
        code (str): Source possibly containing markup.
        tracer (TraceLogger, optional): Collects trace events for this call.

    Returns:
        str: Pure JavaScript.

    Raises:
        TranspileError: On the first failure encountered.
    """
    return self._transpile(code, tracer or TraceLogger())

  def transpile_expression(self, code: str, tracer: Optional[TraceLogger] = None) -> str:
    """
    Transpiles an embedded expression taken from inside a fragment.

    The expression is parsed in parenthesized form so that object literals and
    other expression-only syntax are read correctly.

    Args:
        code (str): Raw expression source.
        tracer (TraceLogger, optional): Collects trace events for this call.

    Returns:
        str: Pure JavaScript, or an empty string for an empty expression.
    """
    if is_empty_expression(code):
      return ""
    out = self._transpile(_EXPR_OPEN + code + _EXPR_CLOSE, tracer or TraceLogger())
    if not (out.startswith(_EXPR_OPEN) and out.endswith(_EXPR_CLOSE)):
      raise InternalError(f"embedded expression lost its delimiters: {code!r}")
    return out[len(_EXPR_OPEN) : -len(_EXPR_CLOSE)]

  def transpile_file(self, path: Union[str, Path], tracer: Optional[TraceLogger] = None) -> str:
    """
    Reads a UTF-8 file and transpiles its content.

    Args:
        path: The file to read.
        tracer (TraceLogger, optional): Collects trace events for this call.

    Returns:
        str: Pure JavaScript.
    """
    with open(path, "rt", encoding="utf-8") as f:
      code = f.read()
    return self.transpile_source(code, tracer)

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full pipeline, capturing failures in the result.

    Args:
        code (str): The input source string.

    Returns:
        ConversionResult: Either the output code or the first error, plus the trace.
    """
    tracer = TraceLogger()
    try:
      output = self.transpile_source(code, tracer)
    except TranspileError as e:
      logger.debug("Transpilation failed: %s", e)
      return ConversionResult(code="", errors=[str(e)], success=False, trace_events=tracer.export())
    return ConversionResult(code=output, trace_events=tracer.export())

  def _transpile(self, code: str, tracer: TraceLogger) -> str:
    tracer.start_phase("Host Parse", f"{len(code)} characters")
    try:
      result = HostParser(self.config.source_type, measure=measure_fragment).parse(code)
    finally:
      tracer.end_phase()

    if result.ok:
      return code

    tracer.start_phase("Boundary Walk", f"{len(result.spans)} fragment(s)")
    try:
      generator = CodeGenerator(
        self.config.element_factory,
        self.config.spread_helper,
        retranspile=lambda expr: self.transpile_expression(expr, tracer),
      )
      annotator = None
      if self.config.annotate_display_names:
        annotator = DisplayNameAnnotator(self.config.class_factory, self.config.display_name_key, tracer)
      return BoundaryDetector(result, generator, annotator, tracer).run()
    finally:
      tracer.end_phase()


def transpile_source(text: str, config: Optional[RuntimeConfig] = None) -> str:
  """Transpiles `text` with a fresh engine. See `TranspileEngine.transpile_source`."""
  return TranspileEngine(config).transpile_source(text)


def transpile_file(path: Union[str, Path], config: Optional[RuntimeConfig] = None) -> str:
  """Transpiles the file at `path` with a fresh engine. See `TranspileEngine.transpile_file`."""
  return TranspileEngine(config).transpile_file(path)
