"""
Boundary Detector.

Walks the host syntax tree in source order and rewrites the source through a
single `SpliceWriter`. Two independent policies share the traversal:

1. **Fragment substitution**: a placeholder node whose position coincides with
   a markup-signature parse error marks a fragment. The fragment is re-parsed
   on its own, the generated call expression is written in its place, and the
   cursor resumes at the end the markup parser reports.
2. **Display name annotation**: delegated to `DisplayNameAnnotator` for every
   node the walk reaches.

Sharing one cursor keeps both kinds of edit in strict source order.
"""

import logging
from typing import Any, Dict, Optional

from jsx_transpiler.core.annotator import DisplayNameAnnotator
from jsx_transpiler.core.errors import InternalError
from jsx_transpiler.core.generator import CodeGenerator
from jsx_transpiler.core.host import BoundarySpan, HostParseResult, child_nodes, is_markup_start, line_column
from jsx_transpiler.core.markup.parser import parse_fragment
from jsx_transpiler.core.splice import SpliceWriter
from jsx_transpiler.core.tracer import TraceLogger

logger = logging.getLogger(__name__)


class BoundaryDetector:
  """
  Produces the final source for one host parse result.

  Attributes:
      result (HostParseResult): Tree, errors and recovered spans of the input.
      generator (CodeGenerator): Lowers parsed fragments to call expressions.
      annotator (Optional[DisplayNameAnnotator]): Display name policy, if enabled.
  """

  def __init__(
    self,
    result: HostParseResult,
    generator: CodeGenerator,
    annotator: Optional[DisplayNameAnnotator] = None,
    tracer: Optional[TraceLogger] = None,
  ) -> None:
    self.result = result
    self.generator = generator
    self.annotator = annotator
    self.tracer = tracer
    self.writer = SpliceWriter(result.source)
    self._spans: Dict[int, BoundarySpan] = {span.recovered_from: span for span in result.spans}
    self._substituted = 0

  def run(self) -> str:
    """
    Rewrites the source.

    Returns:
        str: The input unchanged if it parsed cleanly, otherwise the spliced output.

    Raises:
        LexError, ParseError: If a fragment fails to re-parse.
        InternalError: If a recovered fragment was never reached by the walk.
    """
    if self.result.ok:
      return self.result.source

    self._visit(self.result.program)
    if self._substituted != len(self.result.spans):
      raise InternalError(f"{len(self.result.spans)} fragments recovered but {self._substituted} substituted")
    return self.writer.finish()

  def _visit(self, node: Any) -> None:
    span = self._candidate(node)
    if span is not None:
      self._substitute(span)
      return
    if self.annotator is not None:
      self.annotator.visit(node, self.writer)
    for child in child_nodes(node):
      self._visit(child)

  def _candidate(self, node: Any) -> Optional[BoundarySpan]:
    if node.type != "Literal":
      return None
    span = self._spans.get(node.range[0])
    if span is None:
      return None
    line, column = line_column(self.result.source, node.range[0])
    for error in self.result.errors:
      if error.line == line and error.column == column and is_markup_start(error):
        return span
    return None

  def _substitute(self, span: BoundarySpan) -> None:
    source = self.result.source
    parser = parse_fragment(source, span.recovered_from)
    code = self.generator.generate(parser.root)
    end = span.recovered_from + parser.last_pos

    self.writer.copy_until(span.recovered_from)
    self.writer.insert(code)
    self.writer.skip_to(end)
    self._substituted += 1

    logger.debug("Substituted fragment %d..%d", span.recovered_from, end)
    if self.tracer:
      line, column = line_column(source, span.recovered_from)
      self.tracer.log_fragment(line, column, source[span.recovered_from : end], code)
