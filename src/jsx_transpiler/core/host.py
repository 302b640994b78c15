"""
Host Parser Collaborator.

Wraps the `esprima` JavaScript parser behind the contract the boundary
detector relies on:

1. Parse a source string into a syntax tree (with character ranges).
2. On failure, report structured errors ``{message, index, line, column}``
   and still hand back a tree in which every markup fragment is represented
   by a placeholder node.
3. Walk that tree in source order.

esprima stops at the first error, so recovery is done here. Whenever the
first error carries the markup signature, the fragment extent is measured by
the caller-supplied `measure` callback, the fragment is masked with a
placeholder expression of identical length, and the source is parsed again.
Offsets and line numbers therefore stay identical to the original input.
Every fragment costs one more full parse, so a file with many fragments is
parsed O(fragments x size) in total.

The signature match lives in `is_markup_start` and nowhere else.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

import esprima

from jsx_transpiler.core.errors import HostParseError, InternalError

logger = logging.getLogger(__name__)

MARKUP_START_MESSAGE = "Unexpected token <"
PLACEHOLDER = "0"

_LINE_TERMINATORS = frozenset("\r\n\u2028\u2029")
_LINE_PREFIX = re.compile(r"^Line \d+: ")
_SKIP_KEYS = frozenset({"range", "loc", "leadingComments", "trailingComments", "innerComments"})

Measure = Callable[[str, int], int]


@dataclass(frozen=True)
class HostError:
  """
  A single parse error reported by the host parser.

  Attributes:
      message (str): The parser's description, without the line prefix.
      index (int): Offset of the offending token.
      line (int): 1-based line number.
      column (int): 1-based column number.
  """

  message: str
  index: int
  line: int
  column: int


@dataclass(frozen=True)
class BoundarySpan:
  """
  The erroneous range the recovery step replaced by a placeholder.

  `recovered_to` is an estimate only; the markup parser's `last_pos` decides
  where host source resumes.
  """

  message: str
  position: int
  recovered_from: int
  recovered_to: int


@dataclass
class HostParseResult:
  """
  Outcome of parsing one source string.

  Attributes:
      source (str): The original, unmasked input.
      program: The esprima Program node.
      errors (List[HostError]): Recovered errors in source order.
      spans (List[BoundarySpan]): One span per recovered fragment.
  """

  source: str
  program: Any
  errors: List[HostError] = field(default_factory=list)
  spans: List[BoundarySpan] = field(default_factory=list)

  @property
  def ok(self) -> bool:
    """True if the source parsed without any recovery."""
    return not self.errors


def is_markup_start(error: HostError) -> bool:
  """
  Recognises the failure that marks the start of a markup fragment.

  Args:
      error (HostError): A reported parse error.

  Returns:
      bool: True if the parser met ``<`` where an expression was expected.
  """
  return error.message == MARKUP_START_MESSAGE


def line_column(source: str, index: int) -> Tuple[int, int]:
  """Converts an offset into a 1-based (line, column) pair."""
  line = source.count("\n", 0, index) + 1
  column = index - (source.rfind("\n", 0, index) + 1) + 1
  return line, column


def placeholder_for(fragment: str) -> str:
  """
  Builds a same-length stand-in expression for a fragment.

  Line terminators are kept in place so positions after the fragment do not move.
  """
  tail = "".join(ch if ch in _LINE_TERMINATORS else " " for ch in fragment[len(PLACEHOLDER) :])
  return PLACEHOLDER + tail


def is_node(value: Any) -> bool:
  """True if `value` is an esprima syntax node carrying a source range."""
  return isinstance(getattr(value, "type", None), str) and isinstance(getattr(value, "range", None), (list, tuple))


def child_nodes(node: Any) -> List[Any]:
  """
  Returns the direct child nodes of `node`, ordered by source position.

  Args:
      node: An esprima node.

  Returns:
      List: Child nodes.
  """
  children = []
  for key, value in vars(node).items():
    if key in _SKIP_KEYS:
      continue
    if isinstance(value, (list, tuple)):
      children.extend(item for item in value if is_node(item))
    elif is_node(value):
      children.append(value)
  children.sort(key=lambda child: child.range[0])
  return children


class HostParser:
  """
  Facade over esprima implementing error recovery for markup fragments.

  Attributes:
      source_type (str): ``script`` or ``module``.
      measure (Optional[Measure]): Callback returning the end offset of the
          fragment starting at a given offset. Without it, any error is fatal.
  """

  def __init__(self, source_type: str = "script", measure: Optional[Measure] = None) -> None:
    self.source_type = source_type
    self.measure = measure

  def _parse(self, code: str) -> Any:
    if self.source_type == "module":
      return esprima.parseModule(code, range=True)
    return esprima.parseScript(code, range=True)

  def parse(self, source: str) -> HostParseResult:
    """
    Parses `source`, recovering from every markup fragment.

    Args:
        source (str): JavaScript source, possibly containing markup.

    Returns:
        HostParseResult: The tree plus recovered errors and spans.

    Raises:
        HostParseError: If a failure does not carry the markup signature.
        LexError, ParseError: Propagated from `measure`.
    """
    masked = source
    errors: List[HostError] = []
    spans: List[BoundarySpan] = []
    floor = 0

    # One esprima pass per fragment: esprima cannot resume after an error.
    while True:
      try:
        program = self._parse(masked)
      except esprima.Error as e:
        error = self._to_host_error(e, source)
      else:
        return HostParseResult(source=source, program=program, errors=errors, spans=spans)

      if not is_markup_start(error) or self.measure is None or error.index < floor:
        raise HostParseError(
          f"Line {error.line}: {error.message}",
          index=error.index,
          line=error.line,
          column=error.column,
        )

      end = self.measure(source, error.index)
      if not error.index < end <= len(source):
        raise InternalError(f"Fragment at offset {error.index} measured an invalid end {end}")

      logger.debug("Recovered markup fragment at %d:%d (%d..%d)", error.line, error.column, error.index, end)
      errors.append(error)
      spans.append(BoundarySpan(error.message, error.index, error.index, end))
      masked = masked[: error.index] + placeholder_for(source[error.index : end]) + masked[end:]
      floor = end

  def _to_host_error(self, exc: Exception, source: str) -> HostError:
    index = getattr(exc, "index", None)
    description = getattr(exc, "description", None) or _LINE_PREFIX.sub("", str(exc))
    if not isinstance(index, int):
      raise HostParseError(str(exc))
    line, column = line_column(source, index)
    return HostError(message=description, index=index, line=line, column=column)
