"""
Source Splicing Buffer.

Rebuilds an output string from an input string by copying untouched ranges
and inserting replacement text. Every rewrite made during the host tree walk
goes through one `SpliceWriter`, so the cursor only ever moves forward and
edits land in strict source order.
"""

from typing import List

from jsx_transpiler.core.errors import InternalError


class SpliceWriter:
  """
  Forward-only copy cursor over a source string.

  Attributes:
      source (str): The original text.
      cursor (int): Offset of the first source character not yet emitted or skipped.
  """

  def __init__(self, source: str) -> None:
    self.source = source
    self.cursor = 0
    self._parts: List[str] = []

  def copy_until(self, pos: int) -> None:
    """Emits source text from the cursor up to `pos` (exclusive)."""
    self._check(pos)
    self._parts.append(self.source[self.cursor : pos])
    self.cursor = pos

  def insert(self, text: str) -> None:
    """Emits `text` at the current cursor."""
    self._parts.append(text)

  def skip_to(self, pos: int) -> None:
    """Moves the cursor to `pos` without emitting the skipped source."""
    self._check(pos)
    self.cursor = pos

  def finish(self) -> str:
    """
    Emits the remaining source and returns the assembled output.

    Returns:
        str: The rewritten text.
    """
    self.copy_until(len(self.source))
    return "".join(self._parts)

  def _check(self, pos: int) -> None:
    if pos < self.cursor or pos > len(self.source):
      raise InternalError(f"splice position {pos} is outside [{self.cursor}, {len(self.source)}]")
