"""
Transpilation Error Hierarchy.

Every failure aborts the whole transpile call. There is no partial output:
a markup fragment is converted completely or not at all.

- ``LexError``: The markup scanner hit malformed input (unterminated tag,
  attribute value, embedded expression or comment).
- ``ParseError``: The token stream violates the markup grammar.
- ``HostParseError``: The JavaScript parser failed for a reason unrelated to markup.
- ``InternalError``: An invariant was violated (e.g. an element name that cannot be emitted).
"""

from typing import Optional


class TranspileError(Exception):
  """Base exception for all transpilation failures."""


class LexError(TranspileError):
  """
  Raised when the markup lexer emits an error token.

  Attributes:
      position (int): Offset into the lexed fragment where scanning stopped.
  """

  def __init__(self, message: str, position: int = 0) -> None:
    super().__init__(message)
    self.position = position


class ParseError(TranspileError):
  """
  Raised when the markup parser receives a token it cannot accept.

  Attributes:
      token: The offending token.
      excerpt (str): A short slice of the fragment starting at the token.
  """

  def __init__(self, message: str, token=None, excerpt: str = "") -> None:
    super().__init__(message)
    self.token = token
    self.excerpt = excerpt


class HostParseError(TranspileError):
  """
  Raised when the host parser reports a failure that is not a markup boundary.

  The parser's message is surfaced verbatim.
  """

  def __init__(
    self,
    message: str,
    index: Optional[int] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
  ) -> None:
    super().__init__(message)
    self.index = index
    self.line = line
    self.column = column


class InternalError(TranspileError):
  """Raised for conditions only reachable through a bug or invalid element names."""
