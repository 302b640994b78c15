"""
Markup Token Definitions.

Defines the enumeration of token kinds produced by the markup lexer and the
`Token` record handed to the parser.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  ERROR = "ERROR"
  EOF = "EOF"
  EMBEDDED_CODE = "EMBEDDED_CODE"
  OPENING_TAG_NAME = "OPENING_TAG_NAME"
  END_OF_OPENING_TAG = "END_OF_OPENING_TAG"
  CLOSING_TAG_NAME = "CLOSING_TAG_NAME"
  SELF_CLOSING_TAG_END = "SELF_CLOSING_TAG_END"
  ATTRIBUTE_NAME = "ATTRIBUTE_NAME"
  ATTRIBUTE_LITERAL_VALUE = "ATTRIBUTE_LITERAL_VALUE"
  LEFT_BRACE = "LEFT_BRACE"
  RIGHT_BRACE = "RIGHT_BRACE"
  SPREAD_ELLIPSIS = "SPREAD_ELLIPSIS"
  TEXT = "TEXT"


@dataclass(frozen=True)
class Token:
  """
  Represents a lexical unit of a markup fragment.

  Attributes:
      kind: The type of token.
      start: Offset of the first character, relative to the lexed fragment.
      end: Offset just past the last consumed character.
      text: The token value. For ERROR tokens this is the diagnostic message.
  """

  kind: TokenKind
  start: int
  end: int
  text: str

  def __str__(self) -> str:
    if self.kind == TokenKind.EOF:
      return "EOF"
    if self.kind == TokenKind.ERROR:
      return self.text
    if len(self.text) > 10:
      return f"{self.text[:10]!r}..."
    return repr(self.text)
