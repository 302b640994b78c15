"""
Markup Lexer.

A finite-state scanner that decomposes one markup fragment into a stream of
typed `Token` objects. Each state is a method that consumes input, emits
zero or more tokens and returns the next state (or None to stop).

The lexer knows nothing about JavaScript beyond what is needed to find the
closing brace of an embedded expression: brace depth, quoted strings, escapes
and comments. Scanning halts at the first ERROR token, and also once the root
element is closed, so host code following a fragment is never read.

Tokens are produced lazily: iterating the lexer runs the state machine only
as far as the consumer pulls.
"""

import re
import string
from collections import deque
from typing import Callable, Deque, Iterator, Optional

from jsx_transpiler.core.markup.tokens import Token, TokenKind

EOF = ""

NAME_START = frozenset(string.ascii_letters + "_")
NAME_CHARS = NAME_START | frozenset(string.digits + "-.")
WHITESPACE = frozenset(" \t\n\r")
QUOTES = frozenset("\"'`")

_CHILD_STOP = re.compile(r"[<{]")
_LINE_END = re.compile(r"[\r\n]")

StateFn = Callable[[], Optional["StateFn"]]


class MarkupLexer:
  """
  State-machine lexer for a single markup fragment.

  Attributes:
      text (str): The source being scanned.
      offset (int): Where the fragment starts in `text`; it must hold ``<``.
          Token offsets are relative to it.
      pos (int): Current scan position in `text`.
      start (int): Start of the token currently being accumulated.
      depth (int): Number of elements whose closing tag is still pending.
  """

  def __init__(self, text: str, offset: int = 0) -> None:
    self.text = text
    self.offset = offset
    self.pos = offset
    self.start = offset
    self.depth = 0
    self._pending: Deque[Token] = deque()
    self._resume: Optional[StateFn] = None

  def __iter__(self) -> Iterator[Token]:
    return self.tokens()

  def tokens(self) -> Iterator[Token]:
    """
    Runs the state machine, yielding tokens as they are emitted.

    Yields:
        Token objects. The stream ends after an ERROR or EOF token.
    """
    state: Optional[StateFn] = self._lex_opening_tag
    while state is not None:
      state = state()
      while self._pending:
        yield self._pending.popleft()

  # --- Primitives ---

  def _peek(self, offset: int = 0) -> str:
    idx = self.pos + offset
    if idx >= len(self.text):
      return EOF
    return self.text[idx]

  def _next(self) -> str:
    ch = self._peek()
    if ch != EOF:
      self.pos += 1
    return ch

  def _accept(self, valid) -> bool:
    ch = self._peek()
    if ch != EOF and ch in valid:
      self.pos += 1
      return True
    return False

  def _accept_run(self, valid) -> None:
    while self._accept(valid):
      pass

  def _ignore(self) -> None:
    self.start = self.pos

  def _token(self, kind: TokenKind, text: str) -> Token:
    return Token(kind, self.start - self.offset, self.pos - self.offset, text)

  def _emit(self, kind: TokenKind) -> None:
    self._pending.append(self._token(kind, self.text[self.start : self.pos]))
    self.start = self.pos

  def _error(self, message: str) -> None:
    self._pending.append(self._token(TokenKind.ERROR, message))
    return None

  def _skip_comment(self) -> bool:
    """
    Consumes a ``//`` or ``/* */`` comment starting at the current position.

    Returns:
        bool: False if a block comment is not terminated.
    """
    if self.text.startswith("//", self.pos):
      m = _LINE_END.search(self.text, self.pos)
      self.pos = m.start() if m else len(self.text)
      return True
    end = self.text.find("*/", self.pos + 2)
    if end < 0:
      self.pos = len(self.text)
      return False
    self.pos = end + 2
    return True

  def _at_comment(self) -> bool:
    return self.text.startswith(("//", "/*"), self.pos)

  def _after_element(self) -> Optional[StateFn]:
    if self.depth > 0:
      return self._lex_children
    self._emit(TokenKind.EOF)
    return None

  def _lex_embedded(self, resume: StateFn) -> StateFn:
    self._resume = resume
    return self._lex_assignment

  # --- States ---

  def _lex_opening_tag(self) -> Optional[StateFn]:
    if not self._accept("<"):
      return self._error("expected '<' to open a tag")
    self._ignore()
    if not self._accept(NAME_START):
      return self._error("expected a tag name after '<'")
    self._accept_run(NAME_CHARS)
    self._emit(TokenKind.OPENING_TAG_NAME)
    return self._lex_attributes

  def _lex_attributes(self) -> Optional[StateFn]:
    self._accept_run(WHITESPACE)
    self._ignore()
    ch = self._peek()
    if ch == "{":
      self._next()
      self._emit(TokenKind.LEFT_BRACE)
      return self._lex_spread_attribute
    if ch == ">":
      self._next()
      self._emit(TokenKind.END_OF_OPENING_TAG)
      self.depth += 1
      return self._lex_children
    if ch == "/":
      self._next()
      if not self._accept(">"):
        return self._error("expected '>' after '/' in tag")
      self._emit(TokenKind.SELF_CLOSING_TAG_END)
      return self._after_element()
    if ch == EOF:
      return self._error("unterminated opening tag")
    return self._lex_attribute_name

  def _lex_attribute_name(self) -> Optional[StateFn]:
    if not self._accept(NAME_START):
      return self._error(f"unexpected character {self._peek()!r} in opening tag")
    self._accept_run(NAME_CHARS)
    self._emit(TokenKind.ATTRIBUTE_NAME)
    self._accept_run(WHITESPACE)
    if not self._accept("="):
      return self._error("expected '=' after attribute name")
    self._accept_run(WHITESPACE)
    self._ignore()
    return self._lex_attribute_value

  def _lex_attribute_value(self) -> Optional[StateFn]:
    quote = self._next()
    if quote in ("'", '"'):
      self._ignore()
      end = self.text.find(quote, self.pos)
      if end < 0:
        self.pos = len(self.text)
        return self._error("unterminated attribute value")
      self.pos = end
      self._emit(TokenKind.ATTRIBUTE_LITERAL_VALUE)
      self._next()
      self._ignore()
      return self._lex_attributes
    if quote == "{":
      self._emit(TokenKind.LEFT_BRACE)
      return self._lex_embedded(self._lex_attributes)
    return self._error("expected a quoted string or '{' as attribute value")

  def _lex_spread_attribute(self) -> Optional[StateFn]:
    while True:
      self._accept_run(WHITESPACE)
      if not self._at_comment():
        break
      if not self._skip_comment():
        return self._error("unterminated comment")
    self._ignore()
    if not self.text.startswith("...", self.pos):
      return self._error("expected '...' in spread attribute")
    self.pos += 3
    self._emit(TokenKind.SPREAD_ELLIPSIS)
    return self._lex_embedded(self._lex_attributes)

  def _lex_children(self) -> Optional[StateFn]:
    m = _CHILD_STOP.search(self.text, self.pos)
    if m is None:
      self.pos = len(self.text)
      return self._error("unexpected end of input inside element")
    self.pos = m.start()
    if self.pos > self.start:
      self._emit(TokenKind.TEXT)
    if m.group() == "{":
      self._next()
      self._emit(TokenKind.LEFT_BRACE)
      return self._lex_embedded(self._lex_children)
    if self._peek(1) == "/":
      return self._lex_closing_tag
    return self._lex_opening_tag

  def _lex_closing_tag(self) -> Optional[StateFn]:
    self.pos += 2
    self._ignore()
    if not self._accept(NAME_START):
      return self._error("expected a tag name after '</'")
    self._accept_run(NAME_CHARS)
    name = self.text[self.start : self.pos]
    self._accept_run(WHITESPACE)
    if not self._accept(">"):
      return self._error(f"expected '>' to end closing tag {name!r}")
    self._pending.append(self._token(TokenKind.CLOSING_TAG_NAME, name))
    self._ignore()
    self.depth -= 1
    return self._after_element()

  def _lex_assignment(self) -> Optional[StateFn]:
    depth = 0
    quote = None
    while True:
      ch = self._peek()
      if ch == EOF:
        return self._error("unterminated embedded expression")
      if quote is None and self._at_comment():
        if not self._skip_comment():
          return self._error("unterminated comment in embedded expression")
        continue
      self._next()
      if ch == "\\":
        if self._next() == EOF:
          return self._error("unterminated escape in embedded expression")
      elif quote is not None:
        if ch == quote:
          quote = None
      elif ch in QUOTES:
        quote = ch
      elif ch == "{":
        depth += 1
      elif ch == "}":
        if depth == 0:
          self.pos -= 1
          self._emit(TokenKind.EMBEDDED_CODE)
          self._next()
          self._emit(TokenKind.RIGHT_BRACE)
          return self._resume
        depth -= 1
