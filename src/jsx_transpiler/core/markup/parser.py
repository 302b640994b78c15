"""
Markup Recursive Descent Parser.

Consumes the lazy token stream of `MarkupLexer` with one token of lookahead and
builds an `Element` tree. Any unexpected token aborts the whole fragment; no
partial tree is ever returned.

The parser records `last_pos`, the end offset of the last token it consumed.
Once `parse()` returns this is the authoritative end of the fragment: the
host parser's own estimate of where the bad construct ends may overshoot.
"""

import re
from typing import Iterator, Optional

from jsx_transpiler.core.errors import LexError, ParseError
from jsx_transpiler.core.markup.lexer import MarkupLexer
from jsx_transpiler.core.markup.nodes import Attr, AttrKind, Element, EmbeddedCode, Text
from jsx_transpiler.core.markup.tokens import Token, TokenKind

EXCERPT_LENGTH = 20

_COMMENT = re.compile(r"//[^\r\n]*|/\*.*?\*/", re.DOTALL)


def is_empty_expression(code: str) -> bool:
  """True if `code` holds nothing but whitespace and comments."""
  return not _COMMENT.sub("", code).strip()


class MarkupParser:
  """
  Parses one markup fragment into an element tree.

  Attributes:
      text (str): The source holding the fragment.
      offset (int): Offset of the fragment's ``<`` in `text`.
      last_pos (int): End of the last consumed token, relative to `offset`.
      root (Optional[Element]): The parsed tree, set by `parse()`.
  """

  def __init__(self, text: str, offset: int = 0) -> None:
    self.text = text
    self.offset = offset
    self._tokens: Iterator[Token] = MarkupLexer(text, offset).tokens()
    self._lookahead: Optional[Token] = None
    self.last_pos = 0
    self.root: Optional[Element] = None

  def parse(self) -> Element:
    """
    Parses the root element.

    Returns:
        Element: The root of the fragment.

    Raises:
        LexError: If the lexer reported malformed input.
        ParseError: If the tokens do not form a well-structured element.
    """
    self.root = self._parse_element()
    return self.root

  # --- Token access ---

  def _peek(self) -> Token:
    if self._lookahead is None:
      end = len(self.text) - self.offset
      self._lookahead = next(self._tokens, None) or Token(TokenKind.EOF, end, end, "")
    if self._lookahead.kind == TokenKind.ERROR:
      raise LexError(self._lookahead.text, self._lookahead.end)
    return self._lookahead

  def _consume(self) -> Token:
    token = self._peek()
    self._lookahead = None
    self.last_pos = token.end
    return token

  def _expect(self, kind: TokenKind, context: str) -> Token:
    token = self._peek()
    if token.kind != kind:
      self._fail(token, f"{context}: expected {kind.value}, got {token.kind.value}")
    return self._consume()

  def _fail(self, token: Token, message: str) -> None:
    start = self.offset + token.start
    excerpt = self.text[start : start + EXCERPT_LENGTH]
    raise ParseError(f"{message} in {excerpt!r}", token=token, excerpt=excerpt)

  # --- Grammar ---

  def _parse_element(self) -> Element:
    name = self._expect(TokenKind.OPENING_TAG_NAME, "element").text
    node = Element(name=name)

    while True:
      token = self._peek()
      if token.kind == TokenKind.ATTRIBUTE_NAME:
        key, value = self._parse_attribute()
        node.attributes[key] = value
      elif token.kind == TokenKind.LEFT_BRACE:
        node.spreads.append(self._parse_spread())
      elif token.kind == TokenKind.END_OF_OPENING_TAG:
        self._consume()
        return self._parse_children(node)
      elif token.kind == TokenKind.SELF_CLOSING_TAG_END:
        self._consume()
        return node
      else:
        self._fail(token, f"unexpected {token.kind.value} in opening tag <{name}>")

  def _parse_children(self, node: Element) -> Element:
    while True:
      token = self._peek()
      if token.kind == TokenKind.OPENING_TAG_NAME:
        node.children.append(self._parse_element())
      elif token.kind == TokenKind.TEXT:
        node.children.append(Text(self._consume().text))
      elif token.kind == TokenKind.LEFT_BRACE:
        node.children.append(EmbeddedCode(self._parse_embedded()))
      elif token.kind == TokenKind.CLOSING_TAG_NAME:
        # Closing tag names are not matched against the opening tag.
        self._consume()
        return node
      else:
        self._fail(token, f"unexpected {token.kind.value} in children of <{node.name}>")

  def _parse_embedded(self) -> str:
    self._expect(TokenKind.LEFT_BRACE, "embedded expression")
    code = self._expect(TokenKind.EMBEDDED_CODE, "embedded expression")
    self._expect(TokenKind.RIGHT_BRACE, "embedded expression")
    return code.text

  def _parse_attribute(self):
    key = self._expect(TokenKind.ATTRIBUTE_NAME, "attribute").text
    token = self._peek()
    if token.kind == TokenKind.ATTRIBUTE_LITERAL_VALUE:
      return key, Attr(payload=self._consume().text, kind=AttrKind.LITERAL)
    if token.kind == TokenKind.LEFT_BRACE:
      code = self._parse_embedded()
      if is_empty_expression(code):
        self._fail(token, f"attribute {key!r} has an empty expression")
      return key, Attr(payload=code, kind=AttrKind.EMBEDDED_CODE)
    self._fail(token, f"unexpected {token.kind.value} as value of attribute {key!r}")

  def _parse_spread(self) -> str:
    start = self._expect(TokenKind.LEFT_BRACE, "spread attribute")
    self._expect(TokenKind.SPREAD_ELLIPSIS, "spread attribute")
    code = self._expect(TokenKind.EMBEDDED_CODE, "spread attribute").text
    self._expect(TokenKind.RIGHT_BRACE, "spread attribute")
    if is_empty_expression(code):
      self._fail(start, "spread attribute has an empty expression")
    return code


def parse_fragment(text: str, offset: int = 0) -> MarkupParser:
  """
  Parses the fragment starting at `offset` in `text`.

  Text following the root element is never scanned, and `text` is not copied.

  Args:
      text (str): Source holding the fragment.
      offset (int): Position of the fragment's ``<``.

  Returns:
      MarkupParser: The finished parser, exposing `root` and `last_pos`.
  """
  parser = MarkupParser(text, offset)
  parser.parse()
  return parser
