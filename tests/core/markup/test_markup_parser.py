"""
Tests for the Markup Parser.

Verifies:
1. Tree shape (attributes, spreads, children) for valid fragments.
2. `last_pos` marks the end of the root element only.
3. Duplicate attributes, empty expressions and permissive closing tags.
4. Lexer and grammar failures surface as LexError / ParseError.
"""

import pytest

from jsx_transpiler.core.errors import LexError, ParseError
from jsx_transpiler.core.markup import (
  Attr,
  AttrKind,
  Element,
  EmbeddedCode,
  MarkupParser,
  Text,
  parse_fragment,
)
from jsx_transpiler.core.markup.parser import is_empty_expression


def parse(text):
  return parse_fragment(text).root


# --- Tree Shape ---


def test_attribute_kinds_are_preserved():
  root = parse('<a href="x" onClick={go}/>')

  assert root.name == "a"
  assert root.attributes == {
    "href": Attr("x", AttrKind.LITERAL),
    "onClick": Attr("go", AttrKind.EMBEDDED_CODE),
  }
  assert root.spreads == []
  assert root.children == []


def test_children_in_source_order():
  root = parse("<p>Hi <b>there</b>{name}!</p>")

  assert root.children == [
    Text("Hi "),
    Element(name="b", children=[Text("there")]),
    EmbeddedCode("name"),
    Text("!"),
  ]


def test_spreads_keep_order():
  root = parse('<Nav {...a} x="1" {...b}/>')
  assert root.spreads == ["a", "b"]
  assert list(root.attributes) == ["x"]


def test_duplicate_attribute_last_value_wins():
  root = parse('<a x="1" y="2" x="3"/>')
  assert list(root.attributes) == ["x", "y"]
  assert root.attributes["x"].payload == "3"


def test_closing_tag_name_is_not_checked():
  root = parse("<a>x</b>")
  assert root.name == "a"
  assert root.children == [Text("x")]


def test_empty_child_expression_is_kept_in_tree():
  root = parse("<a>{/* note */}</a>")
  assert root.children == [EmbeddedCode("/* note */")]


# --- Resumption Point ---


def test_last_pos_after_closing_tag():
  parser = parse_fragment("<a></a> + 1")
  assert parser.last_pos == 7


def test_last_pos_after_self_closing():
  parser = parse_fragment("<a/>;")
  assert parser.last_pos == 4


def test_parse_sets_root():
  parser = MarkupParser("<a/>")
  assert parser.root is None
  root = parser.parse()
  assert parser.root is root


# --- Failures ---


def test_lex_error_is_raised():
  with pytest.raises(LexError, match="unterminated attribute value"):
    parse('<a b="c/>')


def test_unclosed_element():
  with pytest.raises(LexError):
    parse("<a><b></b>")


def test_empty_attribute_expression():
  with pytest.raises(ParseError, match="empty expression"):
    parse("<a b={}/>")


def test_empty_spread_expression():
  with pytest.raises(ParseError) as excinfo:
    parse("<a {.../* x */}/>")
  assert excinfo.value.excerpt.startswith("{...")
  assert excinfo.value.token is not None


def test_is_empty_expression():
  assert is_empty_expression("")
  assert is_empty_expression("  \n ")
  assert is_empty_expression("/* a */ // b\n")
  assert not is_empty_expression("a /* b */")


# --- Offsets ---


def test_parse_at_offset_matches_slice():
  source = 'var x = <a b="c">{d}</a>; var y = 1;'
  at_offset = parse_fragment(source, 8)
  sliced = parse_fragment(source[8:])

  assert at_offset.root == sliced.root
  assert at_offset.last_pos == sliced.last_pos == 16


def test_excerpt_at_offset():
  source = "f(<a {...}/>);"
  with pytest.raises(ParseError) as excinfo:
    parse_fragment(source, 2)
  assert excinfo.value.excerpt == "{...}/>);"
