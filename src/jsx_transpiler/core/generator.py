"""
Markup Code Generator.

Lowers an `Element` tree into JavaScript source text made of nested calls::

    <Nav {...props} color="blue">Hi {name}</Nav>

becomes::

    React.createElement(Nav, React.__spread({}, props, {color: "blue"}), "Hi ", name)

Embedded expressions are never copied verbatim. They go back through the
driver's expression entry point first, because they may contain markup of
their own.
"""

import json
import re
from typing import Callable, List

from jsx_transpiler.core.errors import InternalError
from jsx_transpiler.core.markup.nodes import Attr, AttrKind, Element, EmbeddedCode, Node, Text

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

Retranspile = Callable[[str], str]


def quote(value: str) -> str:
  """
  Renders `value` as a double-quoted JavaScript string literal.

  Args:
      value (str): Raw character data.

  Returns:
      str: The literal, with quotes, backslashes, control characters and the
          U+2028 / U+2029 line separators escaped.
  """
  return json.dumps(value, ensure_ascii=False).replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def property_key(name: str) -> str:
  """Returns `name` bare if it is a valid identifier, quoted otherwise (e.g. ``data-id``)."""
  if _IDENTIFIER.match(name):
    return name
  return quote(name)


class CodeGenerator:
  """
  Emits call-expression source for markup elements.

  Attributes:
      element_factory (str): Callee for every element, e.g. ``React.createElement``.
      spread_helper (str): Callee merging spread groups, e.g. ``React.__spread``.
      retranspile (Retranspile): Converts embedded expression source to pure JavaScript.
  """

  def __init__(self, element_factory: str, spread_helper: str, retranspile: Retranspile) -> None:
    self.element_factory = element_factory
    self.spread_helper = spread_helper
    self.retranspile = retranspile

  def generate(self, element: Element) -> str:
    """
    Generates the call expression for `element` and its subtree.

    Args:
        element (Element): The root of a parsed fragment.

    Returns:
        str: JavaScript source.

    Raises:
        InternalError: If a tag name cannot be emitted.
    """
    args = [self._name(element.name), self._attributes(element)]
    for child in element.children:
      code = self._child(child)
      if code is not None:
        args.append(code)
    return f"{self.element_factory}({', '.join(args)})"

  def _name(self, name: str) -> str:
    initial = name[:1]
    if "a" <= initial <= "z":
      return quote(name)
    if "A" <= initial <= "Z":
      return name
    raise InternalError(f"unexpected element name: {name!r}")

  def _attributes(self, element: Element) -> str:
    if element.spreads:
      parts = ["{}"]
      parts.extend(self.retranspile(code) for code in element.spreads)
      if element.attributes:
        parts.append(self._object_literal(element))
      return f"{self.spread_helper}({', '.join(parts)})"
    if not element.attributes:
      return "null"
    return self._object_literal(element)

  def _object_literal(self, element: Element) -> str:
    entries: List[str] = []
    for key, attr in element.attributes.items():
      entries.append(f"{property_key(key)}: {self._attribute_value(attr)}")
    return "{" + ", ".join(entries) + "}"

  def _attribute_value(self, attr: Attr) -> str:
    if attr.kind == AttrKind.EMBEDDED_CODE:
      return self.retranspile(attr.payload)
    if attr.kind == AttrKind.LITERAL:
      return quote(attr.payload)
    raise InternalError(f"unexpected attribute kind for {attr.payload!r}: {attr.kind}")

  def _child(self, child: Node):
    if isinstance(child, Element):
      return self.generate(child)
    if isinstance(child, Text):
      return quote(child.value)
    if isinstance(child, EmbeddedCode):
      code = self.retranspile(child.code)
      # {} and {/* comment */} in child position produce no argument
      return code if code.strip() else None
    raise InternalError(f"unexpected child node: {child!r}")
