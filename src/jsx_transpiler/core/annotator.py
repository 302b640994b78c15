"""
Display Name Annotator.

Ensures that component classes created through the class factory carry a
display name. For a binding such as::

    var Hello = React.createClass({render: function() { ... }});

the object literal passed to the factory gets a new first entry::

    var Hello = React.createClass({displayName: "Hello", render: function() { ... }});

The rewrite is a textual splice right after the literal's opening brace. It is
skipped when the literal already has the key, so annotated code is left alone.
Bindings recognised: ``name = init``, ``obj.name = init``, ``var name = init``
and ``{name: init}``.
"""

import logging
from typing import Any, Optional, Tuple

from jsx_transpiler.core.errors import InternalError
from jsx_transpiler.core.generator import quote
from jsx_transpiler.core.splice import SpliceWriter
from jsx_transpiler.core.tracer import TraceLogger

logger = logging.getLogger(__name__)


class DisplayNameAnnotator:
  """
  Splices a display-name entry into class-factory object literals.

  Attributes:
      factory_object (str): Object half of the factory callee (e.g. ``React``).
      factory_method (str): Method half of the factory callee (e.g. ``createClass``).
      key (str): The metadata key to inject (e.g. ``displayName``).
  """

  def __init__(
    self,
    class_factory: str = "React.createClass",
    key: str = "displayName",
    tracer: Optional[TraceLogger] = None,
  ) -> None:
    parts = class_factory.split(".")
    if len(parts) != 2:
      raise InternalError(f"class factory must be 'Object.method', got {class_factory!r}")
    self.factory_object, self.factory_method = parts
    self.key = key
    self.tracer = tracer

  def visit(self, node: Any, writer: SpliceWriter) -> bool:
    """
    Annotates `node` if it binds a name to a class-factory call.

    Args:
        node: Any esprima node encountered during the walk.
        writer (SpliceWriter): The shared output cursor.

    Returns:
        bool: True if an entry was injected.
    """
    name, init = self._binding(node)
    if name is None:
      return False
    literal = self._factory_literal(init)
    if literal is None:
      return False

    writer.copy_until(literal.range[0] + 1)
    entry = f"{self.key}: {quote(name)}"
    if literal.properties:
      entry += ", "
    writer.insert(entry)

    logger.debug("Injected %s for %s", self.key, name)
    if self.tracer:
      self.tracer.log_mutation("Display Name", name, entry)
    return True

  def _binding(self, node: Any) -> Tuple[Optional[str], Any]:
    if node.type == "AssignmentExpression" and node.operator == "=":
      left = node.left
      if left.type == "Identifier":
        return left.name, node.right
      if left.type == "MemberExpression" and not left.computed and left.property.type == "Identifier":
        return left.property.name, node.right
    elif node.type == "VariableDeclarator" and node.init is not None:
      if node.id.type == "Identifier":
        return node.id.name, node.init
    elif node.type == "Property" and not node.computed and not getattr(node, "method", False):
      key = self._key_name(node.key)
      if key is not None:
        return key, node.value
    return None, None

  def _factory_literal(self, init: Any) -> Any:
    if init is None or init.type != "CallExpression":
      return None
    callee = init.callee
    if callee.type != "MemberExpression" or callee.computed:
      return None
    if callee.object.type != "Identifier" or callee.object.name != self.factory_object:
      return None
    if callee.property.type != "Identifier" or callee.property.name != self.factory_method:
      return None
    if not init.arguments or init.arguments[0].type != "ObjectExpression":
      return None

    literal = init.arguments[0]
    for prop in literal.properties:
      if prop.type == "Property" and not prop.computed and self._key_name(prop.key) == self.key:
        return None
    return literal

  @staticmethod
  def _key_name(key: Any) -> Optional[str]:
    if key.type == "Identifier":
      return key.name
    if key.type == "Literal" and isinstance(key.value, str):
      return key.value
    return None
