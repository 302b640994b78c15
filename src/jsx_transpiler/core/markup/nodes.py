"""
Markup Semantic Nodes.

The markup AST is a closed union of three variants:

- Element: a tag with attributes, spread groups and children.
- Text: literal character data between tags.
- EmbeddedCode: a JavaScript expression written inside ``{...}``.

A fragment's tree is built once by the parser, consumed by the code generator
and then discarded.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Union


class AttrKind(str, Enum):
  """How an attribute value was written in the source."""

  LITERAL = "literal"  # name="value"
  EMBEDDED_CODE = "embedded_code"  # name={expr}


@dataclass(frozen=True)
class Attr:
  """
  A single attribute value.

  Attributes:
      payload (str): The literal text, or the raw expression source.
      kind (AttrKind): Whether the payload is a literal or embedded code.
  """

  payload: str
  kind: AttrKind


@dataclass(frozen=True)
class Text:
  """Character data between tags, kept verbatim."""

  value: str


@dataclass(frozen=True)
class EmbeddedCode:
  """Raw JavaScript expression source, re-transpiled before emission."""

  code: str


@dataclass
class Element:
  """
  A markup tag with its attributes and children.

  Attributes:
      name (str): Tag name. A lower-case initial denotes an intrinsic tag,
                  an upper-case initial a component reference.
      attributes (Dict[str, Attr]): Named attributes; a repeated name keeps the last value.
      spreads (List[str]): Raw expressions of ``{...expr}`` groups, in source order.
      children (List[Node]): Child nodes in source order.
  """

  name: str
  attributes: Dict[str, Attr] = field(default_factory=dict)
  spreads: List[str] = field(default_factory=list)
  children: List["Node"] = field(default_factory=list)


Node = Union[Element, Text, EmbeddedCode]
