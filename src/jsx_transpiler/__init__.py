"""
jsx-transpiler Package.

Converts JavaScript sources with embedded JSX markup into plain JavaScript in
which every markup fragment is a nested ``React.createElement`` call.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import jsx_transpiler as jsx
    print(jsx.transpile('var x = <p className="note">{hello}</p>;'))
    # var x = React.createElement("p", {className: "note"}, hello);

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from jsx_transpiler import TranspileEngine, RuntimeConfig

    config = RuntimeConfig(element_factory="h", spread_helper="Object.assign")
    res = TranspileEngine(config).run("var x = <Nav {...props}/>;")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from jsx_transpiler.config import RuntimeConfig
from jsx_transpiler.core.conversion_result import ConversionResult
from jsx_transpiler.core.engine import TranspileEngine, transpile_file, transpile_source
from jsx_transpiler.core.errors import HostParseError, InternalError, LexError, ParseError, TranspileError

__version__ = "0.1.0"


def transpile(code: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Transpiles a string of JavaScript-with-markup into plain JavaScript.

  This is a convenience wrapper around `TranspileEngine`.

  Args:
      code (str): The source code to convert.
      config (RuntimeConfig, optional): Call names and parser options. Defaults apply if None.

  Returns:
      str: The transpiled source code.

  Raises:
      TranspileError: If the conversion fails (malformed markup or invalid JavaScript).
  """
  return TranspileEngine(config).transpile_source(code)


__all__ = [
  "ConversionResult",
  "HostParseError",
  "InternalError",
  "LexError",
  "ParseError",
  "RuntimeConfig",
  "TranspileEngine",
  "TranspileError",
  "__version__",
  "transpile",
  "transpile_file",
  "transpile_source",
]
