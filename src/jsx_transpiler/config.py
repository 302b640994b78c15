"""
Runtime Configuration Store.

Holds the names that make up the generated-code contract (element factory,
spread helper, class factory, display name key) and parser options.
Values come from ``[tool.jsx_transpiler]`` in the nearest ``pyproject.toml``,
overridden by explicit arguments (typically CLI flags).
"""

import sys
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "jsx_transpiler"


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the transpiler.
  """

  element_factory: str = Field("React.createElement", description="Callee emitted for every element.")
  spread_helper: str = Field("React.__spread", description="Callee merging spread attributes into one object.")
  class_factory: str = Field("React.createClass", description="Two-part 'Object.method' class factory callee.")
  display_name_key: str = Field("displayName", description="Key injected into class factory literals.")
  annotate_display_names: bool = Field(True, description="If False, class factory literals are left untouched.")
  source_type: Literal["script", "module"] = Field("script", description="How the host parser reads input.")

  @field_validator("element_factory", "spread_helper", "display_name_key")
  @classmethod
  def validate_not_blank(cls, v: str) -> str:
    """
    Rejects empty callee or key names.

    Args:
        v (str): The configured name.

    Returns:
        str: The stripped name.

    Raises:
        ValueError: If the name is blank.
    """
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("Name must not be empty")
    return v_clean

  @field_validator("class_factory")
  @classmethod
  def validate_class_factory(cls, v: str) -> str:
    """
    Ensures the class factory is an ``Object.method`` pair.

    Args:
        v (str): The configured factory.

    Returns:
        str: The stripped factory name.

    Raises:
        ValueError: If the value does not have exactly two non-empty parts.
    """
    v_clean = v.strip()
    parts = v_clean.split(".")
    if len(parts) != 2 or not all(parts):
      raise ValueError(f"Class factory must look like 'Object.method', got '{v_clean}'")
    return v_clean

  @classmethod
  def load(
    cls,
    element_factory: Optional[str] = None,
    spread_helper: Optional[str] = None,
    class_factory: Optional[str] = None,
    display_name_key: Optional[str] = None,
    annotate_display_names: Optional[bool] = None,
    source_type: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Args:
        element_factory (Optional[str]): Override for the element callee.
        spread_helper (Optional[str]): Override for the spread callee.
        class_factory (Optional[str]): Override for the class factory.
        display_name_key (Optional[str]): Override for the injected key.
        annotate_display_names (Optional[bool]): Override for annotation.
        source_type (Optional[str]): Override for 'script' / 'module'.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    overrides = {
      "element_factory": element_factory,
      "spread_helper": spread_helper,
      "class_factory": class_factory,
      "display_name_key": display_name_key,
      "annotate_display_names": annotate_display_names,
      "source_type": source_type,
    }
    merged: Dict[str, Any] = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return cls(**merged)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None
