"""
Tests for Config Persistence (TOML).

Verifies that:
1. RuntimeConfig.load() picks up [tool.jsx_transpiler] from pyproject.toml.
2. Explicit arguments override TOML settings.
3. File traversal finds toml in parent directories.
4. Invalid names are rejected.
"""

import pytest
from pydantic import ValidationError

from jsx_transpiler.config import RuntimeConfig


@pytest.fixture
def toml_file(tmp_path):
  """Creates a dummy pyproject.toml in the temp dir."""
  fpath = tmp_path / "pyproject.toml"
  content = """
[tool.jsx_transpiler]
element_factory = "h"
spread_helper = "Object.assign"
annotate_display_names = false
unknown_key = "ignored"
"""
  fpath.write_text(content, encoding="utf-8")
  return fpath


def test_defaults():
  config = RuntimeConfig()
  assert config.element_factory == "React.createElement"
  assert config.spread_helper == "React.__spread"
  assert config.class_factory == "React.createClass"
  assert config.display_name_key == "displayName"
  assert config.annotate_display_names is True
  assert config.source_type == "script"


def test_load_defaults_from_toml(tmp_path, toml_file):
  config = RuntimeConfig.load(search_path=tmp_path)

  assert config.element_factory == "h"
  assert config.spread_helper == "Object.assign"
  assert config.annotate_display_names is False


def test_arguments_override_toml(tmp_path, toml_file):
  config = RuntimeConfig.load(element_factory="preact.h", annotate_display_names=True, search_path=tmp_path)

  assert config.element_factory == "preact.h"
  assert config.spread_helper == "Object.assign"
  assert config.annotate_display_names is True


def test_toml_found_in_parent(tmp_path, toml_file):
  nested = tmp_path / "src" / "components"
  nested.mkdir(parents=True)
  assert RuntimeConfig.load(search_path=nested).element_factory == "h"


def test_no_toml(tmp_path):
  assert RuntimeConfig.load(search_path=tmp_path) == RuntimeConfig()


def test_names_are_stripped():
  assert RuntimeConfig(element_factory="  h ").element_factory == "h"


@pytest.mark.parametrize(
  "kwargs",
  [
    {"element_factory": " "},
    {"display_name_key": ""},
    {"class_factory": "createClass"},
    {"class_factory": "a.b.c"},
    {"class_factory": "React."},
    {"source_type": "commonjs"},
  ],
)
def test_invalid_values(kwargs):
  with pytest.raises(ValidationError):
    RuntimeConfig(**kwargs)
