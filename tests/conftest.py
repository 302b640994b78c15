"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A default engine and a fresh console for every test.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'jsx_transpiler' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from jsx_transpiler.core.engine import TranspileEngine
from jsx_transpiler.utils.console import reset_console


@pytest.fixture
def engine():
  """An engine with the default React call names."""
  return TranspileEngine()


@pytest.fixture(autouse=True)
def cleanup_console():
  """Ensures console and log level are reset after every test."""
  reset_console()
  yield
  reset_console()
