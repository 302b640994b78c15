"""
Tests for the forward-only SpliceWriter.
"""

import pytest

from jsx_transpiler.core.errors import InternalError
from jsx_transpiler.core.splice import SpliceWriter


def test_copy_insert_skip():
  writer = SpliceWriter("var x = <a/>;")
  writer.copy_until(8)
  writer.insert("A()")
  writer.skip_to(12)
  assert writer.finish() == "var x = A();"


def test_untouched_source_round_trips():
  assert SpliceWriter("abc").finish() == "abc"


def test_cursor_cannot_move_backwards():
  writer = SpliceWriter("abcdef")
  writer.copy_until(4)
  with pytest.raises(InternalError):
    writer.copy_until(2)


def test_cursor_cannot_pass_end():
  with pytest.raises(InternalError):
    SpliceWriter("abc").skip_to(4)
