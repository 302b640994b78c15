"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Printing through the installed console.
2. Injection capabilities (`set_console`).
3. Standard logging wrappers and verbosity.
"""

import logging

from rich.console import Console

from jsx_transpiler.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
  set_verbose,
)


def test_console_proxy_forwards_print():
  capture = Console(record=True, width=200)
  set_console(capture)
  console.print("summary row")
  assert "summary row" in capture.export_text()


def test_default_console_writes_to_stderr():
  assert console.backend.stderr is True


def test_custom_console_injection():
  capture = Console(record=True, width=200)
  set_console(capture)

  log_info("Captured info")
  log_success("Captured success")
  log_warning("Captured warning")
  log_error("Captured error")

  output = capture.export_text()
  for word in ("info", "success", "warning", "error"):
    assert f"Captured {word}" in output


def test_reset_restores_backend():
  temp = Console()
  set_console(temp)
  assert console.backend is temp

  reset_console()
  assert console.backend is not temp


def test_verbose_toggles_debug():
  set_verbose(True)
  assert logging.getLogger().level == logging.DEBUG
  set_verbose(False)
  assert logging.getLogger().level == logging.INFO
