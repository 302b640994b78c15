"""
Console and Logging Setup.

Diagnostics never share stdout with transpiled code: log records and batch
summary tables are rendered by a rich console bound to stderr. Core modules log
through plain `logging.getLogger(__name__)`; the root logger gets a single
`RichHandler` that follows whichever console is currently installed.

Attributes:
    console (_ConsoleProxy): The installed console. Swap it with `set_console`.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Stable handle on the active rich console and the log level of the CLI.

  Attributes:
      backend (Console): The console that receives output and log records.
      level (int): Root logger level applied whenever the handler is rebuilt.
  """

  def __init__(self) -> None:
    self.backend = Console(theme=_THEME, stderr=True)
    self.level = logging.INFO
    self._install_handler()

  def use(self, backend: Console, level: int) -> None:
    self.backend = backend
    self.level = level
    self._install_handler()

  def print(self, *args: Any, **kwargs: Any) -> None:
    self.backend.print(*args, **kwargs)

  def _install_handler(self) -> None:
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, RichHandler)]:
      root.removeHandler(handler)
    root.addHandler(RichHandler(console=self.backend, show_time=False, show_path=False, markup=True))
    root.setLevel(self.level)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Routes printing and log records to `new_console` (e.g. a recording console in tests).

  Args:
      new_console (Console): The rich console to install.
  """
  console.use(new_console, console.level)


def reset_console() -> None:
  """Reinstalls a fresh stderr console at INFO level."""
  console.use(Console(theme=_THEME, stderr=True), logging.INFO)


def set_verbose(verbose: bool) -> None:
  """Shows DEBUG records from the core modules when `verbose` is True."""
  console.use(console.backend, logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Reports a failure to the user.

  Args:
      msg (str): Message text; rich markup such as ``[path]...[/path]`` is rendered.
  """
  logging.error(f"❌ {msg}", extra={"markup": True})
