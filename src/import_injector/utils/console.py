"""
Logging and Console Utilities.

Routes the package's diagnostics through the standard ``logging`` library,
rendered by ``rich``.

The engine itself never prints. It logs to the ``import_injector`` logger via
the ``log_*`` helpers below, and a ``RichHandler`` bound to the active console
renders the records. The console is held behind a proxy so that a host (a
bundler plugin, a test) can swap the destination with ``set_console`` and
capture output, e.g. into an ``io.StringIO`` backed Console.

Attributes:
    LOGGER_NAME (str): Name of the package logger.
    console (_ConsoleProxy): Stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "import_injector"

_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
  }
)

logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  A swappable wrapper around ``rich.console.Console``.

  Every swap of the backend re-binds the package logger's ``RichHandler`` so
  that log records follow the console.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and re-binds the log handler.

    Args:
        new_console (Console): The Rich Console to write to.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Restores a fresh stderr console."""
    self._backend = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    """
    Access the raw backend console.

    Returns:
        Console: The currently active implementation.
    """
    return self._backend

  def _configure_logging(self) -> None:
    # Only our own logger is touched; the host's root configuration is left alone.
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    logger.addHandler(rich_handler)
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.WARNING)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards ``print`` calls to the active backend."""
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """
    Forwards ``export_text`` (useful for log capturing).

    Args:
        **kwargs: Options passed to ``Console.export_text``.

    Returns:
        str: The captured text output.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and package logs to ``new_console``.

  Args:
      new_console (Console): The configured Rich console to use.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets logging and console to standard error."""
  console.reset()


def get_console() -> Console:
  """
  Retrieves the currently active console backend.

  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def set_log_level(level: int) -> None:
  """
  Sets the threshold of the package logger.

  Args:
      level (int): A ``logging`` level, e.g. ``logging.DEBUG``.
  """
  logger.setLevel(level)


def log_debug(msg: str) -> None:
  """
  Logs a debug message.

  Args:
      msg (str): The message content. Can include rich markup.
  """
  logger.debug(msg, extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. Can include rich markup.
  """
  logger.info(msg, extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning message.

  Args:
      msg (str): The message content. Can include rich markup.
  """
  logger.warning(f"⚠️  {msg}", extra={"markup": True})
