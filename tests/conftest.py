"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Context factory for building injectors with a small catalog.
- Console capture for asserting on log output.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
from rich.console import Console

# Add src to path so we can import 'import_injector' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from import_injector import InjectorContext, create_context  # noqa: E402
from import_injector.utils.console import reset_console, set_console, set_log_level  # noqa: E402


@pytest.fixture
def make_context() -> Callable[..., InjectorContext]:
  """
  Returns a factory building a context from option keywords.

  Defaults to a one-entry catalog: ``fooBar`` from ``test-id``.
  """

  def _factory(**options: Any) -> InjectorContext:
    options.setdefault("imports", [{"name": "fooBar", "from": "test-id"}])
    return create_context(**options)

  return _factory


@pytest.fixture
def captured_console():
  """
  Routes package logs into a recording console for the duration of a test.
  """
  capture = Console(record=True, width=200)
  set_console(capture)
  set_log_level(logging.DEBUG)
  yield capture
  set_log_level(logging.WARNING)
  reset_console()
