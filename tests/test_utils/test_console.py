"""
Tests for Centralized Logging Utility.

Verifies:
1. The console proxy forwards to the active backend.
2. ``set_console`` redirects package logs.
3. Level filtering and the warning prefix.
"""

import logging

import pytest
from rich.console import Console

from import_injector.core.registry import BindingRegistry
from import_injector.config import ImportBinding
from import_injector.utils.console import (
  console,
  get_console,
  log_debug,
  log_info,
  log_warning,
  reset_console,
  set_console,
  set_log_level,
)


@pytest.fixture(autouse=True)
def cleanup_console():
  """Ensures console and level are reset after every test."""
  reset_console()
  yield
  set_log_level(logging.WARNING)
  reset_console()


def test_console_proxy_forwards():
  assert callable(console.print)
  assert callable(console.export_text)
  assert get_console() is console.backend


def test_set_console_captures_logs():
  capture = Console(record=True, width=200)
  set_console(capture)
  set_log_level(logging.INFO)

  log_info("Hello [bold]world[/bold]")
  assert get_console() is capture
  assert "Hello world" in capture.export_text()


def test_debug_filtered_by_default_level():
  capture = Console(record=True, width=200)
  set_console(capture)

  log_debug("hidden")
  log_warning("shown")
  text = capture.export_text()
  assert "hidden" not in text
  assert "⚠️  shown" in text


def test_duplicate_binding_warns():
  capture = Console(record=True, width=200)
  set_console(capture)

  registry = BindingRegistry([ImportBinding(name="x", from_="a")])
  registry.register([ImportBinding(name="x", from_="b")])
  text = capture.export_text()
  assert "Duplicate import 'x'" in text
  assert registry.lookup("x").from_ == "b"
