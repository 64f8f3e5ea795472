"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from todo_spaces.config import Config  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config and cached settings."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("TODO_FILE", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def todo_path(tmp_path):
    """Path for a todo file that does not exist yet."""
    return tmp_path / "todo" / "todos.md"
