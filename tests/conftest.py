"""Pytest configuration.

The calculator is a flat collection of top-level modules, so the project root
is prepended to `sys.path` to make imports stable whether or not the project
was installed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_syspath() -> None:
    project_root = Path(__file__).resolve().parents[1]
    root_str = str(project_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


_ensure_project_root_on_syspath()


class RecordingDisplay:
    """Render sink that keeps every screen and diagnostic in memory."""

    def __init__(self):
        self.screens: list[list[str]] = []
        self.errors: list[str] = []

    def clear(self):
        return None

    def write_lines(self, lines):
        self.screens.append(list(lines))

    def refresh(self, lines):
        self.screens.append(list(lines))

    def error(self, message):
        self.errors.append(message)

    @property
    def last_screen(self) -> list[str]:
        return self.screens[-1] if self.screens else []


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()
