"""Shared fixtures for the updater test-suite.

The sample template mirrors a typical application configuration: nested
sections with comments, a sequence, a numeric-keyed section, and comments after
the last key.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

DEFAULT_TEMPLATE = """\
# Main settings
a:
  # hello
  b: 10
  c: 1
# x section
x:
  y:
    k: v
  z: 3
list:
- one
- two

# end of file
"""


@pytest.fixture()
def default_text() -> str:
    """Return the canonical sample template."""

    return DEFAULT_TEMPLATE


@pytest.fixture()
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing UTF-8 text below ``tmp_path``."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def default_template(write_yaml: Callable[[str, str], Path]) -> Path:
    """Write the canonical sample template as ``default.yml``."""

    return write_yaml("default.yml", DEFAULT_TEMPLATE)
