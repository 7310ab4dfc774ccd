from __future__ import annotations

import pytest

from lib_yaml_updater.adapters.serializer import yaml_dump
from lib_yaml_updater.adapters.serializer.yaml_dump import (
    indent_block,
    indent_for,
    reindent,
    render_entry,
    render_header,
    render_key,
)
from lib_yaml_updater.domain.errors import SerializationError


def test_indent_for_depth() -> None:
    assert indent_for("top") == ""
    assert indent_for("a.b") == "  "
    assert indent_for("a.b.c.d") == "      "


def test_indent_block_keeps_blank_lines_empty() -> None:
    assert indent_block("\n# one\n\n", "    ") == "\n    # one\n\n"


def test_reindent_skips_empty_lines() -> None:
    assert reindent("a\n\nb", "  ") == "  a\n\n  b"


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("plain", "plain"),
        (7, "7"),
        ("7", "'7'"),
        ("yes", "'yes'"),
        (True, "true"),
        ("with: colon", "'with: colon'"),
    ],
)
def test_render_key(key, expected) -> None:
    assert render_key(key) == expected


def test_render_header() -> None:
    assert render_header("server", "  ", empty=False) == "  server:\n"
    assert render_header(1, "", empty=True) == "1: {}\n"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (5, "key: 5"),
        ("text value", "key: text value"),
        (None, "key: null"),
        (False, "key: false"),
        ([], "key: []"),
        ({}, "key: {}"),
        (["a", "b"], "key:\n- a\n- b"),
        ({"x": 1}, "key:\n  x: 1"),
    ],
)
def test_render_entry_top_level(value, expected) -> None:
    assert render_entry("key", value, "") == expected


def test_render_entry_reindents_continuation_lines() -> None:
    assert render_entry("hosts", ["a", "b"], "    ") == "    hosts:\n    - a\n    - b"


def test_render_entry_keeps_unicode() -> None:
    assert render_entry("greeting", "héllo wörld", "") == "greeting: héllo wörld"


def test_render_entry_wraps_representer_errors() -> None:
    with pytest.raises(SerializationError):
        render_entry("key", object(), "")


def test_dump_options_use_unix_line_breaks() -> None:
    assert yaml_dump._DUMP_OPTIONS["line_break"] == "\n"
