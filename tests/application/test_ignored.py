from __future__ import annotations

import pytest

from lib_yaml_updater.application.ignored import render_ignored_block, render_ignored_blocks
from lib_yaml_updater.domain.errors import InvalidIgnoredPath

ROOT = {
    "x": {
        "y": {"extra": True, "k": "changed"},
        "z": 3,
    },
    "groups": {1: {"name": "admin", "perms": ["read", "write"]}},
    "empty": {"section": {}},
}


def test_nested_block_with_comments() -> None:
    block = render_ignored_block("x.y", ROOT, {"x.y.extra": "# custom\n"})
    assert block == "  y:\n    # custom\n    extra: true\n    k: changed\n"


def test_comment_of_the_ignored_key_is_reindented() -> None:
    block = render_ignored_block("x.y", ROOT, {"x.y": "\n# section\n"})
    assert block.startswith("\n  # section\n  y:\n")


def test_numeric_key_segment_resolves_integer_key() -> None:
    block = render_ignored_block("groups.1", ROOT, {})
    assert block == "  1:\n    name: admin\n    perms:\n    - read\n    - write\n"


def test_empty_section_renders_flow_braces() -> None:
    assert render_ignored_block("empty.section", ROOT, {}) == "  section: {}\n"


def test_top_level_section() -> None:
    assert render_ignored_block("empty", ROOT, {}) == "empty:\n  section: {}\n"


def test_children_follow_current_document_order() -> None:
    root = {"s": {"zeta": 1, "alpha": 2, "mid": 3}}
    assert render_ignored_block("s", root, {}) == "s:\n  zeta: 1\n  alpha: 2\n  mid: 3\n"


def test_block_map_preserves_request_order_and_is_read_only() -> None:
    blocks = render_ignored_blocks(["x.y", "groups.1"], ROOT, {})
    assert list(blocks) == ["x.y", "groups.1"]
    with pytest.raises(TypeError):
        blocks["x.y"] = ""  # type: ignore[index]


@pytest.mark.parametrize(
    "path",
    [
        "missing",
        "x.missing",
        "missing.section",
        "x.z",
        "x.z.deeper",
        "groups.2",
    ],
)
def test_invalid_paths_fail_loudly(path: str) -> None:
    with pytest.raises(InvalidIgnoredPath) as excinfo:
        render_ignored_blocks([path], ROOT, {})
    assert excinfo.value.path == path
    assert path in str(excinfo.value)
