"""Rendering of ignored sections.

Purpose
-------
Sections named by an ignored path are copied from the current document instead
of being reconciled against the default. This module resolves each path and
renders the section, comments included, as one self-contained text block.

Contents
    - ``render_ignored_blocks``: public entry point building the read-only
      block map.
    - ``render_ignored_block``: resolves and renders a single path.
    - ``_locate_parent`` / ``_render_entry``: recursive stanzas.

System Role
-----------
Invoked once by the composition root; the resulting map is handed to
:func:`lib_yaml_updater.application.merge.merge_documents`, which inserts each
block where the default declares the section.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterable

from ..adapters.serializer.yaml_dump import INDENT_UNIT, indent_block, render_entry, render_header
from ..domain.document import SEPARATOR, join_path, resolve_key
from ..domain.errors import InvalidIgnoredPath


def render_ignored_blocks(
    paths: Iterable[str],
    root: Mapping[Any, Any],
    comments: Mapping[str | None, str],
) -> Mapping[str, str]:
    """Render every ignored section of *root*.

    Why
    ----
    Blocks are computed once at construction so an invalid path fails before
    anything is written, and repeated renders reuse the same text.

    Parameters
    ----------
    paths:
        Dotted paths naming sections of the current document.
    root:
        Root mapping of the current document with its original key types.
    comments:
        Comment map used for keys inside the ignored sections.

    Returns
    -------
    Mapping[str, str]
        Read-only map of ignored path to rendered block.

    Raises
    ------
    InvalidIgnoredPath
        When a path does not resolve to a section.

    Examples
    --------
    >>> blocks = render_ignored_blocks(["a"], {"a": {"x": 1}}, {})
    >>> blocks["a"]
    'a:\\n  x: 1\\n'
    """

    blocks: dict[str, str] = {}
    for path in paths:
        blocks[path] = render_ignored_block(path, root, comments)
    return MappingProxyType(blocks)


def render_ignored_block(
    path: str,
    root: Mapping[Any, Any],
    comments: Mapping[str | None, str],
) -> str:
    """Resolve *path* inside *root* and render its section.

    Examples
    --------
    >>> print(render_ignored_block("groups.1", {"groups": {1: {"name": "admin"}}}, {}), end="")
      1:
        name: admin
    """

    segments = path.split(SEPARATOR)
    parent, prefix = _locate_parent(path, segments[:-1], root)
    terminal = segments[-1]
    try:
        key = resolve_key(parent, terminal)
    except KeyError:
        raise InvalidIgnoredPath(f"Invalid ignored section: {path}", path=path) from None
    if not isinstance(parent[key], Mapping):
        raise InvalidIgnoredPath(
            f"Ignored section {path} must be a section, not a value",
            path=path,
        )
    return _render_entry(key, parent[key], prefix, len(segments), comments)


def _locate_parent(
    path: str,
    segments: list[str],
    root: Mapping[Any, Any],
) -> tuple[Mapping[Any, Any], str]:
    """Walk the non-terminal *segments* and return the enclosing mapping and its path."""

    current = root
    prefix = ""
    for segment in segments:
        try:
            key = resolve_key(current, segment)
        except KeyError:
            raise InvalidIgnoredPath(f"Invalid ignored section: {path}", path=path) from None
        value = current[key]
        prefix = join_path(prefix, key)
        if not isinstance(value, Mapping):
            raise InvalidIgnoredPath(
                f"Invalid ignored section {path}: {prefix} is not a section",
                path=path,
            )
        current = value
    return current, prefix


def _render_entry(
    key: Any,
    value: Any,
    prefix: str,
    depth: int,
    comments: Mapping[str | None, str],
) -> str:
    """Render *key* (with its comment) and, for sections, each child in order."""

    dotted = join_path(prefix, key)
    indent = INDENT_UNIT * (depth - 1)
    parts: list[str] = []
    comment = comments.get(dotted)
    if comment:
        parts.append(indent_block(comment, indent))
    if isinstance(value, Mapping):
        parts.append(render_header(key, indent, empty=not value))
        for child_key, child_value in value.items():
            parts.append(_render_entry(child_key, child_value, dotted, depth + 1, comments))
    else:
        parts.append(render_entry(key, value, indent) + "\n")
    return "".join(parts)
