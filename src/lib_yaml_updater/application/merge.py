"""Application-layer merge policy.

Purpose
-------
Combine a default document and a user-edited current document into new text:
every default key appears in default order with its default comment, values
come from the current document when it has them, and ignored sections are
spliced in verbatim. Remains free of I/O so it can be reused outside the
composition root.

Contents
    - ``merge_documents``: public entry point driven by a simple loop.
    - ``ignored_owner``: finds the ignored path that dominates a key.
    - ``_render_key``: emits the header or ``key: value`` line of one key.

System Role
-----------
Receives the caches built by :mod:`lib_yaml_updater.core` (comment map and
ignored-block map) and returns the text the composition root compares with the
file on disk.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable

from ..adapters.serializer.yaml_dump import indent_block, indent_for, render_entry, render_header
from ..domain.document import SEPARATOR, Document
from .comments import TRAILING


def merge_documents(
    default: Document,
    current: Document,
    comments: Mapping[str | None, str],
    ignored_blocks: Mapping[str, str],
) -> str:
    """Return the merged text of *default* and *current*.

    Why
    ----
    Users keep their values and the application still gains every key a newer
    default introduces, with the explanatory comments that come with it.

    What
    ----
    Walks :attr:`Document.paths` of *default*. Keys equal to an ignored path are
    replaced by their pre-rendered block and keys below one are skipped. Other
    keys are emitted with their reindented comment followed by either a section
    header or a single ``key: value`` entry. Comments found after the last key
    of the default are appended verbatim.

    Parameters
    ----------
    default:
        Parsed default template; defines keys, order, and the fallback values.
    current:
        Parsed user document; its non-null values take precedence.
    comments:
        Comment map extracted from the default template's text.
    ignored_blocks:
        Map of ignored path to rendered block.

    Returns
    -------
    str
        Complete document text.

    Examples
    --------
    >>> default = Document({"a": {"b": 10, "c": 1}})
    >>> current = Document({"a": {"b": 5}})
    >>> print(merge_documents(default, current, {"a.b": "# hello\\n"}, {}), end="")
    a:
      # hello
      b: 5
      c: 1
    """

    chunks: list[str] = []
    for path in default.paths:
        owner = ignored_owner(path, ignored_blocks)
        if owner is not None:
            if owner == path:
                chunks.append(ignored_blocks[path])
            continue

        indent = indent_for(path)
        comment = comments.get(path)
        if comment:
            chunks.append(indent_block(comment, indent))
        chunks.append(_render_key(path, default, current, indent))

    trailing = comments.get(TRAILING)
    if trailing:
        chunks.append(trailing)
    return "".join(chunks)


def ignored_owner(path: str, ignored: Iterable[str]) -> str | None:
    """Return the ignored path equal to or enclosing *path*, if any.

    Examples
    --------
    >>> ignored_owner("x.y.z", ["x.y"]), ignored_owner("x.yz", ["x.y"])
    ('x.y', None)
    """

    for candidate in ignored:
        if candidate and (path == candidate or path.startswith(candidate + SEPARATOR)):
            return candidate
    return None


def _render_key(path: str, default: Document, current: Document, indent: str) -> str:
    """Render the line(s) for one non-ignored key.

    Sections follow the default's shape: their children are emitted by later
    iterations. An empty default section has no children, so a user-filled
    mapping there is written whole. Values prefer the current document unless
    it is missing or null.
    """

    key = default.key_at(path)
    fallback = default.get(path)
    value = current.get(path)
    if default.is_section(path):
        if not fallback and isinstance(value, Mapping) and value:
            return render_entry(key, value, indent) + "\n"
        return render_header(key, indent, empty=not fallback)

    if value is None:
        value = fallback
    return render_entry(key, value, indent) + "\n"
