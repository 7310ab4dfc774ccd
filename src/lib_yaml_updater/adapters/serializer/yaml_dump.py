"""PyYAML-backed rendering of single entries and indentation helpers.

Purpose
-------
The merge engine never serialises whole documents; it emits one key at a time
so comments and ordering stay under its control. This module turns a single
``key: value`` pair into text with :func:`yaml.safe_dump` and shifts the result
to the nesting depth it belongs to.

Contents
--------
* :data:`INDENT_UNIT` – two spaces per nesting level beyond the top.
* :func:`indent_for` – indentation prefix for a dotted path.
* :func:`indent_block` – reindent a newline-terminated comment block.
* :func:`render_key` – YAML form of a key (quoted when the parser would
  otherwise read it back as another type).
* :func:`render_header` – ``key:`` line opening a section.
* :func:`render_entry` – block-style rendering of a single entry.

System Role
-----------
Used by :mod:`lib_yaml_updater.application.merge` and
:mod:`lib_yaml_updater.application.ignored`. Every failure of the underlying
representer surfaces as :class:`~lib_yaml_updater.domain.errors.SerializationError`.
"""

from __future__ import annotations

from typing import Any, Final

import yaml

from ...domain.document import depth_of
from ...domain.errors import SerializationError

INDENT_UNIT: Final[str] = "  "

_DOCUMENT_END: Final[str] = "\n...\n"

# Block style, insertion order, unicode kept as-is, Unix line breaks.
_DUMP_OPTIONS: Final[dict[str, Any]] = {
    "default_flow_style": False,
    "sort_keys": False,
    "allow_unicode": True,
    "line_break": "\n",
}


def indent_for(path: str) -> str:
    """Return the indentation prefix for the key at dotted *path*.

    Examples
    --------
    >>> indent_for("a"), indent_for("a.b"), indent_for("a.b.c")
    ('', '  ', '    ')
    """

    return INDENT_UNIT * (depth_of(path) - 1)


def indent_block(block: str, indent: str) -> str:
    """Prefix every non-empty line of *block* with *indent*.

    Each line of the result ends with exactly one newline and blank lines stay
    empty, so reindenting never introduces trailing whitespace.

    Examples
    --------
    >>> indent_block("# one\\n\\n# two\\n", "  ")
    '  # one\\n\\n  # two\\n'
    """

    return "".join(f"{indent}{line}\n" if line else "\n" for line in block.splitlines())


def reindent(text: str, indent: str) -> str:
    """Prefix the first and every continuation line of *text* with *indent*.

    Examples
    --------
    >>> reindent("key:\\n- a\\n- b", "  ")
    '  key:\\n  - a\\n  - b'
    """

    return "\n".join(f"{indent}{line}" if line else line for line in text.split("\n"))


def render_key(key: Any) -> str:
    """Return *key* as it must appear in front of a colon.

    Examples
    --------
    >>> render_key("name"), render_key(1), render_key("1")
    ('name', '1', "'1'")
    """

    text = _dump(key)
    if text.endswith(_DOCUMENT_END):
        text = text[: -len(_DOCUMENT_END) + 1]
    return text.rstrip("\n")


def render_header(key: Any, indent: str, *, empty: bool) -> str:
    """Return the line opening the section *key*.

    Examples
    --------
    >>> render_header("server", "", empty=False)
    'server:\\n'
    >>> render_header("tls", "  ", empty=True)
    '  tls: {}\\n'
    """

    suffix = " {}" if empty else ""
    return f"{indent}{render_key(key)}:{suffix}\n"


def render_entry(key: Any, value: Any, indent: str) -> str:
    """Render ``key: value`` in block style at *indent*, without a final newline.

    The pair is dumped through a disposable single-entry mapping so PyYAML
    decides between the inline form (scalars, empty or flow collections) and
    the block form (non-empty sequences and mappings).

    Examples
    --------
    >>> render_entry("port", 8080, "  ")
    '  port: 8080'
    >>> print(render_entry("hosts", ["a", "b"], "  "))
      hosts:
      - a
      - b
    """

    text = _dump({key: value})
    if text.endswith("\n"):
        text = text[:-1]
    return reindent(text, indent)


def _dump(data: Any) -> str:
    """Serialise *data* with the shared options, wrapping representer errors."""

    try:
        return yaml.safe_dump(data, **_DUMP_OPTIONS)
    except yaml.YAMLError as exc:
        raise SerializationError(f"Cannot render {data!r} as YAML: {exc}") from exc
