"""Comment extraction driven by the parsed key set.

Purpose
-------
Recover the comment and blank-line blocks a YAML parser throws away and attach
each block to the dotted path of the key it precedes. Free of I/O so it can be
applied to a packaged default as easily as to a file on disk.

Contents
    - ``TRAILING``: reserved key under which end-of-file comments are stored.
    - ``KeyPathTracker``: rebuilds the dotted path of successive key lines.
    - ``key_token``: extracts the key name from a stripped ``key: value`` line.
    - ``extract_comments``: public entry point returning a read-only map.

System Role
-----------
The composition root calls :func:`extract_comments` once per document. The
merge engine reads the default's map; the ignored-block renderer reads the
current document's map.

Indentation width is never measured. YAML does not fix it, and block scalars or
flow collections make column counting unreliable; instead every candidate path
is checked against the keys the parser actually produced.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Final, Iterable

from ..domain.document import SEPARATOR

TRAILING: Final = None
"""Comment-map key holding comments found after the last key of a document."""


class KeyPathTracker:
    """Incrementally reconstruct a dotted key path from successive key lines.

    Why
    ----
    A line only shows its own key. Whether it is a child, a sibling, or an
    ancestor's sibling of the previous key is decided by asking which candidate
    path is known to the parsed document.

    Examples
    --------
    >>> tracker = KeyPathTracker({"a", "a.b", "a.c", "d"})
    >>> tracker.push("a"); tracker.push("b"); tracker.path
    'a.b'
    >>> tracker.push("c"); tracker.path
    'a.c'
    >>> tracker.retreat("d"); bool(tracker)
    False
    """

    def __init__(self, known: Iterable[str]) -> None:
        self._known = frozenset(known)
        self._segments: list[str] = []

    def __bool__(self) -> bool:
        return bool(self._segments)

    @property
    def path(self) -> str:
        """Dotted path accumulated so far (empty string when cleared)."""

        return SEPARATOR.join(self._segments)

    def push(self, token: str, *, validate: bool = True) -> None:
        """Append *token*, first dropping segments it cannot be nested under.

        With *validate* the tracker pops trailing segments while
        ``path + "." + token`` is unknown, which decodes dedents of any width.
        """

        if validate:
            while self._segments and f"{self.path}{SEPARATOR}{token}" not in self._known:
                self._segments.pop()
        self._segments.append(token)

    def clear(self) -> None:
        """Forget the accumulated path."""

        self._segments.clear()

    def retreat(self, upcoming: str) -> None:
        """Pop segments until *upcoming* equals or nests under the current path."""

        while self._segments and not _nests_under(upcoming, self.path):
            self._segments.pop()


def key_token(line: str) -> str:
    """Return the key named by the stripped mapping *line*.

    The line is split on colons; when more than a key and a value appear (a URL
    or a quoted key containing ``:``) it is split on ``": "`` instead. Quote
    characters are removed.

    Examples
    --------
    >>> key_token("port: 8080")
    'port'
    >>> key_token("url: https://example.org")
    'url'
    >>> key_token("'1': one")
    '1'
    >>> key_token("server:")
    'server'
    """

    pieces = line.split(":")
    while len(pieces) > 1 and not pieces[-1]:
        pieces.pop()
    if len(pieces) > 2:
        pieces = line.split(": ")
    return pieces[0].replace("'", "").replace('"', "").strip()


def extract_comments(text: str, paths: Sequence[str]) -> Mapping[str | None, str]:
    """Map each dotted path of *paths* to the comment block written above it.

    Why
    ----
    The merge engine re-emits documents key by key and needs each key's
    original comments and blank lines verbatim.

    What
    ----
    Walks *text* line by line. Comment and blank lines accumulate (stripped)
    until the next key line, whose dotted path is recovered by a
    :class:`KeyPathTracker` validated against *paths*. Lines inside sequence
    bodies are skipped, so comments there are not attributed. Comments left
    over at the end are stored under :data:`TRAILING`.

    Parameters
    ----------
    text:
        Raw YAML source.
    paths:
        Every dotted path of the parsed document, parents first, in document
        order (:attr:`lib_yaml_updater.domain.document.Document.paths`).

    Returns
    -------
    Mapping[str | None, str]
        Read-only map of path to block; every line of a block ends with a
        newline.

    Examples
    --------
    >>> source = "# top\\na:\\n  # hello\\n  b: 1\\n\\n# bye\\n"
    >>> comments = extract_comments(source, ["a", "a.b"])
    >>> comments["a"], comments["a.b"], comments[TRAILING]
    ('# top\\n', '# hello\\n', '\\n# bye\\n')
    """

    position = {path: index for index, path in reversed(list(enumerate(paths)))}
    tracker = KeyPathTracker(paths)
    comments: dict[str | None, str] = {}
    pending: list[str] = []
    anchor: str | None = None

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("-"):
            continue
        if not stripped or stripped.startswith("#"):
            pending.append(stripped)
            continue

        if not line.startswith(" "):
            tracker.clear()
            anchor = stripped

        tracker.push(key_token(stripped))
        current = tracker.path
        if pending:
            comments[current] = _as_block(pending)
            pending.clear()

        upcoming = position.get(current, -1) + 1
        if upcoming >= len(paths):
            continue
        tracker.retreat(paths[upcoming])
        if not tracker and anchor is not None:
            tracker.push(key_token(anchor), validate=False)

    if pending:
        comments[TRAILING] = _as_block(pending)
    return MappingProxyType(comments)


def _as_block(lines: list[str]) -> str:
    """Join buffered lines into a newline-terminated block."""

    return "".join(f"{line}\n" for line in lines)


def _nests_under(path: str, parent: str) -> bool:
    """Return ``True`` when *path* is *parent* or one of its descendants."""

    return path == parent or path.startswith(parent + SEPARATOR)
