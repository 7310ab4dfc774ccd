"""Domain-level document value object.

Purpose
-------
Anchor the immutable :class:`Document` that carries a parsed YAML tree together
with the raw text it was parsed from. This module belongs to the domain layer
and contains no I/O.

Contents
--------
* :data:`SEPARATOR` – reserved dotted-path separator.
* :class:`Document` – ``Mapping`` implementation exposing the deep key
  enumeration and dotted lookups the merge engine relies on.
* :func:`key_text` – textual form of a stored key as it appears in dotted paths.
* :func:`resolve_key` – coerces a textual path segment back to the stored key.

System Role
-----------
The comment extractor consumes :attr:`Document.paths` as its set of valid
paths, the merge engine walks the same tuple in order, and the ignored-block
renderer resolves user supplied segments through :func:`resolve_key`.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Iterator, TypeVar, overload

SEPARATOR: Final[str] = "."

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Document(MappingABC[Any, Any]):
    """Immutable parsed YAML document.

    Why
    ----
    The updater parses both documents once at construction and relies on them
    staying unchanged while comment and ignored-block caches are derived.

    What
    ----
    Wraps the root mapping in ``MappingProxyType``, indexes every nested key by
    its dotted path, and records keys that would break dotted addressing.

    Parameters
    ----------
    _data:
        Root mapping produced by the YAML parser.
    text:
        Raw source text the mapping was parsed from.
    source:
        Optional file path or resource name, used in diagnostics.

    Examples
    --------
    >>> doc = Document({"server": {"port": 8080, "tls": {}}, "debug": False})
    >>> doc.paths
    ('server', 'server.port', 'server.tls', 'debug')
    >>> doc.get("server.port")
    8080
    >>> doc.contains("server.host")
    False
    """

    _data: Mapping[Any, Any]
    text: str = ""
    source: str | None = None
    _paths: tuple[str, ...] = field(init=False, repr=False, compare=False)
    _entries: Mapping[str, tuple[Any, Any]] = field(init=False, repr=False, compare=False)
    _dotted: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze the root mapping and build the dotted-path index."""

        object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))
        paths: list[str] = []
        entries: dict[str, tuple[Any, Any]] = {}
        dotted: list[str] = []
        _index_mapping(self._data, (), paths, entries, dotted)
        object.__setattr__(self, "_paths", tuple(paths))
        object.__setattr__(self, "_entries", MappingProxyType(entries))
        object.__setattr__(self, "_dotted", tuple(dotted))

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def root(self) -> Mapping[Any, Any]:
        """Read-only view of the root mapping with its original key types."""

        return self._data

    @property
    def paths(self) -> tuple[str, ...]:
        """Every dotted key path, parents before children, in document order."""

        return self._paths

    @property
    def dotted_keys(self) -> tuple[str, ...]:
        """Paths of keys whose own name contains the reserved separator."""

        return self._dotted

    def contains(self, path: str) -> bool:
        """Return ``True`` when *path* names a key of this document."""

        return path in self._entries

    @overload
    def get(self, path: str, *, default: T) -> Any | T:  # type: ignore[override]
        ...

    @overload
    def get(self, path: str, *, default: None = ...) -> Any | None:  # type: ignore[override]
        ...

    def get(self, path: str, *, default: Any = None) -> Any:
        """Resolve *path* as a dotted path and return ``default`` when missing.

        Examples
        --------
        >>> doc = Document({"groups": {1: {"name": "admin"}}})
        >>> doc.get("groups.1.name")
        'admin'
        >>> doc.get("groups.2", default="none")
        'none'
        """

        entry = self._entries.get(path)
        if entry is None:
            return default
        return entry[1]

    def key_at(self, path: str) -> Any:
        """Return the stored (typed) key behind the last segment of *path*.

        Raises
        ------
        KeyError
            When *path* is not part of the document.

        Examples
        --------
        >>> Document({"groups": {1: {}}}).key_at("groups.1")
        1
        """

        return self._entries[path][0]

    def is_section(self, path: str) -> bool:
        """Return ``True`` when *path* resolves to a nested mapping."""

        return isinstance(self.get(path), MappingABC)


def key_text(key: Any) -> str:
    """Return the textual form of *key* used inside dotted paths.

    Examples
    --------
    >>> key_text("name"), key_text(1), key_text(True), key_text(None)
    ('name', '1', 'true', 'null')
    """

    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def join_path(prefix: str, key: Any) -> str:
    """Append the textual form of *key* to the dotted *prefix*."""

    text = key_text(key)
    return f"{prefix}{SEPARATOR}{text}" if prefix else text


def depth_of(path: str) -> int:
    """Return the number of segments in *path*."""

    return path.count(SEPARATOR) + 1


def resolve_key(mapping: Mapping[Any, Any], segment: str) -> Any:
    """Return the key stored in *mapping* that the textual *segment* refers to.

    Why
    ----
    YAML parsers store purely numeric keys as numbers, while dotted paths are
    always text. The lookup coerces the segment into each candidate type in
    turn (literal string, float, integer) and compares type-strictly so that
    ``1`` and ``1.0`` stay distinct. Boolean and null keys fall back to their
    textual form.

    Raises
    ------
    KeyError
        When no stored key matches *segment*.

    Examples
    --------
    >>> resolve_key({1: "a", "b": "c"}, "1")
    1
    >>> resolve_key({1.5: "x"}, "1.5")
    1.5
    >>> resolve_key({True: "x"}, "true")
    True
    >>> resolve_key({"a": 1}, "z")
    Traceback (most recent call last):
    ...
    KeyError: 'z'
    """

    for candidate in _candidates(segment):
        for key in mapping:
            if type(key) is type(candidate) and key == candidate:
                return key
    for key in mapping:
        if key_text(key) == segment:
            return key
    raise KeyError(segment)


def _candidates(segment: str) -> Iterator[Any]:
    """Yield *segment* converted to each key type a parser may have produced."""

    yield segment
    for convert in (float, int):
        try:
            yield convert(segment)
        except ValueError:
            continue


def _index_mapping(
    mapping: Mapping[Any, Any],
    prefix: tuple[str, ...],
    paths: list[str],
    entries: dict[str, tuple[Any, Any]],
    dotted: list[str],
) -> None:
    """Record every key of *mapping* (recursively) under its dotted path."""

    for key, value in mapping.items():
        text = key_text(key)
        segments = (*prefix, text)
        path = SEPARATOR.join(segments)
        if SEPARATOR in text:
            dotted.append(path)
        if path not in entries:
            paths.append(path)
            entries[path] = (key, value)
        if isinstance(value, MappingABC):
            _index_mapping(value, segments, paths, entries, dotted)
