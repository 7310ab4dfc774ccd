"""Composition root for ``lib_yaml_updater``.

Purpose
-------
Provide the entry point that wires resource loading, YAML parsing, comment
extraction, ignored-section rendering, and the merge policy, then persists the
result only when it differs from the file on disk.

Contents
--------
* :class:`YAMLUpdater` – builds every cache at construction and exposes
  :meth:`~YAMLUpdater.render` and :meth:`~YAMLUpdater.update`.
* :func:`update_file` – one-shot helper for a default file on disk.

System Role
-----------
This module connects adapters (resources, loader, serializer) with the pure
application functions while emitting structured observability signals. It is
the place to change how documents are sourced or written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping

from .adapters.file_loaders.structured import YAMLFileLoader
from .adapters.resources.default import DirectoryResourceLoader
from .application.comments import extract_comments
from .application.ignored import render_ignored_blocks
from .application.merge import merge_documents
from .application.ports import DocumentLoader, ResourceLoader
from .domain.document import Document
from .domain.errors import InvalidFormat, NotFound, UpdaterError, WriteError
from .observability import bind_trace_id, log_debug, log_error, log_info, log_warning, make_event

_ENCODING = "utf-8"


class YAMLUpdater:
    """Merge a default template into a user-edited YAML file.

    Why
    ----
    Applications evolve their default configuration; users edit theirs. The
    updater adds new default keys with their comments while keeping every user
    value and leaving ignored sections exactly as the user wrote them.

    What
    ----
    At construction the default template and the current file are parsed once,
    the default's comment map and the ignored-block map are built, and every
    configuration error is raised. :meth:`render` and :meth:`update` reuse
    those caches.

    Parameters
    ----------
    loader:
        Resource capability providing the default template.
    resource:
        Name of the default template inside *loader*.
    file:
        Path of the user-editable file; must exist.
    ignored:
        Dotted paths of sections copied from the current file untouched.
    documents:
        YAML loader; defaults to :class:`YAMLFileLoader`.

    Raises
    ------
    NotFound
        When the file or the resource does not exist.
    InvalidFormat
        When either document cannot be parsed, or a default key contains ``.``.
    InvalidIgnoredPath
        When an ignored path does not name a section of the current file.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> root = Path(tmp.name)
    >>> _ = (root / "default.yml").write_text("# port\\nport: 80\\nhost: localhost\\n", encoding="utf-8")
    >>> _ = (root / "config.yml").write_text("port: 8080\\n", encoding="utf-8")
    >>> updater = YAMLUpdater(DirectoryResourceLoader(root), "default.yml", root / "config.yml")
    >>> updater.update()
    True
    >>> print((root / "config.yml").read_text(encoding="utf-8"), end="")
    # port
    port: 8080
    host: localhost
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        loader: ResourceLoader,
        resource: str,
        file: str | Path,
        ignored: Iterable[str] = (),
        *,
        documents: DocumentLoader | None = None,
    ) -> None:
        bind_trace_id(None)
        self._file = Path(file)
        self._resource = resource
        self._ignored = tuple(ignored)
        documents = documents or YAMLFileLoader()

        if not self._file.is_file():
            raise NotFound(f"File does not exist: {self._file}")

        self._default = _load_default(loader, resource, documents)
        self._current = documents.load(str(self._file))
        log_debug("document_loaded", **make_event("current", str(self._file), {"keys": len(self._current.paths)}))

        self._comments = extract_comments(self._default.text, self._default.paths)
        log_debug("comments_extracted", **make_event("default", resource, {"blocks": len(self._comments)}))

        current_comments = extract_comments(self._current.text, self._current.paths)
        self._blocks = render_ignored_blocks(self._ignored, self._current.root, current_comments)
        log_debug("ignored_blocks_rendered", **make_event("current", str(self._file), {"blocks": len(self._blocks)}))

        for path in self._ignored:
            if not self._default.contains(path):
                log_warning("ignored_path_not_in_default", **make_event("default", resource, {"ignored": path}))

    @classmethod
    def from_paths(
        cls,
        default: str | Path,
        file: str | Path,
        ignored: Iterable[str] = (),
    ) -> YAMLUpdater:
        """Build an updater whose default template is a file on disk.

        Examples
        --------
        >>> YAMLUpdater.from_paths("missing-default.yml", "missing.yml")
        Traceback (most recent call last):
        ...
        lib_yaml_updater.domain.errors.NotFound: File does not exist: missing.yml
        """

        default_path = Path(default)
        file_path = Path(file)
        loader = DirectoryResourceLoader(default_path.parent, base=file_path.parent)
        return cls(loader, default_path.name, file_path, ignored)

    @property
    def file(self) -> Path:
        """Path of the user-editable file."""

        return self._file

    @property
    def default(self) -> Document:
        """Parsed default template."""

        return self._default

    @property
    def current(self) -> Document:
        """Parsed current file as it was at construction."""

        return self._current

    @property
    def comments(self) -> Mapping[str | None, str]:
        """Comment map of the default template."""

        return self._comments

    @property
    def ignored_blocks(self) -> Mapping[str, str]:
        """Rendered ignored sections keyed by their dotted path."""

        return self._blocks

    def render(self) -> str:
        """Return the merged document text without touching the file."""

        return merge_documents(self._default, self._current, self._comments, self._blocks)

    def update(self) -> bool:
        """Write the merged document when it differs from the file.

        Returns
        -------
        bool
            ``True`` when the file was rewritten, ``False`` when it already
            matched byte for byte.

        Raises
        ------
        SerializationError
            When a value cannot be rendered; nothing is written.
        WriteError
            When reading back or writing the file fails.
        """

        path = str(self._file)
        try:
            payload = self.render().encode(_ENCODING)
        except UpdaterError as exc:
            log_error("update_failed", **make_event("current", path, {"error": str(exc)}))
            raise
        try:
            if self._file.read_bytes() == payload:
                log_info("update_unchanged", **make_event("current", path))
                return False
            self._file.write_bytes(payload)
        except OSError as exc:
            log_error("update_failed", **make_event("current", path, {"error": str(exc)}))
            raise WriteError(f"Failed to write {path}: {exc}") from exc
        log_info("update_written", **make_event("current", path, {"size": len(payload)}))
        return True


def update_file(default: str | Path, file: str | Path, ignored: Iterable[str] = ()) -> bool:
    """Merge the default template at *default* into *file*.

    Returns ``True`` when *file* was rewritten. See :class:`YAMLUpdater`.
    """

    return YAMLUpdater.from_paths(default, file, ignored).update()


def _load_default(loader: ResourceLoader, resource: str, documents: DocumentLoader) -> Document:
    """Read the default template *resource* through *loader* and parse it."""

    try:
        with loader.open_resource(resource) as stream:
            payload = stream.read()
    except OSError as exc:
        raise NotFound(f"Cannot read default resource {resource}: {exc}") from exc
    document = documents.parse(payload, source=resource)
    if document.dotted_keys:
        raise InvalidFormat(
            f"Keys of {resource} must not contain '.': {', '.join(document.dotted_keys)}"
        )
    log_debug("document_loaded", **make_event("default", resource, {"keys": len(document.paths)}))
    return document


__all__ = ["YAMLUpdater", "update_file"]
