"""Lifecycle helpers for user-editable YAML files.

Purpose
    Place a packaged default template on disk when the user has no file yet,
    reload the parsed file, and run the updater against it. Existing files are
    never overwritten unless explicitly requested.

Contents
    - ``deploy_resource``: copy one resource to a destination path.
    - ``deploy_file``: same for a template that is a plain file.
    - ``YAMLFile``: ``<base>/<folder>/<name>.yml`` bound to its default
      template.
    - ``_should_copy`` / ``_copy_payload``: tiny helpers that narrate how
      files are written or skipped.

System Integration
    Resolves locations through
    :meth:`lib_yaml_updater.application.ports.ResourceLoader.base_directory` and
    delegates merging to :class:`lib_yaml_updater.core.YAMLUpdater`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .adapters.file_loaders.structured import YAMLFileLoader
from .adapters.resources.default import DirectoryResourceLoader
from .application.ports import ResourceLoader
from .core import YAMLUpdater
from .domain.document import Document
from .observability import log_debug, make_event


def deploy_resource(
    loader: ResourceLoader,
    resource: str,
    destination: str | Path,
    *,
    force: bool = False,
) -> bool:
    """Copy *resource* to *destination* without overwriting existing files.

    Parameters
    ----------
    loader:
        Resource capability serving the template.
    resource:
        Template name inside *loader*.
    destination:
        Target path; parent directories are created.
    force:
        When ``True`` an existing destination is overwritten.

    Returns
    -------
    bool
        ``True`` when the destination was written.

    Raises
    ------
    NotFound
        If the resource does not exist.
    """

    target = Path(destination)
    if not _should_copy(target, force):
        return False
    with loader.open_resource(resource) as stream:
        payload = stream.read()
    _copy_payload(target, payload)
    log_debug("resource_deployed", **make_event("default", resource, {"destination": str(target)}))
    return True


def deploy_file(source: str | Path, destination: str | Path, *, force: bool = False) -> bool:
    """Copy the template file *source* to *destination* (see :func:`deploy_resource`).

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> source = Path(tmp.name) / "default.yml"
    >>> _ = source.write_text("debug: false\\n", encoding="utf-8")
    >>> deploy_file(source, Path(tmp.name) / "conf" / "config.yml")
    True
    >>> deploy_file(source, Path(tmp.name) / "conf" / "config.yml")
    False
    >>> tmp.cleanup()
    """

    source_path = Path(source)
    if Path(destination).resolve() == source_path.resolve():
        return False
    loader = DirectoryResourceLoader(source_path.parent)
    return deploy_resource(loader, source_path.name, destination, force=force)


class YAMLFile:
    """A user-editable YAML file paired with its default template.

    Parameters
    ----------
    loader:
        Resource capability; its base directory anchors the file.
    name:
        File name without the ``.yml`` suffix.
    folder:
        Optional sub-directory below the base directory.
    resource:
        Template name; defaults to the file's relative location.
    ignored:
        Dotted paths handed to :class:`YAMLUpdater` on :meth:`update`.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "lang.yml").write_text("greeting: hi\\n", encoding="utf-8")
    >>> loader = DirectoryResourceLoader(tmp.name, base=Path(tmp.name) / "data")
    >>> messages = YAMLFile(loader, "messages", resource="lang.yml")
    >>> messages.save_defaults()
    True
    >>> messages.document.get("greeting")
    'hi'
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        loader: ResourceLoader,
        name: str,
        folder: str | None = None,
        *,
        resource: str | None = None,
        ignored: Iterable[str] = (),
    ) -> None:
        self._loader = loader
        self.name = name
        self.folder = folder
        self.location = f"{folder}/{name}.yml" if folder else f"{name}.yml"
        self.file = loader.base_directory() / self.location
        self.resource = resource or self.location
        self.ignored = tuple(ignored)
        self._document: Document | None = None

    def __repr__(self) -> str:
        return f"YAMLFile(folder={self.folder!r}, name={self.name!r})"

    @property
    def document(self) -> Document:
        """Parsed file, loaded on first access."""

        if self._document is None:
            return self.reload()
        return self._document

    def reload(self) -> Document:
        """Parse the file again and cache the result."""

        self._document = YAMLFileLoader().load(str(self.file))
        return self._document

    def save_defaults(self, *, replace: bool = False) -> bool:
        """Copy the default template into place when the file is missing.

        Returns ``True`` when the file was written.
        """

        written = deploy_resource(self._loader, self.resource, self.file, force=replace)
        if written:
            self.reload()
        return written

    def update(self) -> bool:
        """Merge the default template into the file; ``True`` when rewritten."""

        changed = YAMLUpdater(self._loader, self.resource, self.file, self.ignored).update()
        if changed:
            self.reload()
        return changed


def _should_copy(destination: Path, force: bool) -> bool:
    """Return ``True`` when *destination* may be (over)written."""

    if destination.exists() and not force:
        return False
    return True


def _copy_payload(destination: Path, payload: bytes) -> None:
    """Create parent directories and write *payload* to *destination*."""

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(payload)
