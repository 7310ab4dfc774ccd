"""Default implementations of the resource capability.

Purpose
-------
Provide the two ways applications usually ship a default template: as a file
in a directory, or as package data inside an installed distribution.

Contents
--------
* :class:`DirectoryResourceLoader` – resolves resource names below a directory.
* :class:`PackageResourceLoader` – resolves resource names through
  :mod:`importlib.resources`.

System Role
-----------
Both satisfy :class:`lib_yaml_updater.application.ports.ResourceLoader` and are
passed to :class:`lib_yaml_updater.core.YAMLUpdater` and
:class:`lib_yaml_updater.files.YAMLFile`.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import BinaryIO

from ...domain.errors import NotFound
from ...observability import log_debug


class DirectoryResourceLoader:
    """Serve resources from *root*; user files resolve against *base*.

    Parameters
    ----------
    root:
        Directory holding the default templates.
    base:
        Directory user files live in. Defaults to *root*.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> _ = (Path(tmp.name) / "config.yml").write_bytes(b"debug: false\\n")
    >>> loader = DirectoryResourceLoader(tmp.name)
    >>> with loader.open_resource("config.yml") as stream:
    ...     stream.read()
    b'debug: false\\n'
    >>> tmp.cleanup()
    """

    def __init__(self, root: str | Path, base: str | Path | None = None) -> None:
        self.root = Path(root)
        self._base = Path(base) if base is not None else self.root

    def open_resource(self, name: str) -> BinaryIO:
        path = self.root / _normalise(name)
        if not path.is_file():
            raise NotFound(f"Resource not found: {name} (looked in {self.root})")
        log_debug("resource_opened", document="default", path=str(path))
        return path.open("rb")

    def base_directory(self) -> Path:
        return self._base


class PackageResourceLoader:
    """Serve resources bundled as package data of *package*.

    Parameters
    ----------
    package:
        Importable package name whose data files hold the templates.
    base:
        Directory user files live in.
    """

    def __init__(self, package: str, base: str | Path) -> None:
        self.package = package
        self._base = Path(base)

    def open_resource(self, name: str) -> BinaryIO:
        try:
            traversable = resources.files(self.package).joinpath(_normalise(name))
        except ModuleNotFoundError as exc:
            raise NotFound(f"Package not found: {self.package}") from exc
        if not traversable.is_file():
            raise NotFound(f"Resource not found: {name} (package {self.package})")
        log_debug("resource_opened", document="default", path=f"{self.package}:{name}")
        return traversable.open("rb")

    def base_directory(self) -> Path:
        return self._base


def _normalise(name: str) -> str:
    """Use forward slashes so Windows-style names resolve everywhere."""

    return name.replace("\\", "/")
