"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts adapters must satisfy so the composition root
can orchestrate behaviour without depending on concrete implementations.

Contents
--------
* :class:`ResourceLoader` – hands out packaged default templates and the base
  directory user files live in.
* :class:`DocumentLoader` – parses YAML bytes into a
  :class:`~lib_yaml_updater.domain.document.Document`.

System Role
-----------
These protocols keep the updater independent of where defaults come from (a
directory, an installed package, a plugin archive).
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from ..domain.document import Document


@runtime_checkable
class ResourceLoader(Protocol):
    """Host capability serving default templates.

    Why
    ----
    Applications ship their default configuration in different ways. The
    updater only needs to open one by name and to know where user files are
    kept.

    Methods
    -------
    :meth:`open_resource`
        Binary stream of the named resource; raises ``NotFound`` when absent.
    :meth:`base_directory`
        Directory that user-editable files are resolved against.
    """

    def open_resource(self, name: str) -> BinaryIO:
        """Return a readable binary stream for the resource called *name*."""

    def base_directory(self) -> Path:
        """Return the directory user files are resolved against."""


@runtime_checkable
class DocumentLoader(Protocol):
    """Parse YAML files and payloads into documents."""

    def load(self, path: str) -> Document:
        """Read *path* and return its document or raise ``InvalidFormat``."""

    def parse(self, payload: bytes, *, source: str) -> Document:
        """Parse *payload* (named *source* in diagnostics) into a document."""
