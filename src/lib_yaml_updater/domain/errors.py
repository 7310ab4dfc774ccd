"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the merge engine, and the
composition root. The hierarchy lives in the domain layer so outer layers may
depend on it without creating import cycles.

Contents
--------
* :class:`UpdaterError` – umbrella base class for every failure raised by the
  library.
* :class:`ConstructionError` – anything that prevents an updater from being
  built (missing sources, malformed documents, bad ignored paths).
* :class:`NotFound` – a file or packaged resource does not exist.
* :class:`InvalidFormat` – a document cannot be decoded or parsed into a
  mapping.
* :class:`InvalidIgnoredPath` – an ignored path does not name an existing
  section of the current document.
* :class:`SerializationError` – a value cannot be rendered back to YAML.
* :class:`WriteError` – persisting the merged document failed.

System Role
-----------
Construction and serialization errors are raised before any file is touched, so
callers catching :class:`UpdaterError` never observe a partially written
document.
"""

from __future__ import annotations


class UpdaterError(Exception):
    """Base type for all exceptions emitted by ``lib_yaml_updater``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class ConstructionError(UpdaterError):
    """Raised when an updater cannot be assembled from its inputs.

    Why
    ----
    Every construction failure is fatal and happens before the target file is
    read for writing; grouping them lets callers abort cleanly.
    """


class NotFound(ConstructionError):
    """Represents a missing file or packaged default resource."""


class InvalidFormat(ConstructionError):
    """Raised when an input artifact cannot be parsed into a YAML mapping.

    Typical Sources
    ---------------
    Undecodable bytes, :mod:`yaml` parser errors, documents whose root is not a
    mapping, and default documents using the reserved ``.`` inside a key.
    """


class InvalidIgnoredPath(ConstructionError):
    """Raised when an ignored path cannot be resolved to a section.

    Why
    ----
    A typo in an ignored path would otherwise drop the user's customised
    section on the next update. Failing loudly keeps the configuration intact.

    Attributes
    ----------
    path:
        The dotted path exactly as supplied by the caller.
    """

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class SerializationError(UpdaterError):
    """Signifies that a value could not be represented as YAML."""


class WriteError(UpdaterError):
    """Raised when the merged document cannot be written back to disk.

    The underlying :class:`OSError` is always attached as ``__cause__``. No
    retry is attempted.
    """
