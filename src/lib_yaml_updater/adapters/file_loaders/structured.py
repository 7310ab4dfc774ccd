"""Structured YAML document loader.

Purpose
-------
Convert on-disk files and packaged resources into :class:`Document` instances
the merge engine understands. The adapter is a small wrapper around
``yaml.safe_load`` so decoding, error handling, and observability live in one
place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`YAMLFileLoader` – loader producing :class:`Document` values that keep
  the raw text next to the parsed tree.

System Role
-----------
Invoked by :class:`lib_yaml_updater.core.YAMLUpdater` for both the default
template and the current file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from ...domain.document import Document
from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Side Effects
        ------------
        Emits ``yaml_file_read`` debug events.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b"key: value")
        >>> tmp.close()
        >>> BaseFileLoader()._read(tmp.name)[:3]
        b'key'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"YAML file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("yaml_file_read", document="file", path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[Any, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"key": 1}, path="demo")
        {'key': 1}
        >>> BaseFileLoader._ensure_mapping(42, path="demo")
        Traceback (most recent call last):
        ...
        lib_yaml_updater.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents into :class:`Document` values."""

    def load(self, path: str) -> Document:
        """Return the document stored in the file at *path*.

        Raises
        ------
        NotFound
            When *path* is not an existing file.
        InvalidFormat
            When the file is not UTF-8, not valid YAML, or not a mapping.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', delete=False, encoding='utf-8')
        >>> _ = tmp.write('server:\\n  port: 8080\\n')
        >>> tmp.close()
        >>> YAMLFileLoader().load(tmp.name).get("server.port")
        8080
        >>> Path(tmp.name).unlink()
        """

        return self.parse(self._read(path), source=path)

    def parse(self, payload: bytes, *, source: str) -> Document:
        """Decode and parse *payload*; *source* names it in diagnostics.

        An empty document (or one holding only comments) yields an empty
        mapping. A leading UTF-8 byte order mark is dropped.

        Examples
        --------
        >>> YAMLFileLoader().parse(b"# nothing yet\\n", source="demo").paths
        ()
        """

        try:
            text = payload.decode("utf-8-sig")
            data = yaml.safe_load(text)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            log_error("yaml_file_invalid", document="file", path=source, error=str(exc))
            raise InvalidFormat(f"Invalid YAML in {source}: {exc}") from exc
        if data is None:
            data = {}
        result = self._ensure_mapping(data, path=source)
        log_debug("yaml_file_loaded", document="file", path=source)
        return Document(result, text=text, source=source)
