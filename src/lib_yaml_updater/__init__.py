"""Public package surface of ``lib_yaml_updater``.

Merges a default YAML template into a user-edited file while keeping the
template's comments and key order, the user's values, and ignored sections.
``import lib_yaml_updater`` and ``python -m lib_yaml_updater`` both reach the
same composition root (:mod:`lib_yaml_updater.core`).
"""

from __future__ import annotations

from .adapters.file_loaders.structured import YAMLFileLoader
from .adapters.resources.default import DirectoryResourceLoader, PackageResourceLoader
from .application.comments import TRAILING, KeyPathTracker, extract_comments
from .application.ignored import render_ignored_blocks
from .application.merge import merge_documents
from .application.ports import ResourceLoader
from .core import YAMLUpdater, update_file
from .domain.document import Document
from .domain.errors import (
    ConstructionError,
    InvalidFormat,
    InvalidIgnoredPath,
    NotFound,
    SerializationError,
    UpdaterError,
    WriteError,
)
from .files import YAMLFile, deploy_file, deploy_resource
from .observability import bind_trace_id, get_logger

__all__ = [
    "ConstructionError",
    "DirectoryResourceLoader",
    "Document",
    "InvalidFormat",
    "InvalidIgnoredPath",
    "KeyPathTracker",
    "NotFound",
    "PackageResourceLoader",
    "ResourceLoader",
    "SerializationError",
    "TRAILING",
    "UpdaterError",
    "WriteError",
    "YAMLFile",
    "YAMLFileLoader",
    "YAMLUpdater",
    "bind_trace_id",
    "deploy_file",
    "deploy_resource",
    "extract_comments",
    "get_logger",
    "merge_documents",
    "render_ignored_blocks",
    "update_file",
]
