"""Logging for the updater's load, merge and write events.

Purpose
    Every event the updater emits is a short snake_case message on the
    ``lib_yaml_updater`` logger, with a ``context`` dict in ``extra`` naming
    the document role (``default`` or ``current``), its path or resource name,
    and the active trace id. Host applications attach their own handlers; the
    package logs nothing until they do.

Events
    - loaders: ``yaml_file_read``, ``yaml_file_loaded``, ``yaml_file_invalid``,
      ``resource_opened``;
    - updater construction: ``document_loaded``, ``comments_extracted``,
      ``ignored_blocks_rendered``, ``ignored_path_not_in_default`` (warning);
    - writing: ``update_written``, ``update_unchanged``, ``update_failed``
      (error);
    - deployment: ``resource_deployed``.

Contents
    - ``TRACE_ID`` / ``bind_trace_id``: trace id stamped on every event.
    - ``get_logger``: the package logger.
    - ``log_debug`` / ``log_info`` / ``log_warning`` / ``log_error``.
    - ``make_event``: builds the ``document``/``path`` payload.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_yaml_updater_trace_id", default=None)
"""Trace id attached to every event; one value per update run or request."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_yaml_updater")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the ``lib_yaml_updater`` logger (a ``NullHandler`` is attached)."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind or clear the active trace identifier.

    What
        Stores ``trace_id`` in :data:`TRACE_ID`; ``None`` clears the binding.
    Inputs
        trace_id: Identifier string or ``None`` to drop the binding.
    Side Effects
        Mutates the context variable visible to subsequent logging helpers.

    Examples
    --------
    >>> bind_trace_id('abc123')
    >>> TRACE_ID.get()
    'abc123'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    """Emit a debug event (file reads, parsed documents, comment maps)."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit an info event; the updater uses it for write outcomes."""

    _emit(logging.INFO, message, fields)


def log_warning(message: str, **fields: Any) -> None:
    """Emit a warning event, e.g. an ignored path the default lacks."""

    _emit(logging.WARNING, message, fields)


def log_error(message: str, **fields: Any) -> None:
    """Emit an error event for invalid YAML or a failed write."""

    _emit(logging.ERROR, message, fields)


def make_event(
    document: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a structured logging payload for update lifecycle events.

    Why
        Every updater event names which document it concerns and where it
        came from.
    What
        Returns a dictionary with ``document`` and ``path`` keys and any optional
        payload fields.
    Inputs
        document: Role of the document being observed (``"default"``,
            ``"current"``).
        path: Filesystem path or resource name associated with the event.
        payload: Optional mapping with extra diagnostic detail.
    Outputs
        dict[str, Any]: Data safe to unpack into :func:`log_*` helpers.

    Examples
    --------
    >>> make_event('default', 'config.yml', {'keys': 3})
    {'document': 'default', 'path': 'config.yml', 'keys': 3}
    """

    event = _base_event(document, path)
    return _merge_payload(event, payload)


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a log entry through the shared logger with contextual metadata."""

    _LOGGER.log(level, message, extra={"context": _with_trace(fields)})


def _with_trace(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Attach the current trace identifier to the provided structured fields."""

    context = {"trace_id": TRACE_ID.get()}
    context.update(fields)
    return context


def _base_event(document: str, path: str | None) -> dict[str, Any]:
    """Create the minimal event payload containing document and path information."""

    return {"document": document, "path": path}


def _merge_payload(event: dict[str, Any], payload: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge optional diagnostic data into the event payload when provided."""

    if payload:
        event |= dict(payload)
    return event
