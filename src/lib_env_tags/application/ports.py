"""Application-layer ports describing collaborator responsibilities.

Purpose
-------
Define the structural contracts the populator depends on so the composition
root can wire real or fake collaborators without changing the population
logic.

Contents
--------
* :class:`EnvResolver` – typed environment lookups with fallbacks.
* :class:`DiagnosticSink` – receives soft-failure events (unsettable fields,
  unparsable integer fallbacks).

System Role
-----------
These protocols keep :mod:`lib_env_tags.application.populate` independent of
:data:`os.environ` and of the logging backend.
"""

from __future__ import annotations

from typing import Any, Protocol


class EnvResolver(Protocol):
    """Resolve environment variables into typed values.

    Methods never raise: absent and malformed values both yield the fallback.
    """

    def resolve_string(self, name: str, fallback: str) -> str:
        """Return the raw value of *name* or *fallback*."""

    def resolve_bool(self, name: str, fallback: bool) -> bool:
        """Return *name* as a boolean or *fallback*."""

    def resolve_int(self, name: str, fallback: int) -> int:
        """Return *name* as a 64-bit integer or *fallback*."""


class DiagnosticSink(Protocol):
    """Fire-and-forget receiver for populate diagnostics.

    Called as ``sink(event, **fields)`` where ``event`` is a short identifier
    such as ``"field_unsettable"`` and ``fields`` carry the field name and
    context. :func:`lib_env_tags.observability.log_warning` satisfies it.
    """

    def __call__(self, message: str, **fields: Any) -> None:
        """Record a single diagnostic event."""
