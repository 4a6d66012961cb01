"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by the populator, the composition root, and
consuming applications. Population is deliberately forgiving: per-field
problems degrade to fallbacks, so the only failure surfaced to callers is a
record of the wrong shape.

Contents
--------
* :class:`EnvTagsError` – umbrella base class for all library errors.
* :class:`InvalidInputType` – raised when the supplied value is not a
  dataclass instance.

System Role
-----------
The populator raises :class:`InvalidInputType` before touching any field.
Callers catch :class:`EnvTagsError` (or the builtin :class:`TypeError`) to
handle it.
"""

from __future__ import annotations

from typing import Final

INVALID_INPUT_MESSAGE: Final[str] = "value must be a dataclass instance"


class EnvTagsError(Exception):
    """Base type for all exceptions emitted by ``lib_env_tags``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidInputType(EnvTagsError, TypeError):
    """Raised when the value handed to :func:`lib_env_tags.parse` is not a record.

    Why
    ----
    Only dataclass instances expose named, typed, writable fields. Classes,
    mappings and scalars are rejected up front so nothing is mutated.

    Examples
    --------
    >>> raise InvalidInputType()
    Traceback (most recent call last):
    ...
    lib_env_tags.domain.errors.InvalidInputType: value must be a dataclass instance
    """

    def __init__(self, message: str = INVALID_INPUT_MESSAGE) -> None:
        super().__init__(message)
