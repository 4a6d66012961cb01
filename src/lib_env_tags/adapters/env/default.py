"""Environment variable adapter.

Purpose
-------
Resolve typed values from process environment variables with a caller-supplied
fallback. Every resolver performs a fresh lookup; nothing is cached.

Key behaviours
--------------
* Absent variables and unparsable values both yield the fallback; resolvers
  never raise.
* Booleans accept ``1``/``t``/``true`` and ``0``/``f``/``false`` in any case.
* Integers are base-10, optionally signed, and must fit a signed 64-bit range.
* The mapping is injectable (``environ=``) so tests never touch
  :data:`os.environ`.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Final

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

_TRUE_LITERALS: Final[frozenset[str]] = frozenset({"1", "t", "true"})
_FALSE_LITERALS: Final[frozenset[str]] = frozenset({"0", "f", "false"})
_DECIMAL: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


def parse_bool(text: str) -> bool:
    """Parse a boolean literal or raise :class:`ValueError`.

    Examples
    --------
    >>> parse_bool('TRUE'), parse_bool('f'), parse_bool('1')
    (True, False, True)
    >>> parse_bool('maybe')
    Traceback (most recent call last):
    ...
    ValueError: invalid boolean literal: 'maybe'
    """

    lowered = text.lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal: {text!r}")


def parse_int64(text: str) -> int:
    """Parse a base-10 signed 64-bit integer or raise :class:`ValueError`.

    Why
    ----
    :func:`int` tolerates whitespace, underscores and unbounded magnitudes;
    environment values must be plain decimal numbers inside the int64 range.

    Examples
    --------
    >>> parse_int64('42'), parse_int64('-7'), parse_int64('+3')
    (42, -7, 3)
    >>> parse_int64('1_000')
    Traceback (most recent call last):
    ...
    ValueError: invalid integer literal: '1_000'
    """

    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid integer literal: {text!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


class DefaultEnvResolver:
    """Resolve typed values from one environment mapping."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the resolver with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def lookup(self, name: str) -> str | None:
        """Return the value bound to *name*, or ``None`` when unset."""

        return self._environ.get(name)

    def resolve_string(self, name: str, fallback: str) -> str:
        """Return the raw value of *name* or *fallback* when unset.

        Examples
        --------
        >>> DefaultEnvResolver(environ={'NAME': 'alice'}).resolve_string('NAME', 'anon')
        'alice'
        >>> DefaultEnvResolver(environ={}).resolve_string('NAME', 'anon')
        'anon'
        """

        value = self.lookup(name)
        return fallback if value is None else value

    def resolve_bool(self, name: str, fallback: bool) -> bool:
        """Return *name* parsed as a boolean, *fallback* when unset or unparsable.

        Examples
        --------
        >>> resolver = DefaultEnvResolver(environ={'ON': 'true', 'BAD': 'yes please'})
        >>> resolver.resolve_bool('ON', False), resolver.resolve_bool('BAD', False)
        (True, False)
        """

        value = self.lookup(name)
        if value is None:
            return fallback
        try:
            return parse_bool(value)
        except ValueError:
            return fallback

    def resolve_int(self, name: str, fallback: int) -> int:
        """Return *name* parsed as an int64, *fallback* when unset or unparsable.

        Examples
        --------
        >>> resolver = DefaultEnvResolver(environ={'PORT': '8080', 'BAD': 'abc'})
        >>> resolver.resolve_int('PORT', 80), resolver.resolve_int('BAD', 80)
        (8080, 80)
        """

        value = self.lookup(name)
        if value is None:
            return fallback
        try:
            return parse_int64(value)
        except ValueError:
            return fallback


def resolve_string(name: str, fallback: str, *, environ: Mapping[str, str] | None = None) -> str:
    """Module-level shortcut for :meth:`DefaultEnvResolver.resolve_string`."""

    return DefaultEnvResolver(environ=environ).resolve_string(name, fallback)


def resolve_bool(name: str, fallback: bool, *, environ: Mapping[str, str] | None = None) -> bool:
    """Module-level shortcut for :meth:`DefaultEnvResolver.resolve_bool`."""

    return DefaultEnvResolver(environ=environ).resolve_bool(name, fallback)


def resolve_int(name: str, fallback: int, *, environ: Mapping[str, str] | None = None) -> int:
    """Module-level shortcut for :meth:`DefaultEnvResolver.resolve_int`."""

    return DefaultEnvResolver(environ=environ).resolve_int(name, fallback)
