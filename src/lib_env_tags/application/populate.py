"""Application-layer field population.

Purpose
-------
Walk the fields of a dataclass instance, read the environment metadata
attached to each one, resolve a typed value and write it back in place.
Remains free of direct environment and logging access so it can be driven by
any :class:`~lib_env_tags.application.ports.EnvResolver` and
:class:`~lib_env_tags.application.ports.DiagnosticSink`.

Contents
    - ``populate_record``: public entry point driven by a simple loop.
    - ``describe_fields``: yields :class:`FieldDescriptor` values per field.
    - ``_resolve_field``: type dispatch for ``str``, ``bool`` and ``int``.
    - ``_bool_fallback`` / ``_int_fallback``: fallback literal parsing with
      safe defaults.

System Role
-----------
Called by :mod:`lib_env_tags.core` with the default resolver and sink.
Soft failures never escape: unsettable fields and unparsable integer
fallbacks are reported to the sink, unsupported types are skipped.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Final, Iterator

from ..adapters.env.default import parse_bool, parse_int64
from ..domain.errors import InvalidInputType
from ..domain.tags import ENV_KEYWORD, FALLBACK_KEYWORD, FieldDescriptor, field_options, strip_quotes
from ..observability import log_debug, log_info, make_event
from .ports import DiagnosticSink, EnvResolver

INT_FALLBACK_ON_ERROR: Final[int] = -1
BOOL_FALLBACK_ON_ERROR: Final[bool] = False

# Annotations that could not be evaluated stay strings; accept the plain names.
_SCALAR_NAMES: Final[dict[str, type]] = {"str": str, "bool": bool, "int": int}


def populate_record(record: object, *, resolver: EnvResolver, sink: DiagnosticSink) -> None:
    """Populate every environment-driven field of *record* in place.

    Why
    ----
    Centralising the per-field procedure keeps the composition root a thin
    wiring layer and makes the walk testable with fake collaborators.

    What
    ----
    Rejects non-records, then for each field: reports and skips unsettable
    fields (frozen records, or a write refused with :class:`AttributeError`),
    skips fields without an ``env`` keyword, strips quotes from the ``env``
    and ``fallback`` values, and assigns the resolved value when the declared
    type is supported. Logs ``record_populated`` at info level when done.

    Parameters
    ----------
    record:
        Dataclass instance, mutated in place.
    resolver:
        Typed environment lookups.
    sink:
        Receives ``field_unsettable`` and ``fallback_unparsable`` events.

    Raises
    ------
    InvalidInputType
        When *record* is not a dataclass instance. Nothing is mutated.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> from lib_env_tags.adapters.env.default import DefaultEnvResolver
    >>> @dataclass
    ... class Settings:
    ...     port: int = field(default=0, metadata={"tag": 'env:"PORT" fallback:"80"'})
    >>> settings = Settings()
    >>> populate_record(settings, resolver=DefaultEnvResolver(environ={}), sink=print)
    >>> settings.port
    80
    """

    settable = not _is_frozen(record)
    populated = 0
    for descriptor in describe_fields(record):
        if not settable:
            sink("field_unsettable", **make_event(descriptor.name, None))
            continue
        if ENV_KEYWORD not in descriptor.options:
            continue
        if _resolve_field(record, descriptor, resolver=resolver, sink=sink):
            populated += 1
    log_info("record_populated", record=type(record).__name__, fields=populated)


def describe_fields(record: object) -> Iterator[FieldDescriptor]:
    """Yield a :class:`FieldDescriptor` for each field of *record*.

    Raises :class:`InvalidInputType` on first iteration when *record* is not
    a dataclass instance.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from lib_env_tags.domain.tags import env_field
    >>> @dataclass
    ... class Demo:
    ...     debug: bool = env_field("DEBUG", fallback=False, default=False)
    >>> [(d.name, d.type, dict(d.options)) for d in describe_fields(Demo())]
    [('debug', <class 'bool'>, {'env': 'DEBUG', 'fallback': 'False'})]
    """

    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise InvalidInputType()
    hints = _type_hints(type(record))
    for field in dataclasses.fields(record):
        declared = hints.get(field.name, field.type)
        yield FieldDescriptor(field.name, declared, field_options(field))


def _resolve_field(
    record: object,
    descriptor: FieldDescriptor,
    *,
    resolver: EnvResolver,
    sink: DiagnosticSink,
) -> bool:
    """Assign the resolved value of one field; return ``False`` when skipped."""

    env = strip_quotes(descriptor.options[ENV_KEYWORD])
    fallback = strip_quotes(descriptor.options.get(FALLBACK_KEYWORD, ""))
    declared = _scalar_type(descriptor.type)

    value: Any
    if declared is str:
        value = resolver.resolve_string(env, fallback)
    elif declared is bool:
        value = resolver.resolve_bool(env, _bool_fallback(fallback))
    elif declared is int:
        value = resolver.resolve_int(env, _int_fallback(descriptor.name, env, fallback, sink))
    else:
        log_debug("field_type_unsupported", **make_event(descriptor.name, env, {"type": repr(declared)}))
        return False

    try:
        setattr(record, descriptor.name, value)
    except AttributeError:
        sink("field_unsettable", **make_event(descriptor.name, env))
        return False
    log_debug("field_resolved", **make_event(descriptor.name, env))
    return True


def _bool_fallback(text: str) -> bool:
    """Parse a boolean fallback literal; unparsable text means ``False``.

    Examples
    --------
    >>> _bool_fallback('true'), _bool_fallback('maybe'), _bool_fallback('')
    (True, False, False)
    """

    try:
        return parse_bool(text)
    except ValueError:
        return BOOL_FALLBACK_ON_ERROR


def _int_fallback(name: str, env: str, text: str, sink: DiagnosticSink) -> int:
    """Parse an integer fallback literal; unparsable text is reported and means ``-1``."""

    try:
        return parse_int64(text)
    except ValueError:
        sink(
            "fallback_unparsable",
            **make_event(name, env, {"fallback": text, "substitute": INT_FALLBACK_ON_ERROR}),
        )
        return INT_FALLBACK_ON_ERROR


def _scalar_type(declared: Any) -> Any:
    if isinstance(declared, str):
        return _SCALAR_NAMES.get(declared, declared)
    return declared


def _is_frozen(record: object) -> bool:
    params = getattr(type(record), "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def _type_hints(cls: type) -> dict[str, Any]:
    """Return evaluated annotations for *cls*, or ``{}`` when they cannot be resolved."""

    try:
        return typing.get_type_hints(cls)
    except Exception:  # noqa: BLE001 - any evaluation failure falls back to raw annotations
        return {}
