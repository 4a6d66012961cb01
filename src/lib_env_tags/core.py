"""Composition root for ``lib_env_tags``.

Purpose
-------
Provide the single entry point that wires the environment resolver and the
diagnostic sink into the field populator and exports only stable,
consumer-ready APIs.

Contents
--------
* :func:`populate` – fill a dataclass instance from the environment.
* :func:`parse` – alias of :func:`populate`.

System Role
-----------
This module connects the environment adapter and the logging-backed sink with
:mod:`lib_env_tags.application.populate`. It is the canonical location for
changing default collaborators.
"""

from __future__ import annotations

from collections.abc import Mapping

from .adapters.env.default import DefaultEnvResolver
from .application.ports import DiagnosticSink
from .application.populate import describe_fields, populate_record
from .domain.errors import EnvTagsError, InvalidInputType
from .domain.tags import FieldDescriptor, env_field, tokenize_tag
from .observability import log_warning


def populate(
    value: object,
    *,
    environ: Mapping[str, str] | None = None,
    sink: DiagnosticSink | None = None,
) -> None:
    """Populate the environment-driven fields of *value* in place.

    Why
    ----
    Consumers need a one-call way to fill a settings dataclass without wiring
    resolvers or logging themselves.

    Parameters
    ----------
    value:
        Dataclass instance whose fields carry ``env``/``fallback`` metadata.
    environ:
        Mapping to read from. Defaults to :data:`os.environ`, read fresh on
        every call.
    sink:
        Receives soft-failure diagnostics. Defaults to
        :func:`lib_env_tags.observability.log_warning`.

    Raises
    ------
    InvalidInputType
        When *value* is not a dataclass instance.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Settings:
    ...     name: str = field(default="", metadata={"tag": 'env:"NAME" fallback:"anon"'})
    ...     port: int = env_field("PORT", fallback=80, default=0)
    ...     debug: bool = env_field("DEBUG", fallback="true", default=False)
    >>> settings = Settings()
    >>> populate(settings, environ={"NAME": "alice", "PORT": "abc"})
    >>> settings
    Settings(name='alice', port=80, debug=True)
    >>> populate(42)
    Traceback (most recent call last):
    ...
    lib_env_tags.domain.errors.InvalidInputType: value must be a dataclass instance
    """

    populate_record(
        value,
        resolver=DefaultEnvResolver(environ=environ),
        sink=log_warning if sink is None else sink,
    )


def parse(
    value: object,
    *,
    environ: Mapping[str, str] | None = None,
    sink: DiagnosticSink | None = None,
) -> None:
    """Alias of :func:`populate` kept as the primary public verb."""

    populate(value, environ=environ, sink=sink)


__all__ = [
    "EnvTagsError",
    "FieldDescriptor",
    "InvalidInputType",
    "describe_fields",
    "env_field",
    "parse",
    "populate",
    "tokenize_tag",
]
