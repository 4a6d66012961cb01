"""Adapter contract tests for the default ports implementation.

Purpose
-------
Verify the default collaborators continue to satisfy the application-layer
ports defined in ``src/lib_env_tags/application/ports.py`` so dependency
inversion remains enforceable through automated tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lib_env_tags.adapters.env.default import DefaultEnvResolver
from lib_env_tags.application import ports
from lib_env_tags.application.populate import populate_record
from lib_env_tags.observability import log_warning


class MappingResolver:
    """Minimal resolver that ignores parsing and echoes fixed values."""

    def resolve_string(self, name: str, fallback: str) -> str:
        return f"{name}:{fallback}"

    def resolve_bool(self, name: str, fallback: bool) -> bool:
        return not fallback

    def resolve_int(self, name: str, fallback: int) -> int:
        return fallback * 10


def test_default_env_resolver_contract() -> None:
    """DefaultEnvResolver must fulfil the EnvResolver protocol."""

    resolver: ports.EnvResolver = DefaultEnvResolver(environ={"PORT": "8080"})
    assert all(callable(getattr(resolver, name)) for name in ("resolve_string", "resolve_bool", "resolve_int"))
    assert resolver.resolve_int("PORT", 0) == 8080


def test_custom_resolver_drives_populator() -> None:
    """Any EnvResolver implementation can stand in for the environment adapter."""

    @dataclass
    class Demo:
        name: str = field(default="", metadata={"tag": 'env:"NAME" fallback:"anon"'})
        debug: bool = field(default=False, metadata={"tag": 'env:"DEBUG" fallback:"true"'})
        port: int = field(default=0, metadata={"tag": 'env:"PORT" fallback:"8"'})

    resolver: ports.EnvResolver = MappingResolver()
    record = Demo()
    populate_record(record, resolver=resolver, sink=log_warning)
    assert record == Demo(name="NAME:anon", debug=False, port=80)


def test_log_warning_is_a_diagnostic_sink() -> None:
    sink: ports.DiagnosticSink = log_warning
    sink("field_unsettable", field="port", env=None)
