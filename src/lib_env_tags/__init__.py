"""Public package surface for environment-driven dataclass population.

``import lib_env_tags`` exposes :func:`parse` (alias :func:`populate`), the
field helpers, the typed resolvers and the logging hooks. The CLI adapter in
:mod:`lib_env_tags.cli` drives the same functions.
"""

from __future__ import annotations

from .adapters.env.default import DefaultEnvResolver, resolve_bool, resolve_int, resolve_string
from .core import (
    EnvTagsError,
    FieldDescriptor,
    InvalidInputType,
    describe_fields,
    env_field,
    parse,
    populate,
    tokenize_tag,
)
from .domain.tags import strip_quotes
from .observability import bind_trace_id, get_logger

__all__ = [
    "DefaultEnvResolver",
    "EnvTagsError",
    "FieldDescriptor",
    "InvalidInputType",
    "bind_trace_id",
    "describe_fields",
    "env_field",
    "get_logger",
    "parse",
    "populate",
    "resolve_bool",
    "resolve_int",
    "resolve_string",
    "strip_quotes",
    "tokenize_tag",
]
