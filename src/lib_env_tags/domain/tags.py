"""Field metadata: tag tokenizer and structured options.

Purpose
-------
Turn the metadata attached to a dataclass field into a keyword/value mapping
the populator understands. Two spellings are accepted:

* raw tag text stored under :data:`TAG_METADATA_KEY`
  (``field(metadata={"tag": 'env:"PORT" fallback:"8080"'})``), tokenized by
  :func:`tokenize_tag`;
* structured options stored under the keyword names themselves, as produced by
  :func:`env_field` (``env_field("PORT", fallback=8080)``).

Contents
--------
* :data:`ENV_KEYWORD` / :data:`FALLBACK_KEYWORD` – the recognised keywords.
* :class:`FieldDescriptor` – name, declared type and metadata of one field.
* :func:`tokenize_tag` – raw tag text to ``dict[str, str]``.
* :func:`strip_quotes` – removes surrounding double quotes at point of use.
* :func:`field_options` – metadata of a :class:`dataclasses.Field` as a mapping.
* :func:`env_field` – ``dataclasses.field`` wrapper carrying structured options.

System Role
-----------
Pure domain helpers without I/O. Consumed by
:mod:`lib_env_tags.application.populate`.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import MISSING
from typing import Any, Callable, Final, NamedTuple

ENV_KEYWORD: Final[str] = "env"
FALLBACK_KEYWORD: Final[str] = "fallback"
TAG_METADATA_KEY: Final[str] = "tag"


class FieldDescriptor(NamedTuple):
    """Describe one field of a record for a single populate call.

    Attributes
    ----------
    name:
        Attribute name on the record.
    type:
        Declared type after resolving postponed annotations (may still be a
        string when the annotation cannot be evaluated).
    options:
        Keyword/value mapping built from the field metadata, raw values
        (quotes preserved). Empty when the field carries no metadata.
    """

    name: str
    type: Any
    options: Mapping[str, str]


def tokenize_tag(text: str) -> dict[str, str]:
    """Split raw tag *text* into a keyword/value mapping.

    Why
    ----
    Tag text is a compact ``keyword:value`` list separated by single spaces.
    Values keep their quotes; callers strip them with :func:`strip_quotes`.

    What
    ----
    Every token contributes ``keyword -> value`` where the keyword is the text
    before the first colon and the value everything after it. Tokens without
    a colon map the whole token to an empty value. Empty tokens (repeated,
    leading or trailing spaces) are ignored. Later duplicates overwrite
    earlier ones.

    Examples
    --------
    >>> tokenize_tag('env:"X" fallback:"5"')
    {'env': '"X"', 'fallback': '"5"'}
    >>> tokenize_tag('env:URL  fallback:http://host:80 flag')
    {'env': 'URL', 'fallback': 'http://host:80', 'flag': ''}
    >>> tokenize_tag('')
    {}
    """

    mapping: dict[str, str] = {}
    for token in text.split(" "):
        if not token:
            continue
        keyword, _, value = token.partition(":")
        mapping[keyword] = value
    return mapping


def strip_quotes(value: str) -> str:
    """Remove every leading and trailing double quote from *value*.

    Examples
    --------
    >>> strip_quotes('"X"'), strip_quotes('plain'), strip_quotes('""')
    ('X', 'plain', '')
    """

    return value.strip('"')


def field_options(field: dataclasses.Field) -> dict[str, str]:
    """Return the keyword mapping attached to *field*, or ``{}``.

    Raw tag text wins over structured options when both are present. Empty tag
    text counts as no metadata.

    Examples
    --------
    >>> from dataclasses import dataclass, field, fields
    >>> @dataclass
    ... class Demo:
    ...     port: int = field(default=0, metadata={"tag": 'env:"PORT" fallback:"80"'})
    ...     host: str = env_field("HOST", fallback="localhost", default="")
    ...     plain: str = ""
    >>> [field_options(f) for f in fields(Demo)]
    [{'env': '"PORT"', 'fallback': '"80"'}, {'env': 'HOST', 'fallback': 'localhost'}, {}]
    """

    metadata = field.metadata
    if not metadata:
        return {}
    text = metadata.get(TAG_METADATA_KEY)
    if text is not None:
        return tokenize_tag(str(text))
    return {
        keyword: str(metadata[keyword])
        for keyword in (ENV_KEYWORD, FALLBACK_KEYWORD)
        if metadata.get(keyword) is not None
    }


def env_field(
    env: str,
    fallback: object = None,
    *,
    default: Any = MISSING,
    default_factory: Callable[[], Any] | Any = MISSING,
    **kwargs: Any,
) -> Any:
    """Return a :func:`dataclasses.field` bound to environment variable *env*.

    Why
    ----
    Structured options avoid free-text tag parsing: the variable name and the
    fallback literal are stored as separate metadata entries.

    Parameters
    ----------
    env:
        Environment variable name.
    fallback:
        Literal used when the variable is unset or unparsable. Rendered with
        :func:`str` and parsed like tag text (``True`` -> ``"True"``).
    default / default_factory:
        Passed to :func:`dataclasses.field`; the value a record holds before
        it is populated.
    kwargs:
        Remaining :func:`dataclasses.field` arguments (``repr``, ``compare``...).
        A ``metadata`` mapping is merged with the environment options.

    Examples
    --------
    >>> from dataclasses import dataclass, fields
    >>> @dataclass
    ... class Demo:
    ...     retries: int = env_field("RETRIES", fallback=3, default=0)
    >>> dict(fields(Demo)[0].metadata)
    {'env': 'RETRIES', 'fallback': 3}
    """

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ENV_KEYWORD] = env
    if fallback is not None:
        metadata[FALLBACK_KEYWORD] = fallback
    return dataclasses.field(default=default, default_factory=default_factory, metadata=metadata, **kwargs)


__all__ = [
    "ENV_KEYWORD",
    "FALLBACK_KEYWORD",
    "TAG_METADATA_KEY",
    "FieldDescriptor",
    "env_field",
    "field_options",
    "strip_quotes",
    "tokenize_tag",
]
