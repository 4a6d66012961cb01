"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, trace binding, and event construction behaviour
promised to downstream consumers.
"""

from __future__ import annotations

import logging

import pytest

from lib_env_tags import bind_trace_id, get_logger
from lib_env_tags.observability import TRACE_ID, log_info, log_warning, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_env_tags")
    bind_trace_id("trace-123")
    try:
        log_info("record_populated", field="port", env="PORT")
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "field": "port", "env": "PORT"}


def test_log_warning_level(caplog: pytest.LogCaptureFixture) -> None:
    """The default diagnostic sink logs at WARNING so it is visible without debug logging."""

    caplog.set_level(logging.WARNING, logger="lib_env_tags")
    log_warning("field_unsettable", field="port")
    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "field_unsettable"


def test_bind_trace_id_clears_context() -> None:
    """Clearing the trace ID should reset the context variable to None."""

    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    """make_event should merge optional metadata on top of the field keys."""

    assert make_event("port", "PORT", {"fallback": "x"}) == {"field": "port", "env": "PORT", "fallback": "x"}
    assert make_event("port", None) == {"field": "port", "env": None}
