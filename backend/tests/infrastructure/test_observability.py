"""Observability & configuration — JSON log format, settings loading, and logging from settings."""

import json
import logging

import pytest

from predicate_core.config import Settings, get_settings
from predicate_core.infrastructure.observability import (
    JSONFormatter,
    configure_logging,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "predicate_core.test", logging.WARNING, __file__, 1, "Rejected %s", ("remove",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "predicate_core.test"
    assert payload["message"] == "Rejected remove"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(_record(
        error_code="InvalidPredicateType", operation="add", unrelated="x",
    )))
    assert payload["error_code"] == "InvalidPredicateType"
    assert payload["operation"] == "add"
    assert "unrelated" not in payload


def test_setup_logging_attaches_handler():
    previous_level = logging.root.level
    handler = setup_logging("debug", "text")
    try:
        assert handler in logging.root.handlers
        assert logging.root.level == logging.DEBUG
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)


def test_configure_logging_applies_settings():
    previous_level = logging.root.level
    handler = configure_logging(Settings(log_level="warning", log_format="text", _env_file=None))
    try:
        assert handler in logging.root.handlers
        assert logging.root.level == logging.WARNING
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)


def test_configure_logging_defaults_to_environment(monkeypatch):
    monkeypatch.setenv("PREDICATE_CORE_LOG_LEVEL", "error")
    monkeypatch.setenv("PREDICATE_CORE_LOG_FORMAT", "json")
    get_settings.cache_clear()
    previous_level = logging.root.level
    handler = configure_logging()
    try:
        assert logging.root.level == logging.ERROR
        assert isinstance(handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)
        get_settings.cache_clear()


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PREDICATE_CORE_LOG_LEVEL", " warning ")
    monkeypatch.setenv("PREDICATE_CORE_LOG_REJECTIONS", "false")
    settings = Settings(_env_file=None)
    assert settings.log_level == "WARNING"
    assert settings.log_rejections is False
    assert settings.log_format == "json"


def test_settings_reject_unknown_log_format(monkeypatch):
    monkeypatch.setenv("PREDICATE_CORE_LOG_FORMAT", "xml")
    with pytest.raises(ValueError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
