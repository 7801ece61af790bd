"""Structured Logging — JSON formatter and setup for library consumers.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, operation, target_id, ...) surfaced when present
    - JSON format by default, human-readable text on request

Design Decisions:
    - setup_logging is opt-in: the library itself only creates module loggers
    - configure_logging is the host entry point: level and format come from Settings
"""

import json
import logging
from datetime import datetime, timezone

from predicate_core.config import Settings, get_settings

_EXTRA_KEYS = (
    "error_code", "operation", "predicate_type",
    "target_id", "operator_id", "insertion_mode",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach one stream handler to the root logger. Returns the handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """Configure logging from settings (PREDICATE_CORE_LOG_LEVEL / _LOG_FORMAT)."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
