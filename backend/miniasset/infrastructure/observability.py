"""Structured Logging — JSON formatter and setup for build-server observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (build_name, path, error_code, cache, duration_ms) surfaced when present
    - JSON format by default, human-readable text when log_format=text
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("build_name", "path", "error_code", "cache", "duration_ms")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging. Safe to call more than once."""
    for existing in list(logging.root.handlers):
        if getattr(existing, "_miniasset", False):
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler._miniasset = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
