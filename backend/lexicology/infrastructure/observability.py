"""Structured Logging — JSON formatter and setup for the Lexicology service.

Invariants:
    - Every JSON line carries timestamp (record creation time, UTC), level, logger, message
    - Domain extras (user_id, word_id) and error extras (error_code, operation, path)
      appear only when set on the record
    - setup_logging() is idempotent: calling it again replaces its own handler
    - Driver chatter (aiosqlite, asyncpg) stays at WARNING unless the root level is DEBUG

Design Decisions:
    - setup_logging called once on startup via lifespan; tests may call it repeatedly
"""

import json
import logging
from datetime import datetime, timezone

DOMAIN_FIELDS = ("user_id", "word_id")
ERROR_FIELDS = ("error_code", "operation", "path")
_NOISY_LOGGERS = ("aiosqlite", "asyncpg")
_HANDLER_NAME = "lexicology"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in DOMAIN_FIELDS + ERROR_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    driver_level = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(driver_level)
    return handler
