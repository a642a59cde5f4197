"""Structured Logging: one stream handler on the root logger, JSON or text.

Invariants:
    - JSON lines carry service, timestamp (the record's own creation time), level,
      logger and message; request extras (operation, user_id, error_code, path)
      and supervisor extras (attempt) appear only when set
    - setup_logging is idempotent: a repeated call replaces the handler it installed
      earlier instead of stacking a second one
    - Plaintext passwords never reach a log line; callers log codes, not inputs

Design Decisions:
    - Standard logging with a small JSONFormatter: no extra dependency
    - sqlalchemy.engine pinned to WARNING so DEBUG runs do not echo SQL parameters
"""

import logging
import json
from datetime import datetime, timezone

SERVICE_NAME = "user-service"
LOG_FIELDS = ("operation", "user_id", "error_code", "path", "attempt")

_HANDLER_NAME = "user_service"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "service": SERVICE_NAME,
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, getattr(record, key))
            for key in LOG_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger; unknown levels mean INFO."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_formatter(fmt))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
