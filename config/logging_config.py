"""
Central logging configuration for the desktop backend.

- LOG_LEVEL from env (default INFO).
- LOG_JSON=1 switches to one JSON object per line for log shippers.
- Service loggers use key=value messages (ledger_swap, window_open, ...), so
  the plain format stays grep-friendly.
"""
import json
import logging
import os
import sys
from typing import Optional

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _use_json() -> bool:
    return os.getenv("LOG_JSON", "").lower() in ("1", "true", "yes")


def configure_logging(level_name: Optional[str] = None) -> None:
    """Configure root logger: level from LOG_LEVEL, JSON format when LOG_JSON is set."""
    level_name = (level_name or os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers when reloading
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if _use_json() else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
