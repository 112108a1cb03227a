"""
Central logging configuration for the portfolio engine.

- JSON logs when LOG_JSON=1 (for log aggregators), plain text otherwise.
- LOG_LEVEL from env (default INFO).
- Never log holding names or amounts: use counts, indices and ids only.
  Use getLogger(__name__) in each module.

The engine itself never configures logging; the host application calls
configure_logging() once at startup.
"""
import json
import logging
import os
import sys
from typing import Any


def _json_serial(obj: Any):
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            payload["exception"] = self.formatException(record.exc_info)
        # e.g. logger.info("...", extra={"extra": {"portfolio_index": 0}})
        if hasattr(record, "extra") and isinstance(getattr(record, "extra"), dict):
            for k, v in getattr(record, "extra").items():
                if k not in payload and v is not None:
                    payload[k] = v
        return json.dumps(payload, default=_json_serial, ensure_ascii=False)


def use_json_logs() -> bool:
    return os.getenv("LOG_JSON", "").lower() in ("1", "true", "yes")


def configure_logging() -> None:
    """Configure root logger: level from LOG_LEVEL, JSON format when LOG_JSON is set."""
    level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers when reloading
    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json_logs():
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    root.addHandler(handler)
