"""Structured Logging — ledger-aware formatters and one-shot logging setup.

Invariants:
    - Every record carries timestamp, level, logger and message
    - Ledger fields (operation, server_id, caller, error_code, amount,
      event_kind, path) are emitted only when the call site passed them in `extra`
    - setup_logging is idempotent: calling it twice does not duplicate output

Design Decisions:
    - "json" for deployments (one object per line, indexer friendly),
      "text" for local runs and tests
    - SQLAlchemy engine chatter pinned to WARNING regardless of app level
"""

import logging
import json
from datetime import datetime, timezone

LEDGER_FIELDS = (
    "operation", "server_id", "caller", "error_code",
    "amount", "event_kind", "path",
)


def _ledger_extras(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in LEDGER_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_ledger_extras(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable line with ledger fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = _ledger_extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


_HANDLER_NAME = "stakepool"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the stakepool handler on the root logger (replacing a previous one)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
