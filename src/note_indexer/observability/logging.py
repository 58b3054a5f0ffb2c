"""Structured logging with run correlation.

Every record passing the stdout handler is stamped with the current run id
(and notes directory, once a run is bound) by ``RunContextFilter``. Pipeline
records also carry ``document_id`` through ``extra`` so JSON consumers can
group messages per note.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from note_indexer.observability.context import get_run_context


PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] run=%(run_id)s %(message)s"

_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class RunContextFilter(logging.Filter):
    """Copy ``run_id`` and ``notes_dir`` from the run context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_run_context()
        record.run_id = ctx.get("run_id", "")
        record.notes_dir = ctx.get("notes_dir", "")
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with note and run fields at the top level."""

    MAX_MESSAGE_LEN = 2000

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "message": self._truncate(record.getMessage()),
            "logger": record.name,
            "run_id": getattr(record, "run_id", "") or get_run_context().get("run_id", ""),
        }

        if "." in record.name:
            log_entry["component"] = record.name.split(".")[-1]

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # notes_dir, document_id and any other extra fields
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_entry or key.startswith("_") or value in ("", None):
                continue
            log_entry[key] = value

        return orjson.dumps(log_entry, default=self._json_default).decode("utf-8")

    def _truncate(self, msg: str) -> str:
        if len(msg) > self.MAX_MESSAGE_LEN:
            return msg[: self.MAX_MESSAGE_LEN] + "..."
        return msg

    def _json_default(self, value: Any) -> Any:
        if isinstance(value, (set, frozenset)):
            return sorted(value, key=str)
        if isinstance(value, Path):
            return str(value)
        return repr(value)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure the root logger with one stdout handler.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Emit structured JSON logs when True
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RunContextFilter())
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root.addHandler(handler)
