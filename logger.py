"""
logger
~~~~~~
Human-readable console logs *and* JSON-lines file logs with size rotation.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

_ISO = "%Y-%m-%dT%H:%M:%SZ"
_CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(message)s"

# attributes every LogRecord has; anything else came in through extra=
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class _JSONFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        data = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(_ISO),
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED:
                data[key] = value
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, separators=(",", ":"), default=str)


def build_logger(
    path: str | Path,
    name: str = "zerossl",
    max_bytes: int = 1_000_000,
    backup_count: int = 5,
    console: bool = True,
) -> logging.Logger:
    log = logging.getLogger(name)
    log.setLevel(logging.DEBUG)
    log.propagate = False
    close_logger(log)  # a second build replaces the handlers

    fh = logging.handlers.RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    fh.setFormatter(_JSONFormatter())
    log.addHandler(fh)

    if console:
        sh = logging.StreamHandler()
        sh.setLevel(logging.INFO)
        sh.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        log.addHandler(sh)

    return log


def close_logger(log: logging.Logger) -> None:
    for h in list(log.handlers):
        h.flush()
        h.close()
        log.removeHandler(h)
