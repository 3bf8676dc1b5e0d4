"""JSON log output for programs that drive issuekit parsers.

The library itself only calls ``logging.getLogger(__name__)``; the
program running the parsers (a batch script, a CI step) calls
``setup_logging()`` once at startup to get one JSON object per line:

    {"ts": "2025-03-01T12:00:00+00:00", "level": "ERROR", "logger": "issuekit.domain.report",
     "msg": "Skipping malformed entry", "origin": "grype", "report_id": "build-42"}

``origin`` and ``report_id`` come from ``Report.log_*`` and the parser
registry, which pass them through ``extra=``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import TextIO

from issuekit.core.config import settings

_CONTEXT_FIELDS = ("origin", "report_id")


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({key: getattr(record, key) for key in _CONTEXT_FIELDS if hasattr(record, key)})

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Install the JSON handler on the root logger.

    ``level`` wins over the ``LOG_LEVEL`` env var, which wins over
    ``settings.LOG_LEVEL``. Output goes to ``stream`` (stdout by default).
    """
    level_name = (level or os.getenv("LOG_LEVEL") or settings.LOG_LEVEL).upper()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
