"""
Formatters: JSON Lines for the rotating file, plain text for the console.
"""
from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Optional


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line.

    Structured diagnostic fields travel on the record as ``record.fields``
    (``logger.info(msg, extra={"fields": {...}})``) and are emitted under the
    ``fields`` key so dimension counts and magnitudes stay queryable.
    """

    def __init__(self, *, include_fields: bool = True) -> None:
        super().__init__()
        self.include_fields = include_fields

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": _utc_iso(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_dict["exception"] = "".join(
                traceback.format_exception(*record.exc_info)
            ).strip()
        if record.lineno:
            log_dict["lineno"] = record.lineno
        fields = getattr(record, "fields", None)
        if self.include_fields and fields:
            log_dict["fields"] = fields
        return json.dumps(log_dict, default=str, ensure_ascii=False)


def _utc_iso(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat()


class PlainConsoleFormatter(logging.Formatter):
    """Human-readable format for console."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
    ) -> None:
        if fmt is None:
            fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        if datefmt is None:
            datefmt = "%Y-%m-%d %H:%M:%S"
        super().__init__(fmt=fmt, datefmt=datefmt)
