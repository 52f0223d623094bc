"""Diagnostic observers for the parser and normalizer.

Both components report every decision point through a ``VectorDiagnostics``
passed in at construction. ``LoggingDiagnostics`` is the production default;
``RecordingDiagnostics`` keeps events in memory so callers (and tests) can see
which path fired without scraping log output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class DiagnosticEvent:
    event: str
    level: int
    message: str
    fields: Dict[str, Any] = field(default_factory=dict)


class VectorDiagnostics:
    """Observer interface. Subclasses override ``emit``."""

    def emit(self, event: str, level: int, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def debug(self, event: str, message: str, **fields: Any) -> None:
        self.emit(event, logging.DEBUG, message, **fields)

    def info(self, event: str, message: str, **fields: Any) -> None:
        self.emit(event, logging.INFO, message, **fields)

    def warning(self, event: str, message: str, **fields: Any) -> None:
        self.emit(event, logging.WARNING, message, **fields)

    def error(self, event: str, message: str, **fields: Any) -> None:
        self.emit(event, logging.ERROR, message, **fields)


class LoggingDiagnostics(VectorDiagnostics):
    """Write events to a stdlib logger; fields go to ``record.fields`` for the JSON formatter."""

    def __init__(self, target: Optional[logging.Logger] = None) -> None:
        self._logger = target or logger

    def emit(self, event: str, level: int, message: str, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, "%s: %s", event, message, extra={"fields": {"event": event, **fields}})


class RecordingDiagnostics(VectorDiagnostics):
    """Keep events in memory, optionally forwarding to another observer."""

    def __init__(self, forward: Optional[VectorDiagnostics] = None) -> None:
        self.events: List[DiagnosticEvent] = []
        self._forward = forward

    def emit(self, event: str, level: int, message: str, **fields: Any) -> None:
        self.events.append(DiagnosticEvent(event=event, level=level, message=message, fields=dict(fields)))
        if self._forward is not None:
            self._forward.emit(event, level, message, **fields)

    @property
    def names(self) -> List[str]:
        return [e.event for e in self.events]

    def of(self, event: str) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.event == event]

    def clear(self) -> None:
        self.events.clear()


default_diagnostics = LoggingDiagnostics()
