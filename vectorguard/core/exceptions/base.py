"""
Error base for vectorguard.

The vector parser never raises on bad data, so errors here mean either a
misconfigured deployment or an embedding the normalizer refused to repair.
Each error carries a stable ``code`` that batch reports and alerting key on,
and the HTTP status the API answers with. New guard types are minted with
exception_factory() rather than hand-written subclasses.
"""
from __future__ import annotations

import traceback
from typing import Any, Optional, Type


class ProjectError(Exception):
    """
    Root of every vectorguard error.

    Attributes:
        message: What was wrong with the vector or setting, for humans.
        code: Stable slug such as ``SUSPICIOUS_SIZE``; class default unless overridden.
        http_status: Status the API returns (422 for refused embeddings, 500 otherwise).
        details: JSON-safe context: observed length, target, limit, offending index.
        cause: Underlying exception, e.g. the ValueError from an unparseable env var.
    """

    default_code: str = "ERROR"
    default_http_status: int = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        http_status: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else getattr(
            self.__class__, "default_code", self.__class__.__name__
        )
        self.http_status = (
            http_status
            if http_status is not None
            else getattr(self.__class__, "default_http_status", 500)
        )
        self.details: dict[str, Any] = details or {}
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, code={self.code!r}, "
            f"http_status={self.http_status})"
        )

    def __str__(self) -> str:
        return self.message

    def to_dict(self, *, include_traceback: bool = True) -> dict[str, Any]:
        """JSON-safe form used in batch reports and API error bodies.

        Tracebacks of ``cause`` are for log files; API responses and batch
        reports pass ``include_traceback=False``.
        """
        out: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
            "http_status": self.http_status,
        }
        if self.details:
            out["details"] = self.details
        if self.cause is not None:
            out["cause"] = str(self.cause)
            if include_traceback:
                out["cause_traceback"] = traceback.format_exception(
                    type(self.cause), self.cause, self.cause.__traceback__
                )
        return out


def exception_factory(
    name: str,
    *,
    code: Optional[str] = None,
    http_status: int = 500,
    base: Type[ProjectError] = ProjectError,
    doc: Optional[str] = None,
) -> Type[ProjectError]:
    """
    Mint an error type with its own code and HTTP status.

    ``__module__`` follows ``base`` so the minted class reports where its family
    lives instead of this module.

    Example:
        TruncatedVectorError = exception_factory(
            "TruncatedVectorError", code="TRUNCATED_VECTOR", http_status=422,
            base=EmbeddingConversionError,
        )
        raise TruncatedVectorError("Vector ended early", details={"length": 12})
    """
    code = code or name.upper().replace(" ", "_")
    attrs: dict[str, Any] = {
        "default_code": code,
        "default_http_status": http_status,
        "__module__": base.__module__,
    }
    if doc:
        attrs["__doc__"] = doc
    return type(name, (base,), attrs)
