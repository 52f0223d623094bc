"""VectorParser: raw vector input (list, tuple or pgvector literal) → validated floats or None.

Malformed vectors are routine (partial writes, bad upstream data), so every
rejection is a ``None`` result plus a diagnostic event, never an exception.
Only programmer errors such as a non-positive ``expected_dimensions`` raise.
"""
from __future__ import annotations

import math
import numbers
from typing import Any, List, Optional, Sequence, Tuple

from vectorguard.config.embedding import EMBEDDING_DIMENSIONS
from vectorguard.core.exceptions import ValidationError
from vectorguard.embeddings.diagnostics import VectorDiagnostics, default_diagnostics
from vectorguard.embeddings.types import (
    ParseFailureReason,
    ParseOutcome,
    RawVectorKind,
    Vector,
    classify_raw,
)

_PREVIEW_CHARS = 40


def _to_float(value: Any) -> Optional[float]:
    """Number or numeric string → float. None if it is neither. Non-finite values pass through."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        token = value.strip()
        # float() also takes digit separators and non-ASCII digits; stored vectors never use either
        if "_" in token or not token.isascii():
            return None
        try:
            return float(token)
        except ValueError:
            return None
    return None


def _preview(value: Any) -> str:
    text = repr(value)
    return text if len(text) <= _PREVIEW_CHARS else text[:_PREVIEW_CHARS] + "..."


def _split_literal(raw: str) -> List[str]:
    """'[0.1, 0.2]' or '0.1,0.2' → ['0.1', '0.2']."""
    body = raw.strip()
    if body.startswith("["):
        body = body[1:]
    if body.endswith("]"):
        body = body[:-1]
    return [token.strip() for token in body.split(",")]


def _check_dimensions(expected_dimensions: Any) -> int:
    if isinstance(expected_dimensions, bool) or not isinstance(expected_dimensions, int) or expected_dimensions < 1:
        raise ValidationError(
            f"expected_dimensions must be a positive integer, got {expected_dimensions!r}",
            details={"expected_dimensions": repr(expected_dimensions)},
        )
    return expected_dimensions


class VectorParser:
    """Convert heterogeneous raw vectors into a trustworthy list of floats, or refuse."""

    def __init__(self, diagnostics: Optional[VectorDiagnostics] = None) -> None:
        self._diagnostics = diagnostics or default_diagnostics

    def parse(self, raw: Any, expected_dimensions: int = EMBEDDING_DIMENSIONS) -> Optional[Vector]:
        """Return ``expected_dimensions`` finite floats, or None if ``raw`` is not exactly that."""
        return self.parse_outcome(raw, expected_dimensions).vector

    def parse_outcome(self, raw: Any, expected_dimensions: int = EMBEDDING_DIMENSIONS) -> ParseOutcome:
        """Like ``parse`` but reports why the vector was rejected."""
        expected = _check_dimensions(expected_dimensions)
        kind, values, failure = self._coerce(raw)
        if values is None:
            return ParseOutcome(kind=kind, reason=failure)

        if len(values) != expected:
            self._diagnostics.warning(
                "parse.dimension_mismatch",
                f"expected {expected} dimensions, got {len(values)}",
                expected=expected,
                observed=len(values),
                kind=kind.value,
            )
            return ParseOutcome(
                kind=kind,
                reason=ParseFailureReason.DIMENSION_MISMATCH,
                observed_dimensions=len(values),
            )

        for index, value in enumerate(values):
            if not math.isfinite(value):
                self._diagnostics.warning(
                    "parse.non_finite",
                    f"non-finite value {value!r} at index {index}",
                    index=index,
                    kind=kind.value,
                )
                return ParseOutcome(
                    kind=kind,
                    reason=ParseFailureReason.NON_FINITE_VALUE,
                    observed_dimensions=len(values),
                )

        self._diagnostics.debug(
            "parse.ok", f"parsed {len(values)}-d vector", dimensions=len(values), kind=kind.value
        )
        return ParseOutcome(kind=kind, vector=values, observed_dimensions=len(values))

    def coerce(self, raw: Any) -> Optional[Vector]:
        """Element conversion only: no dimension or finiteness checks.

        Used by repair paths that hand the result to the normalizer, whose own
        guards decide what is acceptable.
        """
        return self._coerce(raw)[1]

    def _coerce(self, raw: Any) -> Tuple[RawVectorKind, Optional[Vector], Optional[ParseFailureReason]]:
        kind = classify_raw(raw)

        if kind is RawVectorKind.ABSENT:
            self._diagnostics.debug("parse.absent", "no vector data")
            return kind, None, ParseFailureReason.ABSENT

        if kind is RawVectorKind.UNSUPPORTED:
            self._diagnostics.warning(
                "parse.unsupported_type",
                f"unsupported vector type {type(raw).__name__}",
                type=type(raw).__name__,
            )
            return kind, None, ParseFailureReason.UNSUPPORTED_TYPE

        items: Sequence[Any] = _split_literal(raw) if kind is RawVectorKind.DELIMITED_STRING else raw
        values: Vector = []
        for index, item in enumerate(items):
            number = _to_float(item)
            if number is None:
                self._diagnostics.warning(
                    "parse.unparseable_element",
                    f"cannot parse element {index} ({_preview(item)}) as a number",
                    index=index,
                    kind=kind.value,
                )
                return kind, None, ParseFailureReason.UNPARSEABLE_ELEMENT
            values.append(number)
        return kind, values, None


_default_parser = VectorParser()


def parse_and_validate_vector(
    raw_vector_data: Any,
    expected_dimensions: int = EMBEDDING_DIMENSIONS,
) -> Optional[Vector]:
    """Module-level entry point using the default logging diagnostics."""
    return _default_parser.parse(raw_vector_data, expected_dimensions)
