"""Common data structures for vector parsing, conversion and batch stats."""
from __future__ import annotations

import array
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

Vector = List[float]


class RawVectorKind(str, Enum):
    """Closed set of input shapes the parser accepts at its single entry point."""
    ABSENT = "absent"
    NUMERIC_SEQUENCE = "numeric_sequence"
    DELIMITED_STRING = "delimited_string"
    UNSUPPORTED = "unsupported"


class ParseFailureReason(str, Enum):
    ABSENT = "absent"
    UNSUPPORTED_TYPE = "unsupported_type"
    UNPARSEABLE_ELEMENT = "unparseable_element"
    DIMENSION_MISMATCH = "dimension_mismatch"
    NON_FINITE_VALUE = "non_finite_value"


class ConversionStrategy(str, Enum):
    """How the normalizer reconciled the input length with the target."""
    PASSTHROUGH = "passthrough"
    DUPLICATE = "duplicate"
    PAD = "pad"
    AVERAGE_PAIRS = "average_pairs"
    TRUNCATE = "truncate"


def is_vector_sequence(raw: Any) -> bool:
    """True for array-like containers of elements (list, tuple, array.array, ...).

    Text and byte strings are sequences too, but of characters, not numbers.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        return False
    return isinstance(raw, (Sequence, array.array))


def classify_raw(raw: Any) -> RawVectorKind:
    """Map an untyped raw value onto RawVectorKind."""
    if raw is None:
        return RawVectorKind.ABSENT
    if isinstance(raw, str):
        return RawVectorKind.DELIMITED_STRING if raw.strip() else RawVectorKind.ABSENT
    if is_vector_sequence(raw):
        return RawVectorKind.NUMERIC_SEQUENCE if len(raw) else RawVectorKind.ABSENT
    return RawVectorKind.UNSUPPORTED


@dataclass
class ParseOutcome:
    """Parser result with the reason it failed, if it did.

    ``vector`` is set exactly when ``reason`` is None.
    """

    kind: RawVectorKind
    vector: Optional[Vector] = None
    reason: Optional[ParseFailureReason] = None
    observed_dimensions: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.vector is not None


@dataclass
class ConversionResult:
    """Normalizer output plus what it did to get there."""

    vector: Vector
    strategy: ConversionStrategy
    source_dimensions: int
    magnitude: float


@dataclass
class ProcessingStats:
    """Per-batch counters. Only ever incremented."""

    total_processed: int = 0
    valid_vectors: int = 0
    invalid_vectors: int = 0
    skipped_vectors: int = 0
    dimension_sum: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of processed vectors that were valid; 0.0 when nothing was processed."""
        if self.total_processed == 0:
            return 0.0
        return self.valid_vectors / self.total_processed * 100

    @property
    def average_dimensions(self) -> Optional[float]:
        if self.valid_vectors == 0:
            return None
        return self.dimension_sum / self.valid_vectors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_processed": self.total_processed,
            "valid_vectors": self.valid_vectors,
            "invalid_vectors": self.invalid_vectors,
            "skipped_vectors": self.skipped_vectors,
            "success_rate": round(self.success_rate, 2),
            "average_dimensions": self.average_dimensions,
        }
