"""EmbeddingRepairService: run batches of stored embeddings through the parser or normalizer.

Two modes, mirroring the two trust levels of the core:

* ``validate_batch``: untrusted data. Anything malformed or of the wrong size
  is reported INVALID and left for regeneration.
* ``repair_batch``: data from a known model with a different native size.
  Vectors are reshaped and normalised; a vector that trips a corruption guard
  is reported NEEDS_REVIEW with the error attached, and the batch carries on.

Records are in-memory values; loading and writing them back is the caller's job.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from vectorguard.config.embedding import EmbeddingConfig
from vectorguard.core.exceptions import EmbeddingConversionError
from vectorguard.embeddings.context import VectorProcessingContext
from vectorguard.embeddings.diagnostics import VectorDiagnostics, default_diagnostics
from vectorguard.embeddings.normalizer import EmbeddingNormalizer
from vectorguard.embeddings.parser import VectorParser
from vectorguard.embeddings.types import ConversionStrategy, ProcessingStats, Vector

logger = logging.getLogger(__name__)


class RecordStatus(str, Enum):
    VALID = "valid"
    REPAIRED = "repaired"
    INVALID = "invalid"
    SKIPPED = "skipped"
    NEEDS_REVIEW = "needs_review"


@dataclass
class EmbeddingRecord:
    record_id: str
    raw: Any


@dataclass
class RecordResult:
    record_id: str
    status: RecordStatus
    vector: Optional[Vector] = None
    error: Optional[Dict[str, Any]] = None

    def to_dict(self, *, include_vector: bool = False) -> Dict[str, Any]:
        out: Dict[str, Any] = {"record_id": self.record_id, "status": self.status.value}
        if include_vector:
            out["vector"] = self.vector
        if self.error is not None:
            out["error"] = self.error
        return out


@dataclass
class BatchReport:
    """Summary of one validate/repair run."""

    mode: str
    results: List[RecordResult] = field(default_factory=list)
    stats: ProcessingStats = field(default_factory=ProcessingStats)
    summary: Dict[str, Any] = field(default_factory=dict)

    def count(self, status: RecordStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def needs_review(self) -> int:
        return self.count(RecordStatus.NEEDS_REVIEW)

    def to_dict(self, *, include_vectors: bool = False) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "stats": self.stats.to_dict(),
            "counts": {status.value: self.count(status) for status in RecordStatus},
            "results": [r.to_dict(include_vector=include_vectors) for r in self.results],
        }


class EmbeddingRepairService:
    """Batch validation and repair over in-memory embedding records.

    Every call builds its own VectorProcessingContext, so one service instance
    can be shared by concurrent callers.

    Usage::

        svc = EmbeddingRepairService()
        report = svc.repair_batch(records)
        to_review = [r for r in report.results if r.status is RecordStatus.NEEDS_REVIEW]
    """

    def __init__(
        self,
        config: Optional[EmbeddingConfig] = None,
        diagnostics: Optional[VectorDiagnostics] = None,
    ) -> None:
        self._config = config or EmbeddingConfig()
        self._diagnostics = diagnostics or default_diagnostics
        self._parser = VectorParser(self._diagnostics)
        self._normalizer = EmbeddingNormalizer(self._config, self._diagnostics)

    def _new_context(self, label: str) -> VectorProcessingContext:
        return VectorProcessingContext(self._parser, self._diagnostics, label=label)

    def validate_batch(
        self,
        records: Iterable[EmbeddingRecord],
        expected_dimensions: Optional[int] = None,
    ) -> BatchReport:
        expected = expected_dimensions or self._config.dimensions
        context = self._new_context("validate")
        report = BatchReport(mode="validate", stats=context.stats)

        for record in records:
            if record.raw is None:
                context.skip_vector()
                report.results.append(RecordResult(record.record_id, RecordStatus.SKIPPED))
                continue
            vector = context.process_vector(record.raw, expected)
            status = RecordStatus.VALID if vector is not None else RecordStatus.INVALID
            report.results.append(RecordResult(record.record_id, status, vector=vector))

        report.summary = context.log_stats()
        return report

    def repair_batch(
        self,
        records: Iterable[EmbeddingRecord],
        target_dimensions: Optional[int] = None,
    ) -> BatchReport:
        target = target_dimensions or self._config.dimensions
        context = self._new_context("repair")
        report = BatchReport(mode="repair", stats=context.stats)

        for record in records:
            if record.raw is None:
                context.skip_vector()
                report.results.append(RecordResult(record.record_id, RecordStatus.SKIPPED))
                continue

            values = self._parser.coerce(record.raw)
            if values is None:
                context.record(None)
                report.results.append(RecordResult(record.record_id, RecordStatus.INVALID))
                continue

            try:
                converted = self._normalizer.convert_detailed(values, target)
            except EmbeddingConversionError as exc:
                logger.error(
                    "EmbeddingRepairService: record %s flagged for review (%s)",
                    record.record_id,
                    exc.code,
                )
                context.record(None)
                report.results.append(
                    RecordResult(
                        record.record_id,
                        RecordStatus.NEEDS_REVIEW,
                        error=exc.to_dict(include_traceback=False),
                    )
                )
                continue

            context.record(converted.vector)
            status = (
                RecordStatus.VALID
                if converted.strategy is ConversionStrategy.PASSTHROUGH
                else RecordStatus.REPAIRED
            )
            report.results.append(RecordResult(record.record_id, status, vector=converted.vector))

        report.summary = context.log_stats()
        if report.needs_review:
            logger.warning(
                "EmbeddingRepairService: %d of %d records need manual review",
                report.needs_review,
                len(report.results),
            )
        return report
