"""Per-batch wrapper around VectorParser that counts outcomes and logs one summary line."""
from __future__ import annotations

from typing import Any, Dict, Optional

from vectorguard.config.embedding import EMBEDDING_DIMENSIONS
from vectorguard.embeddings.diagnostics import VectorDiagnostics, default_diagnostics
from vectorguard.embeddings.parser import VectorParser
from vectorguard.embeddings.types import ProcessingStats, Vector


class VectorProcessingContext:
    """Observe a batch of parser calls without changing any result.

    One instance per batch run and per worker: counters are plain integers
    with no locking, so concurrent batches must each own a context.
    """

    def __init__(
        self,
        parser: Optional[VectorParser] = None,
        diagnostics: Optional[VectorDiagnostics] = None,
        *,
        label: str = "batch",
    ) -> None:
        self._diagnostics = diagnostics or default_diagnostics
        self._parser = parser or VectorParser(self._diagnostics)
        self._label = label
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_vector(self, raw: Any, expected_dimensions: int = EMBEDDING_DIMENSIONS) -> Optional[Vector]:
        return self.record(self._parser.parse(raw, expected_dimensions))

    def record(self, result: Optional[Vector]) -> Optional[Vector]:
        """Count a result produced outside the parser (e.g. by the normalizer) and return it."""
        self._stats.total_processed += 1
        if result is None:
            self._stats.invalid_vectors += 1
        else:
            self._stats.valid_vectors += 1
            self._stats.dimension_sum += len(result)
        return result

    def skip_vector(self) -> None:
        """Count a vector the caller chose not to attempt (e.g. missing source field)."""
        self._stats.skipped_vectors += 1

    def log_stats(self) -> Dict[str, Any]:
        stats = self._stats
        success_rate = f"{stats.success_rate:.2f}%" if stats.total_processed else "0%"
        average = stats.average_dimensions
        average_text = f"{average:.1f}" if average is not None else "N/A"
        summary: Dict[str, Any] = {
            "label": self._label,
            "total_processed": stats.total_processed,
            "valid_vectors": stats.valid_vectors,
            "invalid_vectors": stats.invalid_vectors,
            "skipped_vectors": stats.skipped_vectors,
            "success_rate": success_rate,
            "average_dimensions": average_text,
        }
        self._diagnostics.info(
            "batch.stats",
            (
                f"{self._label}: total={stats.total_processed} valid={stats.valid_vectors} "
                f"invalid={stats.invalid_vectors} skipped={stats.skipped_vectors} "
                f"success_rate={success_rate} avg_dimensions={average_text}"
            ),
            **summary,
        )
        return summary
