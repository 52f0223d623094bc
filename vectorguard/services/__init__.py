"""Service layer: batch validation and repair of stored embeddings."""
from vectorguard.services.repair_service import (
    BatchReport,
    EmbeddingRecord,
    EmbeddingRepairService,
    RecordResult,
    RecordStatus,
)

__all__ = [
    "EmbeddingRepairService",
    "EmbeddingRecord",
    "RecordResult",
    "RecordStatus",
    "BatchReport",
]
