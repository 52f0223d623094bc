"""
Embedding vector validation and repair.

Two entry points with deliberately different failure styles:

    parse_and_validate_vector(raw, 1536)        -> list | None   (reject malformed input)
    validate_and_convert_embedding(vec, 1536)   -> list or raise (repair + L2-normalise)

Batch callers wrap the parser in a VectorProcessingContext and call
log_stats() once at the end.
"""
from vectorguard.config.embedding import EMBEDDING_DIMENSIONS
from vectorguard.embeddings.context import VectorProcessingContext
from vectorguard.embeddings.diagnostics import (
    DiagnosticEvent,
    LoggingDiagnostics,
    RecordingDiagnostics,
    VectorDiagnostics,
)
from vectorguard.embeddings.normalizer import (
    EmbeddingNormalizer,
    l2_magnitude,
    l2_normalize,
    reconcile_dimensions,
    validate_and_convert_embedding,
)
from vectorguard.embeddings.parser import VectorParser, parse_and_validate_vector
from vectorguard.embeddings.types import (
    ConversionResult,
    ConversionStrategy,
    ParseFailureReason,
    ParseOutcome,
    ProcessingStats,
    RawVectorKind,
    Vector,
    classify_raw,
)

__all__ = [
    "EMBEDDING_DIMENSIONS",
    "Vector",
    "RawVectorKind",
    "ParseFailureReason",
    "ParseOutcome",
    "ConversionStrategy",
    "ConversionResult",
    "ProcessingStats",
    "classify_raw",
    "VectorDiagnostics",
    "LoggingDiagnostics",
    "RecordingDiagnostics",
    "DiagnosticEvent",
    "VectorParser",
    "parse_and_validate_vector",
    "EmbeddingNormalizer",
    "validate_and_convert_embedding",
    "reconcile_dimensions",
    "l2_normalize",
    "l2_magnitude",
    "VectorProcessingContext",
]
