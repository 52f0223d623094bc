"""
Built-in exception types. Add new ones here or via exception_factory().

The embedding conversion guards each get their own type so that callers
(and alerting) can tell which guard tripped without parsing messages.
"""
from __future__ import annotations

from vectorguard.core.exceptions.base import ProjectError, exception_factory


class ConfigurationError(ProjectError):
    """Invalid or missing configuration."""

    default_code = "CONFIGURATION_ERROR"
    default_http_status = 500


class ValidationError(ProjectError):
    """Request or argument validation failed."""

    default_code = "VALIDATION_ERROR"
    default_http_status = 400


class EmbeddingConversionError(ProjectError):
    """An embedding could not be repaired to the target dimensionality."""

    default_code = "EMBEDDING_CONVERSION_ERROR"
    default_http_status = 422


EmptyEmbeddingError = exception_factory(
    "EmptyEmbeddingError",
    code="EMPTY_OR_NOT_ARRAY",
    http_status=422,
    base=EmbeddingConversionError,
    doc="Embedding is not a non-empty sequence.",
)

SuspiciousEmbeddingSizeError = exception_factory(
    "SuspiciousEmbeddingSizeError",
    code="SUSPICIOUS_SIZE",
    http_status=422,
    base=EmbeddingConversionError,
    doc="Embedding is far longer than any real model output; likely corrupted upstream.",
)

NonFiniteEmbeddingError = exception_factory(
    "NonFiniteEmbeddingError",
    code="NON_FINITE_INPUT",
    http_status=422,
    base=EmbeddingConversionError,
    doc="Embedding contains NaN, infinity or a non-numeric element.",
)

PostConversionLengthError = exception_factory(
    "PostConversionLengthError",
    code="POST_CONVERSION_LENGTH_MISMATCH",
    http_status=500,
    base=EmbeddingConversionError,
    doc="Reshaped embedding does not have the target length.",
)

NonFiniteAfterConversionError = exception_factory(
    "NonFiniteAfterConversionError",
    code="NON_FINITE_AFTER_CONVERSION",
    http_status=422,
    base=EmbeddingConversionError,
    doc="Reshaping produced NaN or infinity.",
)
