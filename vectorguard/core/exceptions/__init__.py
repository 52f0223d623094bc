"""
Project exception system.

Usage:
    from vectorguard.core.exceptions import ProjectError, ValidationError, exception_factory

    # Built-in types
    raise ValidationError("expected_dimensions must be positive", details={"value": 0})

    # Add new type on demand
    StaleVectorError = exception_factory("StaleVectorError", code="STALE_VECTOR", http_status=409)
    raise StaleVectorError("Embedding was produced by a retired model")
"""
from vectorguard.core.exceptions.base import ProjectError, exception_factory
from vectorguard.core.exceptions.errors import (
    ConfigurationError,
    EmbeddingConversionError,
    EmptyEmbeddingError,
    NonFiniteAfterConversionError,
    NonFiniteEmbeddingError,
    PostConversionLengthError,
    SuspiciousEmbeddingSizeError,
    ValidationError,
)

__all__ = [
    "ProjectError",
    "exception_factory",
    "ConfigurationError",
    "ValidationError",
    "EmbeddingConversionError",
    "EmptyEmbeddingError",
    "SuspiciousEmbeddingSizeError",
    "NonFiniteEmbeddingError",
    "PostConversionLengthError",
    "NonFiniteAfterConversionError",
]
