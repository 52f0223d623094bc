"""
vectorguard config: load from env.

Load from env: load_embedding_config().
"""
from vectorguard.config.embedding import (
    DOUBLED_SOURCE_DIMENSIONS,
    EMBEDDING_DIMENSIONS,
    SUSPICIOUS_SIZE_FACTOR,
    EmbeddingConfig,
    load_embedding_config,
)

__all__ = [
    "EMBEDDING_DIMENSIONS",
    "SUSPICIOUS_SIZE_FACTOR",
    "DOUBLED_SOURCE_DIMENSIONS",
    "EmbeddingConfig",
    "load_embedding_config",
]
