"""
vectorguard.config.embedding – target dimensionality and conversion heuristics.

Env vars: EMBEDDING_DIMENSIONS, EMBEDDING_SUSPICIOUS_SIZE_FACTOR,
          EMBEDDING_DOUBLED_SOURCE_DIMENSIONS, EMBEDDING_UNIT_NORM_TOLERANCE.

The suspicious-size factor and the doubled source size are empirically chosen
values, kept as defaults for compatibility with vectors already stored.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from vectorguard.core.exceptions import ConfigurationError

EMBEDDING_DIMENSIONS = 1536
SUSPICIOUS_SIZE_FACTOR = 50
DOUBLED_SOURCE_DIMENSIONS = 768
UNIT_NORM_TOLERANCE = 1e-6

_T = TypeVar("_T", int, float)


@dataclass(frozen=True)
class EmbeddingConfig:
    dimensions: int = EMBEDDING_DIMENSIONS
    suspicious_size_factor: int = SUSPICIOUS_SIZE_FACTOR
    doubled_source_dimensions: int = DOUBLED_SOURCE_DIMENSIONS
    unit_norm_tolerance: float = UNIT_NORM_TOLERANCE

    def __post_init__(self) -> None:
        if not isinstance(self.dimensions, int) or self.dimensions < 1:
            raise ValueError(f"dimensions must be a positive integer, got {self.dimensions!r}")
        if not isinstance(self.suspicious_size_factor, int) or self.suspicious_size_factor < 2:
            raise ValueError(
                f"suspicious_size_factor must be an integer >= 2, got {self.suspicious_size_factor!r}"
            )
        if not isinstance(self.doubled_source_dimensions, int) or self.doubled_source_dimensions < 1:
            raise ValueError(
                "doubled_source_dimensions must be a positive integer, "
                f"got {self.doubled_source_dimensions!r}"
            )
        if not (0.0 < self.unit_norm_tolerance < 1.0):
            raise ValueError(
                f"unit_norm_tolerance must be in (0, 1), got {self.unit_norm_tolerance!r}"
            )

    @property
    def suspicious_size_limit(self) -> int:
        """Largest input length the normalizer accepts for the default target."""
        return self.dimensions * self.suspicious_size_factor

    @classmethod
    def from_env(cls, **overrides: object) -> EmbeddingConfig:
        dimensions = _read("dimensions", "EMBEDDING_DIMENSIONS", EMBEDDING_DIMENSIONS, int, overrides)
        factor = _read(
            "suspicious_size_factor", "EMBEDDING_SUSPICIOUS_SIZE_FACTOR", SUSPICIOUS_SIZE_FACTOR, int, overrides
        )
        doubled = _read(
            "doubled_source_dimensions",
            "EMBEDDING_DOUBLED_SOURCE_DIMENSIONS",
            DOUBLED_SOURCE_DIMENSIONS,
            int,
            overrides,
        )
        tolerance = _read(
            "unit_norm_tolerance", "EMBEDDING_UNIT_NORM_TOLERANCE", UNIT_NORM_TOLERANCE, float, overrides
        )
        return cls(
            dimensions=dimensions,
            suspicious_size_factor=factor,
            doubled_source_dimensions=doubled,
            unit_norm_tolerance=tolerance,
        )


def _read(key: str, env_var: str, default: _T, cast: Callable[[str], _T], overrides: dict) -> _T:
    if overrides.get(key) is not None:
        return cast(overrides[key])
    raw = os.environ.get(env_var)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(
            f"{env_var} must be a number, got {raw!r}",
            details={"env_var": env_var},
            cause=exc,
        ) from exc


def load_embedding_config(**overrides: object) -> EmbeddingConfig:
    return EmbeddingConfig.from_env(**overrides)
