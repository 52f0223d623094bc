"""EmbeddingNormalizer: reshape an embedding to the target dimensionality, then L2-normalise.

Unlike the parser this component raises: callers reach it only after deciding
they need a usable vector, so a corrupted input must stop the enclosing write
instead of disappearing as a silent None.

Reconciliation by input length ``n`` and target ``t``:

    n == t                      passthrough
    n == 768 and t == 1536      duplicate each element in place: [v0, v0, v1, v1, ...]
    n < t                       scale by sqrt(t / n), then zero-pad to t
    n == 2 * t                  average adjacent pairs
    n > t                       keep the first t elements
"""
from __future__ import annotations

import math
import numbers
from typing import Any, List, NoReturn, Optional, Sequence, Tuple

from vectorguard.config.embedding import DOUBLED_SOURCE_DIMENSIONS, EMBEDDING_DIMENSIONS, EmbeddingConfig
from vectorguard.core.exceptions import (
    EmptyEmbeddingError,
    NonFiniteAfterConversionError,
    NonFiniteEmbeddingError,
    PostConversionLengthError,
    SuspiciousEmbeddingSizeError,
    ValidationError,
)
from vectorguard.embeddings.diagnostics import VectorDiagnostics, default_diagnostics
from vectorguard.embeddings.types import ConversionResult, ConversionStrategy, Vector, is_vector_sequence


def l2_magnitude(values: Sequence[float]) -> float:
    # hypot scales internally, so very large components do not overflow to inf
    return math.hypot(*values)


def l2_normalize(values: Sequence[float]) -> Tuple[Vector, float]:
    """Return (unit vector, original magnitude). A zero vector is returned unchanged."""
    magnitude = l2_magnitude(values)
    if magnitude == 0.0:
        return list(values), magnitude
    return [v / magnitude for v in values], magnitude


def reconcile_dimensions(
    values: Sequence[float],
    target: int,
    *,
    doubled_source: int = DOUBLED_SOURCE_DIMENSIONS,
) -> Tuple[Vector, ConversionStrategy]:
    """Reshape ``values`` to length ``target`` (no normalisation, no validation)."""
    n = len(values)
    if n == target:
        return list(values), ConversionStrategy.PASSTHROUGH

    if n < target:
        if n == doubled_source and target == 2 * doubled_source:
            out: Vector = []
            for v in values:
                out.append(v)
                out.append(v)
            return out, ConversionStrategy.DUPLICATE
        scale = math.sqrt(target / n)
        return [v * scale for v in values] + [0.0] * (target - n), ConversionStrategy.PAD

    if n == 2 * target:
        return [(values[i] + values[i + 1]) / 2 for i in range(0, n, 2)], ConversionStrategy.AVERAGE_PAIRS
    return list(values[:target]), ConversionStrategy.TRUNCATE


class EmbeddingNormalizer:
    """Repair and normalise embeddings that are trusted enough to be worth fixing."""

    def __init__(
        self,
        config: Optional[EmbeddingConfig] = None,
        diagnostics: Optional[VectorDiagnostics] = None,
    ) -> None:
        self._config = config or EmbeddingConfig()
        self._diagnostics = diagnostics or default_diagnostics

    @property
    def config(self) -> EmbeddingConfig:
        return self._config

    def convert(self, embedding: Any, target_dimensions: Optional[int] = None) -> Vector:
        """Return a unit vector of exactly ``target_dimensions`` floats or raise."""
        return self.convert_detailed(embedding, target_dimensions).vector

    def convert_detailed(self, embedding: Any, target_dimensions: Optional[int] = None) -> ConversionResult:
        target = self._config.dimensions if target_dimensions is None else target_dimensions
        if isinstance(target, bool) or not isinstance(target, int) or target < 1:
            raise ValidationError(
                f"target_dimensions must be a positive integer, got {target!r}",
                details={"target_dimensions": repr(target)},
            )

        values = self._guard_input(embedding, target)
        n = len(values)
        if n != target:
            self._diagnostics.info(
                "convert.dimension_mismatch",
                f"embedding has {n} dimensions, target is {target}",
                observed=n,
                target=target,
            )

        reshaped, strategy = reconcile_dimensions(
            values, target, doubled_source=self._config.doubled_source_dimensions
        )
        if strategy is not ConversionStrategy.PASSTHROUGH:
            self._diagnostics.info(
                "convert.applied",
                f"{strategy.value}: {n} -> {len(reshaped)} dimensions",
                strategy=strategy.value,
                observed=n,
                target=target,
            )

        if len(reshaped) != target:
            self._fail(
                PostConversionLengthError,
                "convert.post_length_mismatch",
                f"conversion produced {len(reshaped)} dimensions, expected {target}",
                observed=len(reshaped),
                target=target,
                strategy=strategy.value,
            )
        bad = _first_non_finite(reshaped)
        if bad is not None:
            self._fail(
                NonFiniteAfterConversionError,
                "convert.non_finite_output",
                f"conversion produced a non-finite value at index {bad}",
                index=bad,
                strategy=strategy.value,
            )

        normalized, magnitude = l2_normalize(reshaped)
        if magnitude == 0.0:
            self._diagnostics.warning(
                "convert.zero_magnitude",
                "zero-magnitude embedding, skipping normalisation",
                target=target,
            )
        else:
            norm = l2_magnitude(normalized)
            self._diagnostics.debug(
                "convert.normalized",
                f"magnitude {magnitude:.6f} -> {norm:.6f}",
                magnitude=magnitude,
                strategy=strategy.value,
            )
            tolerance = self._config.unit_norm_tolerance
            if abs(norm - 1.0) > tolerance:
                self._diagnostics.warning(
                    "convert.norm_drift",
                    f"normalised magnitude {norm!r} is more than {tolerance} away from 1",
                    norm=norm,
                    tolerance=tolerance,
                    strategy=strategy.value,
                )
        return ConversionResult(
            vector=normalized,
            strategy=strategy,
            source_dimensions=n,
            magnitude=magnitude,
        )

    def _guard_input(self, embedding: Any, target: int) -> List[float]:
        if not is_vector_sequence(embedding) or len(embedding) == 0:
            self._fail(
                EmptyEmbeddingError,
                "convert.empty_or_not_array",
                "embedding must be a non-empty sequence of numbers",
                type=type(embedding).__name__,
            )

        limit = target * self._config.suspicious_size_factor
        if len(embedding) > limit:
            self._fail(
                SuspiciousEmbeddingSizeError,
                "convert.suspicious_size",
                f"embedding has {len(embedding)} dimensions, more than {limit} "
                f"({self._config.suspicious_size_factor}x target {target}); likely corrupted",
                observed=len(embedding),
                target=target,
                limit=limit,
            )

        values: List[float] = []
        for index, item in enumerate(embedding):
            number = _finite_float(item)
            if number is None:
                self._fail(
                    NonFiniteEmbeddingError,
                    "convert.non_finite_input",
                    f"embedding element {index} is not a finite number: {item!r}",
                    index=index,
                    observed=len(embedding),
                )
            values.append(number)
        return values

    def _fail(self, error_cls, event: str, message: str, **fields: Any) -> NoReturn:
        self._diagnostics.error(event, message, **fields)
        raise error_cls(message, details=fields)


def _finite_float(item: Any) -> Optional[float]:
    if isinstance(item, bool) or not isinstance(item, numbers.Real):
        return None
    try:
        number = float(item)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _first_non_finite(values: Sequence[float]) -> Optional[int]:
    for index, v in enumerate(values):
        if not math.isfinite(v):
            return index
    return None


_default_normalizer = EmbeddingNormalizer()


def validate_and_convert_embedding(
    embedding: Any,
    target_dimensions: int = EMBEDDING_DIMENSIONS,
) -> Vector:
    """Module-level entry point using the default config and logging diagnostics."""
    return _default_normalizer.convert(embedding, target_dimensions)
