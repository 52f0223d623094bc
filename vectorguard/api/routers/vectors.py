"""Vector API: parse (reject malformed), convert (repair + normalise), batch runs.

Parse failures are a normal 200 response with ``valid: false``; conversion
guard violations surface as ProjectError and are rendered by the app-level
exception handler with the guard's code and HTTP status.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from vectorguard.api.dependencies import get_normalizer, get_parser, get_repair_service
from vectorguard.api.schemas.vectors import (
    BatchRequest,
    BatchResponse,
    EmbeddingConvertRequest,
    EmbeddingConvertResponse,
    VectorParseRequest,
    VectorParseResponse,
)
from vectorguard.embeddings.normalizer import EmbeddingNormalizer
from vectorguard.embeddings.parser import VectorParser
from vectorguard.services.repair_service import EmbeddingRecord, EmbeddingRepairService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vectors", tags=["vectors"])


def _records(body: BatchRequest) -> list[EmbeddingRecord]:
    return [EmbeddingRecord(r.record_id, r.vector) for r in body.records]


@router.post("/parse", response_model=VectorParseResponse)
async def parse_vector(
    body: VectorParseRequest,
    parser: VectorParser = Depends(get_parser),
    normalizer: EmbeddingNormalizer = Depends(get_normalizer),
):
    """Validate a raw vector. Never fails on malformed input; see ``reason``."""
    expected = body.expected_dimensions or normalizer.config.dimensions
    outcome = parser.parse_outcome(body.vector, expected)
    return VectorParseResponse(
        valid=outcome.ok,
        vector=outcome.vector,
        reason=outcome.reason.value if outcome.reason else None,
        kind=outcome.kind.value,
        dimensions=outcome.observed_dimensions,
    )


@router.post("/convert", response_model=EmbeddingConvertResponse)
async def convert_embedding(
    body: EmbeddingConvertRequest,
    normalizer: EmbeddingNormalizer = Depends(get_normalizer),
):
    """Reshape to the target dimensionality and L2-normalise. 422 when a corruption guard trips."""
    result = normalizer.convert_detailed(body.embedding, body.target_dimensions)
    return EmbeddingConvertResponse(
        embedding=result.vector,
        dimensions=len(result.vector),
        source_dimensions=result.source_dimensions,
        strategy=result.strategy.value,
        magnitude=result.magnitude,
    )


@router.post("/batch/validate", response_model=BatchResponse)
async def validate_batch(
    body: BatchRequest,
    service: EmbeddingRepairService = Depends(get_repair_service),
):
    report = service.validate_batch(_records(body), body.dimensions)
    return report.to_dict(include_vectors=body.include_vectors)


@router.post("/batch/repair", response_model=BatchResponse)
async def repair_batch(
    body: BatchRequest,
    service: EmbeddingRepairService = Depends(get_repair_service),
):
    report = service.repair_batch(_records(body), body.dimensions)
    logger.info(
        "Repair batch: %d records, %d need review", len(report.results), report.needs_review
    )
    return report.to_dict(include_vectors=body.include_vectors)
