"""Pydantic schemas for the vector validation/repair API.

Vector payloads are typed ``Any`` on purpose: the parser has to see the
original JSON shape (list, string, object) to decide whether to accept it.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class VectorParseRequest(BaseModel):
    vector: Any = Field(None, description="List of numbers/numeric strings or a '[v1,v2,...]' literal")
    expected_dimensions: Optional[int] = Field(None, ge=1)


class VectorParseResponse(BaseModel):
    valid: bool
    vector: Optional[List[float]] = None
    reason: Optional[str] = None
    kind: str
    dimensions: Optional[int] = None


class EmbeddingConvertRequest(BaseModel):
    embedding: Any = Field(..., description="List of numbers to reshape and normalise")
    target_dimensions: Optional[int] = Field(None, ge=1)


class EmbeddingConvertResponse(BaseModel):
    embedding: List[float]
    dimensions: int
    source_dimensions: int
    strategy: str
    magnitude: float


class BatchRecordSchema(BaseModel):
    record_id: str = Field(..., min_length=1, max_length=255)
    vector: Any = None


class BatchRequest(BaseModel):
    records: List[BatchRecordSchema] = Field(..., max_length=1000)
    dimensions: Optional[int] = Field(None, ge=1)
    include_vectors: bool = False


class BatchResponse(BaseModel):
    mode: str
    stats: Dict[str, Any]
    counts: Dict[str, int]
    results: List[Dict[str, Any]]
