"""FastAPI dependency providers."""
from __future__ import annotations

from fastapi import Request

from vectorguard.embeddings.normalizer import EmbeddingNormalizer
from vectorguard.embeddings.parser import VectorParser
from vectorguard.services.repair_service import EmbeddingRepairService


def get_parser(request: Request) -> VectorParser:
    return request.app.state.parser


def get_normalizer(request: Request) -> EmbeddingNormalizer:
    return request.app.state.normalizer


def get_repair_service(request: Request) -> EmbeddingRepairService:
    return request.app.state.repair_service
