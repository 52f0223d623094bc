"""vectorguard FastAPI application: entry point.

Start with:
    uvicorn vectorguard.api.main:app --reload --host 0.0.0.0 --port 8000

Target dimensionality and conversion heuristics come from EMBEDDING_* env vars
(see vectorguard.config.embedding); logging from LOG_* env vars.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vectorguard.config.embedding import EmbeddingConfig, load_embedding_config
from vectorguard.core.exceptions import EmbeddingConversionError, ProjectError
from vectorguard.core.logger import configure
from vectorguard.embeddings.diagnostics import VectorDiagnostics, default_diagnostics
from vectorguard.embeddings.normalizer import EmbeddingNormalizer
from vectorguard.embeddings.parser import VectorParser
from vectorguard.services.repair_service import EmbeddingRepairService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure()
    logger.info(
        "API: vectorguard ready (target dimensions %d)", app.state.embedding_config.dimensions
    )
    yield
    logger.info("API: shutting down")


async def project_error_handler(request: Request, exc: ProjectError) -> JSONResponse:
    if isinstance(exc, EmbeddingConversionError):
        # corruption guards are high severity: the record needs manual remediation
        logger.error("API: %s %s on %s", exc.code, exc.message, request.url.path)
    else:
        logger.warning("API: %s %s on %s", exc.code, exc.message, request.url.path)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict(include_traceback=False))


def create_app(
    config: Optional[EmbeddingConfig] = None,
    diagnostics: Optional[VectorDiagnostics] = None,
) -> FastAPI:
    config = config or load_embedding_config()
    diagnostics = diagnostics or default_diagnostics

    app = FastAPI(
        title="vectorguard API",
        version="1.0.0",
        description="Validate, repair and normalise embedding vectors before they are stored or compared.",
        lifespan=lifespan,
    )
    app.state.embedding_config = config
    app.state.parser = VectorParser(diagnostics)
    app.state.normalizer = EmbeddingNormalizer(config, diagnostics)
    app.state.repair_service = EmbeddingRepairService(config, diagnostics)

    app.add_exception_handler(ProjectError, project_error_handler)

    allowed_origins = os.environ.get(
        "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from vectorguard.api.routers import vectors

    app.include_router(vectors.router, prefix="/api/v1")

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
