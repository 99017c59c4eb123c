"""FastAPI application exposing ingestion and answering as a REST API."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from web_rag.config import settings
from web_rag.errors import EmbeddingUnavailableError, GenerationError
from web_rag.ingestion.pipeline import IngestionPipeline, build_ingestion_pipeline
from web_rag.models import IngestionReport
from web_rag.retrieval.answerer import AnswerAssembler, build_answer_assembler

app = FastAPI(
    title="Web RAG API",
    version="0.1.0",
    description="Ingest web pages and answer questions grounded in them.",
)


# ── Dependencies ──────────────────────────────────────────────────────
@lru_cache(maxsize=1)
def get_ingestion_pipeline() -> IngestionPipeline:
    return build_ingestion_pipeline(settings)


@lru_cache(maxsize=1)
def get_answer_assembler() -> AnswerAssembler:
    return build_answer_assembler(settings)


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """URLs to scrape and store."""

    urls: list[str] = Field(min_length=1)


class IngestResponse(BaseModel):
    reports: list[IngestionReport]


class QueryRequest(BaseModel):
    """Incoming question from the user."""

    question: str = Field(min_length=1)


class QueryResponse(BaseModel):
    """Answer returned by the assembler."""

    answer: str
    status: Literal["answered", "no_context"]
    sources: list[str] = []


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/ingest", response_model=IngestResponse)
def ingest(
    request: IngestRequest,
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> IngestResponse:
    """Ingest every URL; per-URL failures are reported, not raised."""
    return IngestResponse(reports=pipeline.ingest_many(request.urls))


@app.post("/query", response_model=QueryResponse)
def query(
    request: QueryRequest,
    assembler: AnswerAssembler = Depends(get_answer_assembler),
) -> QueryResponse:
    """Answer a question from the stored pages."""
    try:
        result = assembler.answer(request.question)
    except EmbeddingUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    except GenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return QueryResponse(answer=result.text, status=result.status, sources=result.sources)
