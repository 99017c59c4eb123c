"""
web_rag: answer questions grounded in web pages that were scraped and
stored as chunk embeddings.

Public API
----------
- :class:`~web_rag.ingestion.pipeline.IngestionPipeline`: fetch → chunk → embed → upsert.
- :class:`~web_rag.retrieval.answerer.AnswerAssembler`: embed → query → prompt → generate.
- :func:`~web_rag.ingestion.chunker.chunk_text`: fixed word-count chunking.
"""

from web_rag.errors import (
    EmbeddingUnavailableError,
    FetchError,
    GenerationError,
    InvalidInputError,
    WebRagError,
)
from web_rag.ingestion.chunker import chunk_text
from web_rag.ingestion.pipeline import IngestionPipeline
from web_rag.models import Answer, IngestionReport, make_chunk_id
from web_rag.retrieval.answerer import AnswerAssembler

__version__ = "0.1.0"

__all__ = [
    "Answer",
    "AnswerAssembler",
    "EmbeddingUnavailableError",
    "FetchError",
    "GenerationError",
    "IngestionPipeline",
    "IngestionReport",
    "InvalidInputError",
    "WebRagError",
    "chunk_text",
    "make_chunk_id",
]
