"""Domain models flowing through ingestion and retrieval.

Every model is created once and never mutated: a fetched
:class:`SourceDocument` is split into :class:`Chunk` objects, each chunk
becomes a :class:`StoredRecord`, and a query yields
:class:`RetrievedMatch` objects that are assembled into an :class:`Answer`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def make_chunk_id(source_url: str, sequence_index: int) -> str:
    """Return the storage id for chunk *sequence_index* of *source_url*.

    Re-ingesting the same URL produces the same ids, so the vector store
    overwrites earlier records instead of duplicating them.
    """
    return f"{source_url}-chunk-{sequence_index}"


class SourceDocument(BaseModel):
    """One fetched page with boilerplate removed.

    Attributes
    ----------
    url:
        The URL that was fetched; unique key for ingestion.
    title:
        Page title (``<title>``, first ``<h1>`` or head text).
    body_text:
        Cleaned body text, whitespace collapsed to single spaces.
    internal_links / external_links:
        ``<a href>`` targets found on the page.  Recorded only; never followed.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    body_text: str
    internal_links: list[str] = Field(default_factory=list)
    external_links: list[str] = Field(default_factory=list)
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def word_count(self) -> int:
        return len(self.body_text.split())


class Chunk(BaseModel):
    """A contiguous, word-bounded slice of a document's body text."""

    model_config = ConfigDict(frozen=True)

    source_url: str
    sequence_index: int = Field(ge=0)
    text: str

    @property
    def chunk_id(self) -> str:
        return make_chunk_id(self.source_url, self.sequence_index)


class RecordMetadata(BaseModel):
    """Metadata persisted next to each embedding."""

    model_config = ConfigDict(frozen=True)

    url: str = ""
    head: str = ""
    body: str = ""
    chunk_index: int | None = None


class StoredRecord(BaseModel):
    """The unit persisted in the vector store."""

    model_config = ConfigDict(frozen=True)

    id: str
    embedding: list[float]
    metadata: RecordMetadata

    @field_validator("embedding")
    @classmethod
    def _embedding_not_empty(cls, value: list[float]) -> list[float]:
        if not value:
            raise ValueError("embedding must not be empty")
        return value


class RetrievedMatch(BaseModel):
    """A single nearest-neighbour hit, closest first in a result list."""

    model_config = ConfigDict(frozen=True)

    id: str
    metadata: RecordMetadata
    distance: float | None = None


class IngestionReport(BaseModel):
    """Outcome of ingesting one URL."""

    url: str
    success: bool
    chunks_total: int = 0
    chunks_stored: int = 0
    chunks_skipped: int = 0
    error: str | None = None

    def summary(self) -> str:
        if not self.success:
            return f"FAILED {self.url}: {self.error}"
        return (
            f"OK {self.url}: stored {self.chunks_stored}/{self.chunks_total} chunks"
            f" ({self.chunks_skipped} skipped)"
        )


class Answer(BaseModel):
    """Result of answering one question.

    ``status == "no_context"`` signals that retrieval found nothing usable;
    in that case the generative model was never called and ``text`` holds
    a fixed insufficient-context message.
    """

    question: str
    status: Literal["answered", "no_context"]
    text: str
    sources: list[str] = Field(default_factory=list)
    matches: list[RetrievedMatch] = Field(default_factory=list)

    @property
    def found_context(self) -> bool:
        return self.status == "answered"
