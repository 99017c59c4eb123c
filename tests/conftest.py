"""Shared pytest configuration and fixtures.

Every external collaborator (page fetcher, embedder, vector store, chat
model) has an in-memory fake here so the pipelines run without network
access, Chroma or an LLM.
"""

from __future__ import annotations

import math
from typing import Any

import pytest
from langchain_core.messages import AIMessage

from web_rag.errors import FetchError
from web_rag.ingestion.embedder import Embedder
from web_rag.ingestion.fetcher import PageFetcher
from web_rag.models import RetrievedMatch, SourceDocument, StoredRecord
from web_rag.retrieval.base import VectorStoreBase


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ─────────────────────────────────────────────────────────────


class FakeFetcher(PageFetcher):
    """Returns canned pages; unknown URLs raise :class:`FetchError`."""

    def __init__(self, pages: dict[str, SourceDocument] | None = None) -> None:
        self.pages: dict[str, SourceDocument] = dict(pages or {})
        self.calls: list[str] = []

    def add(self, url: str, body: str, title: str = "Test page") -> None:
        self.pages[url] = SourceDocument(url=url, title=title, body_text=body)

    def fetch(self, url: str) -> SourceDocument:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, "404 Not Found")
        return self.pages[url]


class FakeEmbedder(Embedder):
    """Deterministic embedder.

    Texts listed in *vectors* get that exact vector; texts listed in
    *fail_on* raise inside the backend (so :meth:`Embedder.embed` returns
    ``[]``); anything else gets a small vector derived from its length.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        *,
        fail_on: set[str] | None = None,
    ) -> None:
        self.vectors = dict(vectors or {})
        self.fail_on = set(fail_on or ())
        self.calls: list[str] = []

    def _embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if text in self.fail_on:
            raise RuntimeError("embedding backend unavailable")
        if text in self.vectors:
            return self.vectors[text]
        n = len(text)
        return [1.0, float(n % 7), float(n % 11)]


class InMemoryVectorStore(VectorStoreBase):
    """Dict-backed store ranking by Euclidean distance."""

    def __init__(self) -> None:
        super().__init__("test-collection")
        self.records: dict[str, StoredRecord] = {}
        self.upsert_calls = 0

    def upsert(self, record: StoredRecord) -> None:
        self.upsert_calls += 1
        self.records[record.id] = record

    def query(self, embedding: list[float], *, k: int) -> list[RetrievedMatch]:
        scored = [
            (math.dist(embedding, rec.embedding), rec)
            for rec in self.records.values()
            if len(rec.embedding) == len(embedding)
        ]
        scored.sort(key=lambda pair: pair[0])
        return [
            RetrievedMatch(id=rec.id, metadata=rec.metadata, distance=dist)
            for dist, rec in scored[:k]
        ]

    def count(self) -> int:
        return len(self.records)

    def health_check(self) -> bool:
        return True

    def delete(self, ids: list[str]) -> None:
        for doc_id in ids:
            self.records.pop(doc_id, None)


class FakeChatModel:
    """Records every prompt and replies with a canned answer."""

    def __init__(self, reply: Any = "Canned answer.") -> None:
        self.reply = reply
        self.prompts: list[list[Any]] = []

    def invoke(self, messages: list[Any]) -> AIMessage:
        self.prompts.append(messages)
        if isinstance(self.reply, Exception):
            raise self.reply
        return AIMessage(content=self.reply)


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def chat_model() -> FakeChatModel:
    return FakeChatModel()
