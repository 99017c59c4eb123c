"""Ingestion pipeline: fetch → chunk → embed → upsert, one URL at a time.

Chunks are processed strictly in sequence order.  Storage ids are derived
from ``(url, chunk index)`` so re-ingesting an unchanged page overwrites
the same records.  If a page shrinks, records for the now-missing higher
indices are left in the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from web_rag.errors import FetchError, InvalidInputError
from web_rag.ingestion.chunker import chunk_document
from web_rag.models import IngestionReport, RecordMetadata, StoredRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from web_rag.config import Settings
    from web_rag.ingestion.embedder import Embedder
    from web_rag.ingestion.fetcher import PageFetcher
    from web_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Ingest web pages into a vector store.

    Parameters
    ----------
    fetcher:
        Page fetcher used to download and clean each URL.
    embedder:
        Text → vector function; an empty vector skips the chunk.
    store:
        Target vector-store collection.
    chunk_word_count:
        Words per chunk.
    min_body_chars:
        Pages with a shorter cleaned body are treated as fetch failures.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        embedder: Embedder,
        store: VectorStoreBase,
        *,
        chunk_word_count: int = 500,
        min_body_chars: int = 50,
    ) -> None:
        if isinstance(chunk_word_count, bool) or not isinstance(chunk_word_count, int) or chunk_word_count <= 0:
            raise InvalidInputError(f"chunk_word_count must be a positive int, got {chunk_word_count!r}")
        self._fetcher = fetcher
        self._embedder = embedder
        self._store = store
        self.chunk_word_count = chunk_word_count
        self.min_body_chars = min_body_chars

    # -- public API -----------------------------------------------------------

    def ingest(self, url: str) -> IngestionReport:
        """Fetch, chunk, embed and store one URL.

        Only a fetch failure (or an unusably short body) makes the report
        unsuccessful; chunks whose embedding comes back empty, or whose
        store write fails, are skipped and counted.
        """
        logger.info("Ingesting %s", url)
        try:
            document = self._fetcher.fetch(url)
        except FetchError as exc:
            logger.error("✗ %s: %s", url, exc.reason)
            return IngestionReport(url=url, success=False, error=exc.reason)

        if len(document.body_text) < self.min_body_chars:
            reason = f"body too short ({len(document.body_text)} < {self.min_body_chars} chars)"
            logger.error("✗ %s: %s", url, reason)
            return IngestionReport(url=url, success=False, error=reason)

        try:
            chunks = chunk_document(document, self.chunk_word_count)
        except InvalidInputError as exc:
            logger.error("✗ %s: %s", url, exc)
            return IngestionReport(url=url, success=False, error=str(exc))

        stored = skipped = 0
        for chunk in chunks:
            embedding = self._embedder.embed(chunk.text)
            if not embedding:
                logger.warning("Skipped empty embedding for %s", chunk.chunk_id)
                skipped += 1
                continue
            try:
                self._store.upsert(
                    StoredRecord(
                        id=chunk.chunk_id,
                        embedding=embedding,
                        metadata=RecordMetadata(
                            url=document.url,
                            head=document.title,
                            body=chunk.text,
                            chunk_index=chunk.sequence_index,
                        ),
                    )
                )
            except Exception:
                logger.exception("Failed to store %s", chunk.chunk_id)
                skipped += 1
                continue
            stored += 1

        logger.info("✓ %s (%d/%d chunks stored, %d skipped)", url, stored, len(chunks), skipped)
        return IngestionReport(
            url=url,
            success=True,
            chunks_total=len(chunks),
            chunks_stored=stored,
            chunks_skipped=skipped,
        )

    def ingest_many(self, urls: Iterable[str]) -> list[IngestionReport]:
        """Ingest each URL in turn; one URL's failure never stops the rest."""
        reports: list[IngestionReport] = []
        for url in urls:
            try:
                reports.append(self.ingest(url))
            except Exception as exc:
                logger.exception("Ingestion of %s failed", url)
                reports.append(IngestionReport(url=url, success=False, error=str(exc)))
        return reports


def build_ingestion_pipeline(settings: Settings) -> IngestionPipeline:
    """Wire the HTTP fetcher, configured embedder and Chroma store together."""
    from web_rag.ingestion.embedder import get_embedder
    from web_rag.ingestion.fetcher import HttpPageFetcher
    from web_rag.retrieval.chroma_store import ChromaVectorStore

    return IngestionPipeline(
        fetcher=HttpPageFetcher(
            timeout=settings.request_timeout,
            min_body_chars=settings.min_body_chars,
            headers={"User-Agent": settings.user_agent},
        ),
        embedder=get_embedder(
            settings.embedding_provider,
            settings.embedding_model,
            api_key=settings.openai_api_key,
        ),
        store=ChromaVectorStore.from_settings(settings),
        chunk_word_count=settings.chunk_word_count,
        min_body_chars=settings.min_body_chars,
    )
