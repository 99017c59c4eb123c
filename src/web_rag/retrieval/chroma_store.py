"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import chromadb

from web_rag.models import RecordMetadata, RetrievedMatch, StoredRecord
from web_rag.retrieval.base import VectorStoreBase

if TYPE_CHECKING:
    from web_rag.config import Settings

logger = logging.getLogger(__name__)

_DISTANCES = ("cosine", "l2", "ip")


def _to_chroma_metadata(meta: RecordMetadata) -> dict[str, Any]:
    """Chroma metadata values must be flat str/int/float/bool (no ``None``)."""
    return {k: v for k, v in meta.model_dump().items() if v is not None}


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Embeddings are always computed by the caller, so the collection is
    created without an embedding function.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection (created if absent).
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance:
        HNSW space used when the collection is first created
        (``cosine`` | ``l2`` | ``ip``).
    """

    def __init__(
        self,
        collection_name: str,
        *,
        host: str = "localhost",
        port: int = 8000,
        distance: str = "cosine",
    ) -> None:
        if distance not in _DISTANCES:
            raise ValueError(f"Unsupported distance {distance!r}; choose from {_DISTANCES}")
        super().__init__(collection_name)
        self._client = chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            embedding_function=None,
            metadata={"hnsw:space": distance},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> ChromaVectorStore:
        return cls(
            settings.chroma_collection,
            host=settings.chroma_host,
            port=settings.chroma_port,
            distance=settings.chroma_distance,
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def upsert(self, record: StoredRecord) -> None:
        if not record.embedding:
            raise ValueError(f"Refusing to store {record.id!r} without an embedding")
        self._collection.upsert(
            ids=[record.id],
            embeddings=[record.embedding],
            metadatas=[_to_chroma_metadata(record.metadata)],
        )

    def query(self, embedding: list[float], *, k: int) -> list[RetrievedMatch]:
        results = self._collection.query(
            query_embeddings=[embedding],
            n_results=k,
            include=["metadatas", "distances"],
        )

        ids = (results.get("ids") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        matches: list[RetrievedMatch] = []
        for doc_id, meta, dist in zip(ids, metas, distances):
            matches.append(
                RetrievedMatch(
                    id=doc_id,
                    metadata=RecordMetadata(**(meta or {})),
                    distance=dist,
                )
            )
        return matches

    def count(self) -> int:
        return self._collection.count()

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    def delete(self, ids: list[str]) -> None:
        self._collection.delete(ids=ids)
