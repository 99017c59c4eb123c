"""Abstract base class for vector-store backends.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`VectorStoreBase` and implementing the abstract
methods.  Ingestion and answering are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from web_rag.models import RetrievedMatch, StoredRecord


class VectorStoreBase(ABC):
    """A single named collection of ``(id, embedding, metadata)`` records.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, record: StoredRecord) -> None:
        """Insert *record*, overwriting any existing record with the same id."""
        ...

    @abstractmethod
    def query(self, embedding: list[float], *, k: int) -> list[RetrievedMatch]:
        """Return up to *k* records nearest to *embedding*, closest first.

        The similarity metric is whatever the backend implements.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Number of records currently stored."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def delete(self, ids: list[str]) -> None:
        """Delete records by id.  Optional, raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support delete")
