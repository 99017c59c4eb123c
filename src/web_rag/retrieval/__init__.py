"""
Retrieval: vector storage, nearest-neighbour search, and answer assembly.

Public surface
--------------
- :class:`AnswerAssembler`: main entry point for answering a question.
- :class:`VectorStoreBase`: abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaVectorStore`: default Chroma backend.
"""

from web_rag.retrieval.answerer import NO_CONTEXT_MESSAGE, AnswerAssembler
from web_rag.retrieval.base import VectorStoreBase

__all__ = [
    "NO_CONTEXT_MESSAGE",
    "AnswerAssembler",
    "ChromaVectorStore",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from web_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
