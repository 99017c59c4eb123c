"""Text → vector adapters.

The rest of the package only sees :class:`Embedder`.  A failed embedding
is reported as an empty list rather than an exception, so ingestion can
skip the affected chunk and retrieval can raise its own error.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class Embedder(ABC):
    """Maps text to a fixed-dimension vector; ``[]`` on failure."""

    def embed(self, text: Any) -> list[float]:
        """Return the embedding of *text*, or ``[]`` if the backend failed.

        Non-string input is serialised with :func:`json.dumps` first.
        """
        if not isinstance(text, str):
            text = json.dumps(text, default=str)
        try:
            vector = self._embed(text)
            return [float(v) for v in vector] if vector else []
        except Exception:
            logger.exception("Embedding failed for %d-char input", len(text))
            return []

    @abstractmethod
    def _embed(self, text: str) -> list[float]:
        """Backend call; may raise."""
        ...


class LangChainEmbedder(Embedder):
    """Adapter for any LangChain :class:`~langchain_core.embeddings.Embeddings`."""

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    def _embed(self, text: str) -> list[float]:
        return self._embeddings.embed_query(text)


def get_embedder(provider: str, model_name: str, *, api_key: str = "") -> Embedder:
    """Return the configured embedding backend.

    Parameters
    ----------
    provider:
        ``"huggingface"`` (local sentence-transformers) or ``"openai"``.
    model_name:
        Model identifier understood by the provider.
    api_key:
        Only used by the ``"openai"`` provider.
    """
    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return LangChainEmbedder(
            HuggingFaceEmbeddings(
                model_name=model_name,
                encode_kwargs={"normalize_embeddings": True},
            )
        )
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict[str, Any] = {"model": model_name}
        if api_key:
            kwargs["api_key"] = api_key
        return LangChainEmbedder(OpenAIEmbeddings(**kwargs))
    raise ValueError(f"Unsupported embedding provider: {provider!r}")
