"""Exception hierarchy shared by ingestion and retrieval."""

from __future__ import annotations


class WebRagError(Exception):
    """Base class for every error raised by :mod:`web_rag`."""


class InvalidInputError(WebRagError, ValueError):
    """Malformed arguments, e.g. empty text or a non-positive chunk size."""


class FetchError(WebRagError):
    """A page could not be fetched or did not contain enough text."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class EmbeddingUnavailableError(WebRagError):
    """The embedder returned no vector for a question."""


class GenerationError(WebRagError):
    """The generative model failed or produced an empty answer."""
