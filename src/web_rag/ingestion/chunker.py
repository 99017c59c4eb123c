"""Fixed word-count chunking."""

from __future__ import annotations

from typing import TYPE_CHECKING

from web_rag.errors import InvalidInputError
from web_rag.models import Chunk

if TYPE_CHECKING:
    from web_rag.models import SourceDocument


def chunk_text(text: str, target_word_count: int) -> list[str]:
    """Split *text* into consecutive windows of *target_word_count* words.

    Words are separated by runs of whitespace; each window is re-joined
    with single spaces and only the last window may be shorter.  Joining
    the result with ``" "`` gives back the whitespace-normalised input.

    Parameters
    ----------
    text:
        Plain text to split.
    target_word_count:
        Number of words per chunk.

    Returns
    -------
    list[str]
        ``ceil(word_count / target_word_count)`` chunks, in order.

    Raises
    ------
    InvalidInputError
        If *text* has no words or *target_word_count* is not a positive int.
    """
    if isinstance(target_word_count, bool) or not isinstance(target_word_count, int):
        raise InvalidInputError(f"target_word_count must be an int, got {target_word_count!r}")
    if target_word_count <= 0:
        raise InvalidInputError(f"target_word_count must be > 0, got {target_word_count}")
    if not isinstance(text, str):
        raise InvalidInputError(f"text must be a string, got {type(text).__name__}")

    words = text.split()
    if not words:
        raise InvalidInputError("text is empty")

    return [
        " ".join(words[start : start + target_word_count])
        for start in range(0, len(words), target_word_count)
    ]


def chunk_document(document: SourceDocument, target_word_count: int) -> list[Chunk]:
    """Chunk a fetched page, numbering chunks from 0 without gaps."""
    return [
        Chunk(source_url=document.url, sequence_index=idx, text=piece)
        for idx, piece in enumerate(chunk_text(document.body_text, target_word_count))
    ]
