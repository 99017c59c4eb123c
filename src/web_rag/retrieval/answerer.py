"""Retrieval & answer assembly.

Usage::

    from web_rag.config import settings
    from web_rag.retrieval.answerer import build_answer_assembler

    assembler = build_answer_assembler(settings)
    answer = assembler.answer("What is the cohort about?")
    print(answer.text, answer.sources)

An empty retrieval result short-circuits to a ``no_context`` answer and
the generative model is never called.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from web_rag.errors import EmbeddingUnavailableError, GenerationError
from web_rag.models import Answer
from web_rag.retrieval.prompts import build_answer_prompt

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from web_rag.config import Settings
    from web_rag.ingestion.embedder import Embedder
    from web_rag.models import RetrievedMatch
    from web_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)

NO_CONTEXT_MESSAGE = (
    "I could not find enough information in the ingested pages to answer that question."
)


def collect_context(matches: list[RetrievedMatch]) -> tuple[list[str], list[str]]:
    """Return ``(urls, bodies)`` from ranked *matches*.

    URLs are deduplicated keeping first-seen rank order; blank URLs and
    blank bodies are dropped.
    """
    urls: dict[str, None] = {}
    bodies: list[str] = []
    for match in matches:
        url = match.metadata.url.strip()
        if url:
            urls.setdefault(url, None)
        if match.metadata.body.strip():
            bodies.append(match.metadata.body)
    return list(urls), bodies


def _message_text(message: Any) -> str:
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    # Content-block lists, e.g. [{"type": "text", "text": "..."}]
    parts: list[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class AnswerAssembler:
    """Answer questions from whatever the vector store currently holds.

    Parameters
    ----------
    embedder:
        Embeds the question; must be the same model used at ingestion.
    store:
        Vector store queried for nearest chunks.
    llm:
        LangChain chat model invoked with the grounded prompt.
    k:
        Number of chunks retrieved per question.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: VectorStoreBase,
        llm: BaseChatModel,
        *,
        k: int = 3,
    ) -> None:
        self._embedder = embedder
        self._store = store
        self._llm = llm
        self.k = k

    def retrieve(self, question: str) -> list[RetrievedMatch]:
        """Embed *question* and return the top-``k`` matches, closest first."""
        embedding = self._embedder.embed(question)
        if not embedding:
            raise EmbeddingUnavailableError(f"Could not embed question {question!r}")
        matches = self._store.query(embedding, k=self.k)
        logger.info("Retrieved %d match(es): %s", len(matches), [m.id for m in matches])
        return matches

    def answer(self, question: str) -> Answer:
        """Return a grounded answer, or a ``no_context`` answer.

        Raises
        ------
        EmbeddingUnavailableError
            The question could not be embedded.
        GenerationError
            The model call failed or returned no text.
        """
        matches = self.retrieve(question)
        urls, bodies = collect_context(matches)

        if not bodies:
            logger.info("No usable context for %r; skipping generation", question)
            return Answer(
                question=question,
                status="no_context",
                text=NO_CONTEXT_MESSAGE,
                sources=urls,
                matches=matches,
            )

        prompt = build_answer_prompt(question, urls, bodies)
        try:
            response = self._llm.invoke(prompt)
        except Exception as exc:
            raise GenerationError(f"Generative model call failed: {exc}") from exc

        text = _message_text(response)
        if not text.strip():
            raise GenerationError("Generative model returned an empty answer")

        return Answer(
            question=question,
            status="answered",
            text=text,
            sources=urls,
            matches=matches,
        )


def build_answer_assembler(settings: Settings) -> AnswerAssembler:
    """Wire the configured embedder, Chroma store and chat model together."""
    from web_rag.ingestion.embedder import get_embedder
    from web_rag.retrieval.chroma_store import ChromaVectorStore
    from web_rag.retrieval.llm import get_llm

    return AnswerAssembler(
        embedder=get_embedder(
            settings.embedding_provider,
            settings.embedding_model,
            api_key=settings.openai_api_key,
        ),
        store=ChromaVectorStore.from_settings(settings),
        llm=get_llm(settings),
        k=settings.retrieval_k,
    )
