"""Unit tests for retrieval, prompt construction and answer assembly."""

from __future__ import annotations

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from web_rag.errors import EmbeddingUnavailableError, GenerationError
from web_rag.models import RecordMetadata, RetrievedMatch, StoredRecord
from web_rag.retrieval.answerer import NO_CONTEXT_MESSAGE, AnswerAssembler, collect_context
from web_rag.retrieval.prompts import ANSWER_SYSTEM, CONTEXT_SEPARATOR, build_answer_prompt

QUESTION = "What is the cohort?"


def _record(doc_id: str, vector: list[float], url: str, body: str) -> StoredRecord:
    return StoredRecord(
        id=doc_id,
        embedding=vector,
        metadata=RecordMetadata(url=url, head="Head", body=body),
    )


def _match(doc_id: str, url: str, body: str) -> RetrievedMatch:
    return RetrievedMatch(id=doc_id, metadata=RecordMetadata(url=url, body=body))


@pytest.fixture()
def assembler(embedder, store, chat_model) -> AnswerAssembler:
    embedder.vectors[QUESTION] = [0.0, 1.0, 0.0]
    return AnswerAssembler(embedder, store, chat_model, k=3)


# ── collect_context ───────────────────────────────────────────────────


class TestCollectContext:
    def test_urls_deduplicated_in_rank_order(self) -> None:
        matches = [
            _match("1", "https://b.dev", "b1"),
            _match("2", "https://a.dev", "a1"),
            _match("3", "https://b.dev", "b2"),
        ]
        urls, bodies = collect_context(matches)
        assert urls == ["https://b.dev", "https://a.dev"]
        assert bodies == ["b1", "a1", "b2"]

    def test_blank_bodies_and_urls_dropped(self) -> None:
        matches = [_match("1", "", "   "), _match("2", "https://a.dev", "kept")]
        assert collect_context(matches) == (["https://a.dev"], ["kept"])


# ── prompt ────────────────────────────────────────────────────────────


class TestBuildAnswerPrompt:
    def test_structure(self) -> None:
        messages = build_answer_prompt(QUESTION, ["https://a.dev"], ["first", "second"])
        assert isinstance(messages[0], SystemMessage)
        assert isinstance(messages[1], HumanMessage)
        assert messages[0].content == ANSWER_SYSTEM
        assert "only" in ANSWER_SYSTEM

    def test_contains_question_sources_and_separated_context(self) -> None:
        [_, human] = build_answer_prompt(QUESTION, ["https://a.dev", "https://b.dev"], ["first", "second"])
        assert f"Question: {QUESTION}" in human.content
        assert "- https://a.dev\n- https://b.dev" in human.content
        assert f"first{CONTEXT_SEPARATOR}second" in human.content

    def test_context_keeps_rank_order(self) -> None:
        [_, human] = build_answer_prompt(QUESTION, [], ["closest", "middle", "farthest"])
        content = human.content
        assert content.index("closest") < content.index("middle") < content.index("farthest")


# ── AnswerAssembler ───────────────────────────────────────────────────


class TestAnswerAssembler:
    def test_empty_store_returns_no_context_without_model_call(self, assembler, chat_model) -> None:
        answer = assembler.answer(QUESTION)
        assert answer.status == "no_context"
        assert not answer.found_context
        assert answer.text == NO_CONTEXT_MESSAGE
        assert chat_model.prompts == []

    def test_blank_bodies_count_as_no_context(self, assembler, store, chat_model) -> None:
        store.upsert(_record("x", [0.0, 1.0, 0.0], "https://a.dev", "  "))
        answer = assembler.answer(QUESTION)
        assert answer.status == "no_context"
        assert answer.sources == ["https://a.dev"]
        assert chat_model.prompts == []

    def test_answer_returns_model_text_verbatim(self, assembler, store, chat_model) -> None:
        chat_model.reply = "  The cohort is a 12-week program.\n"
        store.upsert(_record("a-chunk-0", [0.0, 1.0, 0.0], "https://a.dev", "Cohort info"))
        answer = assembler.answer(QUESTION)
        assert answer.status == "answered"
        assert answer.text == "  The cohort is a 12-week program.\n"
        assert answer.sources == ["https://a.dev"]
        assert len(chat_model.prompts) == 1

    def test_retrieves_at_most_k(self, embedder, store, chat_model) -> None:
        embedder.vectors[QUESTION] = [0.0, 0.0, 0.0]
        for i in range(5):
            store.upsert(_record(f"c-{i}", [float(i), 0.0, 0.0], "https://a.dev", f"body {i}"))
        assembler = AnswerAssembler(embedder, store, chat_model, k=3)

        answer = assembler.answer(QUESTION)

        assert [m.id for m in answer.matches] == ["c-0", "c-1", "c-2"]
        human = chat_model.prompts[0][1].content
        assert "body 0" in human and "body 2" in human
        assert "body 3" not in human

    def test_question_embedding_failure(self, assembler, embedder, chat_model) -> None:
        embedder.fail_on.add(QUESTION)
        with pytest.raises(EmbeddingUnavailableError):
            assembler.answer(QUESTION)
        assert chat_model.prompts == []

    def test_model_error_raises_generation_error(self, assembler, store, chat_model) -> None:
        chat_model.reply = TimeoutError("model timed out")
        store.upsert(_record("a", [0.0, 1.0, 0.0], "https://a.dev", "text"))
        with pytest.raises(GenerationError, match="model timed out"):
            assembler.answer(QUESTION)

    def test_blank_model_output_raises(self, assembler, store, chat_model) -> None:
        chat_model.reply = "   "
        store.upsert(_record("a", [0.0, 1.0, 0.0], "https://a.dev", "text"))
        with pytest.raises(GenerationError, match="empty answer"):
            assembler.answer(QUESTION)

    def test_content_block_output_is_joined(self, assembler, store, chat_model) -> None:
        chat_model.reply = [{"type": "text", "text": "Part one. "}, {"type": "text", "text": "Part two."}]
        store.upsert(_record("a", [0.0, 1.0, 0.0], "https://a.dev", "text"))
        assert assembler.answer(QUESTION).text == "Part one. Part two."
