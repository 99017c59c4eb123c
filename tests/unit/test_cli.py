"""Unit tests for the ``python -m web_rag`` entry points."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from web_rag.__main__ import build_parser, main
from web_rag.errors import EmbeddingUnavailableError
from web_rag.models import Answer, IngestionReport


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_ingest_prints_reports(capsys) -> None:
    pipeline = MagicMock()
    pipeline.ingest_many.return_value = [
        IngestionReport(url="https://a.dev", success=True, chunks_total=2, chunks_stored=2),
    ]
    with patch("web_rag.ingestion.pipeline.build_ingestion_pipeline", return_value=pipeline):
        code = main(["ingest", "https://a.dev"])

    assert code == 0
    assert "OK https://a.dev: stored 2/2 chunks" in capsys.readouterr().out


def test_ingest_failure_exit_code() -> None:
    pipeline = MagicMock()
    pipeline.ingest_many.return_value = [IngestionReport(url="u", success=False, error="404")]
    with patch("web_rag.ingestion.pipeline.build_ingestion_pipeline", return_value=pipeline):
        assert main(["ingest", "u"]) == 1


def test_ask_prints_answer_and_sources(capsys) -> None:
    assembler = MagicMock()
    assembler.answer.return_value = Answer(
        question="q", status="answered", text="Forty-two.", sources=["https://a.dev"]
    )
    with patch("web_rag.retrieval.answerer.build_answer_assembler", return_value=assembler):
        code = main(["ask", "q"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Forty-two." in out
    assert "https://a.dev" in out


def test_ask_unavailable_embedding(capsys) -> None:
    assembler = MagicMock()
    assembler.answer.side_effect = EmbeddingUnavailableError("no vector")
    with patch("web_rag.retrieval.answerer.build_answer_assembler", return_value=assembler):
        assert main(["ask", "q"]) == 2
    assert "no vector" in capsys.readouterr().err
