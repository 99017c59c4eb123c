"""KFP v2 component: Ingest a batch of web pages into the vector store.

Runs the :class:`web_rag.ingestion.pipeline.IngestionPipeline` over a
JSON list of URLs.  Each URL is fetched, chunked, embedded and upserted
in turn; a failing URL is logged and counted but never stops the batch.

The component imports :mod:`web_rag`, so ``base_image`` must be an image
with this repository installed (``pip install .``).

Local testing
-------------
    from pipelines.components.ingest import ingest_urls
    ingest_urls.python_func(
        urls='["https://example.com"]',
        chroma_host="localhost",
        chroma_port=8000,
        collection_name="web_scraped_data",
        metrics=_FakeArtifact("/tmp/metrics"),
    )
"""

from kfp import dsl


@dsl.component(base_image="web-rag:latest")
def ingest_urls(
    urls: str,
    chroma_host: str,
    chroma_port: int,
    collection_name: str,
    metrics: dsl.Output[dsl.Metrics],
    embedding_provider: str = "huggingface",
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2",
    chunk_word_count: int = 500,
    min_body_chars: int = 50,
    request_timeout: float = 30.0,
    distance_metric: str = "cosine",
) -> str:
    """Fetch → chunk → embed → upsert every URL in *urls*.

    Parameters
    ----------
    urls:
        JSON-encoded **list** of page URLs.
    chroma_host / chroma_port:
        Vector-store connection details.
    collection_name:
        Target Chroma collection (created if absent).
    metrics:
        Output Metrics artifact with ingestion statistics.
    embedding_provider / embedding_model:
        Embedding backend and model identifier.
    chunk_word_count:
        Words per chunk.
    min_body_chars:
        Pages with a shorter cleaned body count as failures.
    request_timeout:
        Per-request timeout in seconds.
    distance_metric:
        Distance function (``cosine`` | ``l2`` | ``ip``).

    Returns
    -------
    str
        Summary, e.g. ``"Ingested 3/4 URLs (12 chunks stored, 1 skipped)"``.
    """
    import json
    import logging

    from web_rag.config import Settings
    from web_rag.ingestion.pipeline import build_ingestion_pipeline

    logging.basicConfig(level=logging.INFO)
    log = logging.getLogger("ingest_urls")

    url_list = json.loads(urls) if isinstance(urls, str) else urls
    if not isinstance(url_list, list) or not url_list:
        raise ValueError(f"'urls' must be a non-empty JSON list, got: {urls!r}")

    settings = Settings(
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        chroma_collection=collection_name,
        chroma_distance=distance_metric,
        embedding_provider=embedding_provider,
        embedding_model=embedding_model,
        chunk_word_count=chunk_word_count,
        min_body_chars=min_body_chars,
        request_timeout=request_timeout,
    )
    pipeline = build_ingestion_pipeline(settings)
    reports = pipeline.ingest_many(url_list)

    ok = [r for r in reports if r.success]
    failed = [r for r in reports if not r.success]
    stored = sum(r.chunks_stored for r in ok)
    skipped = sum(r.chunks_skipped for r in ok)
    for report in reports:
        log.info(report.summary())

    # KFP Metrics
    metrics.log_metric("urls_ingested", len(ok))
    metrics.log_metric("urls_failed", len(failed))
    metrics.log_metric("chunks_stored", stored)
    metrics.log_metric("chunks_skipped", skipped)

    if not ok:
        raise RuntimeError(
            "All URLs failed:\n" + "\n".join(f"{r.url}: {r.error}" for r in failed)
        )

    msg = (f"Ingested {len(ok)}/{len(reports)} URLs "
           f"({stored} chunks stored, {skipped} skipped)")
    log.info(msg)
    return msg
