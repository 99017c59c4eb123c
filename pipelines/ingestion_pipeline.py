"""KFP v2 pipeline: offline web-page ingestion.

A single ``ingest_urls`` step scrapes every URL, chunks its text,
embeds each chunk and upserts it into Chroma.  Re-running the pipeline
over the same URLs overwrites the same chunk ids.

Compile
-------
    python -m pipelines.ingestion_pipeline --compile
"""

from kfp import compiler, dsl

from pipelines.components.ingest import ingest_urls


@dsl.pipeline(
    name="web-rag-ingestion-pipeline",
    description="Scrape web pages → chunk text → embed → upsert into Chroma.",
)
def web_ingestion_pipeline(
    urls: str = '["https://example.com"]',
    chroma_host: str = "chroma.kubeflow.svc.cluster.local",
    chroma_port: int = 8000,
    collection_name: str = "web_scraped_data",
    embedding_provider: str = "huggingface",
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2",
    chunk_word_count: int = 500,
    min_body_chars: int = 50,
    request_timeout: float = 30.0,
    distance_metric: str = "cosine",
) -> None:
    """Ingest every URL in the JSON list *urls*.

    Parameters
    ----------
    urls:
        JSON list of page URLs.
    chroma_host / chroma_port / collection_name:
        Chroma connection details.
    embedding_provider / embedding_model:
        Embedding backend and model identifier.
    chunk_word_count:
        Words per chunk.
    min_body_chars:
        Minimum cleaned body length for a page to be ingested.
    request_timeout:
        Per-request timeout in seconds.
    distance_metric:
        ``"cosine"`` | ``"l2"`` | ``"ip"``
    """
    ingest_urls(
        urls=urls,
        chroma_host=chroma_host,
        chroma_port=chroma_port,
        collection_name=collection_name,
        embedding_provider=embedding_provider,
        embedding_model=embedding_model,
        chunk_word_count=chunk_word_count,
        min_body_chars=min_body_chars,
        request_timeout=request_timeout,
        distance_metric=distance_metric,
    )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Web RAG ingestion pipeline")
    parser.add_argument("--compile", action="store_true", help="Compile pipeline to YAML")
    parser.add_argument(
        "--output",
        default="pipelines/compiled/web_ingestion_pipeline.yaml",
        help="Output path for compiled YAML",
    )
    args = parser.parse_args()

    if args.compile:
        compiler.Compiler().compile(web_ingestion_pipeline, args.output)
        print(f"Pipeline compiled → {args.output}")
