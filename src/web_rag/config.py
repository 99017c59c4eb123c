"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for a local endpoint)")
    llm_model_name: str = Field(default="gpt-4o-mini", description="Generative model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for the LLM API. Leave empty to use OpenAI cloud. "
            "Any OpenAI-compatible /v1 endpoint works, e.g. a local vLLM "
            "server or Gemini's OpenAI compatibility layer."
        ),
    )
    llm_temperature: float = 0.0

    # Embedding
    embedding_provider: str = Field(default="huggingface", description="'huggingface' or 'openai'")
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "web_scraped_data"
    chroma_distance: str = Field(default="cosine", description="'cosine' | 'l2' | 'ip'")

    # Ingestion
    chunk_word_count: int = Field(default=500, gt=0)
    min_body_chars: int = Field(default=50, ge=0)
    request_timeout: float = 30.0
    user_agent: str = "web-rag/0.1"

    # Retrieval
    retrieval_k: int = Field(default=3, gt=0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton: read by factories and entry points only.
settings = Settings()
