"""
Application configuration management.

Uses pydantic-settings for environment-based configuration
with validation and type safety.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a CV chatbot assistant that retrieves information about the "
    "candidate's CV. Your answer should be precise and attractive. Always "
    "answer from the context and do not improvise. Provide answers in "
    "bullets and in an organized way."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "RAG Ask API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(default=["*"])

    # Gemini API
    google_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    embedding_model: str = "text-embedding-004"
    generation_model: str = "gemini-1.5-flash"
    system_instruction: str = DEFAULT_SYSTEM_INSTRUCTION
    request_timeout: int = 60

    # Corpus
    corpus_path: str = "data/corpus.txt"
    embed_batch_size: int = Field(default=100, ge=1, le=100)

    # Retrieval (0 keeps the whole ranked corpus)
    similarity_metric: Literal["cosine", "euclidean"] = "cosine"
    retrieval_top_k: int = Field(default=10, ge=0)

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
