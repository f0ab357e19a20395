"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_embedding_model: str = "text-embedding-3-small"
    openai_chat_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    qdrant_url: str
    qdrant_api_key: str | None = None
    qdrant_collection: str
    rag_namespace: str = "nutrition"
    rag_top_k: int = 5
    ingest_batch_size: int = 100
    ingest_dataset_path: str = "data/food_nutrients.json"
    supabase_url: str
    supabase_service_key: str
    default_goal_calories: int = 2000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
