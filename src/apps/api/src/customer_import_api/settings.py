"""API settings."""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    log_level: str = "INFO"
    sink_backend: Literal["memory", "opensearch"] = "memory"
    opensearch_url: str = "http://opensearch:9200"
    opensearch_username: str | None = None
    opensearch_password: str | None = None
    customers_index: str = "customers"
    import_batch_size: int = 1000
    import_max_errors: int = 10_000
    import_read_chunk_size: int = 1000
    max_upload_mb: int = 100
    upload_dir: str = "/tmp/uploads/csv"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
