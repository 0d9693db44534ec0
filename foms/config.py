"""Application settings, read from the environment or a .env file."""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database (PostgreSQL in production, SQLite locally)
    database_url: str = "sqlite:///./foms.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Bearer tokens issued by the identity provider
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    token_issuer: Optional[str] = None
    access_token_expire_minutes: int = 60 * 8

    # Request listing
    page_size: int = 12
    max_page_size: int = 100

    # Frontend origins for CORS
    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "FOMS_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
