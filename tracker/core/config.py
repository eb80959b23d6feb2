from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from the environment or a local ``.env`` file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    project_name: str = "Student Performance Tracker"
    database_url: str = "sqlite:///./app.db"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # JWT
    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    audit_log_page_size: int = 100
    # Month (1-12) in which a new school year begins.
    school_year_start_month: int = 7


@lru_cache
def get_settings() -> Settings:
    return Settings()
