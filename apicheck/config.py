# apicheck/config.py
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration for the runner, CLI and service.
    Override via APICHECK_* environment variables or a .env file.
    """
    log_level: str = "INFO"
    # None means no timeout: a hung server blocks the run
    timeout_sec: Optional[float] = None
    verify_ssl: bool = True
    follow_redirects: bool = True
    user_agent: Optional[str] = None
    reports_dir: str = "reports"

    model_config = SettingsConfigDict(
        env_prefix="APICHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
