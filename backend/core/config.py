from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

load_dotenv()

ISSUE_WINDOWS = (7, 14, 30)


class Settings(BaseSettings):
    """Application settings, read from the environment or a .env file"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    API_BASE_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT: float = 120.0
    RETRY_ATTEMPTS: int = 3
    RETRY_DELAY: float = 1.0

    POSTS_PAGE_SIZE: int = 10
    STATS_FALLBACK_TOTAL: int = 100
    DEFAULT_ISSUE_WINDOW: int = 7

    # None disables the quarter-based recency filter
    ROADMAP_RECENCY_DAYS: Optional[int] = None

    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def check_ranges(self):
        if self.RETRY_ATTEMPTS < 1:
            raise ConfigurationError("RETRY_ATTEMPTS must be at least 1")
        if self.POSTS_PAGE_SIZE < 1:
            raise ConfigurationError("POSTS_PAGE_SIZE must be at least 1")
        if self.DEFAULT_ISSUE_WINDOW not in ISSUE_WINDOWS:
            raise ConfigurationError(f"DEFAULT_ISSUE_WINDOW must be one of {ISSUE_WINDOWS}")
        if self.ROADMAP_RECENCY_DAYS is not None and self.ROADMAP_RECENCY_DAYS < 0:
            raise ConfigurationError("ROADMAP_RECENCY_DAYS must not be negative")
        return self


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
