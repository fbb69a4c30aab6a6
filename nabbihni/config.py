"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./nabbihni.db"

    # Reference clock (Asia/Riyadh has no DST)
    REFERENCE_UTC_OFFSET_HOURS: int = 3

    # Background jobs
    AUTO_ADVANCE_ENABLED: bool = True

    # Application
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_sqlalchemy_url(self) -> str:
        """
        Convert DATABASE_URL to an async SQLAlchemy URL

        postgresql:// -> postgresql+psycopg:// (psycopg 3 async driver)
        sqlite:// -> sqlite+aiosqlite://
        """
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
