"""Package configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from COOKDOC_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="COOKDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Parsing
    strip_source: bool = True  # trim surrounding whitespace before tokenizing

    @property
    def json_logs(self) -> bool:
        """Check if logs should be emitted as JSON."""
        return self.log_format.lower() == "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
