"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Pattern narrator (any OpenAI-compatible chat endpoint)
    llm_api_key: str = ""
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    llm_model: str = "gemini-2.5-flash"
    llm_timeout_seconds: float = 30.0

    # Frontend
    frontend_url: str = "http://localhost:5173"

    # Development mode
    dev_mode: bool = False

    # Rate limiting (disable for tests)
    rate_limiting_enabled: bool = True

    # Sessions idle longer than this are dropped
    session_max_age_seconds: int = 3600

    @property
    def narrator_enabled(self) -> bool:
        """Check if the pattern narrator is configured."""
        return bool(self.llm_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
