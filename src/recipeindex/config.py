"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Instances are immutable; build one at the application edge and pass it to
    every collaborator that needs it.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Database
    database_url: str = "postgresql+asyncpg://localhost/recipeindex"

    # Redis reverse index
    redis_url: str = "redis://localhost:6379/0"
    reverse_index_prefix: str = "ingredient:"

    # LLM API (OpenAI-compatible chat completions)
    llm_api_key: str = ""
    llm_base_url: str = "https://api.deepinfra.com/v1/openai"
    llm_model: str = "meta-llama/Meta-Llama-3.1-70B-Instruct"
    llm_timeout: float = 60.0  # request timeout in seconds

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def chat_completions_url(self) -> str:
        """Get the full chat completions endpoint URL."""
        return f"{self.llm_base_url.rstrip('/')}/chat/completions"

    @property
    def origins(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
