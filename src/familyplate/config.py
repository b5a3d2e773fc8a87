"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (used by the "sql" checked-state backend)
    database_url: str = "sqlite:///./familyplate.db"

    # Checked-state storage
    checked_state_backend: str = "memory"  # "memory", "json" or "sql"
    checked_state_path: str = "./shopping_list_checked.json"
    checked_state_key_prefix: str = "familyplate_shopping_list_checked"

    # Recipe details service
    recipe_api_base_url: str = "http://localhost:3000/api"
    recipe_api_timeout: float = 15.0  # request timeout in seconds
    recipe_api_max_retries: int = 3
    ingredient_fetch_concurrency: int = 3

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
