"""Application configuration using Pydantic settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Extraction
    max_text_chars: int = 2_000_000
    include_diagnostics_default: bool = False


settings = Settings()
