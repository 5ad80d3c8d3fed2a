"""Runtime settings loaded from the environment."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings (env prefix ``REGIME_ANALYZER_``)."""

    model_config = SettingsConfigDict(
        env_prefix="REGIME_ANALYZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"
    # JSON file with raw state records replacing the bundled ones
    reference_data_path: Optional[Path] = None
    ano_referencia: int = 2025
    uf_padrao: str = "SP"


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
