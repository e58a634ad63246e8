"""Environment and settings (Pydantic Settings)."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory: ~/.mindvault/data/
_data_dir = Path.home() / ".mindvault" / "data"


class Settings(BaseSettings):
    """MindVault application settings loaded from environment and .env.

    Summarization settings (API key, endpoint, model) are loaded from
    ~/.mindvault/config.toml by the LLM module.
    """

    model_config = SettingsConfigDict(
        env_prefix="MINDVAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths (local-first data stored in ~/.mindvault/data/)
    db_path: Path = _data_dir / "mindvault.db"
    export_dir: Path = Path.cwd()

    # Feature flags
    enable_ai: bool = True

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Path = _data_dir / "mindvault.log"


def get_settings() -> Settings:
    """Return application settings (singleton-like)."""
    return Settings()
