"""
Centralized configuration management for flashquiz.
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, loaded from FLASHQUIZ_* environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLASHQUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Session ---
    # Extended sessions store mistake counts in card files and enable the
    # log, hardest card and reset stats actions.
    extended: bool = True
    color: bool = True
    # Fixed seed for repeatable quizzes. None draws from system entropy.
    seed: Optional[int] = None

    # --- Files ---
    # Imported before the first prompt / exported after exit when set.
    import_from: Optional[Path] = None
    export_to: Optional[Path] = None

    # --- Diagnostics ---
    # Diagnostics are silenced unless a level is given.
    log_level: Optional[str] = None


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
