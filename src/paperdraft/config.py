"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `PAPERDRAFT_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """PaperDraft settings.

    All fields are environment-configurable. Prefix is `PAPERDRAFT_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PAPERDRAFT_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    app_env: Literal["dev", "prod"] = Field(default="dev")
    log_level: str = Field(default="INFO")

    # LLM
    openai_api_key: str | None = Field(default=None)
    openai_base_url: str | None = Field(default=None)
    openai_model: str = Field(default="gpt-4.1-2025-04-14")
    openai_timeout_s: float = Field(default=120.0)

    # Sampling per generation kind
    temperature_default: float = Field(default=0.7, ge=0.0, le=2.0)
    temperature_title_suggestion: float = Field(default=0.8, ge=0.0, le=2.0)
    max_tokens_section: int = Field(default=1000, ge=1)
    max_tokens_caption: int = Field(default=150, ge=1)
    max_tokens_abstract: int = Field(default=400, ge=1)
    max_tokens_title_suggestion: int = Field(default=300, ge=1)
    max_tokens_rewrite: int = Field(default=500, ge=1)

    # References
    # What happens to an existing References block once no markers remain.
    stale_references_policy: Literal["keep", "clear", "remove"] = Field(default="keep")

    # Drafting
    generation_concurrency: int = Field(default=3, ge=1, le=16)

    # Storage
    sessions_path: Path = Field(default=Path("sessions.json"))
    artifacts_dir: Path = Field(default=Path("artifacts"))


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("PAPERDRAFT_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
