# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from pathlib import Path
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from skulls.core.constants import AGENTS_DIR, DEFAULT_BRANCHES, LOCK_FILE_NAME, SKILLS_SUBDIR


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SKULLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        populate_by_name=True,
        extra="ignore",
    )

    # Install locations
    skills_dir: Path = Path.home() / AGENTS_DIR / SKILLS_SUBDIR
    lock_path: Path = Path.home() / AGENTS_DIR / LOCK_FILE_NAME

    # Discovery
    install_internal_skills: str = Field(
        default="",
        validation_alias=AliasChoices(
            "SKULLS_INSTALL_INTERNAL_SKILLS", "INSTALL_INTERNAL_SKILLS"
        ),
    )

    # GitHub tree API (update checks)
    github_api_url: str = "https://api.github.com"
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices(
            "SKULLS_GITHUB_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"
        ),
    )
    use_gh_cli: bool = True
    default_branches: Annotated[list[str], NoDecode] = list(DEFAULT_BRANCHES)

    @field_validator("default_branches", mode="before")
    @classmethod
    def _parse_default_branches(cls, v: object) -> list[str]:
        if isinstance(v, str):
            return [b.strip() for b in v.split(",") if b.strip()]
        return v if isinstance(v, list) else list(DEFAULT_BRANCHES)

    # Search API
    search_api_url: str = Field(
        default="https://skills.sh",
        validation_alias=AliasChoices("SKULLS_SEARCH_API_URL", "SKILLS_API_URL"),
    )

    # HTTP
    http_timeout: float = 15.0

    # Logging
    log_level: str = "WARNING"
    log_format: str = "text"  # "text" or "json"


def should_install_internal_skills(settings: Settings) -> bool:
    """Only ``1`` and ``true`` enable internal skills from the environment."""
    return settings.install_internal_skills.strip().lower() in ("1", "true")


def get_settings() -> Settings:
    return Settings()
