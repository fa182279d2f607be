"""
Application settings, read from ``HOSTS_EDITOR_*`` environment variables
(and an optional ``.env`` file).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="HOSTS_EDITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hosts file
    hosts_path: str = "/etc/hosts"
    elevation: Literal["auto", "none", "sudo", "pkexec", "osascript"] = "auto"
    load_on_startup: bool = True

    # Logging
    log_level: str = "INFO"

    # Frontend build (served at / when present)
    static_dir: str = "app/static"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
