"""Environment-driven settings for applications embedding AIQA."""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DATABASE_URL = "sqlite:///aiqa.db"
DEFAULT_DASHBOARD_WORKERS = 4


class Settings(BaseModel):
    """Runtime settings. Thresholds, weights and curves are not configurable."""

    database_url: str = Field(default=DEFAULT_DATABASE_URL, description="SQLAlchemy URL")
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")
    dashboard_workers: int = Field(
        default=DEFAULT_DASHBOARD_WORKERS,
        ge=1,
        description="Thread pool size for dashboard fan-out reads"
    )

    model_config = ConfigDict(extra="forbid")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build Settings from AIQA_* environment variables.

    Args:
        dotenv: Load a .env file from the working directory first

    Returns:
        Settings instance
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        database_url=os.getenv("AIQA_DATABASE_URL", DEFAULT_DATABASE_URL),
        log_level=os.getenv("AIQA_LOG_LEVEL", "INFO"),
        log_json=_env_flag("AIQA_LOG_JSON"),
        dashboard_workers=int(
            os.getenv("AIQA_DASHBOARD_WORKERS", str(DEFAULT_DASHBOARD_WORKERS))
        ),
    )
