from __future__ import annotations

import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)
    """Application runtime configuration."""

    app_name: str = "ATT Reports"
    host: str = os.getenv("ATT_HOST", "127.0.0.1")
    port: int = int(os.getenv("ATT_PORT", "8080"))

    storage_backend: str = os.getenv("ATT_STORAGE", "sqlite")
    sqlite_path: Path = Path(os.getenv("ATT_SQLITE_PATH", "./data/att.db"))

    timezone: str = os.getenv("ATT_TIMEZONE", "UTC")
    date_format: str = os.getenv("ATT_DATE_FORMAT", "%Y-%m-%d")
    datetime_format: str = os.getenv("ATT_DATETIME_FORMAT", "%Y-%m-%d %H:%M:%S")

    report_job_limit: int = int(os.getenv("ATT_REPORT_JOB_LIMIT", "20"))

    log_level: str = os.getenv("ATT_LOG_LEVEL", "INFO")

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()

# Ensure essential directories exist
settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
