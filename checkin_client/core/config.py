from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_BACKEND_URL = "http://localhost:8000"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class Settings(BaseModel):
    """Client settings; validation errors name the environment variable at fault."""

    model_config = ConfigDict(populate_by_name=True)

    backend_url: str = Field(DEFAULT_BACKEND_URL, alias="BACKEND_URL")
    request_timeout: Optional[float] = Field(None, alias="CHECKIN_REQUEST_TIMEOUT", gt=0)
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown logging level {value!r}")
        return value


def initialize_env() -> None:
    """Load environment variables from a .env in the working directory (or its parents) if present."""
    load_dotenv(find_dotenv(usecwd=True))


def _get_env(key: str, fallback: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if (v is not None and v.strip() != "") else fallback


def get_settings() -> Settings:
    """Read client settings from the environment.

    - BACKEND_URL: base URL of the check-in service
    - CHECKIN_REQUEST_TIMEOUT: optional per-request timeout in seconds
    - LOG_LEVEL: logging level name

    Raises pydantic.ValidationError when a variable holds an unusable value.
    """
    values = {}
    for key in ("BACKEND_URL", "CHECKIN_REQUEST_TIMEOUT", "LOG_LEVEL"):
        v = _get_env(key)
        if v is not None:
            values[key] = v.strip()
    return Settings.model_validate(values)


def configure_logging(level: str = "INFO") -> None:
    """Install a single console handler on the package logger."""
    logger = logging.getLogger("checkin_client")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
