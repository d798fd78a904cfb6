"""Process configuration loaded from environment variables and an optional .env file."""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logging import LOG_FORMATS

DEFAULT_PORT = 4000
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./taskkit.db"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got '{raw}'")


class Settings(BaseModel):
    """Runtime settings for the task service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_format: str = "console"
    expose_errors: bool = False

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        """Reject log formats the logging layer cannot render."""
        if v not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, dotenv: bool = True) -> Settings:
        """Build settings from the process environment.

        Values from a ``.env`` file in the working directory are loaded first
        (without overriding variables already set) unless ``dotenv`` is False.
        Pass ``environ`` to read from an explicit mapping instead.
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        values: dict[str, object] = {}
        if "HOST" in environ:
            values["host"] = environ["HOST"]
        if "PORT" in environ:
            raw_port = environ["PORT"]
            try:
                values["port"] = int(raw_port)
            except ValueError:
                raise ValueError(f"PORT must be an integer, got '{raw_port}'") from None
        if "DATABASE_URL" in environ:
            values["database_url"] = environ["DATABASE_URL"]
        if "LOG_LEVEL" in environ:
            values["log_level"] = environ["LOG_LEVEL"].upper()
        if "LOG_FORMAT" in environ:
            values["log_format"] = environ["LOG_FORMAT"].lower()
        if "EXPOSE_ERRORS" in environ:
            values["expose_errors"] = _parse_bool("EXPOSE_ERRORS", environ["EXPOSE_ERRORS"])

        return cls.model_validate(values)
