"""Pydantic models for resolver settings."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_GITHUB_BASE_URL = "https://raw.githubusercontent.com"
DEFAULT_GITHUB_REF = "main"
DEFAULT_GITHUB_PATH = "morphir-ir.json"
DEFAULT_FETCH_TIMEOUT = 30.0


class Settings(BaseModel, frozen=True):
    """Runtime configuration loaded from environment variables."""

    github_base_url: str = DEFAULT_GITHUB_BASE_URL
    github_default_ref: str = DEFAULT_GITHUB_REF
    github_default_path: str = DEFAULT_GITHUB_PATH
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    strict_dependencies: bool = False


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        msg = f"MORPHIR_DEPS_FETCH_TIMEOUT must be a number of seconds, got {value!r}"
        raise ValueError(msg) from None
    if timeout <= 0:
        msg = f"MORPHIR_DEPS_FETCH_TIMEOUT must be positive, got {value!r}"
        raise ValueError(msg)
    return timeout


def load_settings() -> Settings:
    """Load settings from environment variables with defaults."""
    load_dotenv()

    return Settings(
        github_base_url=os.getenv("MORPHIR_DEPS_GITHUB_BASE_URL", DEFAULT_GITHUB_BASE_URL).rstrip(
            "/"
        ),
        github_default_ref=os.getenv("MORPHIR_DEPS_GITHUB_DEFAULT_REF", DEFAULT_GITHUB_REF),
        github_default_path=os.getenv("MORPHIR_DEPS_GITHUB_DEFAULT_PATH", DEFAULT_GITHUB_PATH),
        fetch_timeout=_parse_timeout(
            os.getenv("MORPHIR_DEPS_FETCH_TIMEOUT", str(DEFAULT_FETCH_TIMEOUT))
        ),
        strict_dependencies=os.getenv("MORPHIR_DEPS_STRICT", "false").lower() == "true",
    )
