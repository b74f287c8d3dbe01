from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1/volumes"


class ClientConfig(BaseModel):
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_seconds: float | None = Field(default=10.0)
    api_key: str | None = Field(default=None)


def _config_path() -> Path:
    return Path(__file__).resolve().parents[2] / "config" / "google_books.yml"


def _env_path() -> Path:
    return Path(__file__).resolve().parents[2] / ".env"


def _load_yaml_config() -> dict[str, Any]:
    path = _config_path()
    if not path.exists():
        return {}

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        return raw
    return {}


def get_client_config() -> ClientConfig:
    load_dotenv(_env_path(), override=False)

    raw = _load_yaml_config()
    config = ClientConfig(**raw)

    env_base_url = os.getenv("GOOGLE_BOOKS_BASE_URL")
    env_timeout_seconds = os.getenv("GOOGLE_BOOKS_TIMEOUT_SECONDS")
    env_api_key = os.getenv("GOOGLE_BOOKS_API_KEY")

    if env_base_url:
        config.base_url = env_base_url
    if env_timeout_seconds is not None:
        # an empty value disables the timeout
        config.timeout_seconds = float(env_timeout_seconds) if env_timeout_seconds.strip() else None
    if env_api_key:
        config.api_key = env_api_key

    config.base_url = config.base_url.rstrip("/")
    return config
