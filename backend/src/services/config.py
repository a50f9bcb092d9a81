"""Application configuration helpers."""

from __future__ import annotations

from functools import lru_cache
import os
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_RECENT_QUERIES = (
    "high priority tasks",
    "overdue items",
    "project alpha",
    "in progress",
)
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:3000")


class AppConfig(BaseModel):
    """Runtime configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True)

    data_backend: Literal["memory", "remote"] = Field(
        default="memory",
        description="Where tasks/projects/comments are read from",
    )
    remote_api_url: Optional[str] = Field(
        default=None, description="Base URL of the hosted records API"
    )
    remote_api_key: Optional[str] = Field(
        default=None, description="Public key sent as a bearer token"
    )
    remote_project_id: Optional[str] = Field(
        default=None, description="Hosted project identifier header"
    )
    remote_timeout_seconds: float = Field(default=10.0, gt=0)
    seed_demo_data: bool = Field(
        default=True, description="Populate the in-memory backend with demo data"
    )
    search_max_limit: int = Field(default=100, ge=1)
    autocomplete_limit: int = Field(default=8, ge=1)
    autocomplete_debounce_ms: int = Field(default=300, ge=0)
    recent_queries: tuple[str, ...] = DEFAULT_RECENT_QUERIES
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    @field_validator("remote_api_url", mode="before")
    @classmethod
    def _normalize_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            return None
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("REMOTE_API_URL must start with http:// or https://")
        return cleaned

    @field_validator("recent_queries", "cors_origins", mode="before")
    @classmethod
    def _split_csv(cls, value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
        if isinstance(value, str):
            value = value.split(",")
        return tuple(item.strip() for item in value if item and item.strip())

    @model_validator(mode="after")
    def _require_remote_url(self) -> "AppConfig":
        if self.data_backend == "remote" and not self.remote_api_url:
            raise ValueError("REMOTE_API_URL is required when DATA_BACKEND=remote")
        return self


def _read_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


def _read_flag(key: str, default: str = "true") -> bool:
    return (_read_env(key, default) or default).lower() not in {"0", "false", "no"}


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Load and cache application configuration."""
    values = {
        "data_backend": (_read_env("DATA_BACKEND", "memory") or "memory").strip().lower(),
        "remote_api_url": _read_env("REMOTE_API_URL"),
        "remote_api_key": _read_env("REMOTE_API_KEY"),
        "remote_project_id": _read_env("REMOTE_PROJECT_ID"),
        "seed_demo_data": _read_flag("SEED_DEMO_DATA"),
    }
    optional = {
        "remote_timeout_seconds": "REMOTE_TIMEOUT_SECONDS",
        "search_max_limit": "SEARCH_MAX_LIMIT",
        "autocomplete_limit": "AUTOCOMPLETE_LIMIT",
        "autocomplete_debounce_ms": "AUTOCOMPLETE_DEBOUNCE_MS",
        "recent_queries": "SEARCH_RECENT_QUERIES",
        "cors_origins": "CORS_ORIGINS",
    }
    for field_name, env_key in optional.items():
        raw = _read_env(env_key)
        if raw is not None:
            values[field_name] = raw

    return AppConfig(**values)


def reload_config() -> AppConfig:
    """Clear cached config (useful for tests) and reload."""
    get_config.cache_clear()
    return get_config()


__all__ = ["AppConfig", "get_config", "reload_config", "DEFAULT_RECENT_QUERIES"]
