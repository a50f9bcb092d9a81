"""Service layer for search logic and data access."""

from .config import AppConfig, get_config, reload_config
from .relevance import extract_snippet, highlight, score_field
from .repository import (
    DataSourceError,
    EntityRepository,
    InMemoryRepository,
    RemoteRepository,
    build_repository,
    create_remote_client,
)
from .search import SearchService, rank_results
from .seed import build_demo_repository
from .suggestions import SuggestionGate

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "score_field",
    "extract_snippet",
    "highlight",
    "DataSourceError",
    "EntityRepository",
    "InMemoryRepository",
    "RemoteRepository",
    "build_repository",
    "create_remote_client",
    "build_demo_repository",
    "SearchService",
    "rank_results",
    "SuggestionGate",
]
