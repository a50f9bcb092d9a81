"""Pydantic models for data validation and serialization."""

from .search import (
    MatchType,
    ProjectSearchResult,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchSuggestion,
    TaskSearchResult,
)
from .task import Comment, Project, Task, TaskPriority, TaskStatus

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Project",
    "Comment",
    "MatchType",
    "TaskSearchResult",
    "ProjectSearchResult",
    "SearchResult",
    "SearchOptions",
    "SearchResponse",
    "SearchSuggestion",
]
