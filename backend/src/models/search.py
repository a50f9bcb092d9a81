"""Search request/response models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .task import TaskPriority, TaskStatus


class MatchType(str, Enum):
    """Field that produced an entity's best score."""

    TITLE = "title"
    DESCRIPTION = "description"
    COMMENT = "comment"


class _ResultBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: Optional[str] = None
    snippet: str = Field("", description="Excerpt around the first match")
    match_type: MatchType
    score: float = Field(..., gt=0, le=100, description="Relevance of the best field")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskSearchResult(_ResultBase):
    """Task hit, possibly matched through one of its comments."""

    type: Literal["task"] = "task"
    status: TaskStatus
    priority: TaskPriority
    project_id: str
    assignee: Optional[str] = None
    due_date: Optional[datetime] = None


class ProjectSearchResult(_ResultBase):
    """Project hit."""

    type: Literal["project"] = "project"
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


SearchResult = Annotated[
    Union[TaskSearchResult, ProjectSearchResult], Field(discriminator="type")
]


class SearchOptions(BaseModel):
    """Scope, paging and filters for a full search."""

    type: Literal["all", "task", "project"] = "all"
    limit: int = Field(50, ge=1)
    offset: int = Field(0, ge=0)
    status: Optional[str] = Field(None, description="Keep results with this status")
    priority: Optional[TaskPriority] = Field(None, description="Keep tasks with this priority")
    project_id: Optional[str] = Field(None, description="Keep tasks of this project")


class SearchResponse(BaseModel):
    """One page of ranked results."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [],
                "total": 12,
                "query": "release",
                "search_time": 0.42,
                "has_more": True,
            }
        }
    )

    results: list[SearchResult] = Field(default_factory=list)
    total: int = Field(0, ge=0, description="Matches before paging")
    query: str = ""
    search_time: float = Field(0.0, ge=0, description="Scoring and sorting time in ms")
    has_more: bool = False


class SearchSuggestion(BaseModel):
    """Lightweight autocomplete entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: Literal["task"] = "task"
    title: str
    description: Optional[str] = None
    score: float
    status: TaskStatus
    priority: TaskPriority
    project_id: str


__all__ = [
    "MatchType",
    "TaskSearchResult",
    "ProjectSearchResult",
    "SearchResult",
    "SearchOptions",
    "SearchResponse",
    "SearchSuggestion",
]
