"""Workspace entity models (tasks, projects, comments)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Kanban column a task sits in."""

    TODO = "todo"
    IN_PROGRESS = "inProgress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(BaseModel):
    """Unit of work belonging to a project."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "task-1",
                "title": "Draft release plan",
                "description": "Outline milestones for the Q3 release.",
                "status": "inProgress",
                "priority": "high",
                "assignee": "Sarah Chen",
                "project_id": "project-1",
                "due_date": "2025-07-01T00:00:00Z",
                "created_at": "2025-06-01T09:00:00Z",
                "updated_at": "2025-06-10T14:30:00Z",
            }
        }
    )

    id: str = Field(..., min_length=1)
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee: Optional[str] = None
    project_id: str
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Project(BaseModel):
    """Container grouping tasks on a board."""

    id: str = Field(..., min_length=1)
    title: str
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class Comment(BaseModel):
    """Discussion entry attached to a task."""

    id: str = Field(..., min_length=1)
    task_id: str
    content: str
    timestamp: datetime


__all__ = ["TaskStatus", "TaskPriority", "Task", "Project", "Comment"]
