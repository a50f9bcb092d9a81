"""Seed an in-memory workspace with sample projects, tasks and comments."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from ..models.task import Comment, Project, Task
from .repository import InMemoryRepository

logger = logging.getLogger(__name__)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


DEMO_PROJECTS = [
    {
        "id": "project-1",
        "title": "Project Alpha",
        "description": "Customer portal rebuild with a new design system and faster checkout.",
        "status": "active",
        "start_date": "2025-01-06T00:00:00",
        "end_date": "2025-06-30T00:00:00",
        "created_at": "2025-01-02T09:00:00",
    },
    {
        "id": "project-2",
        "title": "Mobile App Launch",
        "description": "Ship the first public release of the iOS and Android apps.",
        "status": "planning",
        "start_date": "2025-03-01T00:00:00",
        "end_date": "2025-09-15T00:00:00",
        "created_at": "2025-02-14T10:30:00",
    },
    {
        "id": "project-3",
        "title": "Infrastructure Migration",
        "description": "Move background workers and the reporting database to managed services.",
        "status": "active",
        "start_date": "2025-02-01T00:00:00",
        "end_date": None,
        "created_at": "2025-01-20T08:15:00",
    },
]

DEMO_TASKS = [
    {
        "id": "task-1",
        "title": "Design login screen",
        "description": "Create wireframes and final mockups for the login and password reset flow.",
        "status": "done",
        "priority": "high",
        "assignee": "Sarah Chen",
        "project_id": "project-1",
        "due_date": "2025-02-10T00:00:00",
        "created_at": "2025-01-08T09:00:00",
        "updated_at": "2025-02-08T16:20:00",
    },
    {
        "id": "task-2",
        "title": "Implement checkout API",
        "description": "Expose cart totals, tax calculation and payment intent endpoints.",
        "status": "inProgress",
        "priority": "high",
        "assignee": "Marcus Johnson",
        "project_id": "project-1",
        "due_date": "2025-03-15T00:00:00",
        "created_at": "2025-01-15T11:00:00",
        "updated_at": "2025-03-01T10:05:00",
    },
    {
        "id": "task-3",
        "title": "Write release notes",
        "description": "Summarize user-facing changes for the portal release.",
        "status": "todo",
        "priority": "medium",
        "assignee": None,
        "project_id": "project-1",
        "due_date": "2025-06-25T00:00:00",
        "created_at": "2025-02-01T13:45:00",
        "updated_at": "2025-02-01T13:45:00",
    },
    {
        "id": "task-4",
        "title": "App store listing",
        "description": "Prepare screenshots, keywords and the privacy questionnaire.",
        "status": "todo",
        "priority": "medium",
        "assignee": "Priya Patel",
        "project_id": "project-2",
        "due_date": "2025-08-30T00:00:00",
        "created_at": "2025-03-03T09:30:00",
        "updated_at": "2025-03-20T12:00:00",
    },
    {
        "id": "task-5",
        "title": "Push notification service",
        "description": "Integrate the notification provider and handle device token refresh.",
        "status": "inProgress",
        "priority": "high",
        "assignee": "Marcus Johnson",
        "project_id": "project-2",
        "due_date": "2025-07-01T00:00:00",
        "created_at": "2025-03-05T14:00:00",
        "updated_at": "2025-04-02T09:10:00",
    },
    {
        "id": "task-6",
        "title": "Migrate reporting database",
        "description": "Export nightly snapshots and validate row counts after cutover.",
        "status": "todo",
        "priority": "low",
        "assignee": "Alex Rivera",
        "project_id": "project-3",
        "due_date": None,
        "created_at": "2025-02-03T10:00:00",
        "updated_at": "2025-02-20T17:30:00",
    },
    {
        "id": "task-7",
        "title": "Retire legacy cron host",
        "description": "Move scheduled jobs to the managed worker queue.",
        "status": "done",
        "priority": "low",
        "assignee": "Alex Rivera",
        "project_id": "project-3",
        "due_date": "2025-03-01T00:00:00",
        "created_at": "2025-02-05T15:20:00",
        "updated_at": "2025-02-28T11:00:00",
    },
]

DEMO_COMMENTS = [
    {
        "id": "comment-1",
        "task_id": "task-1",
        "content": "Approved by the design review, ready for handoff.",
        "timestamp": "2025-02-07T15:00:00",
    },
    {
        "id": "comment-2",
        "task_id": "task-2",
        "content": "Blocked on the payment provider sandbox credentials.",
        "timestamp": "2025-02-20T09:40:00",
    },
    {
        "id": "comment-3",
        "task_id": "task-2",
        "content": "Sandbox access granted, resuming integration tests.",
        "timestamp": "2025-02-24T13:15:00",
    },
    {
        "id": "comment-4",
        "task_id": "task-6",
        "content": "Row counts differ for the invoices table, investigating.",
        "timestamp": "2025-02-19T18:05:00",
    },
    {
        "id": "comment-5",
        "task_id": "task-5",
        "content": "Token refresh works on Android; iOS still needs a fix.",
        "timestamp": "2025-04-01T10:00:00",
    },
]


def _with_timestamps(record: dict, *keys: str) -> dict:
    converted = dict(record)
    for key in keys:
        if converted.get(key):
            converted[key] = _ts(converted[key])
    return converted


def build_demo_repository() -> InMemoryRepository:
    """Return a fresh repository holding the demo workspace."""
    projects = [
        Project(**_with_timestamps(p, "start_date", "end_date", "created_at"))
        for p in DEMO_PROJECTS
    ]
    tasks = [
        Task(**_with_timestamps(t, "due_date", "created_at", "updated_at")) for t in DEMO_TASKS
    ]
    comments = [Comment(**_with_timestamps(c, "timestamp")) for c in DEMO_COMMENTS]

    logger.info(
        "Demo workspace seeded",
        extra={"projects": len(projects), "tasks": len(tasks), "comments": len(comments)},
    )
    return InMemoryRepository(tasks=tasks, projects=projects, comments=comments)


__all__ = ["DEMO_PROJECTS", "DEMO_TASKS", "DEMO_COMMENTS", "build_demo_repository"]
