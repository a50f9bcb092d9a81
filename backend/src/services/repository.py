"""Read access to tasks, projects and comments."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from ..models.task import Comment, Project, Task
from .config import AppConfig

logger = logging.getLogger(__name__)

TASK_FIELDS = [
    "Id",
    "Name",
    "CreatedOn",
    "ModifiedOn",
    "title",
    "description",
    "assignee",
    "due_date",
    "priority",
    "status",
    "project_id",
]
PROJECT_FIELDS = [
    "Id",
    "Name",
    "CreatedOn",
    "title",
    "description",
    "status",
    "start_date",
    "end_date",
]
COMMENT_FIELDS = ["Id", "task_id", "content", "CreatedOn"]


class DataSourceError(RuntimeError):
    """Raised when the backing store reports a failed read."""

    def __init__(self, message: str, table: Optional[str] = None):
        self.message = message
        self.table = table
        super().__init__(message)


class EntityRepository(ABC):
    """Source of the entities the search engine scans."""

    @abstractmethod
    async def list_tasks(self) -> List[Task]: ...

    @abstractmethod
    async def list_projects(self) -> List[Project]: ...

    @abstractmethod
    async def list_comments_for_task(self, task_id: str) -> List[Comment]: ...


class InMemoryRepository(EntityRepository):
    """Repository over lists held in process memory."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        projects: Iterable[Project] = (),
        comments: Iterable[Comment] = (),
    ) -> None:
        self._tasks = list(tasks)
        self._projects = list(projects)
        self._comments = list(comments)

    async def list_tasks(self) -> List[Task]:
        return list(self._tasks)

    async def list_projects(self) -> List[Project]:
        return list(self._projects)

    async def list_comments_for_task(self, task_id: str) -> List[Comment]:
        matching = [comment for comment in self._comments if comment.task_id == task_id]
        return sorted(matching, key=lambda comment: comment.timestamp)


class RemoteRepository(EntityRepository):
    """
    Repository backed by a hosted records API.

    The HTTP client is owned by the caller; this class never opens or closes it.
    Each table is read with ``POST /records/{table}/fetch`` and a body of
    ``{"fields": [...], "where": [...]}``; the response carries ``success``,
    an optional ``message`` and the rows under ``data``.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def list_tasks(self) -> List[Task]:
        rows = await self._fetch("task", TASK_FIELDS)
        return [self._to_task(row) for row in rows]

    async def list_projects(self) -> List[Project]:
        rows = await self._fetch("project", PROJECT_FIELDS)
        return [self._to_project(row) for row in rows]

    async def list_comments_for_task(self, task_id: str) -> List[Comment]:
        rows = await self._fetch(
            "comment",
            COMMENT_FIELDS,
            where=[{"FieldName": "task_id", "Operator": "EqualTo", "Values": [task_id]}],
        )
        comments = [self._to_comment(row) for row in rows]
        return sorted(comments, key=lambda comment: comment.timestamp)

    async def _fetch(
        self,
        table: str,
        fields: List[str],
        where: Optional[List[Dict[str, Any]]] = None,
    ) -> List[Dict[str, Any]]:
        body: Dict[str, Any] = {"fields": fields}
        if where:
            body["where"] = where

        response = await self.client.post(f"/records/{table}/fetch", json=body)
        response.raise_for_status()
        payload = response.json()

        if not payload.get("success", False):
            raise DataSourceError(
                payload.get("message") or f"Failed to fetch {table} records", table=table
            )

        data = payload.get("data") or []
        if isinstance(data, dict):
            data = [data]
        return list(data)

    @staticmethod
    def _to_task(row: Dict[str, Any]) -> Task:
        return Task(
            id=str(row["Id"]),
            title=row.get("title") or row.get("Name") or "",
            description=row.get("description"),
            status=row.get("status") or "todo",
            priority=row.get("priority") or "medium",
            assignee=row.get("assignee"),
            project_id=str(row.get("project_id") or ""),
            due_date=row.get("due_date"),
            created_at=row.get("CreatedOn"),
            updated_at=row.get("ModifiedOn"),
        )

    @staticmethod
    def _to_project(row: Dict[str, Any]) -> Project:
        return Project(
            id=str(row["Id"]),
            title=row.get("title") or row.get("Name") or "",
            description=row.get("description"),
            status=row.get("status"),
            start_date=row.get("start_date"),
            end_date=row.get("end_date"),
            created_at=row.get("CreatedOn"),
        )

    @staticmethod
    def _to_comment(row: Dict[str, Any]) -> Comment:
        return Comment(
            id=str(row["Id"]),
            task_id=str(row["task_id"]),
            content=row.get("content") or "",
            timestamp=row.get("CreatedOn") or row.get("timestamp"),
        )


def create_remote_client(config: AppConfig) -> httpx.AsyncClient:
    """Build the single HTTP client shared by a process's remote repository."""
    headers: Dict[str, str] = {}
    if config.remote_api_key:
        headers["Authorization"] = f"Bearer {config.remote_api_key}"
    if config.remote_project_id:
        headers["X-Project-Id"] = config.remote_project_id
    return httpx.AsyncClient(
        base_url=config.remote_api_url or "",
        headers=headers,
        timeout=config.remote_timeout_seconds,
    )


def build_repository(
    config: AppConfig, client: Optional[httpx.AsyncClient] = None
) -> EntityRepository:
    """Select the repository implementation configured for this process."""
    if config.data_backend == "remote":
        if client is None:
            raise ValueError("Remote backend requires an HTTP client")
        logger.info("Using remote repository", extra={"base_url": config.remote_api_url})
        return RemoteRepository(client)

    if config.seed_demo_data:
        from .seed import build_demo_repository

        logger.info("Using in-memory repository with demo data")
        return build_demo_repository()

    logger.info("Using empty in-memory repository")
    return InMemoryRepository()


__all__ = [
    "DataSourceError",
    "EntityRepository",
    "InMemoryRepository",
    "RemoteRepository",
    "build_repository",
    "create_remote_client",
]
