from datetime import datetime, timezone
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.src.api.main import app
from backend.src.api.routes.search import get_search_service
from backend.src.models.task import Comment, Project, Task
from backend.src.services.repository import DataSourceError, InMemoryRepository
from backend.src.services.search import SearchService

client = TestClient(app)

STAMP = datetime(2025, 3, 1, tzinfo=timezone.utc)


@pytest.fixture()
def search_service():
    repo = InMemoryRepository(
        tasks=[
            Task(id="t1", title="Release checklist", project_id="p1", priority="high", updated_at=STAMP),
            Task(id="t2", title="Retro", description="Discuss the release", project_id="p2"),
        ],
        projects=[Project(id="p1", title="Release train", status="active", created_at=STAMP)],
        comments=[Comment(id="c1", task_id="t2", content="release went fine", timestamp=STAMP)],
    )
    service = SearchService(repo, recent_queries=["overdue items"])
    app.dependency_overrides[get_search_service] = lambda: service
    yield service
    app.dependency_overrides = {}


def _failing_service(exc: Exception):
    mock_service = AsyncMock(spec=SearchService)
    mock_service.search.side_effect = exc
    mock_service.autocomplete.side_effect = exc
    app.dependency_overrides[get_search_service] = lambda: mock_service
    return mock_service


def test_search_returns_ranked_page(search_service) -> None:
    response = client.get("/api/search", params={"q": "release", "limit": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "release"
    assert data["total"] == 3
    assert data["has_more"] is True
    assert [r["id"] for r in data["results"]] == ["t1", "p1"]
    assert data["results"][0]["type"] == "task"
    assert data["results"][0]["match_type"] == "title"
    assert data["results"][1]["type"] == "project"


def test_search_blank_query_is_empty(search_service) -> None:
    response = client.get("/api/search", params={"q": "   "})

    assert response.status_code == 200
    assert response.json()["results"] == []
    assert response.json()["total"] == 0


def test_search_type_and_filters(search_service) -> None:
    projects = client.get("/api/search", params={"q": "release", "type": "project"}).json()
    high = client.get("/api/search", params={"q": "release", "priority": "high"}).json()

    assert [r["id"] for r in projects["results"]] == ["p1"]
    assert [r["id"] for r in high["results"]] == ["t1"]


def test_search_highlight_marks_title_and_snippet(search_service) -> None:
    data = client.get("/api/search", params={"q": "release", "type": "task", "highlight": True}).json()

    assert data["results"][0]["title"] == "<mark>Release</mark> checklist"
    assert "<mark>release</mark>" in data["results"][1]["snippet"]


def test_search_highlight_escapes_task_markup() -> None:
    task = Task(id="t9", title='<img src=x onerror="alert(1)"> release', project_id="p1")
    repo = InMemoryRepository(tasks=[task])
    app.dependency_overrides[get_search_service] = lambda: SearchService(repo)

    data = client.get("/api/search", params={"q": "release", "highlight": True}).json()
    app.dependency_overrides = {}

    assert data["results"][0]["title"] == (
        "&lt;img src=x onerror=&quot;alert(1)&quot;&gt; <mark>release</mark>"
    )
    assert "<img" not in data["results"][0]["snippet"]


def test_source_failures_are_mapped_by_the_routes() -> None:
    assert DataSourceError not in app.exception_handlers


def test_search_rejects_invalid_type(search_service) -> None:
    response = client.get("/api/search", params={"q": "release", "type": "comment"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_search_source_failure_maps_to_502() -> None:
    _failing_service(DataSourceError("task table unavailable", table="task"))

    response = client.get("/api/search", params={"q": "release"})
    app.dependency_overrides = {}

    assert response.status_code == 502
    assert response.json()["error"] == "source_unavailable"
    assert "Search failed" in response.json()["message"]


def test_autocomplete_http_failure_maps_to_502() -> None:
    _failing_service(httpx.ConnectError("connection refused"))

    response = client.get("/api/search/autocomplete", params={"q": "rel"})
    app.dependency_overrides = {}

    assert response.status_code == 502
    assert "Autocomplete failed" in response.json()["message"]


def test_autocomplete_returns_task_suggestions(search_service) -> None:
    response = client.get("/api/search/autocomplete", params={"q": "release"})

    assert response.status_code == 200
    suggestions = response.json()
    assert [s["id"] for s in suggestions] == ["t1", "t2"]
    assert suggestions[0]["score"] == 90
    assert suggestions[1]["score"] == 49


def test_recent_searches(search_service) -> None:
    response = client.get("/api/search/recent")

    assert response.status_code == 200
    assert response.json() == ["overdue items"]


def test_health() -> None:
    assert client.get("/health").json() == {"status": "healthy"}


def test_lifespan_builds_demo_service() -> None:
    with TestClient(app) as live_client:
        response = live_client.get("/api/search", params={"q": "Project Alpha"})

    assert response.status_code == 200
    assert response.json()["results"][0]["id"] == "project-1"
    assert response.json()["results"][0]["score"] == 100
