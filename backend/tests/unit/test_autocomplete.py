import pytest

from backend.src.models.task import Comment, Project, Task
from backend.src.services.repository import InMemoryRepository
from backend.src.services.search import SearchService


def _task(task_id: str, title: str, description: str | None = None) -> Task:
    return Task(id=task_id, title=title, description=description, project_id="project-1")


@pytest.mark.asyncio
async def test_blank_query_returns_no_suggestions() -> None:
    service = SearchService(InMemoryRepository(tasks=[_task("t1", "Release")]))

    assert await service.autocomplete("") == []
    assert await service.autocomplete("   ") == []


@pytest.mark.asyncio
async def test_description_matches_are_discounted() -> None:
    repo = InMemoryRepository(
        tasks=[
            _task("title", "Release checklist"),
            _task("desc-word", "Checklist", "Cut the release branch"),
            _task("desc-substring", "Checklist", "Prereleases are frozen"),
        ]
    )

    suggestions = await SearchService(repo).autocomplete("release")
    scores = {s.id: s.score for s in suggestions}

    assert scores["title"] == 90
    assert scores["desc-word"] == 49
    assert scores["desc-substring"] == 35


@pytest.mark.asyncio
async def test_threshold_excludes_weak_matches() -> None:
    repo = InMemoryRepository(
        tasks=[
            # partial multi-word title match: 40 -> kept
            _task("partial-title", "Plan the release", None),
            # partial description match: 40 * 0.7 = 28 -> dropped
            _task("partial-desc", "Checklist", "Plan the release"),
            # single partial word: 20 -> dropped
            _task("weak", "Plan", None),
        ]
    )

    suggestions = await SearchService(repo).autocomplete("release plan")

    assert [s.id for s in suggestions] == ["partial-title"]
    assert all(s.score > 30 for s in suggestions)


@pytest.mark.asyncio
async def test_suggestions_are_tasks_only_and_ignore_comments() -> None:
    repo = InMemoryRepository(
        tasks=[_task("t1", "Checklist")],
        projects=[Project(id="p1", title="Release train")],
        comments=[Comment(id="c1", task_id="t1", content="release", timestamp="2025-01-01T00:00:00Z")],
    )

    assert await SearchService(repo).autocomplete("release") == []


@pytest.mark.asyncio
async def test_sorted_by_score_stable_and_limited() -> None:
    repo = InMemoryRepository(
        tasks=[
            _task("a", "Final release notes"),
            _task("b", "Release"),
            _task("c", "Another release step"),
            _task("d", "Release calendar"),
        ]
    )
    service = SearchService(repo)

    suggestions = await service.autocomplete("release")
    limited = await service.autocomplete("release", limit=2)

    assert [s.id for s in suggestions] == ["b", "d", "a", "c"]
    assert [s.id for s in limited] == ["b", "d"]
    assert all(s.type == "task" for s in suggestions)
