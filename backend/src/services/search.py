"""Free-text search over tasks, projects and task comments."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.search import (
    MatchType,
    ProjectSearchResult,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchSuggestion,
    TaskSearchResult,
)
from ..models.task import Comment, Project, Task
from .config import DEFAULT_RECENT_QUERIES
from .relevance import extract_snippet, score_field
from .repository import EntityRepository

logger = logging.getLogger(__name__)

COMMENT_WEIGHT = 0.8
AUTOCOMPLETE_DESCRIPTION_WEIGHT = 0.7
AUTOCOMPLETE_THRESHOLD = 30
DEFAULT_AUTOCOMPLETE_LIMIT = 8

# (score, snippet, match type) of the strongest field seen so far
BestMatch = Tuple[float, str, Optional[MatchType]]


def _best_match(
    query: str, fields: Iterable[Tuple[Optional[str], MatchType, float]]
) -> BestMatch:
    """Pick the highest weighted field score; earlier fields win ties."""
    best: BestMatch = (0, "", None)
    for text, match_type, weight in fields:
        if not text:
            continue
        score = round(score_field(text, query) * weight, 2)
        if score > best[0]:
            best = (score, extract_snippet(text, query), match_type)
    return best


def _recency(result: SearchResult) -> float:
    stamp: Optional[datetime] = result.updated_at or result.created_at
    if stamp is None:
        return float("-inf")
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.timestamp()


def rank_results(results: Sequence[SearchResult]) -> List[SearchResult]:
    """Order by score, then most recently touched first."""
    return sorted(results, key=lambda result: (result.score, _recency(result)), reverse=True)


class SearchService:
    """
    Rank tasks and projects against a free-text query.

    Entities are read fresh from the repository on every call; nothing is
    cached between queries and repository failures propagate to the caller.
    """

    def __init__(
        self,
        repository: EntityRepository,
        recent_queries: Sequence[str] = DEFAULT_RECENT_QUERIES,
    ) -> None:
        self.repository = repository
        self._recent_queries = tuple(recent_queries)

    async def search(
        self, query: Optional[str], options: Optional[SearchOptions] = None
    ) -> SearchResponse:
        """Score, filter, rank and page every matching task and project."""
        options = options or SearchOptions()
        trimmed = (query or "").strip()
        if not trimmed:
            return SearchResponse(results=[], total=0, query=trimmed, search_time=0, has_more=False)

        tasks: List[Task] = []
        comments_by_task: Dict[str, List[Comment]] = {}
        projects: List[Project] = []

        if options.type in ("all", "task"):
            tasks = await self.repository.list_tasks()
            comment_lists = await asyncio.gather(
                *(self.repository.list_comments_for_task(task.id) for task in tasks)
            )
            comments_by_task = {task.id: comments for task, comments in zip(tasks, comment_lists)}
        if options.type in ("all", "project"):
            projects = await self.repository.list_projects()

        start_time = time.perf_counter()

        candidates: List[SearchResult] = []
        for task in tasks:
            result = self._score_task(task, comments_by_task.get(task.id, []), trimmed)
            if result is not None:
                candidates.append(result)
        for project in projects:
            result = self._score_project(project, trimmed)
            if result is not None:
                candidates.append(result)

        ranked = rank_results([c for c in candidates if self._passes_filters(c, options)])
        total = len(ranked)
        page = ranked[options.offset : options.offset + options.limit]

        search_time = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "Search completed",
            extra={
                "query": trimmed,
                "type": options.type,
                "total": total,
                "returned": len(page),
                "duration_ms": f"{search_time:.2f}",
            },
        )

        return SearchResponse(
            results=page,
            total=total,
            query=trimmed,
            search_time=search_time,
            has_more=options.offset + options.limit < total,
        )

    async def autocomplete(
        self, query: Optional[str], limit: int = DEFAULT_AUTOCOMPLETE_LIMIT
    ) -> List[SearchSuggestion]:
        """Suggest tasks whose title (or discounted description) clears the threshold."""
        trimmed = (query or "").strip()
        if not trimmed:
            return []

        tasks = await self.repository.list_tasks()

        suggestions: List[SearchSuggestion] = []
        for task in tasks:
            title_score = score_field(task.title, trimmed)
            description_score = (
                round(score_field(task.description, trimmed) * AUTOCOMPLETE_DESCRIPTION_WEIGHT, 2)
                if task.description
                else 0
            )
            score = max(title_score, description_score)
            if score > AUTOCOMPLETE_THRESHOLD:
                suggestions.append(
                    SearchSuggestion(
                        id=task.id,
                        title=task.title,
                        description=task.description,
                        score=score,
                        status=task.status,
                        priority=task.priority,
                        project_id=task.project_id,
                    )
                )

        suggestions.sort(key=lambda suggestion: suggestion.score, reverse=True)
        logger.debug(
            "Autocomplete completed",
            extra={"query": trimmed, "matches": len(suggestions), "limit": limit},
        )
        return suggestions[:limit]

    def recent_searches(self) -> List[str]:
        """Queries offered before the user starts typing."""
        return list(self._recent_queries)

    @staticmethod
    def _score_task(
        task: Task, comments: Sequence[Comment], query: str
    ) -> Optional[TaskSearchResult]:
        fields = [
            (task.title, MatchType.TITLE, 1.0),
            (task.description, MatchType.DESCRIPTION, 1.0),
        ]
        fields.extend((comment.content, MatchType.COMMENT, COMMENT_WEIGHT) for comment in comments)

        score, snippet, match_type = _best_match(query, fields)
        if score <= 0 or match_type is None:
            return None

        return TaskSearchResult(
            id=task.id,
            title=task.title,
            description=task.description,
            snippet=snippet,
            match_type=match_type,
            score=score,
            status=task.status,
            priority=task.priority,
            project_id=task.project_id,
            assignee=task.assignee,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    @staticmethod
    def _score_project(project: Project, query: str) -> Optional[ProjectSearchResult]:
        score, snippet, match_type = _best_match(
            query,
            [
                (project.title, MatchType.TITLE, 1.0),
                (project.description, MatchType.DESCRIPTION, 1.0),
            ],
        )
        if score <= 0 or match_type is None:
            return None

        return ProjectSearchResult(
            id=project.id,
            title=project.title,
            description=project.description,
            snippet=snippet,
            match_type=match_type,
            score=score,
            status=project.status,
            start_date=project.start_date,
            end_date=project.end_date,
            created_at=project.created_at,
        )

    @staticmethod
    def _passes_filters(result: SearchResult, options: SearchOptions) -> bool:
        if options.status is not None and result.status != options.status:
            return False
        if options.priority is not None:
            if not isinstance(result, TaskSearchResult) or result.priority != options.priority:
                return False
        if options.project_id is not None:
            if not isinstance(result, TaskSearchResult) or result.project_id != options.project_id:
                return False
        return True


__all__ = [
    "SearchService",
    "rank_results",
    "COMMENT_WEIGHT",
    "AUTOCOMPLETE_DESCRIPTION_WEIGHT",
    "AUTOCOMPLETE_THRESHOLD",
]
