"""HTTP API routes for search operations."""

from __future__ import annotations

from typing import Literal, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ...models.search import SearchOptions, SearchResponse, SearchSuggestion
from ...models.task import TaskPriority
from ...services.config import get_config
from ...services.relevance import highlight as highlight_text
from ...services.repository import DataSourceError
from ...services.search import SearchService

router = APIRouter()


def get_search_service(request: Request) -> SearchService:
    """Return the process-wide search service built at startup."""
    return request.app.state.search_service


def _max_limit() -> int:
    return get_config().search_max_limit


@router.get("/api/search", response_model=SearchResponse)
async def search(
    q: str = Query("", max_length=256, description="Free-text query"),
    type: Literal["all", "task", "project"] = Query("all"),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    status: Optional[str] = Query(None),
    priority: Optional[TaskPriority] = Query(None),
    project_id: Optional[str] = Query(None),
    highlight: bool = Query(False, description="Wrap matches in <mark> tags"),
    service: SearchService = Depends(get_search_service),
):
    """Ranked search across tasks, projects and task comments."""
    options = SearchOptions(
        type=type,
        limit=min(limit, _max_limit()),
        offset=offset,
        status=status,
        priority=priority,
        project_id=project_id,
    )

    try:
        response = await service.search(q, options)
    except (DataSourceError, httpx.HTTPError) as e:
        raise HTTPException(status_code=502, detail=f"Search failed: {str(e)}")

    if highlight and response.results:
        marked = [
            result.model_copy(
                update={
                    "title": highlight_text(result.title, response.query),
                    "snippet": highlight_text(result.snippet, response.query),
                }
            )
            for result in response.results
        ]
        response = response.model_copy(update={"results": marked})

    return response


@router.get("/api/search/autocomplete", response_model=list[SearchSuggestion])
async def autocomplete(
    q: str = Query("", max_length=256),
    limit: Optional[int] = Query(None, ge=1, le=50),
    service: SearchService = Depends(get_search_service),
):
    """Task suggestions for live typing."""
    try:
        return await service.autocomplete(q, limit=limit or get_config().autocomplete_limit)
    except (DataSourceError, httpx.HTTPError) as e:
        raise HTTPException(status_code=502, detail=f"Autocomplete failed: {str(e)}")


@router.get("/api/search/recent", response_model=list[str])
async def recent_searches(service: SearchService = Depends(get_search_service)):
    """Suggested queries shown before the user types."""
    return service.recent_searches()


__all__ = ["router", "get_search_service"]
