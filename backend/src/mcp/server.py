"""FastMCP server exposing workspace search tools."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import os
import time
from typing import Any, AsyncIterator, Dict, List, Literal

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

load_dotenv()

from ..models.search import SearchOptions
from ..services.config import get_config
from ..services.repository import build_repository, create_remote_client
from ..services.search import SearchService

logger = logging.getLogger(__name__)

_config = get_config()
_client = create_remote_client(_config) if _config.data_backend == "remote" else None
search_service = SearchService(
    build_repository(_config, client=_client), recent_queries=_config.recent_queries
)


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    try:
        yield {}
    finally:
        if _client is not None:
            await _client.aclose()
            logger.info("Closed remote records client")


mcp = FastMCP(
    "taskboard-search",
    instructions=(
        "Search a project/task workspace. Ranking per field: exact match 100, prefix 90, "
        "whole word 70, substring 50, partial multi-word match up to 40. Task comments count "
        "at 0.8x and never appear as results on their own. Ties go to the most recently "
        "updated entity. Autocomplete covers tasks only and keeps scores above 30."
    ),
    lifespan=_lifespan,
)


def _format_line(result: Dict[str, Any]) -> str:
    line = f"- [{result['type']}] {result['title']} (score {result['score']:g}, {result['match_type']})"
    if result.get("snippet") and result["match_type"] != "title":
        line += f": {result['snippet']}"
    return line


@mcp.tool(
    name="search_workspace",
    description="Ranked search over tasks, projects and task comments with snippets.",
)
async def search_workspace(
    query: str = Field(..., description="Free-text query; blank returns nothing."),
    type: Literal["all", "task", "project"] = Field("all", description="Entity scope."),
    limit: int = Field(20, ge=1, le=100, description="Page size between 1 and 100."),
    offset: int = Field(0, ge=0, description="Results to skip."),
) -> ToolResult:
    start_time = time.time()

    response = await search_service.search(
        query, SearchOptions(type=type, limit=limit, offset=offset)
    )
    results = [result.model_dump(mode="json") for result in response.results]

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "MCP tool called",
        extra={
            "tool_name": "search_workspace",
            "query": query,
            "limit": limit,
            "offset": offset,
            "result_count": len(results),
            "total": response.total,
            "duration_ms": f"{duration_ms:.2f}",
        },
    )

    summary = f"Found {response.total} matches for '{response.query}'."
    lines = [summary] + [_format_line(result) for result in results]
    return ToolResult(
        content=[TextContent(type="text", text="\n".join(lines))],
        structured_content={
            "results": results,
            "total": response.total,
            "has_more": response.has_more,
        },
    )


@mcp.tool(
    name="autocomplete_tasks",
    description="Task suggestions for a partial query (title matches outrank descriptions).",
)
async def autocomplete_tasks(
    query: str = Field(..., description="Partial query text."),
    limit: int = Field(8, ge=1, le=50, description="Maximum suggestions."),
) -> List[Dict[str, Any]]:
    start_time = time.time()

    suggestions = await search_service.autocomplete(query, limit=limit)

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "MCP tool called",
        extra={
            "tool_name": "autocomplete_tasks",
            "query": query,
            "result_count": len(suggestions),
            "duration_ms": f"{duration_ms:.2f}",
        },
    )
    return [suggestion.model_dump(mode="json") for suggestion in suggestions]


if __name__ == "__main__":
    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower() or "stdio"

    if transport == "http":
        port = int(os.getenv("MCP_PORT", "8001"))
        host = os.getenv("MCP_HOST", "127.0.0.1")
        logger.info(
            "Starting MCP server",
            extra={"transport": transport, "host": host, "port": port},
        )
        mcp.run(transport=transport, host=host, port=port)
    else:
        logger.info("Starting MCP server", extra={"transport": transport})
        mcp.run(transport=transport)
