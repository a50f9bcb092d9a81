"""FastAPI application main entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from .middleware import register_error_handlers
from .routes import search
from ..services.config import get_config
from ..services.repository import build_repository, create_remote_client
from ..services.search import SearchService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the repository and search service once per process."""
    config = get_config()
    client = create_remote_client(config) if config.data_backend == "remote" else None

    repository = build_repository(config, client=client)
    app.state.search_service = SearchService(repository, recent_queries=config.recent_queries)
    logger.info("Startup complete", extra={"data_backend": config.data_backend})

    try:
        yield
    finally:
        if client is not None:
            await client.aclose()


app = FastAPI(
    title="Taskboard Search API",
    description="Relevance search and autocomplete over projects, tasks and comments",
    version="0.1.0",
    lifespan=lifespan,
)

config = get_config()

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(search.router, tags=["search"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


__all__ = ["app"]
