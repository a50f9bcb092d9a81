"""Debounced, latest-wins wrapper around autocomplete for interactive callers."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from ..models.search import SearchSuggestion
from .config import get_config
from .search import DEFAULT_AUTOCOMPLETE_LIMIT, SearchService


class SuggestionGate:
    """
    Issue autocomplete requests for a single input box.

    Every call to :meth:`suggest` supersedes the previous ones. A superseded
    call resolves to ``None`` so the caller can drop it instead of rendering
    stale suggestions over newer ones. The debounce delay defaults to
    ``AUTOCOMPLETE_DEBOUNCE_MS``.
    """

    def __init__(self, service: SearchService, delay_ms: Optional[int] = None) -> None:
        if delay_ms is None:
            delay_ms = get_config().autocomplete_debounce_ms
        self.service = service
        self.delay = delay_ms / 1000.0
        self._sequence = 0

    @property
    def sequence(self) -> int:
        return self._sequence

    def is_current(self, ticket: int) -> bool:
        return ticket == self._sequence

    async def suggest(
        self, query: str, limit: int = DEFAULT_AUTOCOMPLETE_LIMIT
    ) -> Optional[List[SearchSuggestion]]:
        self._sequence += 1
        ticket = self._sequence

        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.is_current(ticket):
            return None

        if not (query or "").strip():
            return []

        suggestions = await self.service.autocomplete(query, limit=limit)
        if not self.is_current(ticket):
            return None
        return suggestions


__all__ = ["SuggestionGate"]
