"""Field-level relevance scoring and snippet helpers."""

from __future__ import annotations

import html
import re
from typing import Optional

EXACT_SCORE = 100
PREFIX_SCORE = 90
WHOLE_WORD_SCORE = 70
SUBSTRING_SCORE = 50
PARTIAL_WORD_SCORE = 20
PARTIAL_SCORE_CAP = 40

SNIPPET_MAX_LENGTH = 150
SNIPPET_CONTEXT = 50
ELLIPSIS = "…"


def score_field(text: Optional[str], query: Optional[str]) -> int:
    """
    Score how well ``text`` matches ``query`` on a 0-100 ladder.

    The first matching rule wins:

    - exact (case-insensitive) equality: 100
    - text starts with the query: 90
    - query appears as a whole word: 70
    - query appears anywhere: 50
    - 20 per whitespace-separated query word found in the text, capped at 40

    Returns 0 for empty text, empty query, or no match at all.
    """
    if not text or not query:
        return 0

    lower_text = text.lower()
    lower_query = query.lower()

    if lower_text == lower_query:
        return EXACT_SCORE

    if lower_text.startswith(lower_query):
        return PREFIX_SCORE

    # ASCII word boundaries: accented letters end a word
    if re.search(rf"\b{re.escape(lower_query)}\b", lower_text, flags=re.ASCII):
        return WHOLE_WORD_SCORE

    if lower_query in lower_text:
        return SUBSTRING_SCORE

    partial = sum(PARTIAL_WORD_SCORE for word in lower_query.split() if word in lower_text)
    return min(partial, PARTIAL_SCORE_CAP)


def extract_snippet(
    text: Optional[str], query: Optional[str], max_length: int = SNIPPET_MAX_LENGTH
) -> str:
    """
    Return an excerpt of ``text`` around the first occurrence of ``query``.

    The window spans 50 characters either side of the match and is marked with
    an ellipsis on each side that was cut. When the query does not occur, the
    head of the text is returned, truncated to ``max_length``.
    """
    if not text or not query:
        return ""

    match = re.search(re.escape(query), text, flags=re.IGNORECASE)
    if match is None:
        if len(text) > max_length:
            return text[:max_length] + ELLIPSIS
        return text

    start = max(0, match.start() - SNIPPET_CONTEXT)
    end = min(len(text), match.start() + len(query) + SNIPPET_CONTEXT)

    snippet = text[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + ELLIPSIS
    return snippet


def highlight(
    text: Optional[str],
    query: Optional[str],
    open_tag: str = "<mark>",
    close_tag: str = "</mark>",
) -> str:
    """
    Wrap every case-insensitive occurrence of ``query`` in ``text`` with tags.

    The result is HTML: every piece of ``text``, matched or not, is escaped
    before the tags are added.
    """
    if not text:
        return ""
    if not query or not query.strip():
        return html.escape(text)

    pattern = re.compile(re.escape(query.strip()), flags=re.IGNORECASE)
    parts = []
    last = 0
    for match in pattern.finditer(text):
        parts.append(html.escape(text[last : match.start()]))
        parts.append(f"{open_tag}{html.escape(match.group(0))}{close_tag}")
        last = match.end()
    parts.append(html.escape(text[last:]))
    return "".join(parts)


__all__ = [
    "score_field",
    "extract_snippet",
    "highlight",
    "EXACT_SCORE",
    "PREFIX_SCORE",
    "WHOLE_WORD_SCORE",
    "SUBSTRING_SCORE",
    "PARTIAL_SCORE_CAP",
    "ELLIPSIS",
]
