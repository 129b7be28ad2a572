"""Search-term highlighting for rendered listing fields.

Uses the same normalization and case-insensitive substring rule as the
server-side search, so whatever made a listing match is what gets marked.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from campus_books.domain.search import normalize_search_term


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    text: str
    highlighted: bool = False


def highlight(value: str, term: str | None) -> list[HighlightSpan]:
    """
    Split ``value`` into literal and highlighted spans.

    Every case-insensitive occurrence of the term is its own highlighted
    span; adjacent occurrences are not merged. A blank term returns the
    value untouched as a single literal span.
    """
    normalized = normalize_search_term(term)
    if normalized is None or not value:
        return [HighlightSpan(value)]

    pattern = re.compile(f"({re.escape(normalized)})", re.IGNORECASE)

    # re.split with one capture group alternates literal, match, literal, ...
    return [
        HighlightSpan(part, highlighted=index % 2 == 1)
        for index, part in enumerate(pattern.split(value))
        if part
    ]
