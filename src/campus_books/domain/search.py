"""Substring search rules shared by every listing search implementation.

The SQL adapter, the in-memory adapter and the client highlighter all go
through these helpers so they agree on what a search term matches:

- the term is stripped; a blank term means "no search constraint"
- matching is case-insensitive substring containment
- LIKE wildcards and the escape character are matched literally
"""

from __future__ import annotations

from typing import Iterable

SEARCHABLE_FIELDS = ("book_title", "author", "program_name")

LIKE_ESCAPE_CHAR = "\\"
_LIKE_SPECIAL_CHARS = (LIKE_ESCAPE_CHAR, "%", "_")


def normalize_search_term(term: str | None) -> str | None:
    """Return the stripped term, or None when it disables searching."""
    if term is None:
        return None
    stripped = term.strip()
    return stripped or None


def escape_like(term: str) -> str:
    """
    Escape LIKE metacharacters so they match literally.

    The escape character itself is escaped first, otherwise the
    escapes added for ``%`` and ``_`` would be doubled.
    """
    escaped = term
    for char in _LIKE_SPECIAL_CHARS:
        escaped = escaped.replace(char, LIKE_ESCAPE_CHAR + char)
    return escaped


def like_pattern(term: str | None) -> str | None:
    """Build the ``%term%`` containment pattern, or None for a blank term."""
    normalized = normalize_search_term(term)
    if normalized is None:
        return None
    return f"%{escape_like(normalized)}%"


def matches_term(values: Iterable[str | None], term: str | None) -> bool:
    """In-process equivalent of ``OR(field ILIKE pattern)`` over ``values``."""
    normalized = normalize_search_term(term)
    if normalized is None:
        return True
    needle = normalized.lower()
    return any(value is not None and needle in value.lower() for value in values)
