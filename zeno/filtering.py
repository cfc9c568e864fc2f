"""Strict multi-token substring filter over snippet entries.

Every whitespace token must occur (case-insensitively) in the entry's
title, description, keywords, or code. Matches keep the input order.
"""

from __future__ import annotations

from collections.abc import Sequence

from .entries import Entry

# NUL never appears in typed queries, so no token can straddle two fields.
FIELD_SEPARATOR = "\x00"


def query_tokens(query: str) -> list[str]:
    """Split a query into lower-cased, non-empty whitespace tokens."""
    return query.lower().split()


def searchable_text(entry: Entry) -> str:
    """Return the lower-cased haystack searched for ``entry``."""
    return FIELD_SEPARATOR.join(
        (entry.title, entry.description, entry.keywords, entry.code)
    ).lower()


def entry_matches(entry: Entry, tokens: Sequence[str]) -> bool:
    """Return whether every token occurs in the entry haystack."""
    haystack = searchable_text(entry)
    return all(token in haystack for token in tokens)


def filter_entries(entries: Sequence[Entry], query: str) -> list[Entry]:
    """Return entries matching all tokens of ``query`` in original order.

    An empty or whitespace-only query returns a copy of ``entries``.
    """
    tokens = query_tokens(query)
    if not tokens:
        return list(entries)
    return [entry for entry in entries if entry_matches(entry, tokens)]
