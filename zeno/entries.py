"""Snippet records as seen by the interactive session and the add flow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """One stored snippet joined with its language metadata."""

    id: int
    title: str
    description: str
    code: str
    keywords: str = ""
    count: int = 0
    last_used: str = ""
    language: str = ""
    formatters: str = ""


@dataclass(frozen=True)
class Language:
    """Selectable language row with the number of snippets using it."""

    id: int
    name: str
    description: str = ""
    count: int = 0


def remove_entry(entries: list[Entry], entry_id: int) -> list[Entry]:
    """Return ``entries`` without the entry carrying ``entry_id``."""
    return [entry for entry in entries if entry.id != entry_id]


def find_entry(entries: list[Entry], entry_id: int) -> Entry | None:
    """Return the entry with ``entry_id`` or ``None``."""
    for entry in entries:
        if entry.id == entry_id:
            return entry
    return None
