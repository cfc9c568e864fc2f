"""Relational snippet store.

``ItemStore`` is the narrow capability the interactive session depends on;
``SqlItemStore`` implements it (plus usage, language, and insert operations
used by the CLI flows) over one SQLAlchemy engine. Every call runs in its own
scoped transaction and SQLAlchemy failures surface as ``StoreError``.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Protocol

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from .entries import Entry, Language
from .errors import StoreError

logger = logging.getLogger(__name__)

TIMEOUT_SECONDS = 3
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

LOAD_ALL_SQL = text(
    """
    SELECT c.id, c.title, c.description, c.code_md, c.keywords, c.count, c.updated_on,
           UPPER(COALESCE(l.lang_name, '')) AS lang_name,
           COALESCE(l.formatter_bin, '') AS formatter_bin
      FROM command c
 LEFT JOIN language l ON l.id = c.lang_id
  ORDER BY c.count DESC, c.updated_on DESC
    """
)
DELETE_SQL = text("DELETE FROM command WHERE id = :id")
UPDATE_SQL = text(
    """
    UPDATE command
       SET title = :title, description = :description, keywords = :keywords,
           code_md = :code, updated_on = CURRENT_TIMESTAMP
     WHERE id = :id
    """
)
BUMP_COUNT_SQL = text(
    "UPDATE command SET count = count + 1, updated_on = CURRENT_TIMESTAMP WHERE id = :id"
)
FIND_TERM_SQL = text("SELECT id FROM search_term WHERE term = :term")
BUMP_TERM_SQL = text(
    "UPDATE search_term SET count = count + 1, updated_on = CURRENT_TIMESTAMP WHERE id = :id"
)
INSERT_TERM_SQL = text("INSERT INTO search_term (term, count) VALUES (:term, 1)")
BUMP_HIT_SQL = text(
    """
    UPDATE search_hit
       SET count = count + 1, updated_on = CURRENT_TIMESTAMP
     WHERE term_id = :term_id AND command_id = :command_id
    """
)
INSERT_HIT_SQL = text(
    "INSERT INTO search_hit (term_id, command_id, count) VALUES (:term_id, :command_id, 1)"
)
LANGUAGES_SQL = text(
    """
    SELECT l.id, l.lang_name, COALESCE(l.lang_desc, '') AS lang_desc, COUNT(c.id) AS cmd_count
      FROM language l
 LEFT JOIN command c ON c.lang_id = l.id
  GROUP BY l.id, l.lang_name, l.lang_desc
    """
)
INSERT_COMMAND_SQL = text(
    """
    INSERT INTO command (title, description, code_md, keywords, embedding, lang_id)
    VALUES (:title, :description, :code, :keywords, :embedding, :lang_id)
    """
)


class ItemStore(Protocol):
    """Store operations the interactive session relies on."""

    def load_all(self) -> list[Entry]: ...

    def delete(self, entry_id: int) -> None: ...

    def update(self, entry_id: int, title: str, description: str, keywords: str, code: str) -> None: ...


def format_timestamp(value: object) -> str:
    """Render a driver timestamp value for display."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(TIMESTAMP_FORMAT)
    return str(value)


def _describe(exc: SQLAlchemyError) -> str:
    """Return the driver-level message for a SQLAlchemy failure."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class SqlItemStore:
    """``ItemStore`` over any SQLAlchemy URL (MySQL via PyMySQL by default)."""

    def __init__(self, url: str, *, engine: Engine | None = None) -> None:
        self.url = url
        self._engine = engine

    def _get_engine(self) -> Engine:
        if self._engine is not None:
            return self._engine
        connect_args: dict[str, object] = {}
        if self.url.startswith("mysql"):
            connect_args = {
                "connect_timeout": TIMEOUT_SECONDS,
                "read_timeout": TIMEOUT_SECONDS,
                "write_timeout": TIMEOUT_SECONDS,
            }
        try:
            self._engine = create_engine(
                self.url,
                pool_pre_ping=True,
                pool_recycle=30 * 60,
                connect_args=connect_args,
            )
        except (SQLAlchemyError, ImportError) as exc:
            raise StoreError(f"cannot open store: {exc}") from exc
        return self._engine

    @contextlib.contextmanager
    def _transaction(self, action: str) -> Iterator[Connection]:
        """Yield a connection inside one transaction, mapping driver errors."""
        try:
            with self._get_engine().begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.warning("%s failed: %s", action, exc)
            raise StoreError(_describe(exc)) from exc

    def close(self) -> None:
        """Release pooled connections."""
        if self._engine is not None:
            self._engine.dispose()

    def load_all(self) -> list[Entry]:
        """Return every snippet ordered by hit count, then recency (both descending)."""
        with self._transaction("load") as conn:
            rows = conn.execute(LOAD_ALL_SQL).mappings().all()
        return [
            Entry(
                id=int(row["id"]),
                title=row["title"] or "",
                description=row["description"] or "",
                code=row["code_md"] or "",
                keywords=row["keywords"] or "",
                count=int(row["count"] or 0),
                last_used=format_timestamp(row["updated_on"]),
                language=(row["lang_name"] or "").upper(),
                formatters=row["formatter_bin"] or "",
            )
            for row in rows
        ]

    def delete(self, entry_id: int) -> None:
        """Delete one snippet; a missing id is an error."""
        with self._transaction("delete") as conn:
            result = conn.execute(DELETE_SQL, {"id": entry_id})
            if result.rowcount == 0:
                raise StoreError(f"no command with id {entry_id}")
        logger.info("deleted command %s", entry_id)

    def update(self, entry_id: int, title: str, description: str, keywords: str, code: str) -> None:
        """Overwrite the editable fields of one snippet and touch its timestamp."""
        params = {
            "id": entry_id,
            "title": title,
            "description": description,
            "keywords": keywords,
            "code": code,
        }
        with self._transaction("update") as conn:
            result = conn.execute(UPDATE_SQL, params)
            if result.rowcount == 0:
                raise StoreError(f"no command with id {entry_id}")
        logger.info("updated command %s", entry_id)

    def record_usage(self, term: str, entry_id: int) -> None:
        """Count one use of ``entry_id``; with a non-empty ``term`` also count the query hit."""
        term = term.strip()
        with self._transaction("record usage") as conn:
            if conn.execute(BUMP_COUNT_SQL, {"id": entry_id}).rowcount == 0:
                raise StoreError(f"no command with id {entry_id}")
            if not term:
                return

            term_id = conn.execute(FIND_TERM_SQL, {"term": term}).scalar()
            if term_id is None:
                term_id = conn.execute(INSERT_TERM_SQL, {"term": term}).lastrowid
            else:
                conn.execute(BUMP_TERM_SQL, {"id": term_id})

            hit = {"term_id": term_id, "command_id": entry_id}
            if conn.execute(BUMP_HIT_SQL, hit).rowcount == 0:
                conn.execute(INSERT_HIT_SQL, hit)

    def fetch_languages(self) -> list[Language]:
        """Return all languages with the number of snippets using each."""
        with self._transaction("fetch languages") as conn:
            rows = conn.execute(LANGUAGES_SQL).mappings().all()
        return [
            Language(
                id=int(row["id"]),
                name=row["lang_name"] or "",
                description=row["lang_desc"] or "",
                count=int(row["cmd_count"] or 0),
            )
            for row in rows
        ]

    def insert(self, title: str, description: str, code: str, keywords: str, language_id: int) -> int:
        """Insert a new snippet and return its id."""
        params = {
            "title": title,
            "description": description,
            "code": code,
            "keywords": keywords,
            "embedding": "[]",
            "lang_id": language_id,
        }
        with self._transaction("insert") as conn:
            new_id = conn.execute(INSERT_COMMAND_SQL, params).lastrowid
        logger.info("inserted command %s", new_id)
        return int(new_id)
