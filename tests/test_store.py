"""Round-trip tests for the SQL item store against a SQLite file.

The schema mirrors the MySQL tables closely enough for the portable SQL
the store issues.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

from zeno.errors import StoreError
from zeno.store import SqlItemStore, format_timestamp

SCHEMA = [
    """
    CREATE TABLE language (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        lang_name TEXT NOT NULL,
        lang_desc TEXT,
        formatter_bin TEXT
    )
    """,
    """
    CREATE TABLE command (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT,
        code_md TEXT,
        keywords TEXT,
        embedding TEXT,
        lang_id INTEGER REFERENCES language(id),
        count INTEGER NOT NULL DEFAULT 0,
        updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE search_term (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        term TEXT NOT NULL UNIQUE,
        count INTEGER NOT NULL DEFAULT 0,
        updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE search_hit (
        term_id INTEGER NOT NULL,
        command_id INTEGER NOT NULL,
        count INTEGER NOT NULL DEFAULT 0,
        updated_on TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        PRIMARY KEY (term_id, command_id)
    )
    """,
]

SEED = [
    "INSERT INTO language (id, lang_name, lang_desc, formatter_bin) VALUES (1, 'sql', 'Structured Query Language', 'sqlformat')",
    "INSERT INTO language (id, lang_name, lang_desc, formatter_bin) VALUES (2, 'bash', 'Bourne again shell', NULL)",
    """INSERT INTO command (id, title, description, code_md, keywords, lang_id, count, updated_on)
       VALUES (1, 'Connect', 'Open a session', 'mysql -u root', '["sql"]', 1, 5, '2024-01-01 09:00:00')""",
    """INSERT INTO command (id, title, description, code_md, keywords, lang_id, count, updated_on)
       VALUES (2, 'List files', 'Show contents', 'ls -la', '["bash"]', 2, 5, '2024-03-01 09:00:00')""",
    """INSERT INTO command (id, title, description, code_md, keywords, lang_id, count, updated_on)
       VALUES (3, 'Orphan', NULL, 'echo hi', NULL, NULL, 9, '2023-01-01 09:00:00')""",
]


class SqlItemStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.url = f"sqlite:///{Path(self._tmp.name) / 'zeno.db'}"
        engine = create_engine(self.url)
        with engine.begin() as conn:
            for statement in SCHEMA + SEED:
                conn.execute(text(statement))
        engine.dispose()
        self.store = SqlItemStore(self.url)

    def tearDown(self) -> None:
        self.store.close()
        self._tmp.cleanup()

    def _scalar(self, sql: str, **params):
        engine = create_engine(self.url)
        try:
            with engine.connect() as conn:
                return conn.execute(text(sql), params).scalar()
        finally:
            engine.dispose()

    def test_load_all_orders_by_count_then_recency(self) -> None:
        entries = self.store.load_all()
        self.assertEqual([entry.id for entry in entries], [3, 2, 1])

    def test_load_all_joins_language_metadata(self) -> None:
        by_id = {entry.id: entry for entry in self.store.load_all()}
        self.assertEqual(by_id[1].language, "SQL")
        self.assertEqual(by_id[1].formatters, "sqlformat")
        self.assertEqual(by_id[1].last_used, "2024-01-01 09:00:00")
        self.assertEqual(by_id[2].formatters, "")
        self.assertEqual(by_id[3].language, "")
        self.assertEqual(by_id[3].description, "")
        self.assertEqual(by_id[3].keywords, "")

    def test_delete_removes_row(self) -> None:
        self.store.delete(2)
        self.assertEqual([entry.id for entry in self.store.load_all()], [3, 1])

    def test_delete_missing_id_raises(self) -> None:
        with self.assertRaises(StoreError):
            self.store.delete(99)
        self.assertEqual(len(self.store.load_all()), 3)

    def test_update_persists_fields(self) -> None:
        self.store.update(1, "Connect fast", "New text", "sql, fast", "mysql -h db\n")
        entry = {entry.id: entry for entry in self.store.load_all()}[1]
        self.assertEqual(entry.title, "Connect fast")
        self.assertEqual(entry.description, "New text")
        self.assertEqual(entry.keywords, "sql, fast")
        self.assertEqual(entry.code, "mysql -h db\n")

    def test_update_missing_id_raises(self) -> None:
        with self.assertRaises(StoreError):
            self.store.update(42, "t", "d", "k", "c")

    def test_record_usage_counts_command_term_and_hit(self) -> None:
        self.store.record_usage(" db ", 1)
        self.store.record_usage("db", 1)
        self.assertEqual(self._scalar("SELECT count FROM command WHERE id = 1"), 7)
        self.assertEqual(self._scalar("SELECT count FROM search_term WHERE term = 'db'"), 2)
        self.assertEqual(
            self._scalar("SELECT count FROM search_hit WHERE command_id = 1"),
            2,
        )

    def test_record_usage_without_term_only_counts_command(self) -> None:
        self.store.record_usage("  ", 2)
        self.assertEqual(self._scalar("SELECT count FROM command WHERE id = 2"), 6)
        self.assertEqual(self._scalar("SELECT COUNT(*) FROM search_term"), 0)

    def test_fetch_languages_counts_usage(self) -> None:
        languages = {language.name: language for language in self.store.fetch_languages()}
        self.assertEqual(languages["sql"].count, 1)
        self.assertEqual(languages["bash"].description, "Bourne again shell")

    def test_insert_returns_new_id(self) -> None:
        new_id = self.store.insert("Greet", "Say hi", "echo hi", json.dumps(["bash"]), 2)
        entry = {entry.id: entry for entry in self.store.load_all()}[new_id]
        self.assertEqual(entry.title, "Greet")
        self.assertEqual(entry.language, "BASH")
        self.assertEqual(self._scalar("SELECT embedding FROM command WHERE id = :id", id=new_id), "[]")

    def test_driver_errors_become_store_errors(self) -> None:
        failure = OperationalError("SELECT 1", {}, Exception("server has gone away"))
        with mock.patch.object(self.store, "_get_engine", side_effect=failure):
            with self.assertRaises(StoreError) as ctx:
                self.store.load_all()
        self.assertEqual(str(ctx.exception), "server has gone away")

    def test_unreachable_database_raises_store_error(self) -> None:
        store = SqlItemStore(f"sqlite:///{Path(self._tmp.name) / 'missing' / 'nope.db'}")
        with self.assertRaises(StoreError):
            store.load_all()


class FormatTimestampTests(unittest.TestCase):
    def test_none_is_blank(self) -> None:
        self.assertEqual(format_timestamp(None), "")

    def test_datetime_is_formatted(self) -> None:
        from datetime import datetime

        self.assertEqual(format_timestamp(datetime(2024, 5, 1, 10, 0, 0)), "2024-05-01 10:00:00")


if __name__ == "__main__":
    unittest.main()
