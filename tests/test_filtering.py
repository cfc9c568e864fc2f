"""Tests for the multi-token substring filter.

Covers token conjunction, case folding, order preservation, and the
field separator that keeps matches inside one field.
"""

from __future__ import annotations

import unittest

from zeno.entries import Entry
from zeno.filtering import filter_entries, query_tokens, searchable_text


def _entries() -> list[Entry]:
    return [
        Entry(id=1, title="Connect to DB", description="Open a MySQL session", code="mysql -u root"),
        Entry(id=2, title="List files", description="Show directory contents", code="ls -la", keywords="shell"),
        Entry(id=3, title="Dump db", description="Export all tables", code="mysqldump --all-databases"),
    ]


class FilterEntriesTests(unittest.TestCase):
    def test_empty_query_returns_entries_in_original_order(self) -> None:
        entries = _entries()
        self.assertEqual(filter_entries(entries, ""), entries)
        self.assertEqual(filter_entries(entries, "   "), entries)

    def test_empty_query_returns_a_copy(self) -> None:
        entries = _entries()
        result = filter_entries(entries, "")
        self.assertIsNot(result, entries)

    def test_scenario_queries(self) -> None:
        entries = _entries()
        self.assertEqual([e.id for e in filter_entries(entries, "db")], [1, 3])
        self.assertEqual([e.id for e in filter_entries(entries, "db connect")], [1])
        self.assertEqual([e.id for e in filter_entries(entries, "")], [1, 2, 3])

    def test_tokens_are_case_insensitive(self) -> None:
        self.assertEqual([e.id for e in filter_entries(_entries(), "MYSQL")], [1, 3])

    def test_tokens_search_keywords_and_code(self) -> None:
        entries = _entries()
        self.assertEqual([e.id for e in filter_entries(entries, "shell")], [2])
        self.assertEqual([e.id for e in filter_entries(entries, "-la")], [2])

    def test_every_token_must_match(self) -> None:
        self.assertEqual(filter_entries(_entries(), "db files"), [])

    def test_match_never_spans_field_boundary(self) -> None:
        entry = Entry(id=9, title="abc", description="def", code="")
        self.assertEqual(filter_entries([entry], "cd"), [])
        self.assertEqual(filter_entries([entry], "abc"), [entry])

    def test_filter_is_idempotent_and_subset(self) -> None:
        entries = _entries()
        for query in ("db", "mysql", "x", "", "l"):
            once = filter_entries(entries, query)
            self.assertEqual(filter_entries(once, query), once)
            self.assertTrue(all(entry in entries for entry in once))
            for entry in once:
                for token in query_tokens(query):
                    self.assertIn(token, searchable_text(entry))


if __name__ == "__main__":
    unittest.main()
