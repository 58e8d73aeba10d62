"""
Unit tests for pages/store.py and notifications/subscribers.py

Tests the Supabase-backed page store and subscriber roster against a
mocked query builder.
"""

import unittest

from notifications.subscribers import SupabaseSubscriberRoster
from pages.store import SupabasePageStore
from tests.fixtures.mock_helpers import create_mock_supabase


class TestSupabasePageStore(unittest.TestCase):
    """Tests for SupabasePageStore."""

    def test_read_returns_content(self):
        mock_db = create_mock_supabase([{"content": {"posts": [{"slug": "a"}]}}])
        store = SupabasePageStore(client=mock_db)

        content = store.read("blog")

        self.assertEqual(content, {"posts": [{"slug": "a"}]})
        mock_db.table.assert_called_with("pages")
        mock_db.eq.assert_called_with("slug", "blog")

    def test_read_missing_page_is_none(self):
        store = SupabasePageStore(client=create_mock_supabase([]))

        self.assertIsNone(store.read("blog"))

    def test_write_upserts_on_slug(self):
        mock_db = create_mock_supabase([{"slug": "blog", "content": {"posts": []}}])
        store = SupabasePageStore(client=mock_db)

        saved = store.write("blog", {"posts": []})

        self.assertEqual(saved, {"posts": []})
        row = mock_db.upsert.call_args[0][0]
        self.assertEqual(row["slug"], "blog")
        self.assertEqual(row["content"], {"posts": []})
        self.assertIn("updated_at", row)
        self.assertEqual(mock_db.upsert.call_args.kwargs["on_conflict"], "slug")

    def test_write_without_returned_row_echoes_content(self):
        store = SupabasePageStore(client=create_mock_supabase([]))

        self.assertEqual(store.write("about", {"text": "hi"}), {"text": "hi"})

    def test_database_errors_propagate(self):
        mock_db = create_mock_supabase()
        mock_db.execute.side_effect = ConnectionError("database down")
        store = SupabasePageStore(client=mock_db)

        with self.assertRaises(ConnectionError):
            store.write("blog", {})


class TestSupabaseSubscriberRoster(unittest.TestCase):
    """Tests for SupabaseSubscriberRoster."""

    def test_lists_subscribed_only(self):
        mock_db = create_mock_supabase(
            [
                {"email": "a@x.com", "name": "A", "status": "subscribed"},
                {"email": None, "name": None, "status": "subscribed"},
            ]
        )
        roster = SupabaseSubscriberRoster(client=mock_db)

        subscribers = roster.list_subscribed()

        mock_db.table.assert_called_with("subscribers")
        mock_db.eq.assert_called_with("status", "subscribed")
        self.assertEqual([s.email for s in subscribers], ["a@x.com", ""])
        self.assertEqual(subscribers[0].name, "A")

    def test_empty_table(self):
        roster = SupabaseSubscriberRoster(client=create_mock_supabase([]))

        self.assertEqual(roster.list_subscribed(), [])


if __name__ == "__main__":
    unittest.main()
