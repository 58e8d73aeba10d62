"""Unit tests for notifications/error_logger.py"""

import os
import tempfile
import unittest
from unittest.mock import patch

from notifications.error_logger import log_notification_error


class TestLogNotificationError(unittest.TestCase):
    """Tests for log_notification_error()."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        patcher = patch.dict(os.environ, {"NOTIFICATION_LOG_DIR": self.tmp.name})
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self.tmp.cleanup)

    def test_writes_report_with_context(self):
        path = log_notification_error(
            error_type="sending",
            error_message="550 mailbox unavailable",
            context={"recipient": "r@x.com", "content_type": "blog"},
        )

        self.assertEqual(os.path.dirname(path), self.tmp.name)
        self.assertTrue(os.path.basename(path).startswith("sending_error_"))
        with open(path, encoding="utf-8") as f:
            report = f.read()
        self.assertIn("Error Type: sending", report)
        self.assertIn("Error Message: 550 mailbox unavailable", report)
        self.assertIn("recipient: r@x.com", report)

    def test_consecutive_errors_get_separate_files(self):
        first = log_notification_error("sending", "one")
        second = log_notification_error("sending", "two")

        self.assertNotEqual(first, second)
        self.assertEqual(len(os.listdir(self.tmp.name)), 2)

    def test_without_context(self):
        path = log_notification_error("announcing", "SMTP is not configured")

        with open(path, encoding="utf-8") as f:
            self.assertNotIn("Context:", f.read())

    def test_unwritable_directory_returns_none(self):
        """A log dir that cannot be created is reported, not raised."""
        blocker = os.path.join(self.tmp.name, "not-a-dir")
        with open(blocker, "w", encoding="utf-8") as f:
            f.write("x")

        with patch.dict(os.environ, {"NOTIFICATION_LOG_DIR": os.path.join(blocker, "logs")}):
            path = log_notification_error("sending", "550", {"recipient": "r@x.com"})

        self.assertIsNone(path)


if __name__ == "__main__":
    unittest.main()
