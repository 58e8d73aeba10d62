"""Unit tests for notifications/check_smtp.py"""

import io
import sys
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from notifications import check_smtp as cli
from notifications.errors import EmailNotConfiguredError


@patch("notifications.check_smtp.SupabasePageStore")
@patch("notifications.check_smtp.send_test_email")
class TestSendTestEmailCli(unittest.TestCase):
    """Tests for main()."""

    def _run(self, *argv):
        out = io.StringIO()
        with patch.object(sys, "argv", ["check_smtp", *argv]), redirect_stdout(out):
            cli.main()
        return out.getvalue()

    def test_sends_to_given_address(self, mock_send, mock_store_cls):
        output = self._run("--to", " me@x.com ")

        mock_send.assert_called_once_with("me@x.com", mock_store_cls.return_value)
        self.assertIn("✓ Test email sent", output)

    def test_failure_exits_nonzero(self, mock_send, mock_store_cls):
        mock_send.side_effect = EmailNotConfiguredError()

        with self.assertRaises(SystemExit) as ctx:
            self._run("--to", "me@x.com")

        self.assertEqual(ctx.exception.code, 1)

    def test_to_is_required(self, mock_send, mock_store_cls):
        with patch("sys.stderr", new_callable=io.StringIO), self.assertRaises(SystemExit):
            self._run()

        mock_send.assert_not_called()


if __name__ == "__main__":
    unittest.main()
