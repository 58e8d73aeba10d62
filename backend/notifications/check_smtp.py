"""
CLI script for checking the SMTP setup with a single test email.

Usage:
    # Send a test email using admin settings (email-settings page) or SMTP_* env
    uv run python -m notifications.check_smtp --to you@example.com
"""

import argparse
import sys

from notifications.email_sender import send_test_email
from pages.store import SupabasePageStore


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Send one test email to verify SMTP settings"
    )

    parser.add_argument(
        "--to", type=str, required=True, help="Recipient email address"
    )

    args = parser.parse_args()

    to = args.to.strip()
    if not to:
        parser.error("--to must be a non-empty email address")

    try:
        send_test_email(to, SupabasePageStore())
    except Exception as e:
        print(f"✗ Failed to send test email: {e}")
        sys.exit(1)

    print(f"✓ Test email sent. Check the inbox (and spam) for {to}")


if __name__ == "__main__":
    main()
