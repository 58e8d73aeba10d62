"""
Error logging utility for the announcement pipeline.

Logs announcement and delivery errors to timestamped files for debugging.
"""

import os
from datetime import datetime
from typing import Any


def _log_dir() -> str:
    return os.getenv("NOTIFICATION_LOG_DIR") or os.path.join(
        os.path.dirname(__file__), "logs"
    )


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str | None:
    """
    Log a notification error to a timestamped file.

    Never raises: if the report cannot be written (read-only or full disk,
    bad NOTIFICATION_LOG_DIR) the problem is printed and None is returned,
    so a failing logger never interrupts a send loop.

    Args:
        error_type: Type of error ('announcing', 'sending', 'welcome')
        error_message: The error message
        context: Optional dictionary with additional context (page slug, recipient, etc.)

    Returns:
        Path to the log file created, or None if it could not be written
    """
    # Microseconds keep per-recipient failures in one batch from overwriting each other
    now = datetime.now()
    timestamp = now.strftime("%Y%m%d_%H%M%S_%f")

    try:
        log_dir = _log_dir()
        os.makedirs(log_dir, exist_ok=True)
        filename = os.path.join(log_dir, f"{error_type}_error_{timestamp}.txt")

        with open(filename, "w", encoding="utf-8") as f:
            f.write(f"Notification Error Report - {now}\n")
            f.write("=" * 60 + "\n\n")
            f.write(f"Error Type: {error_type}\n")
            f.write(f"Error Message: {error_message}\n\n")

            if context:
                f.write("Context:\n")
                f.write("-" * 60 + "\n")
                for key, value in context.items():
                    f.write(f"{key}: {value}\n")
    except OSError as e:
        print(f"  ⚠️  Could not write {error_type} error log: {e}")
        return None

    return filename
