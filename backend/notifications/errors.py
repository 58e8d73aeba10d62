"""Exceptions raised by the announcement pipeline."""


class EmailError(Exception):
    """Base class for email delivery problems."""


class EmailNotConfiguredError(EmailError):
    """No usable SMTP transport could be resolved."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "SMTP is not configured. Set SMTP in .env or Admin → Subscriber emails."
        )
