"""Process-wide configuration read from the environment (.env supported)."""

import os

from dotenv import load_dotenv

from models.email_settings import MailConfig

load_dotenv()

DEFAULT_SITE_URL = "http://localhost:3000"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in ("1", "true", "yes")


def load_mail_config() -> MailConfig:
    """
    Build the fallback mail settings from SMTP_* and PUBLIC_SITE_URL.

    Missing variables fall back to empty strings so that callers can decide
    whether the result is usable; an unparseable SMTP_PORT falls back to 587.
    """
    try:
        port = int(os.getenv("SMTP_PORT", "587"))
    except ValueError:
        port = 587

    return MailConfig(
        smtp_host=os.getenv("SMTP_HOST", ""),
        smtp_port=port,
        smtp_secure=_env_flag("SMTP_SECURE"),
        smtp_user=os.getenv("SMTP_USER", ""),
        smtp_pass=os.getenv("SMTP_PASS", ""),
        smtp_from=os.getenv("SMTP_FROM", ""),
        public_site_url=os.getenv("PUBLIC_SITE_URL", DEFAULT_SITE_URL) or DEFAULT_SITE_URL,
    )
