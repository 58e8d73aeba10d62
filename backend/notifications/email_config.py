"""
Resolve which SMTP account and templates an outgoing email uses.

Admin overrides live on the `email-settings` page; the process-wide
fallback comes from the environment (see shared.config). The two are never
mixed credential-by-credential: either the admin's user+password pair is
complete and wins, or the environment descriptor is used wholesale.
"""

from typing import Any

from models.content import ContentType
from models.email_settings import (
    EmailSettings,
    MailConfig,
    ResolvedEmailConfig,
    TransportDescriptor,
)

EMAIL_SETTINGS_SLUG = "email-settings"


def load_email_settings(page_store: Any) -> EmailSettings | None:
    """
    Read the admin email settings page.

    Never raises: a store failure or a malformed page is reported and
    treated as "no admin settings".
    """
    try:
        content = page_store.read(EMAIL_SETTINGS_SLUG)
        return EmailSettings.from_page_content(content)
    except Exception as e:
        print(f"  ⚠️  Could not load email settings, using environment: {e}")
        return None


def _has_admin_credentials(settings: EmailSettings | None) -> bool:
    if settings is None:
        return False
    return bool(
        (settings.smtp_user or "").strip() and (settings.smtp_pass or "").strip()
    )


def is_smtp_configured(settings: EmailSettings | None, fallback: MailConfig) -> bool:
    """True if either the admin pair or the full environment triple is present."""
    if _has_admin_credentials(settings):
        return True
    return bool(
        fallback.smtp_host.strip()
        and fallback.smtp_user.strip()
        and fallback.smtp_pass.strip()
    )


def build_transport_descriptor(
    settings: EmailSettings | None, fallback: MailConfig
) -> TransportDescriptor:
    """
    Pick the connection parameters for a dispatch.

    With complete admin credentials, each of host/port/secure comes from the
    admin settings when set there and from the environment otherwise.
    Without them, the environment descriptor is used as a whole.
    """
    if settings is not None and _has_admin_credentials(settings):
        return TransportDescriptor(
            host=settings.smtp_host or fallback.smtp_host,
            port=settings.smtp_port
            if settings.smtp_port is not None
            else fallback.smtp_port,
            secure=settings.smtp_secure
            if settings.smtp_secure is not None
            else fallback.smtp_secure,
            user=(settings.smtp_user or "").strip(),
            secret=settings.smtp_pass or "",
        )

    return TransportDescriptor(
        host=fallback.smtp_host,
        port=fallback.smtp_port,
        secure=fallback.smtp_secure,
        user=fallback.smtp_user,
        secret=fallback.smtp_pass,
    )


def resolve_sender(settings: EmailSettings | None, fallback: MailConfig) -> str:
    """Admin sender, then admin SMTP user, then environment sender."""
    if settings is not None:
        for candidate in (settings.from_email, settings.smtp_user):
            if candidate and candidate.strip():
                return candidate.strip()
    return fallback.smtp_from


def resolve_email_config(
    settings: EmailSettings | None,
    fallback: MailConfig,
    content_type: ContentType | None = None,
) -> ResolvedEmailConfig:
    """
    Merge admin overrides with the fallback for one kind of email.

    Args:
        settings: Parsed `email-settings` page (None if absent)
        fallback: Environment mail settings
        content_type: Announcement type whose templates to pick (None for
            welcome/test emails)

    Returns:
        ResolvedEmailConfig; callers must check `usable` before sending
    """
    subject_template = body_template = None
    if settings is not None and content_type is not None:
        subject_template, body_template = settings.announce_templates(content_type)

    return ResolvedEmailConfig(
        usable=is_smtp_configured(settings, fallback),
        transport=build_transport_descriptor(settings, fallback),
        sender=resolve_sender(settings, fallback),
        subject_template=subject_template,
        body_template=body_template,
        settings=settings,
    )
