"""
Email sending via SMTP for subscriber announcements.

Handles announcing newly published content to every subscribed reader,
plus the single-recipient welcome and test emails that share the same
SMTP configuration.
"""

import smtplib
import ssl
from email.message import EmailMessage
from typing import Any, Callable, Protocol

from models.content import BookClub, ContentType, get_collection, parse_content_item
from models.email_settings import MailConfig, TransportDescriptor
from models.notification import AnnounceResult
from notifications.email_config import load_email_settings, resolve_email_config
from notifications.email_templates import (
    TEST_SUBJECT,
    WELCOME_SUBJECT,
    render_announcement_html,
    render_announcement_subject,
    render_test_html,
    render_welcome_html,
    single_line,
)
from notifications.error_logger import log_notification_error
from notifications.errors import EmailNotConfiguredError
from notifications.subscribers import SubscriberRoster
from shared.config import load_mail_config

SMTP_TIMEOUT_SECONDS = 30


class MailTransport(Protocol):
    def send(self, from_email: str, to: str, subject: str, html: str) -> None: ...


class SmtpTransport:
    """
    Sends one HTML message per call over SMTP.

    `secure` selects implicit TLS (usually port 465); otherwise the
    connection is upgraded with STARTTLS when the server offers it.
    Any failure is raised to the caller.
    """

    def __init__(self, descriptor: TransportDescriptor, timeout: float = SMTP_TIMEOUT_SECONDS):
        self.descriptor = descriptor
        self.timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        d = self.descriptor
        if d.secure:
            return smtplib.SMTP_SSL(
                d.host, d.port, timeout=self.timeout, context=ssl.create_default_context()
            )
        return smtplib.SMTP(d.host, d.port, timeout=self.timeout)

    def send(self, from_email: str, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["From"] = from_email
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(html, subtype="html")

        with self._connect() as smtp:
            if not self.descriptor.secure:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls(context=ssl.create_default_context())
                    smtp.ehlo()
            if self.descriptor.user:
                smtp.login(self.descriptor.user, self.descriptor.secret)
            smtp.send_message(msg)


TransportFactory = Callable[[TransportDescriptor], MailTransport]


def announce_content(
    item: Any,
    content_type: ContentType,
    page_store: Any,
    roster: SubscriberRoster,
    mail_config: MailConfig | None = None,
    transport_factory: TransportFactory = SmtpTransport,
) -> AnnounceResult:
    """
    Email one newly published item to every subscribed reader.

    Recipients are sent to one at a time. A failed send is logged and
    skipped; it never stops the rest of the list.

    Args:
        item: Raw content record (or parsed model) for the new item
        content_type: Which kind of content it is
        page_store: Page-settings store holding `email-settings`
        roster: Source of subscribed readers
        mail_config: Environment fallback (loaded from env if None)
        transport_factory: Builds the transport from the resolved descriptor

    Returns:
        AnnounceResult with the number sent and the number of recipients

    Raises:
        EmailNotConfiguredError: If no usable SMTP account is configured;
            nothing is looked up or sent in that case
    """
    mail_config = mail_config or load_mail_config()
    settings = load_email_settings(page_store)
    resolved = resolve_email_config(settings, mail_config, content_type)
    if not resolved.usable:
        raise EmailNotConfiguredError()

    subscribers = roster.list_subscribed()
    recipients = [(s.email or "").strip() for s in subscribers]
    total = sum(1 for to in recipients if to)
    if total == 0:
        return AnnounceResult(sent=0, total=0)

    parsed = parse_content_item(content_type, item)
    subject = render_announcement_subject(parsed, content_type, resolved.subject_template)
    transport = transport_factory(resolved.transport)

    sent = 0
    for to in recipients:
        if not to:
            continue
        try:
            html = render_announcement_html(
                parsed, content_type, to, mail_config.site_url, resolved.body_template
            )
            transport.send(resolved.sender, to, subject, html)
            sent += 1
        except Exception as e:
            print(f"  ✗ Failed to send {content_type.value} announcement to {to}: {e}")
            log_notification_error(
                error_type="sending",
                error_message=str(e),
                context={
                    "recipient": to,
                    "content_type": content_type.value,
                    "subject": subject,
                },
            )

    return AnnounceResult(sent=sent, total=total)


def _load_welcome_clubs(page_store: Any) -> list[BookClub]:
    try:
        raw_clubs = get_collection("book-clubs", page_store.read("book-clubs"))
    except Exception as e:
        print(f"  ⚠️  Welcome email: failed to load book clubs: {e}")
        return []

    clubs = [
        parse_content_item(ContentType.BOOK_CLUB, raw)
        for raw in raw_clubs
        if isinstance(raw, dict) and isinstance(raw.get("name"), str)
    ]
    return [club for club in clubs if isinstance(club, BookClub)]


def send_welcome_email(
    to: str,
    name: str | None,
    page_store: Any,
    mail_config: MailConfig | None = None,
    transport_factory: TransportFactory = SmtpTransport,
) -> bool:
    """
    Send the welcome email to a new subscriber.

    Does nothing when no SMTP account is configured. Send failures are
    logged, not raised, so subscribing never fails because of email.

    Returns:
        True if the email was sent
    """
    mail_config = mail_config or load_mail_config()
    resolved = resolve_email_config(load_email_settings(page_store), mail_config)
    if not resolved.usable:
        return False

    settings = resolved.settings
    to = to.strip()
    html = render_welcome_html(
        to,
        name,
        _load_welcome_clubs(page_store),
        mail_config.site_url,
        body_template=settings.body_html if settings else None,
        signature=settings.signature if settings else None,
    )
    subject = single_line(settings.subject or "") if settings else ""
    subject = subject or WELCOME_SUBJECT

    try:
        transport_factory(resolved.transport).send(resolved.sender, to, subject, html)
        return True
    except Exception as e:
        print(f"  ✗ Welcome email send error for {to}: {e}")
        log_notification_error(
            error_type="welcome",
            error_message=str(e),
            context={"recipient": to},
        )
        return False


def send_test_email(
    to: str,
    page_store: Any,
    mail_config: MailConfig | None = None,
    transport_factory: TransportFactory = SmtpTransport,
) -> None:
    """
    Send a fixed test message so the admin can check the SMTP setup.

    Raises:
        EmailNotConfiguredError: If no usable SMTP account is configured
        Exception: Whatever the transport raised on a failed send
    """
    mail_config = mail_config or load_mail_config()
    settings = load_email_settings(page_store)
    resolved = resolve_email_config(settings, mail_config)
    if not resolved.usable:
        raise EmailNotConfiguredError(
            "SMTP is not configured. Set SMTP_HOST, SMTP_USER, SMTP_PASS in .env "
            "or in Admin → Subscriber emails."
        )

    transport_factory(resolved.transport).send(
        resolved.sender, to.strip(), TEST_SUBJECT, render_test_html()
    )


def make_announcer(
    page_store: Any,
    roster: SubscriberRoster,
    mail_config: MailConfig | None = None,
    transport_factory: TransportFactory = SmtpTransport,
) -> Callable[[Any, ContentType], AnnounceResult]:
    """Bind announce_content to its collaborators for the page save flow."""

    def announce(item: Any, content_type: ContentType) -> AnnounceResult:
        return announce_content(
            item,
            content_type,
            page_store,
            roster,
            mail_config=mail_config,
            transport_factory=transport_factory,
        )

    return announce
