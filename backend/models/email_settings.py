"""Pydantic models for email/SMTP configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.content import ContentType

_TRIMMED_FIELDS = (
    "from_email",
    "smtp_host",
    "smtp_user",
    "subject",
    "blog_announce_subject",
    "blog_announce_body_html",
    "recommendation_announce_subject",
    "recommendation_announce_body_html",
    "musings_announce_subject",
    "musings_announce_body_html",
    "book_club_announce_subject",
    "book_club_announce_body_html",
)

# Content type -> attribute prefix of its announcement templates
_ANNOUNCE_PREFIX = {
    ContentType.BLOG: "blog",
    ContentType.RECOMMENDATION: "recommendation",
    ContentType.MUSINGS: "musings",
    ContentType.BOOK_CLUB: "book_club",
}


class EmailSettings(BaseModel):
    """
    Admin overrides stored on the `email-settings` page.

    Field names on the page are camelCase (`smtpHost`, `blogAnnounceSubject`,
    ...). Every field is optional; None means "use the default".
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_email: str | None = Field(None, alias="fromEmail")
    smtp_host: str | None = Field(None, alias="smtpHost")
    smtp_port: int | None = Field(None, alias="smtpPort")
    smtp_secure: bool | None = Field(None, alias="smtpSecure")
    smtp_user: str | None = Field(None, alias="smtpUser")
    smtp_pass: str | None = Field(None, alias="smtpPass")

    # Welcome email
    subject: str | None = None
    body_html: str | None = Field(None, alias="bodyHtml")
    signature: str | None = None

    blog_announce_subject: str | None = Field(None, alias="blogAnnounceSubject")
    blog_announce_body_html: str | None = Field(None, alias="blogAnnounceBodyHtml")
    recommendation_announce_subject: str | None = Field(
        None, alias="recommendationAnnounceSubject"
    )
    recommendation_announce_body_html: str | None = Field(
        None, alias="recommendationAnnounceBodyHtml"
    )
    musings_announce_subject: str | None = Field(None, alias="musingsAnnounceSubject")
    musings_announce_body_html: str | None = Field(
        None, alias="musingsAnnounceBodyHtml"
    )
    book_club_announce_subject: str | None = Field(
        None, alias="bookClubAnnounceSubject"
    )
    book_club_announce_body_html: str | None = Field(
        None, alias="bookClubAnnounceBodyHtml"
    )

    @field_validator(*_TRIMMED_FIELDS, mode="before")
    @classmethod
    def trimmed_text(cls, value: Any) -> str | None:
        return value.strip() if isinstance(value, str) else None

    @field_validator("smtp_pass", "body_html", "signature", mode="before")
    @classmethod
    def raw_text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("smtp_port", mode="before")
    @classmethod
    def port_number(cls, value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @field_validator("smtp_secure", mode="before")
    @classmethod
    def secure_flag(cls, value: Any) -> bool | None:
        if value is True or value == "true":
            return True
        if value is False or value == "false":
            return False
        return None

    @classmethod
    def from_page_content(cls, content: Any) -> "EmailSettings | None":
        """Parse the page's JSON; anything but an object means no settings."""
        if not isinstance(content, dict):
            return None
        return cls.model_validate(content)

    def announce_templates(
        self, content_type: ContentType
    ) -> tuple[str | None, str | None]:
        """Return the (subject, body) templates for a content type; blanks become None."""
        prefix = _ANNOUNCE_PREFIX[content_type]
        subject = getattr(self, f"{prefix}_announce_subject")
        body = getattr(self, f"{prefix}_announce_body_html")
        return (subject or None, body or None)


class MailConfig(BaseModel):
    """Process-wide fallback mail settings read from the environment."""

    model_config = ConfigDict(str_strip_whitespace=True)

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_from: str = ""
    public_site_url: str = "http://localhost:3000"

    @property
    def site_url(self) -> str:
        """Public site URL without a trailing slash."""
        return self.public_site_url.rstrip("/")


class TransportDescriptor(BaseModel):
    """Connection parameters for one dispatch."""

    host: str = ""
    port: int = 587
    secure: bool = False
    user: str = ""
    secret: str = Field("", repr=False)


class ResolvedEmailConfig(BaseModel):
    """Outcome of merging admin overrides with the fallback settings."""

    usable: bool
    transport: TransportDescriptor
    sender: str = ""
    subject_template: str | None = None
    body_template: str | None = None
    settings: EmailSettings | None = None
