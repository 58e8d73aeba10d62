"""Pydantic models for announceable page content.

Page content is stored as loosely-typed JSON. These models are the
boundary where the announcement pipeline reads it: every field is
optional and anything missing or of the wrong type becomes an empty
string instead of a validation error.
"""

import re
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from models.types import CanonicalSlug, ContentCollection

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class ContentType(str, Enum):
    """Kinds of content that trigger a subscriber announcement."""

    BLOG = "blog"
    RECOMMENDATION = "recommendation"
    MUSINGS = "musings"
    BOOK_CLUB = "bookClub"

    @property
    def site_path(self) -> str:
        """Public URL path segment the content lives under."""
        return {
            ContentType.BLOG: "blog",
            ContentType.RECOMMENDATION: "recommendations",
            ContentType.MUSINGS: "musings",
            ContentType.BOOK_CLUB: "book-clubs",
        }[self]


# Page slug -> (content type, collection keys tried in order)
NOTIFYING_PAGES: dict[str, tuple[ContentType, tuple[str, ...]]] = {
    "blog": (ContentType.BLOG, ("posts",)),
    "recommendations": (ContentType.RECOMMENDATION, ("items",)),
    "musings": (ContentType.MUSINGS, ("items",)),
    "book-clubs": (ContentType.BOOK_CLUB, ("pageClubs", "clubs")),
}


def canonical_slug(slug: Any = None, title: Any = None) -> CanonicalSlug:
    """
    Derive the identity key of a content item.

    The explicit slug wins when it is a non-blank string (trimmed and
    lowercased). Otherwise the title is lowercased and every run of
    non-alphanumeric characters becomes one hyphen.

    Examples:
        >>> canonical_slug(" My-Post ")
        'my-post'
        >>> canonical_slug(None, "Hello, World!")
        'hello-world-'
        >>> canonical_slug("", "")
        ''
    """
    if isinstance(slug, str) and slug.strip():
        return CanonicalSlug(slug.strip().lower())
    if isinstance(title, str) and title:
        return CanonicalSlug(_NON_ALNUM.sub("-", title.lower()))
    return CanonicalSlug("")


def item_identity(content_type: ContentType, raw: Any) -> CanonicalSlug:
    """Identity key of a raw collection entry for the given content type."""
    if not isinstance(raw, dict):
        return CanonicalSlug("")
    if content_type is ContentType.BOOK_CLUB:
        club_id = raw.get("id")
        if isinstance(club_id, (str, int)) and not isinstance(club_id, bool):
            club_id = str(club_id).strip()
            if club_id:
                return CanonicalSlug(club_id)
        return canonical_slug(None, raw.get("name"))
    return canonical_slug(raw.get("slug"), raw.get("title"))


def get_collection(page_slug: str, content: Any) -> ContentCollection:
    """
    Pull the announceable collection out of a page's content.

    Returns an empty list when the page is not a notifying page, the
    content is not an object, or none of the collection keys hold a list.
    """
    entry = NOTIFYING_PAGES.get(page_slug)
    if entry is None or not isinstance(content, dict):
        return []
    for key in entry[1]:
        value = content.get(key)
        if isinstance(value, list):
            return value
    return []


class PermissiveContent(BaseModel):
    """Base for content records read from page JSON."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Fields where a JSON number is accepted and kept as its text form
    numeric_text_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def text_or_empty(cls, value: Any, info: ValidationInfo) -> str:
        if (
            info.field_name in cls.numeric_text_fields
            and isinstance(value, int)
            and not isinstance(value, bool)
        ):
            return str(value)
        return value if isinstance(value, str) else ""


class AnnouncedItem(PermissiveContent):
    """Fields shared by posts, recommendation lists and musings."""

    title: str = ""
    slug: str = ""
    excerpt: str = ""
    image: str = ""
    author: str = ""

    @property
    def canonical_slug(self) -> CanonicalSlug:
        return canonical_slug(self.slug, self.title)


class BlogPost(AnnouncedItem):
    """A book review on the blog page (`posts`)."""

    book_title: str = Field("", alias="bookTitle")


class RecommendationList(AnnouncedItem):
    """A book recommendation list (`items` on the recommendations page)."""


class Musing(AnnouncedItem):
    """A piece on the musings page (`items`)."""


class BookClub(PermissiveContent):
    """A book club entry on the book-clubs page."""

    id: str = ""
    name: str = ""
    description: str = ""
    theme: str = ""
    join_link: str = Field("", alias="joinLink")
    logo: str = ""

    numeric_text_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    @property
    def canonical_slug(self) -> CanonicalSlug:
        return item_identity(ContentType.BOOK_CLUB, self.model_dump(by_alias=True))


ContentItem = BlogPost | RecommendationList | Musing | BookClub

_MODELS: dict[ContentType, type[PermissiveContent]] = {
    ContentType.BLOG: BlogPost,
    ContentType.RECOMMENDATION: RecommendationList,
    ContentType.MUSINGS: Musing,
    ContentType.BOOK_CLUB: BookClub,
}


def parse_content_item(content_type: ContentType, raw: Any) -> ContentItem:
    """Parse a raw collection entry into its tagged variant; never raises."""
    model = _MODELS[content_type]
    if isinstance(raw, model):
        return raw  # type: ignore[return-value]
    return model.model_validate(raw if isinstance(raw, dict) else {})  # type: ignore[return-value]
