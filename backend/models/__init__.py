"""Pydantic models for data validation and type checking."""

from models.content import (
    NOTIFYING_PAGES,
    AnnouncedItem,
    BlogPost,
    BookClub,
    ContentItem,
    ContentType,
    Musing,
    RecommendationList,
    canonical_slug,
    get_collection,
    item_identity,
    parse_content_item,
)
from models.email_settings import (
    EmailSettings,
    MailConfig,
    ResolvedEmailConfig,
    TransportDescriptor,
)
from models.notification import AnnounceResult, Subscriber

__all__ = [
    "NOTIFYING_PAGES",
    "AnnouncedItem",
    "BlogPost",
    "BookClub",
    "ContentItem",
    "ContentType",
    "Musing",
    "RecommendationList",
    "canonical_slug",
    "get_collection",
    "item_identity",
    "parse_content_item",
    "EmailSettings",
    "MailConfig",
    "ResolvedEmailConfig",
    "TransportDescriptor",
    "AnnounceResult",
    "Subscriber",
]
