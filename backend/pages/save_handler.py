"""
Admin page saves with subscriber announcements.

A save is persisted and handed back to the admin first; only afterwards
are newly-added items announced, one item at a time. Announcement
problems are logged and never change the outcome of the save.
"""

from typing import Any, Callable

from pydantic import BaseModel, Field

from models.content import NOTIFYING_PAGES, ContentType, get_collection
from models.notification import AnnounceResult
from models.types import JSONObject, PageSlug
from notifications.content_diff import find_new_items, key_for
from notifications.error_logger import log_notification_error
from pages.store import PageStore

Announcer = Callable[[JSONObject, ContentType], AnnounceResult]


class PendingAnnouncements(BaseModel):
    """Items a save added to a notifying page, waiting to be announced."""

    page_slug: PageSlug
    content_type: ContentType
    items: list[JSONObject] = Field(default_factory=list)


def normalize_page_content(content: Any) -> JSONObject:
    """Page content is always stored as a JSON object."""
    return content if isinstance(content, dict) else {}


def _read_before_snapshot(slug: PageSlug, page_store: PageStore) -> Any | None:
    """Prior content of a notifying page; a failed read means no announcements."""
    try:
        return page_store.read(slug)
    except Exception as e:
        print(f"  ⚠️  Could not read previous '{slug}' content, skipping announcements: {e}")
        log_notification_error(
            error_type="announcing",
            error_message=str(e),
            context={"page_slug": slug, "stage": "before-snapshot read"},
        )
        return None


def apply_page_save(
    slug: PageSlug, content: Any, page_store: PageStore
) -> tuple[Any, PendingAnnouncements | None]:
    """
    Persist a page save and work out which items it added.

    The previous content is read before the write. When the page did not
    exist yet (first save, e.g. an initial import) or could not be read,
    nothing is announced; only the write decides whether the save fails.

    Args:
        slug: Page slug being saved
        content: New page content from the admin
        page_store: Page-settings store

    Returns:
        Tuple of (stored content, pending announcements or None)
    """
    content = normalize_page_content(content)
    notifying = NOTIFYING_PAGES.get(slug)

    before = _read_before_snapshot(slug, page_store) if notifying else None
    saved = page_store.write(slug, content)

    if notifying is None or before is None:
        return saved, None

    content_type = notifying[0]
    new_items = find_new_items(
        get_collection(slug, before),
        get_collection(slug, saved),
        key=key_for(content_type),
    )
    return saved, PendingAnnouncements(
        page_slug=slug, content_type=content_type, items=new_items
    )


def announce_pending(
    pending: PendingAnnouncements | None, announce: Announcer
) -> dict[str, int]:
    """
    Announce each pending item in turn.

    An error from one item (including "SMTP is not configured") is logged
    and does not stop the following items.

    Returns:
        Dictionary with stats: announced, failed
    """
    stats = {"announced": 0, "failed": 0}
    if pending is None or not pending.items:
        return stats

    print(f"Announcing {len(pending.items)} new item(s) from '{pending.page_slug}'")

    for item in pending.items:
        label = item.get("title") or item.get("name") or item.get("slug") or "untitled"
        try:
            result = announce(item, pending.content_type)
            print(f"  ✓ Announced '{label}': sent {result.sent}/{result.total}")
            stats["announced"] += 1
        except Exception as e:
            print(f"  ✗ Announcement failed for '{label}': {e}")
            stats["failed"] += 1
            error_file = log_notification_error(
                error_type="announcing",
                error_message=str(e),
                context={
                    "page_slug": pending.page_slug,
                    "content_type": pending.content_type.value,
                    "item": label,
                },
            )
            if error_file:
                print(f"    Error details logged to: {error_file}")

    return stats


def save_page_content(
    slug: PageSlug,
    content: Any,
    page_store: PageStore,
    announce: Announcer,
    respond: Callable[[Any], None],
) -> dict[str, int]:
    """
    Handle one admin save end to end.

    `respond` receives the stored content before any announcement work
    starts; persistence errors propagate from here before `respond` is
    called, announcement errors never do.

    Returns:
        Announcement stats (see announce_pending)
    """
    saved, pending = apply_page_save(slug, content, page_store)
    respond(saved)
    return announce_pending(pending, announce)
