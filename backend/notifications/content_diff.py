"""
Detect content items added by a page save.

Compares the collection stored before a save with the collection being
saved and reports only items whose identity key was not seen before, so
edits to existing posts never re-announce them.
"""

from typing import Any, Callable

from models.content import ContentType, canonical_slug, item_identity
from models.types import CanonicalSlug, JSONObject


def _default_key(raw: Any) -> CanonicalSlug:
    if not isinstance(raw, dict):
        return CanonicalSlug("")
    return canonical_slug(raw.get("slug"), raw.get("title"))


def key_for(content_type: ContentType) -> Callable[[Any], CanonicalSlug]:
    """Identity-key rule for a content type's collection entries."""
    return lambda raw: item_identity(content_type, raw)


def find_new_items(
    before: Any,
    after: Any,
    key: Callable[[Any], CanonicalSlug] = _default_key,
) -> list[JSONObject]:
    """
    Return the items in `after` whose identity key is absent from `before`.

    Either collection may be None or not a list; it is then treated as empty.
    Items with an empty key (no usable slug or title) are never reported,
    and non-object entries are skipped. The order of `after` is preserved and
    duplicate keys within `after` are all reported.

    Args:
        before: Collection stored before the save
        after: Collection being saved
        key: Identity-key rule (defaults to the canonical slug)

    Returns:
        List of newly-added items, as the raw records from `after`
    """
    before_items = before if isinstance(before, list) else []
    after_items = after if isinstance(after, list) else []

    known = {key(item) for item in before_items}

    new_items = []
    for item in after_items:
        if not isinstance(item, dict):
            continue
        item_key = key(item)
        if item_key and item_key not in known:
            new_items.append(item)

    return new_items
