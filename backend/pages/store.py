"""Page-settings store: one opaque JSON document per page slug."""

from datetime import datetime, timezone
from typing import Any, Protocol, cast

from models.types import PageSlug
from shared.db import PAGES_TABLE, get_supabase_client


class PageStore(Protocol):
    def read(self, slug: PageSlug) -> Any | None: ...

    def write(self, slug: PageSlug, content: Any) -> Any: ...


class SupabasePageStore:
    """Stores page content in the Supabase `pages` table (unique on slug)."""

    def __init__(self, client: Any = None):
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def read(self, slug: PageSlug) -> Any | None:
        """Return the stored content, or None if the page row does not exist."""
        response = (
            self.client.table(PAGES_TABLE)
            .select("content")
            .eq("slug", slug)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        row = cast(dict[str, Any], response.data[0])
        return row.get("content")

    def write(self, slug: PageSlug, content: Any) -> Any:
        """Upsert the page and return the content as stored."""
        response = (
            self.client.table(PAGES_TABLE)
            .upsert(
                {
                    "slug": slug,
                    "content": content,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
                on_conflict="slug",
            )
            .execute()
        )

        if not response.data:
            return content

        row = cast(dict[str, Any], response.data[0])
        return row.get("content", content)
