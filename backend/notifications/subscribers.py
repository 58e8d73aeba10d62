"""
Subscriber roster access.

The announcement pipeline only ever reads subscribers whose status is
`subscribed`; creating and unsubscribing readers happens elsewhere.
"""

from typing import Any, Protocol, cast

from models.notification import Subscriber
from shared.db import SUBSCRIBERS_TABLE, get_supabase_client


class SubscriberRoster(Protocol):
    def list_subscribed(self) -> list[Subscriber]: ...


class SupabaseSubscriberRoster:
    """Reads subscribers from the Supabase `subscribers` table."""

    def __init__(self, client: Any = None):
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase_client()
        return self._client

    def list_subscribed(self) -> list[Subscriber]:
        response = (
            self.client.table(SUBSCRIBERS_TABLE)
            .select("email, name, status")
            .eq("status", "subscribed")
            .execute()
        )

        if not response.data:
            return []

        rows = cast(list[dict[str, Any]], response.data)
        return [
            Subscriber(
                email=row.get("email") or "",
                name=row.get("name"),
                status="subscribed",
            )
            for row in rows
        ]
