"""Pydantic models for subscribers and announcement results."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SubscriberStatus = Literal["subscribed", "unsubscribed"]


class Subscriber(BaseModel):
    """A reader on the subscriber roster."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    email: str = ""
    name: str | None = None
    status: SubscriberStatus = "subscribed"
    source: str | None = None
    subscribed_at: datetime | None = Field(None, alias="subscribedAt")
    unsubscribed_at: datetime | None = Field(None, alias="unsubscribedAt")


class AnnounceResult(BaseModel):
    """Tally returned by one dispatch."""

    sent: int = Field(0, ge=0)
    total: int = Field(0, ge=0)
