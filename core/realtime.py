# core/realtime.py
"""
Supabase realtime (postgres_changes) subscriptions.

Notifications are only used as a "something changed" signal; payloads
are logged and handed to the callback untouched.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from core.supabase_client import get_async_supabase_client
from core.logging_config import logger


ChangeCallback = Callable[[Dict[str, Any]], None]


@dataclass(frozen=True)
class ChangeFeed:
    """One table to watch, optionally filtered to the tenant's rows."""
    table: str
    tenant_column: Optional[str] = "society_id"

    def filter_for(self, society_id: Optional[str]) -> Optional[str]:
        if not self.tenant_column or not society_id:
            return None
        return f"{self.tenant_column}=eq.{society_id}"

    def channel_name(self, society_id: Optional[str]) -> str:
        # channel topics must be unique per client
        return f"{self.table}-changes-{society_id or 'all'}-{uuid4().hex[:8]}"


class ChangeSubscription:
    """Handle returned by subscribe_to_changes(); unsubscribe() is idempotent."""

    def __init__(self, client, channel, name: str):
        self.client = client
        self.channel = channel
        self.name = name
        self.closed = False

    async def unsubscribe(self):
        if self.closed:
            return
        self.closed = True
        await self.client.remove_channel(self.channel)
        logger.info(f"Realtime channel closed: {self.name}")


async def subscribe_to_changes(
    feed: ChangeFeed,
    society_id: Optional[str],
    on_change: ChangeCallback,
    client=None,
) -> ChangeSubscription:
    """
    Listen to INSERT/UPDATE/DELETE on feed.table (public schema),
    filtered to `society_id` when the feed is tenant-scoped.
    """
    client = client or await get_async_supabase_client()
    name = feed.channel_name(society_id)

    def handle(payload):
        logger.debug(f"Realtime change on {feed.table} ({name})")
        on_change(payload)

    channel = client.channel(name)
    channel.on_postgres_changes(
        event="*",
        schema="public",
        table=feed.table,
        filter=feed.filter_for(society_id),
        callback=handle,
    )
    await channel.subscribe()

    logger.info(f"Realtime channel open: {name}")
    return ChangeSubscription(client, channel, name)
