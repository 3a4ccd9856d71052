# core/live_resource.py
"""
Live, tenant-scoped view of one resource.

A LiveResource fetches a snapshot for a society, subscribes to the
change feeds of the tables behind it and re-fetches the whole collection
on every notification. Each listener receives the snapshot after every
state change (loading, data, error).

Rapid re-triggers follow last-request-wins: every refresh takes a ticket
and only the newest ticket may write state. Superseded results are
dropped. A failed fetch is not retried; the next notification (or an
explicit refresh) is the only way back.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Set

from core.errors import extract_supabase_error
from core.logging_config import logger
from core.realtime import ChangeFeed, ChangeSubscription, subscribe_to_changes
from core.supabase_client import get_supabase_client
from models.snapshot import ResourceSnapshot, TenantContext


NO_SOCIETY_MESSAGE = "No society associated"

Fetcher = Callable[[Any, TenantContext], ResourceSnapshot]
Listener = Callable[[ResourceSnapshot], Optional[Awaitable[None]]]
Subscriber = Callable[..., Awaitable[ChangeSubscription]]


class LiveResource:

    def __init__(
        self,
        name: str,
        fetcher: Fetcher,
        context: TenantContext,
        feeds: Iterable[ChangeFeed] = (),
        *,
        clear_on_error: bool = False,
        client_factory: Callable[[], Any] = get_supabase_client,
        subscribe: Subscriber = subscribe_to_changes,
    ):
        self.name = name
        self.fetcher = fetcher
        self.context = context
        self.feeds = tuple(feeds)
        self.clear_on_error = clear_on_error

        self._client_factory = client_factory
        self._subscribe = subscribe

        self.snapshot = ResourceSnapshot(resource=name, loading=True)
        self._listeners: List[Listener] = []
        self._subscriptions: List[ChangeSubscription] = []
        self._pending: Set[asyncio.Task] = set()
        self._ticket = 0
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stopped = False

    # ---------------------------------------------------------
    # Listeners
    # ---------------------------------------------------------
    def add_listener(self, listener: Listener):
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def _notify(self):
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                result = listener(snapshot)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.warning(f"Listener failed for {self.name}", exc_info=True)

    def _apply(self, **changes):
        changes["version"] = self.snapshot.version + 1
        self.snapshot = self.snapshot.model_copy(update=changes)

    # ---------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------
    @property
    def is_live(self) -> bool:
        """True while change subscriptions are open."""
        return bool(self._subscriptions) and not self._stopped

    async def start(self) -> ResourceSnapshot:
        """
        Initial fetch plus one subscription per feed.
        Without a society nothing is queried or subscribed.
        """
        self._loop = asyncio.get_running_loop()

        if not self.context.society_id:
            self._apply(loading=False, error=NO_SOCIETY_MESSAGE)
            await self._notify()
            return self.snapshot

        # Subscribe first so a change landing during the fetch still triggers one
        try:
            for feed in self.feeds:
                subscription = await self._subscribe(feed, self.context.society_id, self._on_change)
                self._subscriptions.append(subscription)
        except Exception:
            await self.stop()
            raise

        return await self.refresh()

    async def stop(self):
        """Release every subscription; in-flight fetches are discarded."""
        self._stopped = True

        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            await subscription.unsubscribe()

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.stop()

    # ---------------------------------------------------------
    # Fetching
    # ---------------------------------------------------------
    def _on_change(self, payload):
        """Realtime callback: schedule exactly one full re-fetch."""
        if self._stopped or self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._schedule_refresh)

    def _schedule_refresh(self):
        if self._stopped:
            return
        task = self._loop.create_task(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_idle(self):
        """Wait until every scheduled re-fetch has finished."""
        await asyncio.sleep(0)
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def refresh(self) -> ResourceSnapshot:
        if self._stopped:
            return self.snapshot

        if not self.context.society_id:
            self._apply(loading=False, error=NO_SOCIETY_MESSAGE)
            await self._notify()
            return self.snapshot

        self._ticket += 1
        ticket = self._ticket

        self._apply(loading=True, error=None)
        await self._notify()

        try:
            client = self._client_factory()
            if client is None:
                raise RuntimeError("Supabase client not configured")
            fresh = await asyncio.to_thread(self.fetcher, client, self.context)
        except Exception as e:
            if not self._is_current(ticket):
                return self.snapshot

            message = extract_supabase_error(e)
            logger.error(f"Error fetching {self.name}: {message}")

            changes = {"loading": False, "error": message}
            if self.clear_on_error:
                changes.update(items=[], related={}, stats={})
            self._apply(**changes)
            await self._notify()
            return self.snapshot

        if not self._is_current(ticket):
            return self.snapshot

        self._apply(
            items=fresh.items,
            related=fresh.related,
            stats=fresh.stats,
            loading=False,
            error=None,
        )
        await self._notify()
        return self.snapshot

    def _is_current(self, ticket: int) -> bool:
        if self._stopped:
            logger.debug(f"Discarding {self.name} fetch #{ticket}: resource stopped")
            return False
        if ticket != self._ticket:
            logger.debug(f"Discarding stale {self.name} fetch #{ticket} (latest #{self._ticket})")
            return False
        return True
