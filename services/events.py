# services/events.py

from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException

from core.utils import parse_timestamp, sanitize, utc_now
from models.event import EventCreate
from models.snapshot import ResourceSnapshot, TenantContext


EVENTS_TABLE = "events"
EVENTS_SELECT = "*, profiles!events_created_by_fkey(full_name)"


def fetch_events(client, context: TenantContext) -> ResourceSnapshot:
    """Society events, soonest first, with the organiser's name."""
    society_id = context.require_society()

    result = (
        client.table(EVENTS_TABLE)
        .select(EVENTS_SELECT)
        .eq("society_id", society_id)
        .order("event_date", desc=False)
        .execute()
    )
    events = result.data or []

    return ResourceSnapshot(
        resource="events",
        items=events,
        stats=compute_event_stats(events),
    )


def compute_event_stats(events: List[dict], now: Optional[datetime] = None) -> dict:
    now = now or utc_now()
    dates = [parse_timestamp(e.get("event_date")) for e in events]
    return {
        "total": len(events),
        "upcoming": sum(1 for d in dates if d and d > now),
        "completed": sum(1 for d in dates if d and d <= now),
    }


def create_event(client, payload: EventCreate, context: TenantContext) -> dict:
    society_id = context.require_society()

    data = sanitize({
        **payload.model_dump(mode="json"),
        "society_id": society_id,
        "created_by": context.profile_id,
    })

    result = client.table(EVENTS_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Event creation failed - no data returned")
    return result.data[0]
