# services/announcements.py

from datetime import datetime
from typing import List, Optional

from fastapi import HTTPException

from core.utils import parse_timestamp, sanitize, utc_now, utc_now_iso
from models.announcement import AnnouncementCreate
from models.snapshot import ResourceSnapshot, TenantContext


ANNOUNCEMENTS_TABLE = "announcements"
ANNOUNCEMENTS_SELECT = "*, profiles!announcements_created_by_fkey(full_name)"

EXPIRING_SOON_HOURS = 24


def fetch_announcements(client, context: TenantContext) -> ResourceSnapshot:
    """Announcements that have not expired yet, newest first."""
    society_id = context.require_society()
    now = utc_now_iso()

    result = (
        client.table(ANNOUNCEMENTS_TABLE)
        .select(ANNOUNCEMENTS_SELECT)
        .eq("society_id", society_id)
        .or_(f"expires_at.is.null,expires_at.gt.{now}")
        .order("created_at", desc=True)
        .execute()
    )
    announcements = result.data or []

    return ResourceSnapshot(
        resource="announcements",
        items=announcements,
        stats=compute_announcement_stats(announcements),
    )


def is_expiring_soon(announcement: dict, now: Optional[datetime] = None) -> bool:
    expires_at = parse_timestamp(announcement.get("expires_at"))
    if expires_at is None:
        return False

    now = now or utc_now()
    hours_left = (expires_at - now).total_seconds() / 3600
    return 0 < hours_left <= EXPIRING_SOON_HOURS


def compute_announcement_stats(announcements: List[dict], now: Optional[datetime] = None) -> dict:
    now = now or utc_now()
    return {
        "total": len(announcements),
        "urgent": sum(1 for a in announcements if a.get("is_urgent")),
        "expiring_soon": sum(1 for a in announcements if is_expiring_soon(a, now)),
    }


def create_announcement(client, payload: AnnouncementCreate, context: TenantContext) -> dict:
    society_id = context.require_society()

    data = sanitize({
        **payload.model_dump(mode="json"),
        "society_id": society_id,
        "created_by": context.profile_id,
    })

    result = client.table(ANNOUNCEMENTS_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Announcement creation failed - no data returned")
    return result.data[0]
