# services/dashboard.py
"""
Headline numbers for the home screen.

Admins (super_admin, society_admin, committee_member) see society-wide
figures; everyone else sees their own dues and requests.
"""

from typing import Iterable

from core.logging_config import logger
from core.utils import format_currency, utc_now_iso
from models.snapshot import ResourceSnapshot, TenantContext


OPEN_COMPLAINT_STATUSES = ["open", "in_progress"]


def _count(result) -> int:
    return result.count or 0


def _sum_amounts(rows: Iterable[dict]) -> float:
    return sum(float(row.get("amount") or 0) for row in rows)


def collection_rate(pending: float, paid: float) -> int:
    """Paid share of all billed fees, as a rounded percentage."""
    total = pending + paid
    if total <= 0:
        return 0
    return round(paid / total * 100)


def _fee_amounts(client, column: str, value: str, status: str) -> float:
    rows = (
        client.table("maintenance_fees")
        .select("amount")
        .eq(column, value)
        .eq("status", status)
        .execute()
    ).data or []
    return _sum_amounts(rows)


def _upcoming_events(client, society_id: str) -> int:
    return _count(
        client.table("events")
        .select("id", count="exact")
        .eq("society_id", society_id)
        .gte("event_date", utc_now_iso())
        .execute()
    )


def admin_stats(client, society_id: str) -> dict:
    members = _count(
        client.table("profiles")
        .select("id", count="exact")
        .eq("society_id", society_id)
        .eq("is_active", True)
        .execute()
    )
    open_complaints = _count(
        client.table("complaints")
        .select("id", count="exact")
        .eq("society_id", society_id)
        .in_("status", OPEN_COMPLAINT_STATUSES)
        .execute()
    )
    pending = _fee_amounts(client, "society_id", society_id, "pending")
    paid = _fee_amounts(client, "society_id", society_id, "paid")

    return {
        "total_members": members,
        "pending_dues": format_currency(pending),
        "open_complaints": open_complaints,
        "collection_rate": f"{collection_rate(pending, paid)}%",
        "upcoming_events": _upcoming_events(client, society_id),
    }


def resident_stats(client, society_id: str, profile_id: str) -> dict:
    my_complaints = _count(
        client.table("complaints")
        .select("id", count="exact")
        .eq("profile_id", profile_id)
        .in_("status", OPEN_COMPLAINT_STATUSES)
        .execute()
    )
    return {
        "my_dues": format_currency(_fee_amounts(client, "profile_id", profile_id, "pending")),
        "my_complaints": my_complaints,
        "upcoming_events": _upcoming_events(client, society_id),
    }


def fetch_dashboard(client, context: TenantContext) -> ResourceSnapshot:
    society_id = context.require_society()

    if context.is_admin:
        stats = admin_stats(client, society_id)
    else:
        stats = resident_stats(client, society_id, context.profile_id)

    logger.debug(f"Dashboard stats for society {society_id} ({context.role}): {stats}")
    return ResourceSnapshot(resource="dashboard", stats=stats)
