# services/visitors.py

from typing import List

from fastapi import HTTPException

from core.config import settings
from core.logging_config import logger
from core.utils import parse_timestamp, sanitize, utc_now_iso
from models.enums import VisitorAction, VisitorStatus
from models.snapshot import ResourceSnapshot, TenantContext
from models.visitor import VisitorCreate


VISITORS_TABLE = "visitors"
VISITORS_SELECT = "*, profiles!visitors_host_profile_id_fkey(full_name, unit_number)"

STORED_STATUSES = ("pending", "approved", "rejected")

# action → (new status, timestamp column stamped with now)
VISITOR_ACTIONS = {
    VisitorAction.approve: (VisitorStatus.approved, None),
    VisitorAction.reject: (VisitorStatus.rejected, None),
    VisitorAction.check_in: (VisitorStatus.checked_in, "entry_time"),
    VisitorAction.check_out: (VisitorStatus.checked_out, "exit_time"),
}


# ============================================================
# READ
# ============================================================
def fetch_visitors(client, context: TenantContext) -> ResourceSnapshot:
    """Latest visitors of the society with their host's name and unit."""
    society_id = context.require_society()

    result = (
        client.table(VISITORS_TABLE)
        .select(VISITORS_SELECT)
        .eq("society_id", society_id)
        .order("created_at", desc=True)
        .limit(settings.VISITORS_FETCH_LIMIT)
        .execute()
    )
    visitors = [normalize_visitor(v) for v in (result.data or [])]
    logger.debug(f"Fetched {len(visitors)} visitors for society {society_id}")

    return ResourceSnapshot(
        resource="visitors",
        items=visitors,
        stats=compute_visitor_stats(visitors),
    )


def derive_visitor_status(visitor: dict) -> str:
    """
    Gate timestamps win over the stored status:
    inside (entry, no exit) → checked_in, exit → checked_out.
    """
    entry_time = parse_timestamp(visitor.get("entry_time"))
    exit_time = parse_timestamp(visitor.get("exit_time"))

    if entry_time and not exit_time:
        return VisitorStatus.checked_in.value
    if exit_time:
        return VisitorStatus.checked_out.value
    if visitor.get("status") in STORED_STATUSES:
        return visitor["status"]
    return VisitorStatus.pending.value


def normalize_visitor(visitor: dict) -> dict:
    entry_time = parse_timestamp(visitor.get("entry_time"))
    exit_time = parse_timestamp(visitor.get("exit_time"))
    return {
        **visitor,
        "status": derive_visitor_status(visitor),
        "entry_time": entry_time.isoformat() if entry_time else None,
        "exit_time": exit_time.isoformat() if exit_time else None,
    }


def compute_visitor_stats(visitors: List[dict]) -> dict:
    return {
        "total": len(visitors),
        "pending": sum(1 for v in visitors if v["status"] == "pending"),
        "in_progress": sum(1 for v in visitors if v["status"] == "checked_in"),
        "completed": sum(1 for v in visitors if v["status"] in ("checked_out", "rejected")),
    }


# ============================================================
# WRITE
# ============================================================
def create_visitor(client, payload: VisitorCreate, context: TenantContext) -> dict:
    society_id = context.require_society()
    host_profile_id = payload.host_profile_id or context.profile_id
    if not host_profile_id:
        raise HTTPException(400, "A host is required for every visitor")

    data = sanitize({
        "visitor_name": payload.visitor_name,
        "visitor_phone": payload.visitor_phone,
        "purpose": payload.purpose,
        "visit_date": payload.visit_date.isoformat(),
        "host_profile_id": host_profile_id,
        "security_notes": payload.security_notes,
        "society_id": society_id,
        "status": VisitorStatus.pending.value,
    })

    result = client.table(VISITORS_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Visitor creation failed - no data returned")
    return normalize_visitor(result.data[0])


def apply_visitor_action(client, visitor_id: str, action: VisitorAction, context: TenantContext) -> dict:
    """approve / reject / check-in / check-out a visitor of the caller's society."""
    society_id = context.require_society()
    status, stamp_column = VISITOR_ACTIONS[action]

    now = utc_now_iso()
    updates = {"status": status.value, "updated_at": now}
    if stamp_column:
        updates[stamp_column] = now

    logger.info(f"Visitor {visitor_id}: {action.value}")

    result = (
        client.table(VISITORS_TABLE)
        .update(updates)
        .eq("id", visitor_id)
        .eq("society_id", society_id)
        .execute()
    )
    if not result.data:
        raise HTTPException(404, f"Visitor {visitor_id} not found")
    return normalize_visitor(result.data[0])
