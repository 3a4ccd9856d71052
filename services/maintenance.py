# services/maintenance.py

from typing import List

from fastapi import HTTPException

from core.logging_config import logger
from core.utils import sanitize, utc_now_iso
from models.complaint import ComplaintCreate, ComplaintUpdate
from models.enums import ComplaintStatus, MaintenanceStatus
from models.snapshot import ResourceSnapshot, TenantContext


COMPLAINTS_TABLE = "complaints"
COMPLAINTS_SELECT = "*, profiles!complaints_profile_id_fkey(full_name, unit_number)"

DONE_STATUSES = (ComplaintStatus.resolved.value, ComplaintStatus.closed.value)


def to_maintenance_status(complaint_status) -> str:
    if complaint_status in DONE_STATUSES:
        return MaintenanceStatus.completed.value
    if complaint_status == ComplaintStatus.in_progress.value:
        return MaintenanceStatus.in_progress.value
    return MaintenanceStatus.pending.value


def to_maintenance_request(complaint: dict) -> dict:
    """Board row: simplified status, raw status kept in complaint_status."""
    return {
        **complaint,
        "status": to_maintenance_status(complaint.get("status")),
        "complaint_status": complaint.get("status"),
    }


# ============================================================
# READ
# ============================================================
def fetch_maintenance(client, context: TenantContext) -> ResourceSnapshot:
    society_id = context.require_society()

    result = (
        client.table(COMPLAINTS_TABLE)
        .select(COMPLAINTS_SELECT)
        .eq("society_id", society_id)
        .order("created_at", desc=True)
        .execute()
    )
    complaints = result.data or []

    return ResourceSnapshot(
        resource="maintenance",
        items=[to_maintenance_request(c) for c in complaints],
        stats=compute_maintenance_stats(complaints),
    )


def compute_maintenance_stats(complaints: List[dict]) -> dict:
    """Counts on the stored complaint status, not the board status."""
    statuses = [c.get("status") for c in complaints]
    return {
        "total": len(complaints),
        "pending": statuses.count(ComplaintStatus.open.value),
        "in_progress": statuses.count(ComplaintStatus.in_progress.value),
        "completed": sum(1 for s in statuses if s in DONE_STATUSES),
    }


# ============================================================
# WRITE
# ============================================================
def create_complaint(client, payload: ComplaintCreate, context: TenantContext) -> dict:
    society_id = context.require_society()
    if not context.profile_id:
        raise HTTPException(400, "A profile is required to raise a request")

    data = sanitize({
        **payload.model_dump(mode="json"),
        "society_id": society_id,
        "profile_id": context.profile_id,
        "status": ComplaintStatus.open.value,
    })

    result = client.table(COMPLAINTS_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Request creation failed - no data returned")
    return to_maintenance_request(result.data[0])


def update_complaint(client, complaint_id: str, payload: ComplaintUpdate, context: TenantContext) -> dict:
    society_id = context.require_society()

    changes = sanitize(payload.model_dump(mode="json", exclude_none=True))
    if not changes:
        raise HTTPException(400, "Nothing to update")

    if changes.get("status") in DONE_STATUSES:
        changes["resolved_at"] = utc_now_iso()
    changes["updated_at"] = utc_now_iso()

    result = (
        client.table(COMPLAINTS_TABLE)
        .update(changes)
        .eq("id", complaint_id)
        .eq("society_id", society_id)
        .execute()
    )
    if not result.data:
        raise HTTPException(404, f"Request {complaint_id} not found")

    logger.info(f"Maintenance request {complaint_id} updated: {sorted(changes)}")
    return to_maintenance_request(result.data[0])
