# services/societies.py
"""
Platform-level society management for super admins. Not tenant-scoped:
these calls see every society.
"""

from fastapi import HTTPException

from core.logging_config import logger
from core.utils import sanitize
from models.snapshot import ResourceSnapshot
from models.society import SocietyCreate


SOCIETIES_TABLE = "societies"


def normalize_society(row: dict) -> dict:
    """Flatten the embedded profiles(count) into member_count."""
    society = dict(row)
    counts = society.pop("profiles", None) or []
    society["member_count"] = counts[0].get("count", 0) if counts else 0
    return society


def fetch_societies(client) -> ResourceSnapshot:
    rows = (
        client.table(SOCIETIES_TABLE)
        .select("*, profiles(count)")
        .order("created_at", desc=True)
        .execute()
    ).data or []

    societies = [normalize_society(r) for r in rows]
    return ResourceSnapshot(
        resource="societies",
        items=societies,
        stats={
            "total": len(societies),
            "total_members": sum(s["member_count"] for s in societies),
        },
    )


def create_society(client, payload: SocietyCreate) -> dict:
    data = sanitize(payload.model_dump(mode="json"))

    result = client.table(SOCIETIES_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Society creation failed - no data returned")

    society = result.data[0]
    logger.info(f"Society created: {society.get('id')} ({data['name']})")
    return society


def delete_society(client, society_id: str):
    # members and other rows referencing the society make this a foreign-key error
    result = client.table(SOCIETIES_TABLE).delete().eq("id", society_id).execute()
    if not result.data:
        raise HTTPException(404, f"Society {society_id} not found")
    logger.info(f"Society deleted: {society_id}")
