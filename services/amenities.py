# services/amenities.py

from datetime import datetime, timedelta
from typing import List

from fastapi import HTTPException

from core.config import settings
from core.utils import sanitize, utc_now
from models.amenity import BookingCreate, BookingUpdate
from models.snapshot import ResourceSnapshot, TenantContext


AMENITIES_TABLE = "amenities"
BOOKINGS_TABLE = "amenity_bookings"

# Bookings carry no society_id; the inner join on amenities scopes them
BOOKINGS_SELECT = """
    *,
    amenities!inner(name, society_id),
    profiles!inner(full_name, unit_number)
"""


# ============================================================
# READ
# ============================================================
def fetch_amenities(client, context: TenantContext) -> ResourceSnapshot:
    """Amenities by name plus the latest bookings across them."""
    society_id = context.require_society()

    amenities = (
        client.table(AMENITIES_TABLE)
        .select("*")
        .eq("society_id", society_id)
        .order("name")
        .execute()
    ).data or []

    bookings = (
        client.table(BOOKINGS_TABLE)
        .select(BOOKINGS_SELECT)
        .eq("amenities.society_id", society_id)
        .order("created_at", desc=True)
        .limit(settings.BOOKINGS_FETCH_LIMIT)
        .execute()
    ).data or []

    return ResourceSnapshot(
        resource="amenities",
        items=amenities,
        related={"bookings": bookings},
        stats=compute_amenity_stats(amenities, bookings),
    )


def compute_amenity_stats(amenities: List[dict], bookings: List[dict]) -> dict:
    return {
        "total_amenities": len(amenities),
        "active_amenities": sum(1 for a in amenities if a.get("is_active")),
        "total_bookings": len(bookings),
        "pending_bookings": sum(1 for b in bookings if b.get("status") == "pending"),
    }


# ============================================================
# BOOKINGS
# ============================================================
def get_society_amenity(client, amenity_id: str, society_id: str) -> dict:
    rows = (
        client.table(AMENITIES_TABLE)
        .select("*")
        .eq("id", amenity_id)
        .eq("society_id", society_id)
        .limit(1)
        .execute()
    ).data or []

    if not rows:
        raise HTTPException(404, f"Amenity {amenity_id} not found")
    return rows[0]


def validate_booking(amenity: dict, payload: BookingCreate, today=None):
    """Enforce the amenity's own booking rules."""
    today = today or utc_now().date()

    if not amenity.get("is_active", True):
        raise HTTPException(400, f"{amenity.get('name', 'Amenity')} is not accepting bookings")

    if payload.booking_date < today:
        raise HTTPException(400, "Cannot book a date in the past")

    advance_days = amenity.get("advance_booking_days")
    if advance_days and payload.booking_date > today + timedelta(days=int(advance_days)):
        raise HTTPException(400, f"Bookings open only {advance_days} days in advance")

    max_hours = amenity.get("max_hours")
    if max_hours:
        start = datetime.combine(payload.booking_date, payload.start_time)
        end = datetime.combine(payload.booking_date, payload.end_time)
        if (end - start) > timedelta(hours=float(max_hours)):
            raise HTTPException(400, f"Bookings are limited to {max_hours} hours")


def create_booking(client, payload: BookingCreate, context: TenantContext) -> dict:
    society_id = context.require_society()
    amenity = get_society_amenity(client, payload.amenity_id, society_id)
    validate_booking(amenity, payload)

    data = sanitize({
        "amenity_id": payload.amenity_id,
        "profile_id": context.profile_id,
        "booking_date": payload.booking_date.isoformat(),
        "start_time": payload.start_time.isoformat(),
        "end_time": payload.end_time.isoformat(),
        "purpose": payload.purpose,
        "status": "pending",
        "payment_status": "pending",
    })

    result = client.table(BOOKINGS_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Booking creation failed - no data returned")
    return result.data[0]


def update_booking(client, booking_id: str, payload: BookingUpdate, context: TenantContext) -> dict:
    society_id = context.require_society()

    rows = (
        client.table(BOOKINGS_TABLE)
        .select("id, amenities!inner(society_id)")
        .eq("id", booking_id)
        .eq("amenities.society_id", society_id)
        .limit(1)
        .execute()
    ).data or []
    if not rows:
        raise HTTPException(404, f"Booking {booking_id} not found")

    changes = {k: str(v) for k, v in payload.model_dump(exclude_none=True).items()}
    if not changes:
        raise HTTPException(400, "Nothing to update")

    result = (
        client.table(BOOKINGS_TABLE)
        .update(changes)
        .eq("id", booking_id)
        .execute()
    )
    if not result.data:
        raise HTTPException(404, f"Booking {booking_id} not found")
    return result.data[0]
