# routers/amenities.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.amenity import BookingCreate, BookingUpdate
from models.snapshot import TenantContext
from services.amenities import fetch_amenities, create_booking, update_booking


router = APIRouter(
    prefix="/amenities",
    tags=["Amenities"],
)


@router.get(
    "",
    summary="List amenities with recent bookings",
    dependencies=[Depends(requires_permission("amenities:read"))],
)
def list_amenities(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_amenities, context, page, page_size, "Failed to fetch amenities")


@router.post(
    "/bookings",
    summary="Book an amenity",
    dependencies=[Depends(requires_permission("amenities:book"))],
)
def book_amenity(
    payload: BookingCreate,
    context: TenantContext = Depends(get_tenant_context),
):
    booking = safe_call("Failed to create booking", create_booking, payload, context)
    return {"success": True, "data": booking}


@router.patch(
    "/bookings/{booking_id}",
    summary="Confirm, cancel or settle a booking",
    dependencies=[Depends(requires_permission("amenities:write"))],
)
def change_booking(
    booking_id: str,
    payload: BookingUpdate,
    context: TenantContext = Depends(get_tenant_context),
):
    booking = safe_call("Failed to update booking", update_booking, booking_id, payload, context)
    return {"success": True, "data": booking}
