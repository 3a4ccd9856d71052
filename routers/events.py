# routers/events.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.event import EventCreate
from models.snapshot import TenantContext
from services.events import fetch_events, create_event


router = APIRouter(
    prefix="/events",
    tags=["Events"],
)


@router.get(
    "",
    summary="List Events",
    dependencies=[Depends(requires_permission("events:read"))],
)
def list_events(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_events, context, page, page_size, "Failed to fetch events")


@router.post(
    "",
    summary="Create Event",
    dependencies=[Depends(requires_permission("events:write"))],
)
def add_event(
    payload: EventCreate,
    context: TenantContext = Depends(get_tenant_context),
):
    event = safe_call("Failed to create event", create_event, payload, context)
    return {"success": True, "data": event}
