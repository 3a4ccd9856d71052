# routers/announcements.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.announcement import AnnouncementCreate
from models.snapshot import TenantContext
from services.announcements import fetch_announcements, create_announcement


router = APIRouter(
    prefix="/announcements",
    tags=["Announcements"],
)


@router.get(
    "",
    summary="Current announcements",
    dependencies=[Depends(requires_permission("announcements:read"))],
)
def list_announcements(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_announcements, context, page, page_size, "Failed to fetch announcements")


@router.post(
    "",
    summary="Publish an announcement",
    dependencies=[Depends(requires_permission("announcements:write"))],
)
def publish_announcement(
    payload: AnnouncementCreate,
    context: TenantContext = Depends(get_tenant_context),
):
    announcement = safe_call("Failed to create announcement", create_announcement, payload, context)
    return {"success": True, "data": announcement}
