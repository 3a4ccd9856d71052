# routers/maintenance.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.complaint import ComplaintCreate, ComplaintUpdate
from models.snapshot import TenantContext
from services.maintenance import fetch_maintenance, create_complaint, update_complaint


router = APIRouter(
    prefix="/maintenance",
    tags=["Maintenance"],
)


@router.get(
    "",
    summary="Maintenance requests",
    dependencies=[Depends(requires_permission("maintenance:read"))],
)
def list_requests(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_maintenance, context, page, page_size, "Failed to fetch maintenance requests")


@router.post(
    "",
    summary="Raise a maintenance request",
    dependencies=[Depends(requires_permission("maintenance:create"))],
)
def raise_request(
    payload: ComplaintCreate,
    context: TenantContext = Depends(get_tenant_context),
):
    request = safe_call("Failed to create maintenance request", create_complaint, payload, context)
    return {"success": True, "data": request}


@router.patch(
    "/{complaint_id}",
    summary="Assign, progress or resolve a request",
    dependencies=[Depends(requires_permission("maintenance:write"))],
)
def update_request(
    complaint_id: str,
    payload: ComplaintUpdate,
    context: TenantContext = Depends(get_tenant_context),
):
    request = safe_call("Failed to update maintenance request", update_complaint, complaint_id, payload, context)
    return {"success": True, "data": request}
