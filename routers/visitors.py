# routers/visitors.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.enums import VisitorAction
from models.snapshot import TenantContext
from models.visitor import VisitorCreate
from services.visitors import fetch_visitors, create_visitor, apply_visitor_action


router = APIRouter(
    prefix="/visitors",
    tags=["Visitors"],
)


@router.get(
    "",
    summary="Visitor log",
    dependencies=[Depends(requires_permission("visitors:read"))],
)
def list_visitors(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_visitors, context, page, page_size, "Failed to fetch visitors")


@router.post(
    "",
    summary="Register a visitor",
    dependencies=[Depends(requires_permission("visitors:create"))],
)
def register_visitor(
    payload: VisitorCreate,
    context: TenantContext = Depends(get_tenant_context),
):
    visitor = safe_call("Failed to create visitor", create_visitor, payload, context)
    return {"success": True, "data": visitor}


# -----------------------------------------------------
# approve | reject | check-in | check-out
# -----------------------------------------------------
@router.post(
    "/{visitor_id}/{action}",
    summary="Gate action on a visitor",
    dependencies=[Depends(requires_permission("visitors:write"))],
)
def visitor_action(
    visitor_id: str,
    action: VisitorAction,
    context: TenantContext = Depends(get_tenant_context),
):
    visitor = safe_call("Failed to update visitor", apply_visitor_action, visitor_id, action, context)
    return {"success": True, "data": visitor}
