# routers/dashboard.py

from fastapi import APIRouter, Depends

from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import safe_call
from models.snapshot import TenantContext
from services.activity import fetch_activity
from services.dashboard import fetch_dashboard


router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(requires_permission("dashboard:read"))],
)


@router.get("/stats", summary="Headline numbers (society-wide for admins, personal for residents)")
def dashboard_stats(context: TenantContext = Depends(get_tenant_context)):
    snapshot = safe_call("Failed to fetch stats", fetch_dashboard, context)
    return {"success": True, "data": snapshot.stats}


@router.get("/activity", summary="Recent activity feed")
def recent_activity(context: TenantContext = Depends(get_tenant_context)):
    snapshot = safe_call("Failed to fetch activities", fetch_activity, context)
    return {"success": True, "data": snapshot.items}
