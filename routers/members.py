# routers/members.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.logging_config import logger
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.member import MemberCreate, MemberUpsertResult
from models.snapshot import TenantContext
from services.members import fetch_members, upsert_member


router = APIRouter(
    prefix="/members",
    tags=["Members"],
)


# -----------------------------------------------------
# LIST MEMBERS
# -----------------------------------------------------
@router.get(
    "",
    summary="List society members",
    dependencies=[Depends(requires_permission("members:read"))],
)
def list_members(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_members, context, page, page_size, "Failed to fetch members")


# -----------------------------------------------------
# ADD / UPDATE MEMBER BY EMAIL
# -----------------------------------------------------
@router.post(
    "",
    summary="Add a member (or update the existing one with that email)",
    response_model=MemberUpsertResult,
    dependencies=[Depends(requires_permission("members:write"))],
)
def add_member(
    payload: MemberCreate,
    context: TenantContext = Depends(get_tenant_context),
):
    result = safe_call("Failed to save member", upsert_member, payload, context.require_society())
    logger.info(f"Member {result.operation}: {payload.email}")
    return result
