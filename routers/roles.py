# routers/roles.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.role import SocietyRoleCreate, RolePermissionsUpdate
from models.snapshot import TenantContext
from services.roles import (
    fetch_roles,
    create_role,
    delete_role,
    get_role_permissions,
    set_role_permissions,
)


router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
)


# -----------------------------------------------------
# ROLES
# -----------------------------------------------------
@router.get("", summary="Custom roles of the society", dependencies=[Depends(requires_permission("roles:read"))])
def list_roles(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_roles, context, page, page_size, "Failed to fetch roles")


@router.post("", summary="Create a custom role", dependencies=[Depends(requires_permission("roles:write"))])
def add_role(payload: SocietyRoleCreate, context: TenantContext = Depends(get_tenant_context)):
    role = safe_call("Failed to create role", create_role, payload, context)
    return {"success": True, "data": role}


@router.delete("/{role_id}", summary="Delete a custom role", dependencies=[Depends(requires_permission("roles:write"))])
def remove_role(role_id: str, context: TenantContext = Depends(get_tenant_context)):
    safe_call("Failed to delete role. Make sure no users are assigned to it", delete_role, role_id, context)
    return {"success": True}


# -----------------------------------------------------
# PERMISSIONS OF A ROLE
# -----------------------------------------------------
@router.get(
    "/{role_id}/permissions",
    summary="Permission checklist of a role",
    dependencies=[Depends(requires_permission("roles:read"))],
)
def read_role_permissions(role_id: str, context: TenantContext = Depends(get_tenant_context)):
    permissions = safe_call("Failed to load permissions", get_role_permissions, role_id, context)
    return {"success": True, "data": permissions}


@router.put(
    "/{role_id}/permissions",
    summary="Replace the permissions of a role",
    dependencies=[Depends(requires_permission("roles:write"))],
)
def replace_role_permissions(
    role_id: str,
    payload: RolePermissionsUpdate,
    context: TenantContext = Depends(get_tenant_context),
):
    permissions = safe_call(
        "Failed to update permissions", set_role_permissions, role_id, payload.permissions, context
    )
    return {"success": True, "data": permissions}
