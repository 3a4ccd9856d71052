# services/roles.py
"""
Custom per-society roles (society_roles) and the permissions granted to
each of them (society_role_permissions).
"""

from typing import List

from fastapi import HTTPException

from core.logging_config import logger
from core.permissions import PERMISSION_DESCRIPTIONS, PLATFORM_PERMISSIONS
from models.role import SocietyRoleCreate
from models.snapshot import ResourceSnapshot, TenantContext


ROLES_TABLE = "society_roles"
ROLE_PERMISSIONS_TABLE = "society_role_permissions"

# platform permissions (and the "*" master key) stay with super admins
ASSIGNABLE_PERMISSIONS = [p for p in PERMISSION_DESCRIPTIONS if p not in PLATFORM_PERMISSIONS]


def fetch_roles(client, context: TenantContext) -> ResourceSnapshot:
    society_id = context.require_society()

    roles = (
        client.table(ROLES_TABLE)
        .select("*")
        .eq("society_id", society_id)
        .order("created_at")
        .execute()
    ).data or []

    return ResourceSnapshot(resource="roles", items=roles, stats={"total": len(roles)})


def get_society_role(client, role_id: str, society_id: str) -> dict:
    rows = (
        client.table(ROLES_TABLE)
        .select("*")
        .eq("id", role_id)
        .eq("society_id", society_id)
        .limit(1)
        .execute()
    ).data or []
    if not rows:
        raise HTTPException(404, f"Role {role_id} not found")
    return rows[0]


def create_role(client, payload: SocietyRoleCreate, context: TenantContext) -> dict:
    society_id = context.require_society()

    data = {
        "society_id": society_id,
        "name": payload.name,
        "description": payload.description or f"Custom role: {payload.name}",
        "is_default": payload.is_default,
    }
    result = client.table(ROLES_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "Role creation failed - no data returned")

    logger.info(f"Role '{payload.name}' created in society {society_id}")
    return result.data[0]


def delete_role(client, role_id: str, context: TenantContext):
    society_id = context.require_society()
    get_society_role(client, role_id, society_id)

    client.table(ROLE_PERMISSIONS_TABLE).delete().eq("role_id", role_id).execute()
    client.table(ROLES_TABLE).delete().eq("id", role_id).eq("society_id", society_id).execute()
    logger.info(f"Role {role_id} deleted from society {society_id}")


def get_role_permissions(client, role_id: str, context: TenantContext) -> dict:
    """Every known permission mapped to whether the role grants it."""
    get_society_role(client, role_id, context.require_society())

    rows = (
        client.table(ROLE_PERMISSIONS_TABLE)
        .select("permission")
        .eq("role_id", role_id)
        .execute()
    ).data or []
    granted = {row["permission"] for row in rows}

    return {permission: permission in granted for permission in ASSIGNABLE_PERMISSIONS}


def set_role_permissions(client, role_id: str, permissions: List[str], context: TenantContext) -> dict:
    """Replace the role's permissions: add the missing ones, remove the rest."""
    get_society_role(client, role_id, context.require_society())

    unknown = sorted(set(permissions) - set(ASSIGNABLE_PERMISSIONS))
    if unknown:
        raise HTTPException(400, f"Unknown permissions: {', '.join(unknown)}")

    rows = (
        client.table(ROLE_PERMISSIONS_TABLE)
        .select("permission")
        .eq("role_id", role_id)
        .execute()
    ).data or []
    current = {row["permission"] for row in rows}
    wanted = set(permissions)

    to_add = sorted(wanted - current)
    to_remove = sorted(current - wanted)

    if to_add:
        client.table(ROLE_PERMISSIONS_TABLE).insert(
            [{"role_id": role_id, "permission": p} for p in to_add]
        ).execute()
    if to_remove:
        (
            client.table(ROLE_PERMISSIONS_TABLE)
            .delete()
            .eq("role_id", role_id)
            .in_("permission", to_remove)
            .execute()
        )

    logger.info(f"Role {role_id} permissions: +{to_add} -{to_remove}")
    return {permission: permission in wanted for permission in ASSIGNABLE_PERMISSIONS}
