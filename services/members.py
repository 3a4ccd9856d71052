# services/members.py

import secrets
from typing import List, Optional

from fastapi import HTTPException

from core.logging_config import logger
from core.utils import utc_now_iso
from models.member import MemberCreate, MemberUpsertResult
from models.snapshot import ResourceSnapshot, TenantContext


MEMBERS_TABLE = "profiles"

TEMP_PASSWORD_CHARSET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnpqrstuvwxyz23456789!@#$%"


# ============================================================
# READ
# ============================================================
def fetch_members(client, context: TenantContext) -> ResourceSnapshot:
    """Active members of the society, newest first."""
    society_id = context.require_society()

    result = (
        client.table(MEMBERS_TABLE)
        .select("*")
        .eq("society_id", society_id)
        .eq("is_active", True)
        .order("created_at", desc=True)
        .execute()
    )
    members = result.data or []

    return ResourceSnapshot(
        resource="members",
        items=members,
        stats=compute_member_stats(members),
    )


def compute_member_stats(members: List[dict]) -> dict:
    # A member with no listed family still counts as one resident
    return {
        "total_members": len(members),
        "owners": sum(1 for m in members if m.get("is_owner") is True),
        "tenants": sum(1 for m in members if m.get("is_owner") is False),
        "total_residents": sum(len(m.get("family_members") or []) or 1 for m in members),
    }


# ============================================================
# CREATE / UPDATE BY EMAIL
# ============================================================
def generate_temporary_password(length: int = 12) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_CHARSET) for _ in range(length))


def find_profile_by_email(client, email: str) -> Optional[dict]:
    result = (
        client.table(MEMBERS_TABLE)
        .select("id, user_id, society_id")
        .eq("email", email)
        .limit(1)
        .execute()
    )
    rows = result.data or []
    return rows[0] if rows else None


def upsert_member(client, payload: MemberCreate, society_id: str) -> MemberUpsertResult:
    """
    Add a member to a society.

    An existing profile with the same email is updated (profile row and
    auth metadata). Otherwise an auth user is created with a temporary
    password and its profile row inserted.
    """
    email = payload.email.strip().lower()
    details = payload.member_data
    role = str(details.role or "resident")
    now = utc_now_iso()

    base_profile = {
        "full_name": payload.full_name.strip(),
        "email": email,
        "phone": payload.phone,
        "family_members": details.family_members,
        "role": role,
        "is_owner": bool(details.is_owner),
        "society_id": society_id,
        "unit_number": details.unit_number,
        "emergency_contact": details.emergency_contact,
        "vehicle_details": details.vehicle_details,
        "is_active": True if details.is_active is None else details.is_active,
        "updated_at": now,
    }
    user_metadata = {
        "full_name": base_profile["full_name"],
        "phone": payload.phone,
        "role": role,
        "society_id": society_id,
    }

    existing = find_profile_by_email(client, email)

    if existing:
        if existing.get("society_id") and existing["society_id"] != society_id:
            raise HTTPException(409, "This email belongs to a member of another society")

        user_id = existing.get("user_id") or existing.get("id")
        if not user_id:
            raise HTTPException(400, "Existing member record is misconfigured. Please contact support.")

        client.table(MEMBERS_TABLE).update(base_profile).eq("id", existing["id"]).execute()

        try:
            client.auth.admin.update_user_by_id(
                user_id, {"email": email, "user_metadata": user_metadata}
            )
        except Exception as e:
            # The profile row is what the app reads; metadata is best-effort
            logger.warning(f"Auth metadata update failed for {user_id}: {e}")

        logger.info(f"Member updated: {email} (society {society_id})")
        return MemberUpsertResult(operation="updated", user_id=user_id)

    temporary_password = generate_temporary_password()
    created = client.auth.admin.create_user(
        {
            "email": email,
            "password": temporary_password,
            "email_confirm": True,
            "user_metadata": user_metadata,
        }
    )
    if not created or not created.user:
        raise HTTPException(500, "Failed to create auth user")

    user_id = created.user.id
    client.table(MEMBERS_TABLE).insert(
        {**base_profile, "id": user_id, "user_id": user_id, "created_at": now}
    ).execute()

    logger.info(f"Member created: {email} (society {society_id})")
    return MemberUpsertResult(
        operation="created",
        user_id=user_id,
        temporary_password=temporary_password,
    )
