# core/admin_helpers.py
"""
Operator tasks shared by the jobs/ scripts.

They run outside FastAPI, so failures are plain exceptions (the job
logs them and exits 1) instead of HTTPException.
"""

import secrets
from typing import Dict, Iterable, Optional, Tuple

from core.logging_config import logger
from core.permissions import ROLE_PERMISSIONS, PERMISSION_DESCRIPTIONS
from core.utils import utc_now_iso


RANDOM_PASSWORD_CHARSET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!@#$%^&*()"
)

SOCIETY_TABLES = [
    "profiles",
    "societies",
    "houses",
    "amenities",
    "amenity_bookings",
    "complaints",
    "visitors",
    "events",
    "announcements",
    "maintenance_fees",
    "society_roles",
    "society_role_permissions",
    "role_permissions",
]


def generate_random_password(length: int = 32) -> str:
    return "".join(secrets.choice(RANDOM_PASSWORD_CHARSET) for _ in range(length))


def find_profile_by_email(client, email: str) -> Optional[dict]:
    rows = (
        client.table("profiles")
        .select("id, user_id, email, role, is_active")
        .eq("email", email)
        .limit(1)
        .execute()
    ).data or []
    return rows[0] if rows else None


# ============================================================
# SUPER ADMIN
# ============================================================
def grant_super_admin(client, email: str) -> Tuple[str, str]:
    """
    Make `email` a super admin.

    Unknown email → auth user created with a random password and
    role=super_admin metadata, profile row upserted.
    Known email → profile role updated.

    Returns (operation, user_id) with operation "created" or "updated".
    """
    email = email.strip().lower()
    full_name = email.split("@")[0]

    logger.info("Checking if user exists...")
    profile = find_profile_by_email(client, email)

    if profile is None:
        logger.info("User not found. Creating new user...")
        created = client.auth.admin.create_user(
            {
                "email": email,
                "password": generate_random_password(),
                "email_confirm": True,
                "user_metadata": {"role": "super_admin", "full_name": full_name},
            }
        )
        if not created or not created.user:
            raise RuntimeError("Failed to create user: no user data returned")

        user_id = created.user.id
        client.table("profiles").upsert(
            {
                "id": user_id,
                "user_id": user_id,
                "email": email,
                "full_name": full_name,
                "role": "super_admin",
                "is_active": True,
                "updated_at": utc_now_iso(),
            },
            on_conflict="id",
        ).execute()

        logger.info(f"Created new user with ID: {user_id}")
        return "created", user_id

    user_id = profile.get("user_id") or profile["id"]
    logger.info(f"User found with ID: {user_id}")

    client.table("profiles").update(
        {"role": "super_admin", "updated_at": utc_now_iso()}
    ).eq("id", profile["id"]).execute()

    try:
        client.auth.admin.update_user_by_id(user_id, {"user_metadata": {"role": "super_admin"}})
    except Exception as e:
        # profiles.role is what the API reads
        logger.warning(f"Auth metadata update failed for {user_id}: {e}")

    return "updated", user_id


def ensure_active_super_admin_profile(client, email: str) -> dict:
    """Force role=super_admin and is_active=true on the profile row."""
    result = (
        client.table("profiles")
        .update({"role": "super_admin", "is_active": True, "updated_at": utc_now_iso()})
        .eq("email", email.strip().lower())
        .execute()
    )
    if not result.data:
        raise RuntimeError(f"No profile row found for {email}")
    return result.data[0]


# ============================================================
# ROLE PERMISSIONS
# ============================================================
def build_role_permission_rows(role: Optional[str] = None) -> list:
    if role is not None and role not in ROLE_PERMISSIONS:
        raise ValueError(f"Unknown role '{role}'. Choose from: {', '.join(ROLE_PERMISSIONS)}")

    roles = [role] if role else list(ROLE_PERMISSIONS)
    return [
        {
            "role": name,
            "permission": permission,
            "description": PERMISSION_DESCRIPTIONS.get(permission),
        }
        for name in roles
        for permission in ROLE_PERMISSIONS[name]
    ]


def seed_role_permissions(client, role: Optional[str] = None) -> int:
    """Upsert the default role → permission map; re-running updates in place."""
    rows = build_role_permission_rows(role)
    client.table("role_permissions").upsert(rows, on_conflict="role,permission").execute()
    return len(rows)


# ============================================================
# TABLE CHECK
# ============================================================
def check_tables(client, tables: Iterable[str] = SOCIETY_TABLES) -> Dict[str, dict]:
    """Row count per table, or the error that made it unreachable."""
    results = {}
    for table in tables:
        try:
            res = client.table(table).select("id", count="exact").limit(1).execute()
            results[table] = {"status": "ok", "count": res.count or 0}
        except Exception as e:
            results[table] = {"status": "error", "detail": str(e)}
    return results
