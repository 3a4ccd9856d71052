from typing import Optional, List
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from core.supabase_client import get_supabase_client
from core.permissions import ROLE_PERMISSIONS
from core.logging_config import logger
from models.snapshot import TenantContext


bearer_scheme = HTTPBearer()


# ============================================================
# Current User Model (auth identity + society profile)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    auth_user_id: str               # Supabase Auth UID
    email: str
    role: str

    full_name: Optional[str] = None
    phone: Optional[str] = None

    # From the profiles row
    profile_id: Optional[str] = None
    society_id: Optional[str] = None
    unit_number: Optional[str] = None

    # Per-user overrides from app_metadata
    permissions: Optional[List[str]] = []

    def tenant(self) -> TenantContext:
        return TenantContext(
            society_id=self.society_id,
            profile_id=self.profile_id,
            role=self.role,
        )


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================================================
# Profile lookup (profiles.user_id → auth UID)
# ============================================================
def load_profile(client, user_id: str) -> Optional[dict]:
    result = (
        client.table("profiles")
        .select("id, society_id, role, full_name, phone, unit_number, is_active")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    rows = result.data or []
    return rows[0] if rows else None


# ============================================================
# TOKEN → CurrentUser (Supabase validates the JWT)
# ============================================================
def authenticate_token(token: Optional[str]) -> CurrentUser:
    """
    Shared by the HTTP bearer dependency and the live WebSocket.
    Raises 401 for missing/invalid tokens.
    """
    if not token:
        raise _unauthorized()

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        auth_resp = client.auth.get_user(token)
    except Exception:
        raise _unauthorized()

    if not auth_resp or not auth_resp.user or not auth_resp.user.email:
        raise _unauthorized()

    auth_user = auth_resp.user
    metadata = auth_user.user_metadata or {}

    try:
        profile = load_profile(client, auth_user.id) or {}
    except Exception as e:
        logger.error(f"Profile lookup failed for {auth_user.id}: {e}")
        raise HTTPException(500, "Unable to load user profile")

    if profile and profile.get("is_active") is False:
        raise HTTPException(403, "Account is deactivated")

    # Role and society come from profiles only; user_metadata is writable by the user
    if profile:
        role = profile.get("role") or "resident"
    else:
        role = "guest"
    if role not in ROLE_PERMISSIONS:
        role = "guest"

    # Overrides live in app_metadata, which only the service role can write
    app_metadata = getattr(auth_user, "app_metadata", None) or {}
    extended_permissions = app_metadata.get("permissions", []) if isinstance(app_metadata, dict) else []
    if not isinstance(extended_permissions, list):
        extended_permissions = []

    return CurrentUser(
        id=auth_user.id,
        auth_user_id=auth_user.id,
        email=auth_user.email,
        role=role,
        full_name=profile.get("full_name") or metadata.get("full_name"),
        phone=profile.get("phone") or metadata.get("phone"),
        profile_id=profile.get("id"),
        society_id=profile.get("society_id"),
        unit_number=profile.get("unit_number"),
        permissions=extended_permissions,
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:
    return authenticate_token(credentials.credentials)
