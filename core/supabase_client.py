# core/supabase_client.py

from typing import Optional

from supabase import create_client, acreate_client, Client, AsyncClient
from core.config import settings
from core.logging_config import logger


# One long-lived handle per process; see reset_clients()
_client: Optional[Client] = None
_async_client: Optional[AsyncClient] = None


# ============================================================
# Supabase Client (ALWAYS service role)
# ============================================================

def get_supabase_client() -> Client:
    """
    Returns the shared Supabase client built with the SERVICE ROLE KEY.
    REQUIRED for:
        - auth.admin.create_user / update_user_by_id
        - full read/write on all society tables
    Returns None when credentials are missing.
    """
    global _client

    if _client is not None:
        return _client

    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY  # MUST be service-role

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    try:
        _client = create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None

    return _client


def get_auth_client() -> Client:
    """
    Fresh anon-key client for end-user sign-in.
    Never shared: signing in stores the user's session on the client.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_ANON_KEY or settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials for auth client")
        return None

    return create_client(supabase_url, supabase_key)


# ============================================================
# Async client (realtime channels)
# ============================================================

async def get_async_supabase_client() -> AsyncClient:
    """
    Shared async client. Realtime postgres_changes channels are only
    available on the async client.
    """
    global _async_client

    if _async_client is not None:
        return _async_client

    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

    if not supabase_url or not supabase_key:
        raise RuntimeError("Supabase not configured")

    _async_client = await acreate_client(supabase_url, supabase_key)
    return _async_client


def reset_clients():
    """Drop cached handles (credential rotation, tests)."""
    global _client, _async_client
    _client = None
    _async_client = None


# ============================================================
# Ping Supabase for health checks
# ============================================================

HEALTH_TABLES = ["profiles", "societies", "complaints", "visitors", "events", "announcements"]


def ping_supabase() -> dict:
    """
    Simple connectivity check.
    Does NOT query auth tables.
    """
    client = get_supabase_client()
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    results = {}
    status = "ok"

    for t in HEALTH_TABLES:
        try:
            res = client.table(t).select("id").limit(1).execute()
            results[t] = {
                "status": "ok",
                "rows_found": len(res.data or [])
            }
        except Exception as err:
            status = "degraded"
            results[t] = {"status": "error", "detail": str(err)}

    return {
        "service": "Supabase",
        "status": status,
        "tables": results,
    }
