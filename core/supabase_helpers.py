# core/supabase_helpers.py

from fastapi import HTTPException

from core.config import settings
from core.errors import handle_supabase_error
from core.pagination import validate_pagination
from core.supabase_client import get_supabase_client
from models.snapshot import TenantContext


# =================================================================
#  ROUTER-SIDE WRAPPERS AROUND THE RESOURCE SERVICES
# =================================================================
# Services raise HTTPException for business rules and let Supabase
# errors through; these wrappers turn the latter into readable HTTP
# errors so every router behaves the same way.
# =================================================================

def require_client():
    """Service-role client or 500 when Supabase is not configured."""
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


def safe_call(operation: str, func, *args, **kwargs):
    """Run a service call against the shared client."""
    client = require_client()
    try:
        return func(client, *args, **kwargs)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, operation)


def list_resource(fetcher, context: TenantContext, page, page_size, operation: str) -> dict:
    """
    Fetch the tenant's whole collection and return one page of it:
        {success, data, stats, related, pagination}
    """
    page, page_size = validate_pagination(page, page_size, settings.MAX_PAGE_SIZE)
    snapshot = safe_call(operation, fetcher, context)
    return snapshot.to_page(page, page_size)
