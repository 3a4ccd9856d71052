# routers/societies.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.pagination import validate_pagination
from core.permission_helpers import requires_permission
from core.supabase_helpers import safe_call
from models.society import SocietyCreate
from services.societies import fetch_societies, create_society, delete_society


router = APIRouter(
    prefix="/societies",
    tags=["Societies"],
)


@router.get(
    "",
    summary="All societies with member counts (super admin)",
    dependencies=[Depends(requires_permission("societies:read"))],
)
def list_societies(page: int = 1, page_size: int = settings.DEFAULT_PAGE_SIZE):
    page, page_size = validate_pagination(page, page_size, settings.MAX_PAGE_SIZE)
    snapshot = safe_call("Failed to fetch societies", fetch_societies)
    return snapshot.to_page(page, page_size)


@router.post(
    "",
    summary="Create a society (super admin)",
    dependencies=[Depends(requires_permission("societies:write"))],
)
def add_society(payload: SocietyCreate):
    society = safe_call("Failed to create society", create_society, payload)
    return {"success": True, "data": society}


@router.delete(
    "/{society_id}",
    summary="Delete a society (super admin)",
    dependencies=[Depends(requires_permission("societies:delete"))],
)
def remove_society(society_id: str):
    safe_call("Failed to delete society", delete_society, society_id)
    return {"success": True}
