# routers/houses.py

from fastapi import APIRouter, Depends

from core.config import settings
from core.permission_helpers import requires_permission, get_tenant_context
from core.supabase_helpers import list_resource, safe_call
from models.house import HouseCreate, HouseUpdate
from models.snapshot import TenantContext
from services.houses import fetch_houses, create_house, update_house, delete_house


router = APIRouter(
    prefix="/houses",
    tags=["Houses"],
)


@router.get(
    "",
    summary="Houses by block and unit",
    dependencies=[Depends(requires_permission("houses:read"))],
)
def list_houses(
    page: int = 1,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    context: TenantContext = Depends(get_tenant_context),
):
    return list_resource(fetch_houses, context, page, page_size, "Failed to fetch houses")


@router.post("", summary="Add a house", dependencies=[Depends(requires_permission("houses:write"))])
def add_house(payload: HouseCreate, context: TenantContext = Depends(get_tenant_context)):
    house = safe_call("Failed to add house", create_house, payload, context)
    return {"success": True, "data": house}


@router.patch("/{house_id}", summary="Update a house", dependencies=[Depends(requires_permission("houses:write"))])
def edit_house(house_id: str, payload: HouseUpdate, context: TenantContext = Depends(get_tenant_context)):
    house = safe_call("Failed to update house", update_house, house_id, payload, context)
    return {"success": True, "data": house}


@router.delete("/{house_id}", summary="Delete a house", dependencies=[Depends(requires_permission("houses:write"))])
def remove_house(house_id: str, context: TenantContext = Depends(get_tenant_context)):
    safe_call("Failed to delete house", delete_house, house_id, context)
    return {"success": True}
