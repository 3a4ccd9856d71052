# services/houses.py

from fastapi import HTTPException

from core.logging_config import logger
from core.utils import sanitize, utc_now_iso
from models.house import HouseCreate, HouseUpdate
from models.snapshot import ResourceSnapshot, TenantContext


HOUSES_TABLE = "houses"


def fetch_houses(client, context: TenantContext) -> ResourceSnapshot:
    society_id = context.require_society()

    houses = (
        client.table(HOUSES_TABLE)
        .select("*")
        .eq("society_id", society_id)
        .order("block")
        .order("unit")
        .execute()
    ).data or []

    return ResourceSnapshot(
        resource="houses",
        items=houses,
        stats={
            "total": len(houses),
            "occupied": sum(1 for h in houses if h.get("is_occupied")),
        },
    )


def create_house(client, payload: HouseCreate, context: TenantContext) -> dict:
    society_id = context.require_society()
    data = sanitize({**payload.model_dump(), "society_id": society_id})

    result = client.table(HOUSES_TABLE).insert(data).execute()
    if not result.data:
        raise HTTPException(500, "House creation failed - no data returned")

    logger.info(f"House {data['block']}-{data['unit']} added to society {society_id}")
    return result.data[0]


def update_house(client, house_id: str, payload: HouseUpdate, context: TenantContext) -> dict:
    society_id = context.require_society()

    changes = sanitize(payload.model_dump(exclude_unset=True))
    if not changes:
        raise HTTPException(400, "Nothing to update")
    changes["updated_at"] = utc_now_iso()

    result = (
        client.table(HOUSES_TABLE)
        .update(changes)
        .eq("id", house_id)
        .eq("society_id", society_id)
        .execute()
    )
    if not result.data:
        raise HTTPException(404, f"House {house_id} not found")
    return result.data[0]


def delete_house(client, house_id: str, context: TenantContext):
    society_id = context.require_society()

    result = (
        client.table(HOUSES_TABLE)
        .delete()
        .eq("id", house_id)
        .eq("society_id", society_id)
        .execute()
    )
    if not result.data:
        raise HTTPException(404, f"House {house_id} not found")
    logger.info(f"House {house_id} deleted from society {society_id}")
