# services/registry.py
"""
Resource name → how to fetch it, which tables signal a change and what
to do with stale data when a fetch fails.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fastapi import HTTPException

from core.live_resource import LiveResource
from core.realtime import ChangeFeed
from models.snapshot import TenantContext
from services.activity import fetch_activity
from services.amenities import fetch_amenities
from services.announcements import fetch_announcements
from services.dashboard import fetch_dashboard
from services.events import fetch_events
from services.houses import fetch_houses
from services.maintenance import fetch_maintenance
from services.members import fetch_members
from services.roles import fetch_roles
from services.visitors import fetch_visitors


@dataclass(frozen=True)
class ResourceDefinition:
    name: str
    fetcher: Callable
    feeds: Tuple[ChangeFeed, ...]
    permission: str
    clear_on_error: bool = False


RESOURCES: Dict[str, ResourceDefinition] = {
    d.name: d
    for d in (
        ResourceDefinition(
            "members", fetch_members,
            (ChangeFeed("profiles"),),
            "members:read",
        ),
        ResourceDefinition(
            "amenities", fetch_amenities,
            # bookings have no society_id column to filter on
            (ChangeFeed("amenities"), ChangeFeed("amenity_bookings", tenant_column=None)),
            "amenities:read",
        ),
        ResourceDefinition(
            "visitors", fetch_visitors,
            (ChangeFeed("visitors"),),
            "visitors:read",
        ),
        ResourceDefinition(
            "events", fetch_events,
            (ChangeFeed("events"),),
            "events:read",
        ),
        ResourceDefinition(
            "maintenance", fetch_maintenance,
            (ChangeFeed("complaints"),),
            "maintenance:read",
        ),
        ResourceDefinition(
            "announcements", fetch_announcements,
            (ChangeFeed("announcements"),),
            "announcements:read",
        ),
        ResourceDefinition(
            "dashboard", fetch_dashboard,
            (),
            "dashboard:read",
            clear_on_error=True,
        ),
        ResourceDefinition(
            "activity", fetch_activity,
            (
                ChangeFeed("complaints", tenant_column=None),
                ChangeFeed("maintenance_fees", tenant_column=None),
                ChangeFeed("visitors", tenant_column=None),
            ),
            "dashboard:read",
            clear_on_error=True,
        ),
        ResourceDefinition(
            "houses", fetch_houses,
            (ChangeFeed("houses"),),
            "houses:read",
        ),
        ResourceDefinition(
            "roles", fetch_roles,
            (ChangeFeed("society_roles"),),
            "roles:read",
        ),
    )
}


def get_resource_definition(name: str) -> ResourceDefinition:
    definition = RESOURCES.get(name)
    if not definition:
        raise HTTPException(404, f"Unknown resource '{name}'")
    return definition


def build_live_resource(name: str, context: TenantContext, **kwargs) -> LiveResource:
    """LiveResource for `name`; kwargs are passed through (client_factory, subscribe)."""
    definition = get_resource_definition(name)
    return LiveResource(
        definition.name,
        definition.fetcher,
        context,
        definition.feeds,
        clear_on_error=definition.clear_on_error,
        **kwargs,
    )
