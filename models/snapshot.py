# models/snapshot.py

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from core.errors import NoSocietyError
from core.pagination import build_page


ADMIN_ROLES = ("super_admin", "society_admin", "committee_member")


# -------------------------------------------------
# Tenant passed explicitly into every fetch
# -------------------------------------------------
class TenantContext(BaseModel):
    society_id: Optional[str] = None
    profile_id: Optional[str] = None
    role: str = "resident"

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    def require_society(self) -> str:
        """Return the society id or raise NoSocietyError."""
        if not self.society_id:
            raise NoSocietyError()
        return self.society_id


# -------------------------------------------------
# View state of one tenant-scoped collection
# -------------------------------------------------
class ResourceSnapshot(BaseModel):
    resource: str
    items: List[Dict[str, Any]] = Field(default_factory=list)
    related: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)
    stats: Dict[str, Any] = Field(default_factory=dict)
    loading: bool = False
    error: Optional[str] = None
    version: int = 0

    def to_page(self, page: int, page_size: int) -> dict:
        """REST shape: one page of items plus stats and navigation."""
        items, pagination = build_page(self.items, page, page_size)
        return {
            "success": True,
            "data": items,
            "stats": self.stats,
            "related": self.related,
            "pagination": pagination,
        }
