# models/role.py

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class SocietyRoleCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_default: bool = False

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class RolePermissionsUpdate(BaseModel):
    """Full replacement of a custom role's permission list."""
    permissions: List[str] = Field(default_factory=list)
