# models/member.py

from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .enums import ProfileRole


# -------------------------------------------------
# Member details written to profiles
# -------------------------------------------------
class MemberDetails(BaseModel):
    family_members: Optional[List[str]] = None
    role: Optional[ProfileRole] = ProfileRole.resident
    is_owner: Optional[bool] = False
    unit_number: Optional[str] = None
    emergency_contact: Optional[str] = None
    vehicle_details: Optional[str] = None
    is_active: Optional[bool] = True

    @field_validator("family_members", mode="before")
    def drop_blank_family_members(cls, v):
        if not v:
            return None
        return [name.strip() for name in v if name and name.strip()] or None


# -------------------------------------------------
# Create (or update by email)
# -------------------------------------------------
class MemberCreate(BaseModel):
    """
    Adds a member to the caller's society.
    Existing profiles with the same email are updated instead.
    """
    email: EmailStr
    full_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    member_data: MemberDetails = Field(default_factory=MemberDetails)


class MemberUpsertResult(BaseModel):
    operation: str                        # "created" | "updated"
    user_id: str
    temporary_password: Optional[str] = None
