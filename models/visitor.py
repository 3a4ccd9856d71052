# models/visitor.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class VisitorCreate(BaseModel):
    """
    Registered by a resident (host) or by security at the gate.
    host_profile_id defaults to the caller's profile.
    """
    visitor_name: str = Field(..., min_length=1)
    visitor_phone: Optional[str] = None
    purpose: str = Field(..., min_length=1)
    visit_date: date
    host_profile_id: Optional[str] = None
    security_notes: Optional[str] = None
