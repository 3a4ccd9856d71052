# models/complaint.py

from typing import List, Optional
from pydantic import BaseModel, Field

from .enums import ComplaintPriority, ComplaintStatus


class ComplaintCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = "general"
    priority: ComplaintPriority = ComplaintPriority.medium
    attachment_urls: Optional[List[str]] = None


class ComplaintUpdate(BaseModel):
    """Committee-side update (PATCH)."""
    status: Optional[ComplaintStatus] = None
    priority: Optional[ComplaintPriority] = None
    assigned_to: Optional[str] = None
    resolution_notes: Optional[str] = None
