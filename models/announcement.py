# models/announcement.py

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    is_urgent: bool = False
    is_pinned: bool = False
    expires_at: Optional[datetime] = None
    attachment_urls: Optional[List[str]] = None

    @field_validator("expires_at", mode="before")
    def parse_expires_at(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v
