# models/event.py

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class EventCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    event_date: datetime
    location: Optional[str] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    requires_rsvp: bool = False

    # Normalize timestamps like "2025-01-01T00:00:00Z"
    @field_validator("event_date", mode="before")
    def parse_event_date(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v
