# models/society.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class SocietyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    registration_number: Optional[str] = None
