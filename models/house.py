# models/house.py

from typing import Optional
from pydantic import BaseModel, Field


class HouseBase(BaseModel):
    block: str = Field(..., min_length=1)
    unit: str = Field(..., min_length=1)
    floor: Optional[str] = None
    house_type: Optional[str] = None
    area_sqft: Optional[float] = Field(None, gt=0)
    is_occupied: bool = False


class HouseCreate(HouseBase):
    """society_id is taken from the caller, never from the body."""
    pass


class HouseUpdate(BaseModel):
    block: Optional[str] = None
    unit: Optional[str] = None
    floor: Optional[str] = None
    house_type: Optional[str] = None
    area_sqft: Optional[float] = Field(None, gt=0)
    is_occupied: Optional[bool] = None
