# models/amenity.py

from datetime import date, time
from typing import Optional
from pydantic import BaseModel, model_validator

from .enums import BookingStatus, PaymentStatus


class BookingCreate(BaseModel):
    amenity_id: str
    booking_date: date
    start_time: time
    end_time: time
    purpose: Optional[str] = None

    @model_validator(mode="after")
    def check_time_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingUpdate(BaseModel):
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None
