"""
Spa Booking API - Booking Schemas
==================================

What:  Request and response records for /booking_spa12.
How:   BookingCreate is the loose wire shape (every field optional, numbers
       accepted as strings) so that a missing field becomes our own 400 with
       an enumerated message rather than FastAPI's 422. BookingService turns
       it into NewBooking, the typed value the insert is built from.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BOOKING_REQUIRED_FIELDS = ("service", "duration", "price", "name", "phone", "datetime")


class BookingCreate(BaseModel):
    """Raw booking form payload (POST /booking_spa12)."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    service: Optional[str] = Field(default=None, examples=["Swedish Massage"])
    duration: Optional[str] = Field(default=None, examples=["60 min"])
    price: Optional[str] = Field(default=None, examples=["$45.00"])
    name: Optional[str] = Field(default=None, examples=["Jane Doe"])
    phone: Optional[str] = Field(default=None, examples=["+1 555 0100"])
    datetime: Optional[str] = Field(default=None, examples=["2025-07-10T14:00:00"])

    @field_validator("*", mode="before")
    @classmethod
    def falsy_is_missing(cls, value):
        # 0 and false count as absent, before numbers are coerced to "0"
        return value or None


class NewBooking(BaseModel):
    """Validated booking, ready to insert."""
    service: str
    duration: str
    price: float = Field(ge=0)
    name: str
    phone: str
    datetime: dt.datetime


class BookingResponse(BaseModel):
    """
    A stored booking row, keys exactly as the columns are named.

    payment_status is null until the payment is confirmed, then "completed".
    """
    id: int
    service: str
    duration: str
    price: float
    name: str
    phone: str
    datetime: dt.datetime
    payment_status: Optional[str] = None

    model_config = {"from_attributes": True}
