"""
Spa Booking API - Simulated Payment Schemas
============================================

What:  Request and response records for /api/payments/initiate and
       /api/payments/confirm.

Payments are a simulation: nothing here is persisted except the booking's
payment_status flip on confirm. Keys are camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from spa_booking.schemas.booking import BookingResponse

PAYMENT_PENDING = "pending"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class _CamelRequest(_CamelModel):

    @field_validator("*", mode="before")
    @classmethod
    def falsy_is_missing(cls, value):
        # 0 and false count as absent, before numbers are coerced to "0"
        return value or None


class PaymentInitiateRequest(_CamelRequest):
    amount: Optional[str] = Field(default=None, examples=["$50"])
    service_name: Optional[str] = Field(default=None, examples=["Massage"])
    booking_id: Optional[str] = Field(default=None, examples=["1"])


class PaymentInitiateResponse(_CamelModel):
    """
    Simulated gateway answer.

    transaction_id is generated per request ("TXN-<epoch ms>-<9 base36>")
    and exists only in this response; nothing stores it.
    """
    message: str
    qr_code_url: str
    transaction_id: str
    status: str = PAYMENT_PENDING


class PaymentConfirmRequest(_CamelRequest):
    booking_id: Optional[str] = Field(default=None, examples=["1"])
    # Optional and informational: logged, shape-checked, not cross-checked
    transaction_id: Optional[str] = Field(default=None, examples=["TXN-1720612345678-k3j9x0abc"])


class PaymentConfirmResponse(_CamelModel):
    message: str
    booking: BookingResponse
