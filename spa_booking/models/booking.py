"""
Spa Booking API - Booking SQLAlchemy Model
===========================================

What:  ORM model for the `booking_spa12` table.
Who:   Used by BookingService (list/create/delete) and PaymentService (confirm).

Table Design Rationale:
    - Integer identity id: the frontend shows and deletes bookings by it
    - service / duration / name / phone: free text exactly as the form sends it
    - price: NUMERIC(10,2), normalized from "$45.00"-style input before insert
    - datetime: the appointment slot; the list endpoint orders by it
    - payment_status: NULL until a payment is confirmed, then 'completed'

Index on datetime DESC serves GET /booking_spa12 (newest slot first).
"""

import datetime as dt
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from spa_booking.database import Base

PAYMENT_COMPLETED = "completed"


class Booking(Base):
    """
    A single spa appointment.

    Lifecycle:
        1. Created by POST /booking_spa12 (payment_status = NULL)
        2. POST /api/payments/confirm sets payment_status = 'completed'
           (one-way; nothing sets it back)
        3. Deleted by DELETE /booking_spa12/{id}
    """

    __tablename__ = "booking_spa12"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[str] = mapped_column(Text, nullable=False)

    # asdecimal=False: the API exposes price as a JSON number
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    datetime: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False)
    payment_status: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_booking_spa12_price_non_negative"),
        Index("idx_booking_spa12_datetime", datetime.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, service='{self.service}', "
            f"datetime='{self.datetime}', payment_status={self.payment_status!r})>"
        )
