"""
Spa Booking API - Booking Service
==================================

What:  Business logic behind /booking_spa12: list, create, delete.
How:   Each operation is one SQL statement:
           list    SELECT ... ORDER BY datetime DESC
           create  INSERT ... RETURNING *
           delete  DELETE ... WHERE id = :id RETURNING id
       Validation happens first and raises before any statement is issued.

Error Handling Strategy:
    Store failures are logged with detail and re-raised as StoreError with a
    generic message. Zero affected rows on delete becomes NotFoundError.
"""

import datetime as dt
import logging
from typing import List

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from spa_booking.exceptions import NotFoundError, StoreError
from spa_booking.models.booking import Booking
from spa_booking.schemas.booking import (
    BOOKING_REQUIRED_FIELDS,
    BookingCreate,
    BookingResponse,
    NewBooking,
)
from spa_booking.utils.validators import (
    normalize_price,
    parse_id,
    parse_timestamp,
    require_fields,
)

logger = logging.getLogger(__name__)

STORE_ERRORS = (SQLAlchemyError, OSError)


class BookingService:
    """
    Stateless; receives the request's session on every call.

    Responsibilities:
        - list_bookings(): every booking, latest slot first
        - validate_new_booking(): BookingCreate → NewBooking or ValidationError
        - create_booking(): validate, insert, return the stored row
        - delete_booking(): delete by id, 404 when nothing matched
    """

    async def list_bookings(self, db: AsyncSession) -> List[BookingResponse]:
        try:
            result = await db.execute(select(Booking).order_by(desc(Booking.datetime)))
            bookings = result.scalars().all()
        except STORE_ERRORS as e:
            logger.error("Error fetching bookings from booking_spa12 table: %s", e, exc_info=True)
            raise StoreError(
                message="Failed to retrieve bookings from the database.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        return [BookingResponse.model_validate(booking) for booking in bookings]

    def validate_new_booking(self, payload: BookingCreate) -> NewBooking:
        """
        All six fields must be present and non-empty.

        price is normalized ("$45.00" → 45.0) and datetime parsed, so the
        insert only ever sees typed values.
        """
        require_fields(payload, BOOKING_REQUIRED_FIELDS, "All booking fields are required.")

        slot = parse_timestamp(payload.datetime)
        if slot.tzinfo is not None:
            # Column is TIMESTAMP WITHOUT TIME ZONE; store offsets as UTC
            slot = slot.astimezone(dt.timezone.utc).replace(tzinfo=None)

        return NewBooking(
            service=payload.service,
            duration=payload.duration,
            price=normalize_price(payload.price),
            name=payload.name,
            phone=payload.phone,
            datetime=slot,
        )

    async def create_booking(self, db: AsyncSession, payload: BookingCreate) -> BookingResponse:
        record = self.validate_new_booking(payload)
        booking = Booking(**record.model_dump())

        try:
            db.add(booking)
            await db.commit()
        except STORE_ERRORS as e:
            logger.error("Error adding booking to booking_spa12 table: %s", e, exc_info=True)
            raise StoreError(
                message="Failed to add booking to the database.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        logger.info("Booking %s created: %s on %s", booking.id, booking.service, booking.datetime)
        return BookingResponse.model_validate(booking)

    async def delete_booking(self, db: AsyncSession, booking_id: int) -> str:
        """Returns the confirmation message; raises NotFoundError if no row matched."""
        booking_id = parse_id(booking_id)
        statement = (
            delete(Booking)
            .where(Booking.id == booking_id)
            .returning(Booking.id)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await db.execute(statement)
            deleted_id = result.scalar_one_or_none()
            await db.commit()
        except STORE_ERRORS as e:
            logger.error("Error deleting booking from booking_spa12 table: %s", e, exc_info=True)
            raise StoreError(
                message="Failed to delete booking from the database.",
                context={"booking_id": booking_id, "error_type": type(e).__name__},
            ) from e

        if deleted_id is None:
            raise NotFoundError(resource="Booking", resource_id=booking_id)

        logger.info("Booking %s deleted", booking_id)
        return f"Booking with ID {booking_id} deleted successfully."


# ── Singleton Instance ────────────────────────────────────────────────────
booking_service = BookingService()
