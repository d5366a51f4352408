"""
Spa Booking API - Simulated Payment Service
============================================

What:  Stand-in for a QR-code payment gateway.
How:
    initiate_payment: no store access. Builds the QR image URL, generates a
        transaction id, waits a fixed delay (asyncio.sleep, so only this
        request waits) and answers "pending".
    confirm_payment: one UPDATE ... RETURNING that flips the booking's
        payment_status to 'completed'.

Known gap:
    Confirmation trusts the bookingId alone. The transaction id from
    initiation is never stored, so it cannot be cross-checked; when a client
    sends one it is only shape-checked and logged.
"""

import asyncio
import logging
import re
import secrets
import string
import time
from urllib.parse import urlencode

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from spa_booking.config import settings
from spa_booking.exceptions import NotFoundError, StoreError, ValidationError
from spa_booking.models.booking import PAYMENT_COMPLETED, Booking
from spa_booking.schemas.booking import BookingResponse
from spa_booking.schemas.payment import (
    PAYMENT_PENDING,
    PaymentConfirmRequest,
    PaymentConfirmResponse,
    PaymentInitiateRequest,
    PaymentInitiateResponse,
)
from spa_booking.utils.validators import parse_id, require_fields

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase
TRANSACTION_ID_PATTERN = re.compile(r"^TXN-\d+-[0-9a-z]+$")


def generate_transaction_id() -> str:
    """TXN-<epoch milliseconds>-<9 random base36 characters>"""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"TXN-{int(time.time() * 1000)}-{suffix}"


def build_qr_code_url(amount: str, booking_id: str) -> str:
    """QR image URL carrying the amount (currency symbol dropped) and booking id."""
    query = urlencode({"amount": amount.replace("$", "").strip(), "bookingId": booking_id})
    return f"{settings.payment_qr_base_url}?{query}"


class PaymentService:

    async def initiate_payment(self, payload: PaymentInitiateRequest) -> PaymentInitiateResponse:
        require_fields(
            payload,
            ("amount", "service_name", "booking_id"),
            "Payment amount, service name, and booking ID are required to initiate payment.",
        )
        logger.info(
            "Simulating payment initiation for Booking ID: %s, Service: %s, Amount: %s",
            payload.booking_id,
            payload.service_name,
            payload.amount,
        )

        response = PaymentInitiateResponse(
            message="Payment initiation successful (simulated). Scan QR to complete.",
            qr_code_url=build_qr_code_url(payload.amount, payload.booking_id),
            transaction_id=generate_transaction_id(),
            status=PAYMENT_PENDING,
        )

        # Models gateway latency; suspends this request only
        await asyncio.sleep(settings.payment_delay_seconds)
        return response

    async def confirm_payment(
        self, db: AsyncSession, payload: PaymentConfirmRequest
    ) -> PaymentConfirmResponse:
        require_fields(payload, ("booking_id",), "Booking ID is required to confirm payment.")
        booking_id = parse_id(payload.booking_id, field="bookingId")

        if payload.transaction_id and not TRANSACTION_ID_PATTERN.match(payload.transaction_id):
            raise ValidationError(
                message=f"'{payload.transaction_id}' is not a valid transaction ID.",
                field="transactionId",
            )

        statement = (
            update(Booking)
            .where(Booking.id == booking_id)
            .values(payment_status=PAYMENT_COMPLETED)
            .returning(Booking)
        )

        try:
            result = await db.execute(statement)
            booking = result.scalar_one_or_none()
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Error confirming payment for booking %s: %s", booking_id, e, exc_info=True)
            raise StoreError(
                message="Failed to update payment status in the database.",
                context={"booking_id": booking_id, "error_type": type(e).__name__},
            ) from e

        if booking is None:
            logger.warning(
                "Attempted to confirm payment for non-existent booking ID: %s", booking_id
            )
            raise NotFoundError(
                resource="Booking",
                resource_id=booking_id,
                message=f"Booking with ID {booking_id} not found for payment confirmation.",
            )

        logger.info(
            "Payment confirmed for Booking ID: %s (transaction %s). Status updated to '%s'.",
            booking_id,
            payload.transaction_id or "n/a",
            PAYMENT_COMPLETED,
        )
        return PaymentConfirmResponse(
            message=f"Payment for booking ID {booking_id} confirmed successfully.",
            booking=BookingResponse.model_validate(booking),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
payment_service = PaymentService()
