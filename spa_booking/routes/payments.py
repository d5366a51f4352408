"""
Spa Booking API - Simulated Payment Route Handlers
===================================================

What:  POST /api/payments/initiate and POST /api/payments/confirm.
Why:   Lets the frontend walk through the QR payment flow without a real
       gateway. Initiation answers after a fixed delay; confirmation marks
       the booking paid.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spa_booking.database import get_db_session
from spa_booking.schemas.common import ErrorResponse
from spa_booking.schemas.payment import (
    PaymentConfirmRequest,
    PaymentConfirmResponse,
    PaymentInitiateRequest,
    PaymentInitiateResponse,
)
from spa_booking.services.payment_service import payment_service

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.post(
    "/initiate",
    response_model=PaymentInitiateResponse,
    responses={400: {"description": "Missing field", "model": ErrorResponse}},
    summary="Start a simulated QR payment",
)
async def initiate_payment(payload: PaymentInitiateRequest) -> PaymentInitiateResponse:
    return await payment_service.initiate_payment(payload)


@router.post(
    "/confirm",
    response_model=PaymentConfirmResponse,
    responses={
        400: {"description": "Missing field", "model": ErrorResponse},
        404: {"description": "No booking with this ID", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Confirm a simulated payment (webhook stand-in)",
)
async def confirm_payment(
    payload: PaymentConfirmRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PaymentConfirmResponse:
    return await payment_service.confirm_payment(db, payload)
