"""
Spa Booking API - Booking Route Handlers
=========================================

What:  GET/POST /booking_spa12 and DELETE /booking_spa12/{id}.
How:   Thin handlers: FastAPI parses the JSON body into BookingCreate,
       BookingService validates and persists, global handlers map errors.

The path keeps the table name the frontend was built against.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spa_booking.database import get_db_session
from spa_booking.schemas.booking import BookingCreate, BookingResponse
from spa_booking.schemas.common import ErrorResponse, MessageResponse
from spa_booking.services.booking_service import booking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/booking_spa12", tags=["Bookings"])


@router.get(
    "",
    response_model=List[BookingResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all bookings, latest appointment first",
)
async def list_bookings(db: AsyncSession = Depends(get_db_session)) -> List[BookingResponse]:
    return await booking_service.list_bookings(db)


@router.post(
    "",
    status_code=201,
    response_model=BookingResponse,
    responses={
        400: {"description": "Missing or invalid field", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a booking",
    description=(
        "All of service, duration, price, name, phone and datetime are required. "
        "price may carry currency symbols and separators (\"$1,250.50\"); it is "
        "stored as a plain number."
    ),
)
async def create_booking(
    payload: BookingCreate,
    db: AsyncSession = Depends(get_db_session),
) -> BookingResponse:
    return await booking_service.create_booking(db, payload)


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "No booking with this ID", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a booking by ID",
)
async def delete_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    message = await booking_service.delete_booking(db, booking_id)
    return MessageResponse(message=message)
