"""
Spa Booking API - Testimonial Route Handlers
=============================================

What:  POST/GET /api/testimonials and DELETE /api/testimonials/{id}.
Who:   POST from the public review form; GET by the testimonials carousel;
       DELETE from the admin page.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spa_booking.database import get_db_session
from spa_booking.schemas.common import ErrorResponse, MessageResponse
from spa_booking.schemas.testimonial import TestimonialCreate, TestimonialResponse
from spa_booking.services.testimonial_service import testimonial_service

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])


@router.post(
    "",
    status_code=201,
    response_model=TestimonialResponse,
    responses={
        400: {"description": "Missing field or rating outside 1-5", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Submit a testimonial",
)
async def create_testimonial(
    payload: TestimonialCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TestimonialResponse:
    return await testimonial_service.create_testimonial(db, payload)


@router.get(
    "",
    response_model=List[TestimonialResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List testimonials, newest first",
)
async def list_testimonials(
    db: AsyncSession = Depends(get_db_session),
) -> List[TestimonialResponse]:
    return await testimonial_service.list_testimonials(db)


@router.delete(
    "/{testimonial_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "No testimonial with this ID", "model": ErrorResponse},
        500: {"description": "Store error (message includes the store's text)", "model": ErrorResponse},
    },
    summary="Delete a testimonial by ID",
)
async def delete_testimonial(
    testimonial_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    message = await testimonial_service.delete_testimonial(db, testimonial_id)
    return MessageResponse(message=message)
