"""
Spa Booking API - Testimonial Service
======================================

What:  Create, list and delete customer testimonials.

Validation order on create:
    1. reviewerName, reviewerEmail, reviewText, rating must be truthy
    2. genuineOpinion must be present (false is a valid answer)
    3. rating must be within 1..5 (its own 400 message)
"""

import logging
from typing import List

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from spa_booking.exceptions import NotFoundError, StoreError, ValidationError
from spa_booking.models.testimonial import MAX_RATING, MIN_RATING, Testimonial
from spa_booking.schemas.testimonial import (
    TESTIMONIAL_REQUIRED_FIELDS,
    NewTestimonial,
    TestimonialCreate,
    TestimonialResponse,
)
from spa_booking.utils.validators import parse_id, wire_name

logger = logging.getLogger(__name__)

STORE_ERRORS = (SQLAlchemyError, OSError)


def _driver_message(error: Exception) -> str:
    """The underlying driver's text when SQLAlchemy wrapped it."""
    return str(getattr(error, "orig", None) or error) or "Unknown database error"


class TestimonialService:
    """Stateless; receives the request's session on every call."""

    def validate_new_testimonial(self, payload: TestimonialCreate) -> NewTestimonial:
        missing = [
            wire_name(payload, name)
            for name in TESTIMONIAL_REQUIRED_FIELDS
            if getattr(payload, name) is None or getattr(payload, name) == ""
        ]
        if payload.genuine_opinion is None:
            missing.append(wire_name(payload, "genuine_opinion"))
        if missing:
            raise ValidationError(
                message=(
                    "All testimonial fields (except title) are required. "
                    f"Missing: {', '.join(missing)}"
                ),
                missing_fields=missing,
            )

        if not MIN_RATING <= payload.rating <= MAX_RATING:
            raise ValidationError(
                message=f"Rating must be between {MIN_RATING} and {MAX_RATING}.",
                field="rating",
                context={"rating": payload.rating},
            )

        return NewTestimonial(
            reviewer_name=payload.reviewer_name,
            reviewer_email=payload.reviewer_email,
            review_title=payload.review_title or None,
            review_text=payload.review_text,
            rating=payload.rating,
            genuine_opinion=payload.genuine_opinion,
        )

    async def create_testimonial(
        self, db: AsyncSession, payload: TestimonialCreate
    ) -> TestimonialResponse:
        record = self.validate_new_testimonial(payload)
        testimonial = Testimonial(**record.model_dump())

        try:
            db.add(testimonial)
            await db.commit()
        except STORE_ERRORS as e:
            logger.error("Error adding testimonial to database: %s", e, exc_info=True)
            raise StoreError(
                message="Failed to add testimonial to the database.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        logger.info("Testimonial %s created (rating=%d)", testimonial.id, testimonial.rating)
        return TestimonialResponse.model_validate(testimonial)

    async def list_testimonials(self, db: AsyncSession) -> List[TestimonialResponse]:
        try:
            result = await db.execute(
                select(Testimonial).order_by(desc(Testimonial.created_at), desc(Testimonial.id))
            )
            testimonials = result.scalars().all()
        except STORE_ERRORS as e:
            logger.error("Error fetching testimonials from database: %s", e, exc_info=True)
            raise StoreError(
                message="Failed to retrieve testimonials from the database.",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        return [TestimonialResponse.model_validate(t) for t in testimonials]

    async def delete_testimonial(self, db: AsyncSession, testimonial_id: int) -> str:
        """
        Same contract as booking delete, except the 500 message carries the
        store's own error text (the admin page shows it verbatim).
        """
        testimonial_id = parse_id(testimonial_id)
        statement = (
            delete(Testimonial)
            .where(Testimonial.id == testimonial_id)
            .returning(Testimonial.id)
            .execution_options(synchronize_session=False)
        )

        try:
            result = await db.execute(statement)
            deleted_id = result.scalar_one_or_none()
            await db.commit()
        except STORE_ERRORS as e:
            detail = _driver_message(e)
            logger.error("Error deleting testimonial from database: %s", detail)
            raise StoreError(
                message=f"Failed to delete testimonial from the database: {detail}",
                context={"testimonial_id": testimonial_id, "error_type": type(e).__name__},
            ) from e

        if deleted_id is None:
            raise NotFoundError(resource="Testimonial", resource_id=testimonial_id)

        logger.info("Testimonial %s deleted", testimonial_id)
        return f"Testimonial with ID {testimonial_id} deleted successfully."


# ── Singleton Instance ────────────────────────────────────────────────────
testimonial_service = TestimonialService()
