"""
Spa Booking API - Testimonial SQLAlchemy Model
===============================================

What:  ORM model for the `testimonials` table (customer reviews).
Who:   Used by TestimonialService.

Rows are immutable once written: the API can create, list and delete them,
never edit. created_at is assigned by the database and read back by the same
INSERT (eager_defaults), so creating a testimonial is one statement.
"""

import datetime as dt
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from spa_booking.database import Base

MIN_RATING = 1
MAX_RATING = 5


class Testimonial(Base):
    """A review left by a customer on the spa website."""

    __tablename__ = "testimonials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reviewer_name: Mapped[str] = mapped_column(Text, nullable=False)
    reviewer_email: Mapped[str] = mapped_column(Text, nullable=False)
    review_title: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    review_text: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    genuine_opinion: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_testimonials_rating_range",
        ),
        Index("idx_testimonials_created_at", created_at.desc()),
    )

    __mapper_args__ = {"eager_defaults": True}

    def __repr__(self) -> str:
        return f"<Testimonial(id={self.id}, rating={self.rating}, created_at='{self.created_at}')>"
