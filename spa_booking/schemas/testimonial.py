"""
Spa Booking API - Testimonial Schemas
======================================

What:  Request and response records for /api/testimonials.

The review form posts camelCase keys (reviewerName, genuineOpinion, ...);
stored rows come back snake_case, as the columns are named.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Must be truthy; reviewTitle is optional, genuineOpinion is checked separately
TESTIMONIAL_REQUIRED_FIELDS = ("reviewer_name", "reviewer_email", "review_text", "rating")


class TestimonialCreate(BaseModel):
    """Raw review form payload (POST /api/testimonials)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reviewer_name: Optional[str] = None
    reviewer_email: Optional[str] = None
    review_title: Optional[str] = None
    review_text: Optional[str] = None
    rating: Optional[int] = None
    genuine_opinion: Optional[bool] = None


class NewTestimonial(BaseModel):
    """Validated testimonial, ready to insert."""
    reviewer_name: str
    reviewer_email: str
    review_title: Optional[str] = None
    review_text: str
    rating: int = Field(ge=1, le=5)
    genuine_opinion: bool


class TestimonialResponse(BaseModel):
    """A stored testimonial row."""
    id: int
    reviewer_name: str
    reviewer_email: str
    review_title: Optional[str] = None
    review_text: str
    rating: int
    genuine_opinion: bool
    created_at: dt.datetime

    model_config = {"from_attributes": True}
