"""
Spa Booking API - Request Validators
=====================================

What:  Small parsing/validation helpers shared by the services.
Why:   Every endpoint follows the same contract: validate first, raise a
       structured ValidationError (→ 400) before the store is touched.
"""

import datetime as dt
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from spa_booking.exceptions import ValidationError

_NON_PRICE_CHARS = re.compile(r"[^0-9.]")
_TIMESTAMP = TypeAdapter(dt.datetime)
_CENTS = Decimal("0.01")


def wire_name(payload: BaseModel, attribute: str) -> str:
    """Name of a field as the client sends it (its alias, if any)."""
    field = type(payload).model_fields[attribute]
    return field.alias or attribute


def require_fields(payload: BaseModel, fields: Iterable[str], message: str) -> None:
    """
    Raise ValidationError if any of `fields` is absent or falsy on `payload`.

    The error message ends with the missing wire names, e.g.
    "All booking fields are required. Missing: phone, datetime".
    """
    missing = [wire_name(payload, name) for name in fields if not getattr(payload, name)]
    if missing:
        raise ValidationError(
            message=f"{message} Missing: {', '.join(missing)}",
            missing_fields=missing,
        )


def normalize_price(raw: Any) -> float:
    """
    "$1,250.50" → 1250.5

    Every character that is not a digit or a decimal point is dropped, then
    the rest is rounded to cents the way the NUMERIC(10, 2) column stores
    it, so the created booking and the listed one carry the same price.
    Input that leaves nothing parseable ("free", "1.2.3") is rejected
    instead of being stored as NaN.
    """
    cleaned = _NON_PRICE_CHARS.sub("", str(raw))
    try:
        return float(Decimal(cleaned).quantize(_CENTS, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValidationError(
            message=f"Price '{raw}' is not a valid amount.",
            field="price",
        ) from None


def parse_timestamp(raw: Any, field: str = "datetime") -> dt.datetime:
    """Parses an ISO-8601 date-time ("2025-07-10T14:00", "2025-07-10 14:00:00Z")."""
    try:
        return _TIMESTAMP.validate_python(raw)
    except PydanticValidationError:
        raise ValidationError(
            message=f"'{raw}' is not a valid date and time.",
            field=field,
        ) from None


def parse_id(raw: Any, field: str = "id") -> int:
    """Booking/testimonial ids are positive integers."""
    try:
        value = int(str(raw).strip())
    except ValueError:
        value = 0
    if value < 1:
        raise ValidationError(message=f"'{raw}' is not a valid ID.", field=field)
    return value
