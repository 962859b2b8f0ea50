"""
Validation of booking batches submitted to ``POST /api/data``.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from booking_gateway.errors import BookingValidationError
from booking_gateway.schemas import BookingIn

BOOKING_EXAMPLE = {
    "title": "string",
    "date": "YYYY-MM-DD",
    "startTime": "HH:MM",
    "endTime": "HH:MM",
}


def parse_booking_batch(payload: Any) -> list[BookingIn]:
    """
    Validate a whole batch. A single bad item rejects every item.
    """
    if not isinstance(payload, list):
        raise BookingValidationError("Data must be an array")
    try:
        return [BookingIn.model_validate(item) for item in payload]
    except ValidationError as e:
        raise BookingValidationError(extra={"example": BOOKING_EXAMPLE}) from e
