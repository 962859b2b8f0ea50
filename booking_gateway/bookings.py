"""
Booking operations shared by the HTTP routes.

These functions take their store and identity provider explicitly so they
can be exercised without the web layer.
"""

from __future__ import annotations

import logging
from typing import Optional

from booking_gateway.db import BookingRecord, BookingStore
from booking_gateway.errors import BookingNotFoundError, PermissionDeniedError
from booking_gateway.identity import AuthUser, IdentityProvider
from booking_gateway.schemas import BookingIn, BookingOut

logger = logging.getLogger(__name__)

UNKNOWN_USER_EMAIL = "Unknown User"
UNKNOWN_USER_NAME = "Unknown"


def display_name(email: Optional[str]) -> str:
    if not email:
        return UNKNOWN_USER_NAME
    return email.split("@", 1)[0]


def list_bookings(store: BookingStore, identity: IdentityProvider) -> list[BookingOut]:
    records = store.list_bookings()
    emails = identity.resolve_emails({record.user_id for record in records})
    bookings = []
    for record in records:
        email = emails.get(record.user_id)
        bookings.append(
            BookingOut(
                id=record.id,
                title=record.title,
                date=record.date,
                startTime=record.start_time,
                endTime=record.end_time,
                userId=record.user_id,
                userEmail=email or UNKNOWN_USER_EMAIL,
                userName=display_name(email),
            )
        )
    return bookings


def save_bookings(store: BookingStore, user: AuthUser, items: list[BookingIn]) -> int:
    """Stamp every item with the caller as owner and upsert them as one batch."""
    records = [
        BookingRecord(
            id=item.id,
            title=item.title,
            date=item.date,
            start_time=item.startTime,
            end_time=item.endTime,
            user_id=user.id,
        )
        for item in items
    ]
    saved = store.upsert_bookings(records)
    logger.info("User %s saved %d booking(s)", user.id, saved)
    return saved


def delete_booking(store: BookingStore, user: AuthUser, booking_id: int) -> None:
    record = store.get_booking(booking_id)
    if record is None:
        raise BookingNotFoundError()
    if record.user_id != user.id:
        raise PermissionDeniedError()
    store.delete_booking(booking_id)
    logger.info("User %s deleted booking %s", user.id, booking_id)
