"""
Dependency wiring for the FastAPI app.

Backends are built once by ``build_backends`` and attached to
``app.state``; route dependencies read them from the request instead of
module-level singletons so tests can hand the app substitutes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request
from supabase import create_client

from booking_gateway.config import Settings
from booking_gateway.db import (
    BookingRow,
    BookingStore,
    InMemoryBookingStore,
    SqlAlchemyBookingStore,
    SupabaseBookingStore,
)
from booking_gateway.identity import (
    IdentityProvider,
    InMemoryIdentityProvider,
    SupabaseIdentityProvider,
)

logger = logging.getLogger(__name__)


@dataclass
class Backends:
    store: BookingStore
    identity: IdentityProvider


def build_backends(settings: Settings) -> Backends:
    """
    Construct the store and identity provider described by ``settings``.

    Raises ``ConfigurationError`` when Supabase credentials are missing and
    in-memory backends are not enabled.
    """
    if settings.use_in_memory_backends:
        logger.warning("Using in-memory backends; data will not persist")
        return Backends(
            store=InMemoryBookingStore(), identity=InMemoryIdentityProvider()
        )

    settings.require_backend_credentials()
    client = create_client(settings.supabase_url, settings.supabase_key)
    auth_client = create_client(settings.supabase_url, settings.supabase_key)

    if settings.database_url:
        if settings.bookings_table != BookingRow.__tablename__:
            logger.warning(
                "BOOKINGS_TABLE=%s is ignored by the SQL store, which uses %r",
                settings.bookings_table,
                BookingRow.__tablename__,
            )
        store: BookingStore = SqlAlchemyBookingStore(settings.database_url)
    else:
        store = SupabaseBookingStore(client, table=settings.bookings_table)
    return Backends(
        store=store,
        identity=SupabaseIdentityProvider(client, auth_client=auth_client),
    )


def get_backends(request: Request) -> Backends:
    return request.app.state.backends


def get_booking_store(request: Request) -> BookingStore:
    return get_backends(request).store


def get_identity_provider(request: Request) -> IdentityProvider:
    return get_backends(request).identity
