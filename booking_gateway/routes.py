"""
HTTP routes for the booking gateway API.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from booking_gateway.auth import require_bearer_token, require_user
from booking_gateway.bookings import delete_booking, list_bookings, save_bookings
from booking_gateway.db import BookingStore
from booking_gateway.dependencies import get_booking_store, get_identity_provider
from booking_gateway.errors import StoreError
from booking_gateway.identity import AuthUser, IdentityProvider
from booking_gateway.schemas import (
    BookingOut,
    Credentials,
    LoginResponse,
    SaveBookingsResponse,
    SignUpResponse,
    SuccessResponse,
    UserResponse,
)
from booking_gateway.validation import parse_booking_batch

router = APIRouter()

NO_CACHE = {"Cache-Control": "no-cache"}
SIGN_UP_MESSAGE = "Signup successful. Please check your email to verify your account."


@router.head("/data")
def head_bookings():
    return Response(status_code=200, headers=NO_CACHE)


@router.get("/data", response_model=list[BookingOut])
def get_bookings(
    response: Response,
    store: BookingStore = Depends(get_booking_store),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    try:
        bookings = list_bookings(store, identity)
    except StoreError as e:
        raise StoreError("Failed to load data") from e
    response.headers.update(NO_CACHE)
    return bookings


@router.post("/data", response_model=SaveBookingsResponse)
def post_bookings(
    payload: Any = Body(...),
    user: AuthUser = Depends(require_user),
    store: BookingStore = Depends(get_booking_store),
):
    """
    Validate the whole batch, stamp the caller as owner and upsert it.
    """
    items = parse_booking_batch(payload)
    try:
        saved = save_bookings(store, user, items)
    except StoreError as e:
        raise StoreError("Failed to save data") from e
    return SaveBookingsResponse(success=True, itemsSaved=saved)


@router.delete("/data/{booking_id}", response_model=SuccessResponse)
def delete_booking_by_id(
    booking_id: int,
    user: AuthUser = Depends(require_user),
    store: BookingStore = Depends(get_booking_store),
):
    try:
        delete_booking(store, user, booking_id)
    except StoreError as e:
        raise StoreError("Failed to delete event") from e
    return SuccessResponse()


@router.post("/auth/signup", response_model=SignUpResponse)
def sign_up(
    payload: Credentials,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    identity.sign_up(payload.email, payload.password)
    return SignUpResponse(success=True, message=SIGN_UP_MESSAGE)


@router.post("/auth/login", response_model=LoginResponse)
def login(
    payload: Credentials,
    identity: IdentityProvider = Depends(get_identity_provider),
):
    result = identity.sign_in(payload.email, payload.password)
    return LoginResponse(success=True, user=result["user"], session=result["session"])


@router.post("/auth/logout", response_model=SuccessResponse)
def logout(
    token: str = Depends(require_bearer_token),
    user: AuthUser = Depends(require_user),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    identity.sign_out(token)
    return SuccessResponse()


@router.get("/auth/user", response_model=UserResponse)
def current_user(user: AuthUser = Depends(require_user)):
    return UserResponse(user=user.model_dump())
