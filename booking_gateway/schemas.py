"""
Pydantic schemas for the booking gateway API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
TIME_PATTERN = r"^[0-9]{2}:[0-9]{2}$"


class BookingIn(BaseModel):
    """A booking as submitted by the front-end. Owner fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[StrictInt] = None
    title: str = Field(..., min_length=1)
    date: str = Field(..., pattern=DATE_PATTERN)
    startTime: str = Field(..., pattern=TIME_PATTERN)
    endTime: str = Field(..., pattern=TIME_PATTERN)


class BookingOut(BaseModel):
    id: Optional[int]
    title: str
    date: str
    startTime: str
    endTime: str
    userId: str
    userEmail: str
    userName: str


class SaveBookingsResponse(BaseModel):
    success: bool
    itemsSaved: int


class SuccessResponse(BaseModel):
    success: Literal[True] = True


class Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    success: bool
    message: str


class LoginResponse(BaseModel):
    success: bool
    user: Optional[dict] = None
    session: Optional[dict] = None


class UserResponse(BaseModel):
    user: dict
