"""
Exceptions raised by the gateway and rendered as JSON error bodies.

Every ``GatewayError`` carries the HTTP status it maps to, so route
handlers can raise them directly and a single exception handler in
``booking_gateway.app`` turns them into ``{"error": ...}`` responses.
"""

from __future__ import annotations

from typing import Any, Optional


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        extra: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.extra = extra or {}
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class BookingValidationError(GatewayError):
    """Request body failed booking validation."""

    status_code = 400
    default_message = "Invalid event structure"


class AuthenticationError(GatewayError):
    """Missing, invalid or expired bearer token, or rejected credentials."""

    status_code = 401
    default_message = "Unauthorized"


class SignUpError(GatewayError):
    """The identity provider rejected a sign-up request."""

    status_code = 400
    default_message = "Sign up failed"


class PermissionDeniedError(GatewayError):
    """Caller is authenticated but does not own the target booking."""

    status_code = 403
    default_message = "You can only delete your own bookings"


class NotFoundError(GatewayError):
    status_code = 404
    default_message = "Not found"


class BookingNotFoundError(NotFoundError):
    default_message = "Booking not found"


class IdentityProviderError(GatewayError):
    """The identity provider failed or rejected a proxied request."""

    status_code = 500
    default_message = "Authentication service error"


class StoreError(GatewayError):
    """The booking store failed."""

    status_code = 500
    default_message = "Database error"


class ConfigurationError(Exception):
    """Required settings are missing at startup."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing required configuration: " + ", ".join(missing)
        )
