"""
Identity provider abstraction for Supabase Auth and an in-memory test implementation.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, Optional, Protocol

from pydantic import BaseModel, ConfigDict
from supabase import AuthApiError

from booking_gateway.errors import (
    AuthenticationError,
    IdentityProviderError,
    SignUpError,
)

logger = logging.getLogger(__name__)


class AuthUser(BaseModel):
    """A user resolved by the identity provider.

    Provider-specific fields are kept as extras so the current-user endpoint
    can echo them back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    email: Optional[str] = None


class IdentityProvider(Protocol):
    """Operations the gateway needs from the identity provider."""

    def get_user(self, token: str) -> AuthUser:
        """Resolve a bearer token, raising ``AuthenticationError`` if it is not valid."""
        ...

    def resolve_emails(self, user_ids: Iterable[str]) -> dict[str, Optional[str]]:
        """Map each user id to its email, or ``None`` when the lookup fails."""
        ...

    def sign_up(self, email: str, password: str) -> AuthUser:
        ...

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """Return ``{"user": ..., "session": ...}`` as issued by the provider."""
        ...

    def sign_out(self, token: str) -> None:
        ...


def _dump(model: Any) -> Optional[dict]:
    if model is None:
        return None
    return model.model_dump(mode="json")


class SupabaseIdentityProvider:
    """
    Supabase Auth adapter.

    ``client`` must be created with the service role key since email lookups
    and sign-out use the admin API. Password sign-in/sign-up go through
    ``auth_client`` so the session they establish never leaks into the client
    used for table access.
    """

    def __init__(self, client: Any, auth_client: Any | None = None):
        self._client = client
        self._auth_client = auth_client or client

    def get_user(self, token: str) -> AuthUser:
        try:
            response = self._client.auth.get_user(token)
        except AuthApiError as e:
            raise AuthenticationError() from e
        except Exception as e:
            raise IdentityProviderError() from e
        if response is None or response.user is None:
            raise AuthenticationError()
        return AuthUser.model_validate(_dump(response.user))

    def resolve_emails(self, user_ids: Iterable[str]) -> dict[str, Optional[str]]:
        emails: dict[str, Optional[str]] = {}
        for user_id in dict.fromkeys(user_ids):
            try:
                response = self._client.auth.admin.get_user_by_id(user_id)
            except Exception as e:
                logger.warning("Could not fetch user %s: %s", user_id, e)
                emails[user_id] = None
                continue
            user = response.user if response else None
            emails[user_id] = user.email if user else None
        return emails

    def sign_up(self, email: str, password: str) -> AuthUser:
        try:
            response = self._auth_client.auth.sign_up(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise SignUpError(str(e)) from e
        if response.user is None:
            raise SignUpError()
        return AuthUser.model_validate(_dump(response.user))

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        try:
            response = self._auth_client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise AuthenticationError(str(e)) from e
        return {"user": _dump(response.user), "session": _dump(response.session)}

    def sign_out(self, token: str) -> None:
        try:
            self._client.auth.admin.sign_out(token)
        except Exception as e:
            raise IdentityProviderError() from e


class InMemoryIdentityProvider:
    """Dictionary-backed identity provider for development and tests."""

    def __init__(self):
        self.users: Dict[str, AuthUser] = {}
        self.passwords: Dict[str, str] = {}
        self.tokens: Dict[str, str] = {}

    def add_user(self, email: str, password: str = "password") -> AuthUser:
        user = AuthUser(id=str(uuid.uuid4()), email=email)
        self.users[user.id] = user
        self.passwords[email] = password
        return user

    def issue_token(self, user_id: str) -> str:
        token = uuid.uuid4().hex
        self.tokens[token] = user_id
        return token

    def get_user(self, token: str) -> AuthUser:
        user_id = self.tokens.get(token)
        if user_id is None or user_id not in self.users:
            raise AuthenticationError()
        return self.users[user_id]

    def resolve_emails(self, user_ids: Iterable[str]) -> dict[str, Optional[str]]:
        emails: dict[str, Optional[str]] = {}
        for user_id in user_ids:
            user = self.users.get(user_id)
            emails[user_id] = user.email if user else None
        return emails

    def sign_up(self, email: str, password: str) -> AuthUser:
        if email in self.passwords:
            raise SignUpError("User already registered")
        return self.add_user(email, password)

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        if self.passwords.get(email) != password:
            raise AuthenticationError("Invalid login credentials")
        user = next(u for u in self.users.values() if u.email == email)
        session = {
            "access_token": self.issue_token(user.id),
            "token_type": "bearer",
        }
        return {"user": user.model_dump(), "session": session}

    def sign_out(self, token: str) -> None:
        self.tokens.pop(token, None)

    def reset(self) -> None:
        self.users.clear()
        self.passwords.clear()
        self.tokens.clear()
