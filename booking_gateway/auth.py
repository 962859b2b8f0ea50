"""
Bearer-token authentication dependencies.

`require_bearer_token` returns the raw token from the Authorization header and
`require_user` resolves it with the identity provider. A missing header or a
token the provider rejects is a 401; a provider failure is a 500.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from booking_gateway.dependencies import get_identity_provider
from booking_gateway.errors import AuthenticationError
from booking_gateway.identity import AuthUser, IdentityProvider

_bearer_scheme = HTTPBearer(auto_error=False)


def require_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


def require_user(
    request: Request,
    token: str = Depends(require_bearer_token),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> AuthUser:
    """Resolve the caller and attach it to ``request.state.user``."""
    user = identity.get_user(token)
    request.state.user = user
    return user
