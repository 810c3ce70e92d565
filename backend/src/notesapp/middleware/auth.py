"""Authentication gate dependencies."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..exceptions import AuthenticationError
from ..security import get_user_id_from_token

MISSING_TOKEN_MESSAGE = "No token, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid"


class JWTBearer(HTTPBearer):
    """Resolves a Bearer JWT to the caller's user id.

    With ``auto_error=False`` a missing or invalid token yields ``None``
    (anonymous caller) instead of a 401.
    """

    def __init__(self, auto_error: bool = True):
        # errors are raised here, not by HTTPBearer, to control status and message
        super().__init__(auto_error=False)
        self.require_token = auto_error

    async def __call__(self, request: Request) -> Optional[UUID]:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            if self.require_token:
                raise AuthenticationError(MISSING_TOKEN_MESSAGE)
            return None

        user_id = await get_user_id_from_token(credentials.credentials)
        if not user_id:
            if self.require_token:
                raise AuthenticationError(INVALID_TOKEN_MESSAGE)
            return None

        request.state.user_id = user_id
        request.state.token = credentials.credentials
        return user_id


# Dependency for getting current user ID from JWT
async def get_current_user_id(user_id: UUID = Depends(JWTBearer())) -> UUID:
    """Get current authenticated user ID."""
    return user_id


async def get_optional_user_id(
    user_id: Optional[UUID] = Depends(JWTBearer(auto_error=False)),
) -> Optional[UUID]:
    """Get the caller's user ID, or None for anonymous requests."""
    return user_id
