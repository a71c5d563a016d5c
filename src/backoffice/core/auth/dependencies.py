"""FastAPI dependencies for authentication.

Authentication stops at the user id. Whether that user may see a page is
decided by the permission controller, which resolves the profile and role.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backoffice.core.auth.backend import decode_token
from backoffice.core.auth.schemas import TokenData
from backoffice.core.errors import UnauthorizedError


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )

    if token_data.type != "access":
        raise UnauthorizedError(
            "Invalid token type",
            error_code="invalid_token_type",
        )

    return token_data


async def get_current_user_id(
    token_data: Annotated[TokenData, Depends(get_token_data)],
) -> UUID:
    """Get the authenticated user's id."""
    return token_data.user_id


async def get_optional_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> UUID | None:
    """Get the current user id if authenticated, None otherwise.

    Used where an anonymous caller must still get an answer, e.g. the
    permission guards, which report unauthenticated callers themselves.
    """
    if not credentials:
        return None

    token_data = decode_token(credentials.credentials)
    if not token_data or token_data.type != "access":
        return None

    return token_data.user_id


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
CurrentToken = Annotated[TokenData, Depends(get_token_data)]
OptionalUserId = Annotated[UUID | None, Depends(get_optional_user_id)]
