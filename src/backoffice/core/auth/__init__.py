"""Authentication module for bearer JWT handling."""

from backoffice.core.auth.backend import create_access_token, decode_token
from backoffice.core.auth.dependencies import (
    CurrentToken,
    CurrentUserId,
    OptionalUserId,
    get_current_user_id,
    get_optional_user_id,
)
from backoffice.core.auth.middleware import AuthContextMiddleware, RequestIdMiddleware
from backoffice.core.auth.schemas import AccessToken, TokenData


__all__ = [
    "AccessToken",
    # Middleware
    "AuthContextMiddleware",
    # Dependencies
    "CurrentToken",
    "CurrentUserId",
    "OptionalUserId",
    "RequestIdMiddleware",
    # Schemas
    "TokenData",
    # Token utilities
    "create_access_token",
    "decode_token",
    "get_current_user_id",
    "get_optional_user_id",
]
