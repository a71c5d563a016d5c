"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from a JWT token.

    Attributes:
        user_id: The authenticated identity, also the profile id
        exp: Token expiration time
        type: Token type
        email: Email claim, when the identity provider sets one
    """

    user_id: UUID
    exp: datetime
    type: str = "access"
    email: str | None = None


class AccessToken(BaseModel):
    """An issued access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
