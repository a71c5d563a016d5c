"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Query
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from backoffice.core.database import get_db


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


class Pagination(BaseModel):
    """Offset pagination parameters for list endpoints."""

    skip: int = 0
    limit: int = DEFAULT_PAGE_SIZE


async def get_pagination(
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> Pagination:
    return Pagination(skip=skip, limit=limit)


PageParams = Annotated[Pagination, Depends(get_pagination)]
