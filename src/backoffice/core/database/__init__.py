"""Database layer - session management, base models, and mixins."""

from backoffice.core.database.base import Base, TimestampMixin, UUIDMixin
from backoffice.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "async_engine",
    "async_session_factory",
    "get_db",
]
