"""Error handling module with RFC 7807 Problem Details."""

from backoffice.core.errors.exceptions import (
    AppException,
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NoProfileError,
    NoRoleAssignedError,
    NotFoundError,
    SaveError,
    ServiceUnavailableError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from backoffice.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    "ConflictError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NoProfileError",
    "NoRoleAssignedError",
    "NotFoundError",
    "ProblemDetail",
    "SaveError",
    "ServiceUnavailableError",
    "StoreError",
    "UnauthorizedError",
    "ValidationError",
    "register_exception_handlers",
]
