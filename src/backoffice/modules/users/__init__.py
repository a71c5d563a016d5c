"""Back-office user (profile) management module."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])

from backoffice.modules.users import routes  # noqa: F401, E402
