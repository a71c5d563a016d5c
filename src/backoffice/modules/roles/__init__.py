"""Role management module."""

from fastapi import APIRouter


router = APIRouter(prefix="/roles", tags=["roles"])

from backoffice.modules.roles import routes  # noqa: F401, E402
