"""Permission administration module: matrix editing, bootstrap and debugging."""

from fastapi import APIRouter


router = APIRouter(prefix="/permissions", tags=["permissions"])

from backoffice.modules.permissions import routes  # noqa: F401, E402
