"""Dashboard module: navigation and guarded page payloads."""

from fastapi import APIRouter


router = APIRouter(tags=["dashboard"])

from backoffice.modules.dashboard import routes  # noqa: F401, E402
