"""Guards that gate content on a permission controller.

Render guards decide what a page shows: the full content, a fallback, or
a loading placeholder while the controller is still resolving.

Request guards are FastAPI dependencies enforcing the same decisions at the
routing boundary, so an endpoint and the page it backs can never disagree.

Usage:
    @router.get("/billing/entries")
    async def list_entries(
        controller: Annotated[PermissionController, Depends(require_page())],
    ):
        ...
"""

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Annotated, TypeVar

from fastapi import Depends, Request

from backoffice.config import settings
from backoffice.core.auth import OptionalUserId
from backoffice.core.constants import API_V1_PREFIX
from backoffice.core.errors import ForbiddenError, UnauthorizedError
from backoffice.core.permissions.controller import (
    UNAUTHENTICATED,
    ControllerState,
    PermissionController,
)
from backoffice.core.permissions.rules import Action, normalize_path
from backoffice.core.permissions.store import PermissionStoreDep


T = TypeVar("T")
F = TypeVar("F")


class Placeholder(StrEnum):
    LOADING = "loading"
    LIMITED_ACCESS = "limited_access"


LIMITED_ACCESS = Placeholder.LIMITED_ACCESS


def view_guard(
    controller: PermissionController,
    render: Callable[[], T],
    fallback: F | Placeholder = LIMITED_ACCESS,
    require_edit: bool = False,
) -> T | F | Placeholder:
    """Render a page only when the controller grants view.

    Denied and errored controllers both yield ``fallback``; with
    ``require_edit`` the page also needs edit access.
    """
    if controller.is_loading:
        return Placeholder.LOADING
    if not controller.can_view or (require_edit and not controller.can_edit):
        return fallback
    return render()


def edit_guard(
    controller: PermissionController,
    render: Callable[[], T],
    fallback: F | None = None,
) -> T | F | None:
    """Render mutating controls only when the controller grants edit.

    Checked on its own even inside content a view guard already let
    through.
    """
    if not controller.can_edit:
        return fallback
    return render()


def path_guard(
    controller: PermissionController,
    path: str,
    render: Callable[[], T],
    action: str = Action.VIEW,
    fallback: F | None = None,
) -> T | F | None:
    """Render content tied to another page, e.g. a navigation link."""
    if not controller.has_permission_for(path, action):
        return fallback
    return render()


def page_path_from_request(request: Request) -> str:
    """Map an API path to the dashboard page it serves.

    ``/api/v1/dashboard/billing/entries`` serves ``/dashboard/billing/entries``.
    """
    path = request.url.path
    if path.startswith(API_V1_PREFIX):
        path = path[len(API_V1_PREFIX) :]
    return normalize_path(path)


async def get_permission_controller(
    request: Request,
    user_id: OptionalUserId,
    store: PermissionStoreDep,
) -> PermissionController:
    """Load a controller for the request's page without enforcing it."""
    controller = PermissionController(store, settings.permission_strategy)
    await controller.load(user_id, page_path_from_request(request))
    return controller


def require_page(
    path: str | None = None,
    action: str = Action.VIEW,
) -> Callable[..., Awaitable[PermissionController]]:
    """Build a dependency that rejects requests lacking access to a page.

    Args:
        path: Page to check; defaults to the page the request path maps to
        action: ``view`` or ``edit``

    Raises:
        UnauthorizedError: When the caller is not authenticated
        ForbiddenError: When access is denied or could not be determined
    """
    required = Action(action)

    async def dependency(
        request: Request,
        user_id: OptionalUserId,
        store: PermissionStoreDep,
    ) -> PermissionController:
        page = normalize_path(path) if path else page_path_from_request(request)
        controller = PermissionController(store, settings.permission_strategy)
        state = await controller.load(user_id, page)

        if state is ControllerState.ERRORED and controller.error == UNAUTHENTICATED:
            raise UnauthorizedError(
                "Missing authentication token",
                error_code="missing_token",
            )

        allowed = controller.can_edit if required is Action.EDIT else controller.can_view
        if not allowed:
            details = {"page": page, "action": required.value}
            if controller.error:
                details["reason"] = controller.error.code
            raise ForbiddenError(
                "You have limited access to this page",
                error_code="page_access_denied",
                details=details,
            )

        request.state.permission_controller = controller
        return controller

    return dependency


PageController = Annotated[PermissionController, Depends(get_permission_controller)]
