"""Dashboard API routes.

Page endpoints are guarded at the routing boundary with the page the
request path maps to, so ``GET /api/v1/dashboard/billing/entries`` needs
view access to ``/dashboard/billing/entries``.
"""

from typing import Annotated

from fastapi import Depends, Request

from backoffice.core.auth import CurrentUserId
from backoffice.core.errors import NotFoundError
from backoffice.core.permissions import (
    PageController,
    PermissionController,
    edit_guard,
    path_guard,
    registry,
    require_page,
    view_guard,
)
from backoffice.core.permissions.guards import page_path_from_request
from backoffice.core.permissions.registry import PageEntry
from backoffice.modules.dashboard import router
from backoffice.modules.dashboard.schemas import (
    NavigationItem,
    NavigationResponse,
    PageLink,
    PagePayload,
)


EDIT_CONTROLS = ["create", "update", "delete"]


async def get_registered_page(request: Request) -> PageEntry:
    """Resolve the requested dashboard page, 404 when it is not registered."""
    path = page_path_from_request(request)
    page = registry.get_page(path)
    if page is None:
        raise NotFoundError("Page not found", resource="page", resource_id=path)
    return page


RegisteredPage = Annotated[PageEntry, Depends(get_registered_page)]
GuardedPage = Annotated[PermissionController, Depends(require_page())]


def _render_page(page: PageEntry, controller: PermissionController) -> PagePayload:
    children = [
        path_guard(
            controller,
            child.path,
            lambda child=child: PageLink(path=child.path, display_name=child.display_name),
        )
        for child in registry.get_children(page.path)
    ]
    return PagePayload(
        path=page.path,
        display_name=page.display_name,
        description=page.description,
        can_edit=controller.can_edit,
        controls=edit_guard(controller, lambda: list(EDIT_CONTROLS), fallback=[]),
        children=[child for child in children if child is not None],
    )


@router.get(
    "/navigation",
    response_model=NavigationResponse,
    summary="Navigation menu",
    description="Registered pages the caller may open, grouped by section.",
)
async def navigation(
    _: CurrentUserId,
    controller: PageController,
) -> NavigationResponse:
    items: list[NavigationItem] = []
    for page in registry.get_available_pages():
        if page.parent_id is not None:
            continue
        children = [
            NavigationItem(path=child.path, display_name=child.display_name, accessible=True)
            for child in registry.get_children(page.path)
            if controller.has_permission_for(child.path)
        ]
        accessible = controller.has_permission_for(page.path)
        if accessible or children:
            items.append(
                NavigationItem(
                    path=page.path,
                    display_name=page.display_name,
                    accessible=accessible,
                    children=children,
                )
            )
    return NavigationResponse(items=items, has_full_access=controller.has_full_access)


@router.get(
    "/dashboard",
    response_model=PagePayload,
    summary="Dashboard overview",
)
async def overview(page: RegisteredPage, controller: GuardedPage) -> PagePayload:
    return view_guard(controller, lambda: _render_page(page, controller))


@router.get(
    "/dashboard/{page_path:path}",
    response_model=PagePayload,
    summary="Dashboard page",
)
async def dashboard_page(
    page_path: str,
    page: RegisteredPage,
    controller: GuardedPage,
) -> PagePayload:
    return view_guard(controller, lambda: _render_page(page, controller))
