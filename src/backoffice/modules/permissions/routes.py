"""Permission administration API routes."""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Query, Request

from backoffice.api.dependencies import DBSession
from backoffice.config import settings
from backoffice.core.auth import CurrentToken, OptionalUserId
from backoffice.core.permissions import (
    PermissionController,
    PermissionMatrixEditor,
    PermissionStoreDep,
    registry,
    require_page,
)
from backoffice.core.permissions.controller import decide
from backoffice.core.permissions.seeds import bootstrap_permissions, has_owner
from backoffice.modules.permissions import router
from backoffice.modules.permissions.schemas import (
    BootstrapRequest,
    BootstrapResponse,
    DebugProfile,
    DebugRole,
    MatrixResponse,
    PageDecision,
    PageResponse,
    PermissionDebugResponse,
    PermissionRow,
    SavePermissionsRequest,
    ToggleRequest,
)
from backoffice.modules.roles.repos import RoleRepo
from backoffice.modules.roles.services import RoleSvc


PERMISSIONS_PAGE = "/dashboard/users/permissions"

CanViewPermissions = Annotated[
    PermissionController, Depends(require_page(PERMISSIONS_PAGE))
]
CanEditPermissions = Annotated[
    PermissionController, Depends(require_page(PERMISSIONS_PAGE, action="edit"))
]


def _matrix_response(role_name: str, editor: PermissionMatrixEditor) -> MatrixResponse:
    return MatrixResponse(role_name=role_name, **editor.to_dict())


@router.get(
    "/pages",
    response_model=list[PageResponse],
    summary="List administrable pages",
)
async def list_pages(_: CurrentToken) -> list[PageResponse]:
    return [
        PageResponse(
            path=page.path,
            display_name=page.display_name,
            parent_id=page.parent_id,
            description=page.description,
            children=[child.path for child in registry.get_children(page.path)],
        )
        for page in registry.get_available_pages()
    ]


@router.get(
    "/me",
    summary="Current permission state",
    description=(
        "Evaluates the caller's access to one page and returns the controller "
        "state. Never rejects; denial and failure are reported in the body."
    ),
)
async def my_permissions(
    user_id: OptionalUserId,
    store: PermissionStoreDep,
    path: Annotated[str, Query(max_length=255)] = "/dashboard",
) -> dict[str, Any]:
    controller = PermissionController(store, settings.permission_strategy)
    await controller.load(user_id, path)
    return controller.snapshot()


@router.get(
    "/debug",
    response_model=PermissionDebugResponse,
    summary="Permission diagnostics",
)
async def debug_permissions(
    token: CurrentToken,
    store: PermissionStoreDep,
    roles: RoleRepo,
) -> PermissionDebugResponse:
    profile = await store.get_profile(token.user_id)
    rows = []
    if profile is not None and profile.role_id is not None:
        rows = await store.load_permissions(profile.role_id)
    all_roles = await roles.list_all()

    decisions: dict[str, PageDecision] = {}
    for page in registry.get_available_pages():
        view, edit = decide(rows, page.path, settings.permission_strategy)
        decisions[page.path] = PageDecision(view=view, edit=edit)

    return PermissionDebugResponse(
        user_id=token.user_id,
        strategy=settings.permission_strategy,
        profile=DebugProfile.model_validate(profile) if profile else None,
        role=DebugRole.model_validate(profile.role) if profile and profile.role else None,
        permissions=[PermissionRow.model_validate(r) for r in rows],
        all_roles=[DebugRole.model_validate(r) for r in all_roles],
        has_profile=profile is not None,
        has_role=bool(profile and profile.role_id),
        permission_count=len(rows),
        role_count=len(all_roles),
        decisions=decisions,
    )


@router.get(
    "/roles/{role_id}/matrix",
    response_model=MatrixResponse,
    summary="Get a role's permission matrix",
)
async def get_matrix(
    role_id: UUID,
    _: CanViewPermissions,
    roles: RoleSvc,
    store: PermissionStoreDep,
) -> MatrixResponse:
    role = await roles.get_role(role_id)
    editor = PermissionMatrixEditor(role.id)
    await editor.load(store)
    return _matrix_response(role.name, editor)


@router.post(
    "/roles/{role_id}/matrix/toggle",
    response_model=MatrixResponse,
    summary="Apply a checkbox change",
    description="Applies one toggle and its cascades to the submitted rows. Nothing is saved.",
)
async def toggle_matrix(
    role_id: UUID,
    data: ToggleRequest,
    _: CanEditPermissions,
    roles: RoleSvc,
) -> MatrixResponse:
    role = await roles.get_role(role_id)
    editor = PermissionMatrixEditor.from_rows(role.id, data.rows)
    editor.toggle(data.page_name, data.field, data.value)
    return _matrix_response(role.name, editor)


@router.put(
    "/roles/{role_id}",
    response_model=MatrixResponse,
    summary="Save a role's permissions",
    description="Replaces every permission row of the role and returns the stored matrix.",
)
async def save_permissions(
    role_id: UUID,
    data: SavePermissionsRequest,
    _: CanEditPermissions,
    roles: RoleSvc,
    store: PermissionStoreDep,
) -> MatrixResponse:
    role = await roles.get_role(role_id)
    editor = PermissionMatrixEditor.from_permissions(role.id, data.rows)
    await editor.save(store)
    return _matrix_response(role.name, editor)


@router.post(
    "/bootstrap",
    response_model=BootstrapResponse,
    summary="Initialize roles and permissions",
    description=(
        "Creates the canonical roles and their rows and makes the caller Owner. "
        "Open to any authenticated user until an Owner exists."
    ),
)
async def bootstrap(
    request: Request,
    token: CurrentToken,
    store: PermissionStoreDep,
    db: DBSession,
    data: BootstrapRequest | None = None,
) -> BootstrapResponse:
    if await has_owner(db):
        await require_page(PERMISSIONS_PAGE, action="edit")(request, token.user_id, store)

    email = (data.email if data else None) or token.email
    summary = await bootstrap_permissions(db, user_id=token.user_id, email=email)
    return BootstrapResponse(**summary)
