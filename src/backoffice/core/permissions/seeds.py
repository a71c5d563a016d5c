"""Bootstrap of the canonical roles and their page permissions.

Running the bootstrap is idempotent: roles are upserted by name and the
canonical roles' rows are replaced with the tables below. Roles created by
administrators keep their rows. Finally an Owner is ensured so that someone
can reach the permission matrix.
"""

from typing import Any, TypedDict
from uuid import UUID

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.permissions.models import Permission, Profile, Role
from backoffice.core.permissions.registry import WILDCARD


logger = structlog.get_logger()


class RoleData(TypedDict):
    name: str
    description: str
    permissions: list[tuple[str, bool, bool]]


OWNER_ROLE = "Owner"

VIEW = (True, False)
EDIT = (True, True)

_READ_ONLY_STAFF: list[tuple[str, tuple[bool, bool]]] = [
    ("/dashboard", VIEW),
    ("/dashboard/consumer", VIEW),
    ("/dashboard/consumer/programs", VIEW),
    ("/dashboard/consumer/participants", VIEW),
    ("/dashboard/billing", VIEW),
    ("/dashboard/billing/entries", VIEW),
    ("/dashboard/billing/reports", VIEW),
]


def _rows(pages: list[tuple[str, tuple[bool, bool]]]) -> list[tuple[str, bool, bool]]:
    return [(page, view, edit) for page, (view, edit) in pages]


CANONICAL_ROLES: list[RoleData] = [
    {
        "name": OWNER_ROLE,
        "description": "System owner with full access",
        "permissions": _rows([(WILDCARD, EDIT)]),
    },
    {
        "name": "Admin",
        "description": "Administrator with full access",
        "permissions": _rows([(WILDCARD, EDIT)]),
    },
    {
        "name": "Manager",
        "description": "Manager with limited access",
        "permissions": _rows(
            [
                ("/dashboard", VIEW),
                ("/dashboard/users", VIEW),
                ("/dashboard/users/manage", EDIT),
                ("/dashboard/inventory", VIEW),
                ("/dashboard/inventory/packages", EDIT),
                ("/dashboard/inventory/products", EDIT),
                ("/dashboard/consumer", VIEW),
                ("/dashboard/consumer/programs", EDIT),
                ("/dashboard/consumer/participants", EDIT),
                ("/dashboard/consumer/staff", EDIT),
                ("/dashboard/billing", VIEW),
                ("/dashboard/billing/entries", EDIT),
                ("/dashboard/billing/invoice", EDIT),
                ("/dashboard/billing/reports", VIEW),
                ("/dashboard/profile", EDIT),
            ]
        ),
    },
    {
        "name": "User",
        "description": "Basic user with minimal access",
        "permissions": _rows([*_READ_ONLY_STAFF, ("/dashboard/profile", EDIT)]),
    },
    {
        "name": "Viewer",
        "description": "Read-only access",
        "permissions": _rows([*_READ_ONLY_STAFF, ("/dashboard/profile", VIEW)]),
    },
]


async def has_owner(session: AsyncSession) -> bool:
    """Whether any active profile holds the Owner role."""
    stmt = (
        select(func.count())
        .select_from(Profile)
        .join(Role, Profile.role_id == Role.id)
        .where(Role.name == OWNER_ROLE, Profile.is_active.is_(True))
    )
    result = await session.execute(stmt)
    return result.scalar_one() > 0


async def _upsert_role(session: AsyncSession, data: RoleData) -> Role:
    result = await session.execute(select(Role).where(Role.name == data["name"]))
    role = result.scalar_one_or_none()
    if role is None:
        role = Role(name=data["name"], description=data["description"])
        session.add(role)
    else:
        role.description = data["description"]
    await session.flush()
    return role


async def _ensure_owner(
    session: AsyncSession,
    owner: Role,
    user_id: UUID | None,
    email: str | None,
) -> tuple[UUID | None, str]:
    if user_id is not None:
        profile = await session.get(Profile, user_id)
        if profile is None:
            session.add(Profile(id=user_id, email=email, role_id=owner.id, is_active=True))
            await session.flush()
            return user_id, "created"
        if profile.role_id is None:
            profile.role_id = owner.id
            profile.is_active = True
            await session.flush()
            return user_id, "promoted"
        return user_id, "unchanged"

    result = await session.execute(select(Profile).limit(2))
    profiles = list(result.scalars().all())
    if len(profiles) == 1 and profiles[0].role_id is None:
        profiles[0].role_id = owner.id
        profiles[0].is_active = True
        await session.flush()
        return profiles[0].id, "promoted"
    return None, "none"


async def bootstrap_permissions(
    session: AsyncSession,
    user_id: UUID | None = None,
    email: str | None = None,
) -> dict[str, Any]:
    """Create the canonical roles and rows, then ensure an Owner.

    Args:
        session: Session whose transaction the caller commits
        user_id: Identity to make Owner; created as a profile if missing and
            promoted and activated if it has no role. Profiles that already
            have a role keep it.
        email: Email stored on a newly created profile

    Returns:
        Summary with role ids, the number of rows created and what happened
        to the owner profile
    """
    roles: dict[str, Role] = {}
    for data in CANONICAL_ROLES:
        roles[data["name"]] = await _upsert_role(session, data)

    role_ids = [role.id for role in roles.values()]
    await session.execute(delete(Permission).where(Permission.role_id.in_(role_ids)))

    created = 0
    for data in CANONICAL_ROLES:
        role = roles[data["name"]]
        for page_name, can_view, can_edit in data["permissions"]:
            session.add(
                Permission(
                    role_id=role.id,
                    page_name=page_name,
                    can_view=can_view,
                    can_edit=can_edit,
                )
            )
            created += 1
    await session.flush()

    owner_id, owner_action = await _ensure_owner(session, roles[OWNER_ROLE], user_id, email)

    logger.info(
        "permissions_bootstrapped",
        roles=len(roles),
        permissions_created=created,
        owner_id=str(owner_id) if owner_id else None,
        owner_action=owner_action,
    )

    return {
        "roles": {name: str(role.id) for name, role in roles.items()},
        "permissions_created": created,
        "owner_profile_id": str(owner_id) if owner_id else None,
        "owner_action": owner_action,
    }
