"""Navigation registry: every administrable dashboard page.

The registry is static configuration and the single source of truth for
which pages exist. The permission matrix renders one row per entry, the
navigation endpoint filters it per user, and the CLI enumerates it when
reporting a role's effective access.

The tree has two levels. Section roots carry no ``parent_id``; their
children name the section root they belong to. ``PAGE_HIERARCHY`` is a
separate table of ancestor chains, consulted only by the legacy inheriting
evaluator in :mod:`backoffice.core.permissions.rules`.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


WILDCARD = "*"
DASHBOARD_ROOT = "/dashboard"


class PermissionLike(Protocol):
    """Anything shaped like a stored permission row."""

    page_name: str
    can_view: bool
    can_edit: bool


@dataclass(frozen=True)
class PageEntry:
    """One administrable page.

    Attributes:
        path: Normalized page path, also the entry's id
        display_name: Label shown in navigation and the permission matrix
        parent_id: Path of the section root, None for roots
        description: One-line help text for the matrix
    """

    path: str
    display_name: str
    parent_id: str | None = None
    description: str = ""

    @property
    def id(self) -> str:
        return self.path


class ParentState(StrEnum):
    """Aggregate of a parent's direct children for one field."""

    ALL = "all"
    SOME = "some"
    NONE = "none"


FULL_ACCESS_ENTRY = PageEntry(
    path=WILDCARD,
    display_name="Full Access",
    description="Grants complete access to all dashboard features",
)


_PAGES: tuple[PageEntry, ...] = (
    PageEntry("/dashboard", "Dashboard Overview", None, "Main dashboard overview page"),
    PageEntry("/dashboard/users", "User Management", None, "User management section"),
    PageEntry("/dashboard/users/roles", "Roles", "/dashboard/users", "Create and rename roles"),
    PageEntry(
        "/dashboard/users/permissions",
        "Permissions",
        "/dashboard/users",
        "Edit each role's page access",
    ),
    PageEntry("/dashboard/users/manage", "Manage Users", "/dashboard/users", "Assign roles to users"),
    PageEntry("/dashboard/inventory", "Inventory Management", None, "Inventory management section"),
    PageEntry("/dashboard/inventory/packages", "Packages", "/dashboard/inventory", "Meal packages"),
    PageEntry("/dashboard/inventory/products", "Products", "/dashboard/inventory", "Products and prices"),
    PageEntry("/dashboard/consumer", "Consumer Management", None, "Consumer management section"),
    PageEntry("/dashboard/consumer/programs", "Programs", "/dashboard/consumer", "Catering programs"),
    PageEntry(
        "/dashboard/consumer/participants",
        "Participants",
        "/dashboard/consumer",
        "Program participants",
    ),
    PageEntry("/dashboard/consumer/staff", "Staff", "/dashboard/consumer", "Serving staff"),
    PageEntry("/dashboard/billing", "Billing Management", None, "Billing management section"),
    PageEntry("/dashboard/billing/entries", "Entries", "/dashboard/billing", "Daily billing entries"),
    PageEntry("/dashboard/billing/invoice", "Invoice", "/dashboard/billing", "Generate invoices"),
    PageEntry("/dashboard/billing/reports", "Reports", "/dashboard/billing", "Billing reports"),
    PageEntry("/dashboard/config", "Configuration", None, "System configuration section"),
    PageEntry("/dashboard/profile", "Profile", None, "Your own profile"),
    PageEntry("/dashboard/signup", "Signup", None, "Register new back-office users"),
)

_BY_PATH: dict[str, PageEntry] = {page.path: page for page in _PAGES}


# Ancestor chains for the legacy evaluator, most specific first. Section
# roots fall back to the dashboard overview; leaves never inherit.
PAGE_HIERARCHY: dict[str, list[str]] = {
    "/dashboard": ["/dashboard"],
    "/dashboard/users": ["/dashboard/users", "/dashboard"],
    "/dashboard/users/roles": ["/dashboard/users/roles"],
    "/dashboard/users/permissions": ["/dashboard/users/permissions"],
    "/dashboard/users/manage": ["/dashboard/users/manage"],
    "/dashboard/inventory": ["/dashboard/inventory", "/dashboard"],
    "/dashboard/inventory/packages": ["/dashboard/inventory/packages"],
    "/dashboard/inventory/products": ["/dashboard/inventory/products"],
    "/dashboard/consumer": ["/dashboard/consumer", "/dashboard"],
    "/dashboard/consumer/programs": ["/dashboard/consumer/programs"],
    "/dashboard/consumer/participants": ["/dashboard/consumer/participants"],
    "/dashboard/consumer/staff": ["/dashboard/consumer/staff"],
    "/dashboard/billing": ["/dashboard/billing", "/dashboard"],
    "/dashboard/billing/entries": ["/dashboard/billing/entries"],
    "/dashboard/billing/invoice": ["/dashboard/billing/invoice"],
    "/dashboard/billing/reports": ["/dashboard/billing/reports"],
    "/dashboard/config": ["/dashboard/config"],
    "/dashboard/profile": ["/dashboard/profile"],
    "/dashboard/signup": ["/dashboard/signup"],
}


def get_available_pages() -> list[PageEntry]:
    """Return every registered page in display order."""
    return list(_PAGES)


def get_page(path: str) -> PageEntry | None:
    return _BY_PATH.get(path)


def is_registered(path: str) -> bool:
    return path in _BY_PATH


def get_children(parent_id: str) -> list[PageEntry]:
    """Return the direct children of a section root, in display order."""
    return [page for page in _PAGES if page.parent_id == parent_id]


def is_parent(path: str) -> bool:
    return any(page.parent_id == path for page in _PAGES)


def get_parent_state(
    parent_id: str,
    field: str,
    permissions: Iterable[PermissionLike],
) -> ParentState:
    """Aggregate ``field`` over the direct children of ``parent_id``.

    Used to draw a parent's checkbox as checked, indeterminate or empty.
    Children without a row count as False. A page without children
    reports ``NONE``.

    Args:
        parent_id: Section root path
        field: ``can_view`` or ``can_edit``
        permissions: The rows currently being edited

    Raises:
        ValueError: If ``field`` is not a permission flag
    """
    if field not in ("can_view", "can_edit"):
        raise ValueError(f"Unknown permission field: {field}")

    children = get_children(parent_id)
    if not children:
        return ParentState.NONE

    by_page = {p.page_name: p for p in permissions}
    values = [
        bool(getattr(by_page[child.path], field)) if child.path in by_page else False
        for child in children
    ]

    if all(values):
        return ParentState.ALL
    if any(values):
        return ParentState.SOME
    return ParentState.NONE


def get_permission_paths(path: str) -> list[str]:
    """Return the ancestor chain of a normalized path, most specific first.

    Unknown paths fall back to ``[path, "/dashboard"]``.
    """
    return list(PAGE_HIERARCHY.get(path, [path, DASHBOARD_ROOT]))

