"""Permission rule engine.

Pure functions deciding whether a role's permission rows grant view or edit
access to a page. Nothing here performs I/O or raises: malformed input and
unknown actions evaluate to "no access".

Two evaluators exist:

- :func:`has_strict_permission` is canonical. An exact row for the path wins,
  even when it is more restrictive than a wildcard row; otherwise the
  wildcard row decides. There is no ancestor inheritance.
- :func:`check_path_permission` is the legacy inheriting evaluator. It is
  only reachable through :func:`evaluate` with
  ``EvaluationStrategy.INHERITED``.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from backoffice.core.permissions.registry import (
    WILDCARD,
    PermissionLike,
    get_permission_paths,
)


_DYNAMIC_SEGMENT = re.compile(r"/\[.*?\]")


class Action(StrEnum):
    VIEW = "view"
    EDIT = "edit"


class EvaluationStrategy(StrEnum):
    STRICT = "strict"
    INHERITED = "inherited"


@dataclass(frozen=True)
class PageGrant:
    """A permission row detached from the database."""

    page_name: str
    can_view: bool = False
    can_edit: bool = False


@dataclass(frozen=True)
class AccessResult:
    has_access: bool
    can_edit: bool


NO_ACCESS = AccessResult(has_access=False, can_edit=False)


def normalize_path(path: str | None) -> str:
    """Strip ``/[param]`` markers and trailing slashes; empty becomes ``/``.

    >>> normalize_path("/dashboard/consumer/programs/[id]/")
    '/dashboard/consumer/programs'
    """
    cleaned = _DYNAMIC_SEGMENT.sub("", path or "").rstrip("/")
    return cleaned or "/"


def find_permission(
    permissions: Iterable[PermissionLike], page_name: str
) -> PermissionLike | None:
    return next((p for p in permissions if p.page_name == page_name), None)


def has_full_access(permissions: Iterable[PermissionLike]) -> bool:
    """True when a wildcard row grants view."""
    return any(p.page_name == WILDCARD and p.can_view for p in permissions)


def _as_action(action: str) -> Action | None:
    try:
        return Action(action)
    except ValueError:
        return None


def has_strict_permission(
    permissions: Sequence[PermissionLike],
    path: str | None,
    action: str = Action.VIEW,
) -> bool:
    """Exact-match evaluator.

    A row for the exact path decides alone (edit needs both flags). Without
    one, a wildcard row with view grants view and grants edit per its own
    ``can_edit``. Anything else is denied.
    """
    act = _as_action(action)
    if act is None:
        return False

    page = normalize_path(path)

    specific = find_permission(permissions, page)
    if specific is not None:
        if act is Action.EDIT:
            return bool(specific.can_view and specific.can_edit)
        return bool(specific.can_view)

    wildcard = find_permission(permissions, WILDCARD)
    if wildcard is not None and wildcard.can_view:
        if act is Action.EDIT:
            return bool(wildcard.can_edit)
        return True

    return False


def _result(row: PermissionLike, require_edit: bool) -> AccessResult:
    can_view = bool(row.can_view)
    can_edit = bool(row.can_view and row.can_edit)
    if require_edit:
        return AccessResult(has_access=can_edit, can_edit=can_edit)
    return AccessResult(has_access=can_view, can_edit=can_edit)


def check_path_permission(
    permissions: Sequence[PermissionLike],
    path: str | None,
    require_edit: bool = False,
) -> AccessResult:
    """Legacy evaluator with ancestor inheritance.

    Order of precedence:

    1. A wildcard row with view, as in the strict evaluator.
    2. The exact row for the path.
    3. The nearest ancestor in the path's chain (see
       :func:`~backoffice.core.permissions.registry.get_permission_paths`)
       whose row grants view, but only when neither the path nor any page
       below it has a row of its own. An explicit child row, even a denial,
       therefore keeps an ancestor from answering for it.
    """
    wildcard = find_permission(permissions, WILDCARD)
    if wildcard is not None and wildcard.can_view:
        return _result(wildcard, require_edit)

    page = normalize_path(path)

    exact = find_permission(permissions, page)
    if exact is not None:
        return _result(exact, require_edit)

    descendant_prefix = page.rstrip("/") + "/"
    if any((p.page_name or "").startswith(descendant_prefix) for p in permissions):
        return NO_ACCESS

    for ancestor in get_permission_paths(page)[1:]:
        row = find_permission(permissions, ancestor)
        if row is not None and row.can_view:
            return _result(row, require_edit)

    return NO_ACCESS


def evaluate(
    permissions: Sequence[PermissionLike],
    path: str | None,
    action: str = Action.VIEW,
    strategy: str = EvaluationStrategy.STRICT,
) -> bool:
    """Single entry point selecting the evaluator by strategy.

    Unknown actions and unknown strategies deny.
    """
    act = _as_action(action)
    if act is None:
        return False

    if strategy == EvaluationStrategy.STRICT:
        return has_strict_permission(permissions, path, act)
    if strategy == EvaluationStrategy.INHERITED:
        return check_path_permission(
            permissions, path, require_edit=act is Action.EDIT
        ).has_access
    return False


def validate_permission_hierarchy(
    permissions: Iterable[PermissionLike],
) -> list[PermissionLike]:
    """Drop rows without a page name; pass everything else through."""
    return [p for p in permissions if p.page_name]


def accessible_paths(permissions: Iterable[PermissionLike]) -> list[str]:
    return [p.page_name for p in permissions if p.can_view]


def editable_paths(permissions: Iterable[PermissionLike]) -> list[str]:
    return [p.page_name for p in permissions if p.can_edit]
