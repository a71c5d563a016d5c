"""Page-level permission system.

Roles own one permission row per dashboard page; the rule engine turns those
rows into view/edit decisions, the controller and guards apply them to
requests, and the matrix editor changes them.
"""

from backoffice.core.permissions.controller import ControllerState, PermissionController
from backoffice.core.permissions.guards import (
    PageController,
    edit_guard,
    path_guard,
    require_page,
    view_guard,
)
from backoffice.core.permissions.matrix import MatrixRow, PermissionMatrixEditor
from backoffice.core.permissions.models import Permission, Profile, Role
from backoffice.core.permissions.registry import WILDCARD, PageEntry, ParentState
from backoffice.core.permissions.rules import (
    Action,
    EvaluationStrategy,
    PageGrant,
    evaluate,
    has_strict_permission,
)
from backoffice.core.permissions.store import PermissionStore, PermissionStoreDep


__all__ = [
    "WILDCARD",
    "Action",
    "ControllerState",
    "EvaluationStrategy",
    "MatrixRow",
    "PageController",
    "PageEntry",
    "PageGrant",
    "ParentState",
    "Permission",
    "PermissionController",
    "PermissionMatrixEditor",
    "PermissionStore",
    "PermissionStoreDep",
    "Profile",
    "Role",
    "edit_guard",
    "evaluate",
    "has_strict_permission",
    "path_guard",
    "require_page",
    "view_guard",
]
