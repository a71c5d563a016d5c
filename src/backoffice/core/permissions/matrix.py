"""Permission matrix editor.

Holds the rows an administrator is editing for one role, one row per
registered page plus the wildcard row, and keeps them consistent while
toggling:

- turning edit on turns view on
- turning view off turns edit off
- toggling a section root applies the same value to its direct children
- turning the wildcard row on (view or edit) grants view and edit everywhere

Nothing is written until :meth:`PermissionMatrixEditor.save`.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import structlog

from backoffice.core.errors import SaveError, ValidationError
from backoffice.core.permissions import registry
from backoffice.core.permissions.registry import (
    FULL_ACCESS_ENTRY,
    WILDCARD,
    ParentState,
    PermissionLike,
)
from backoffice.core.permissions.rules import PageGrant, validate_permission_hierarchy
from backoffice.core.permissions.store import PermissionStore


logger = structlog.get_logger()

FIELDS: tuple[str, ...] = ("can_view", "can_edit")


@dataclass
class MatrixRow:
    page_name: str
    display_name: str
    parent_id: str | None = None
    description: str = ""
    can_view: bool = False
    can_edit: bool = False
    registered: bool = True

    def set(self, field: str, value: bool) -> None:
        if field == "can_view":
            self.can_view = value
            if not value:
                self.can_edit = False
        else:
            self.can_edit = value
            if value:
                self.can_view = True


class PermissionMatrixEditor:
    """In-memory editing session for one role's permission rows.

    Attributes:
        role_id: Role being edited
        rows: Current rows, wildcard first, then registry order, then
            stored rows for pages the registry does not know
        error: Message of the last failed save, None otherwise
    """

    def __init__(self, role_id: UUID) -> None:
        self.role_id = role_id
        self.rows: list[MatrixRow] = []
        self.error: str | None = None
        self.reset([])

    @classmethod
    def from_permissions(
        cls, role_id: UUID, permissions: Iterable[PermissionLike]
    ) -> "PermissionMatrixEditor":
        editor = cls(role_id)
        editor.reset(permissions)
        return editor

    @classmethod
    def from_rows(
        cls, role_id: UUID, rows: Iterable[PermissionLike]
    ) -> "PermissionMatrixEditor":
        """Rebuild an editor from rows a client submitted.

        Edit without view is normalized to view and edit, matching what the
        toggles would have produced.
        """
        grants = [
            PageGrant(r.page_name, bool(r.can_view or r.can_edit), bool(r.can_edit))
            for r in rows
        ]
        return cls.from_permissions(role_id, grants)

    def reset(self, permissions: Iterable[PermissionLike]) -> None:
        """Replace the rows with ``permissions``; missing pages start empty."""
        by_page = {p.page_name: p for p in validate_permission_hierarchy(permissions)}

        entries = [FULL_ACCESS_ENTRY, *registry.get_available_pages()]
        rows = [
            MatrixRow(
                page_name=entry.path,
                display_name=entry.display_name,
                parent_id=entry.parent_id,
                description=entry.description,
            )
            for entry in entries
        ]
        known = {row.page_name for row in rows}
        rows.extend(
            MatrixRow(page_name=page, display_name=page, registered=False)
            for page in sorted(by_page)
            if page not in known
        )

        for row in rows:
            stored = by_page.get(row.page_name)
            if stored is not None:
                row.can_view = bool(stored.can_view)
                row.can_edit = bool(stored.can_edit)

        self.rows = rows
        self.error = None

    def row(self, page_name: str) -> MatrixRow:
        for row in self.rows:
            if row.page_name == page_name:
                return row
        raise ValidationError(
            "Unknown page",
            errors=[{"field": "page_name", "message": f"Unknown page: {page_name}"}],
        )

    def toggle(self, page_name: str, field: str, value: bool) -> None:
        """Apply one checkbox change and everything it implies.

        Raises:
            ValidationError: If the page or field is unknown
        """
        if field not in FIELDS:
            raise ValidationError(
                "Unknown permission field",
                errors=[{"field": "field", "message": f"Unknown field: {field}"}],
            )

        target = self.row(page_name)
        target.set(field, value)

        if page_name == WILDCARD:
            if value:
                for row in self.rows:
                    row.can_view = True
                    row.can_edit = True
            return

        for child in registry.get_children(page_name):
            self.row(child.path).set(field, value)

    def parent_state(self, parent_id: str, field: str) -> ParentState:
        return registry.get_parent_state(parent_id, field, self.rows)

    def to_grants(self) -> list[PageGrant]:
        return [PageGrant(r.page_name, r.can_view, r.can_edit) for r in self.rows]

    def to_dict(self) -> dict[str, Any]:
        parents = [row.page_name for row in self.rows if registry.is_parent(row.page_name)]
        return {
            "role_id": str(self.role_id),
            "rows": [
                {
                    "page_name": row.page_name,
                    "display_name": row.display_name,
                    "parent_id": row.parent_id,
                    "description": row.description,
                    "can_view": row.can_view,
                    "can_edit": row.can_edit,
                    "registered": row.registered,
                }
                for row in self.rows
            ],
            "parent_states": {
                parent: {
                    field: self.parent_state(parent, field).value for field in FIELDS
                }
                for parent in parents
            },
            "error": self.error,
        }

    async def load(self, store: PermissionStore) -> None:
        self.reset(await store.load_permissions(self.role_id))

    async def save(self, store: PermissionStore) -> None:
        """Persist the rows and reload them from the store.

        On failure the edits are kept and ``error`` is set so the save can
        be retried.

        Raises:
            SaveError: If the store could not replace the rows
        """
        grants = validate_permission_hierarchy(self.to_grants())
        try:
            saved = await store.save_permissions(self.role_id, grants)
        except SaveError as exc:
            self.error = exc.message
            logger.warning("permission_matrix_save_failed", role_id=str(self.role_id))
            raise
        self.reset(saved)
