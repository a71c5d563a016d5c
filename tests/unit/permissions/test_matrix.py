"""Unit tests for the permission matrix editor.

These tests verify:
- Row layout (wildcard first, registry order, unknown stored pages last)
- Toggle implications and cascades
- Saving through a store, including failed saves
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from backoffice.core.errors import SaveError, ValidationError
from backoffice.core.permissions import registry
from backoffice.core.permissions.matrix import PermissionMatrixEditor
from backoffice.core.permissions.registry import ParentState
from backoffice.core.permissions.rules import PageGrant


pytestmark = pytest.mark.unit


@pytest.fixture
def editor() -> PermissionMatrixEditor:
    return PermissionMatrixEditor(uuid4())


class TestLayout:
    """Tests for the rows an editor starts with."""

    def test_one_row_per_page_plus_wildcard(self, editor: PermissionMatrixEditor) -> None:
        pages = registry.get_available_pages()
        assert len(editor.rows) == len(pages) + 1
        assert editor.rows[0].page_name == "*"
        assert [r.page_name for r in editor.rows[1:]] == [p.path for p in pages]

    def test_starts_empty(self, editor: PermissionMatrixEditor) -> None:
        assert not any(r.can_view or r.can_edit for r in editor.rows)

    def test_stored_rows_fill_matching_pages(self) -> None:
        editor = PermissionMatrixEditor.from_permissions(
            uuid4(), [PageGrant("/dashboard/billing", True, True)]
        )
        row = editor.row("/dashboard/billing")
        assert (row.can_view, row.can_edit) == (True, True)

    def test_unregistered_stored_pages_are_kept(self) -> None:
        editor = PermissionMatrixEditor.from_permissions(
            uuid4(), [PageGrant("/dashboard/legacy", True, False)]
        )
        row = editor.rows[-1]
        assert row.page_name == "/dashboard/legacy"
        assert row.registered is False
        assert row.can_view is True

    def test_from_rows_normalizes_edit_without_view(self) -> None:
        editor = PermissionMatrixEditor.from_rows(
            uuid4(), [PageGrant("/dashboard/config", False, True)]
        )
        row = editor.row("/dashboard/config")
        assert (row.can_view, row.can_edit) == (True, True)


class TestToggle:
    """Tests for toggle()."""

    def test_edit_on_turns_view_on(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("/dashboard/config", "can_edit", True)
        row = editor.row("/dashboard/config")
        assert (row.can_view, row.can_edit) == (True, True)

    def test_view_off_turns_edit_off(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("/dashboard/config", "can_edit", True)
        editor.toggle("/dashboard/config", "can_view", False)
        row = editor.row("/dashboard/config")
        assert (row.can_view, row.can_edit) == (False, False)

    def test_view_off_keeps_edit_on_other_pages(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("/dashboard/profile", "can_edit", True)
        editor.toggle("/dashboard/config", "can_view", False)
        assert editor.row("/dashboard/profile").can_edit is True

    def test_parent_cascades_to_children(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("/dashboard/billing", "can_view", True)

        for child in registry.get_children("/dashboard/billing"):
            assert editor.row(child.path).can_view is True
        assert editor.parent_state("/dashboard/billing", "can_view") is ParentState.ALL
        assert editor.row("/dashboard/inventory/packages").can_view is False

    def test_parent_edit_off_cascades(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("/dashboard/billing", "can_edit", True)
        editor.toggle("/dashboard/billing", "can_edit", False)

        for child in registry.get_children("/dashboard/billing"):
            row = editor.row(child.path)
            assert (row.can_view, row.can_edit) == (True, False)

    def test_child_toggle_makes_parent_indeterminate(
        self, editor: PermissionMatrixEditor
    ) -> None:
        editor.toggle("/dashboard/billing", "can_view", True)
        editor.toggle("/dashboard/billing/invoice", "can_view", False)

        assert editor.row("/dashboard/billing").can_view is True
        assert editor.parent_state("/dashboard/billing", "can_view") is ParentState.SOME

    def test_wildcard_on_grants_everything(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("*", "can_view", True)
        assert all(r.can_view and r.can_edit for r in editor.rows)

    def test_wildcard_off_leaves_other_rows(self, editor: PermissionMatrixEditor) -> None:
        editor.toggle("*", "can_edit", True)
        editor.toggle("*", "can_view", False)

        wildcard = editor.row("*")
        assert (wildcard.can_view, wildcard.can_edit) == (False, False)
        assert editor.row("/dashboard").can_edit is True

    def test_unknown_page(self, editor: PermissionMatrixEditor) -> None:
        with pytest.raises(ValidationError):
            editor.toggle("/dashboard/nowhere", "can_view", True)

    def test_unknown_field(self, editor: PermissionMatrixEditor) -> None:
        with pytest.raises(ValidationError):
            editor.toggle("/dashboard", "can_delete", True)

    def test_rows_never_hold_edit_without_view(self, editor: PermissionMatrixEditor) -> None:
        for page, field, value in [
            ("/dashboard/users", "can_edit", True),
            ("/dashboard/users/roles", "can_view", False),
            ("*", "can_edit", True),
            ("/dashboard/billing", "can_view", False),
        ]:
            editor.toggle(page, field, value)
            assert not any(r.can_edit and not r.can_view for r in editor.rows)


class TestToDict:
    """Tests for the serialized matrix."""

    def test_parent_states_cover_section_roots(self, editor: PermissionMatrixEditor) -> None:
        data = editor.to_dict()
        assert set(data["parent_states"]) == {
            "/dashboard/users",
            "/dashboard/inventory",
            "/dashboard/consumer",
            "/dashboard/billing",
        }
        assert data["parent_states"]["/dashboard/users"] == {
            "can_view": "none",
            "can_edit": "none",
        }
        assert data["error"] is None


class TestSave:
    """Tests for save() against a stubbed store."""

    async def test_save_sends_rows_and_reloads(self, editor: PermissionMatrixEditor) -> None:
        saved = [PageGrant("/dashboard", True, False)]
        store = AsyncMock()
        store.save_permissions.return_value = saved

        editor.toggle("/dashboard", "can_view", True)
        editor.toggle("/dashboard/config", "can_view", True)
        await editor.save(store)

        role_id, grants = store.save_permissions.await_args.args
        assert role_id == editor.role_id
        assert PageGrant("/dashboard", True, False) in grants
        assert editor.row("/dashboard/config").can_view is False
        assert editor.error is None

    async def test_failed_save_keeps_edits(self, editor: PermissionMatrixEditor) -> None:
        store = AsyncMock()
        store.save_permissions.side_effect = SaveError()

        editor.toggle("/dashboard/config", "can_edit", True)
        with pytest.raises(SaveError):
            await editor.save(store)

        assert editor.row("/dashboard/config").can_edit is True
        assert editor.error == "Failed to save permissions"

    async def test_load(self, editor: PermissionMatrixEditor) -> None:
        store = AsyncMock()
        store.load_permissions.return_value = [PageGrant("*", True, False)]

        await editor.load(store)

        store.load_permissions.assert_awaited_once_with(editor.role_id)
        assert editor.row("*").can_view is True
