"""Unit tests for the permission rule engine.

These tests verify:
- Path normalization
- The strict evaluator (exact rows and the wildcard)
- The legacy inheriting evaluator
- Strategy selection through evaluate()
"""

import pytest

from backoffice.core.permissions.rules import (
    NO_ACCESS,
    AccessResult,
    Action,
    EvaluationStrategy,
    PageGrant,
    accessible_paths,
    check_path_permission,
    editable_paths,
    evaluate,
    find_permission,
    has_full_access,
    has_strict_permission,
    normalize_path,
    validate_permission_hierarchy,
)


pytestmark = pytest.mark.unit


MANAGER_LIKE = [
    PageGrant("/dashboard", True, False),
    PageGrant("/dashboard/billing", True, False),
    PageGrant("/dashboard/billing/entries", True, True),
]


class TestNormalizePath:
    """Tests for normalize_path."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/dashboard/billing/", "/dashboard/billing"),
            ("/dashboard/consumer/programs/[id]", "/dashboard/consumer/programs"),
            ("/dashboard/consumer/programs/[id]/edit", "/dashboard/consumer/programs/edit"),
            ("", "/"),
            (None, "/"),
            ("/", "/"),
        ],
    )
    def test_normalizes(self, raw: str | None, expected: str) -> None:
        assert normalize_path(raw) == expected

    def test_idempotent(self) -> None:
        once = normalize_path("/dashboard/[a]/billing/[b]/")
        assert normalize_path(once) == once


class TestStrictEvaluator:
    """Tests for has_strict_permission."""

    def test_exact_row_grants_view(self) -> None:
        assert has_strict_permission(MANAGER_LIKE, "/dashboard/billing") is True

    def test_exact_row_without_edit_denies_edit(self) -> None:
        assert has_strict_permission(MANAGER_LIKE, "/dashboard/billing", "edit") is False

    def test_exact_row_with_edit_grants_edit(self) -> None:
        assert has_strict_permission(MANAGER_LIKE, "/dashboard/billing/entries", "edit")

    def test_no_inheritance_from_parent(self) -> None:
        """A child page without its own row is denied even when the parent is visible."""
        assert has_strict_permission(MANAGER_LIKE, "/dashboard/billing/invoice") is False

    def test_trailing_slash_and_dynamic_segment_are_ignored(self) -> None:
        assert has_strict_permission(MANAGER_LIKE, "/dashboard/billing/entries/[id]/")

    def test_wildcard_grants_everything(self) -> None:
        rows = [PageGrant("*", True, True)]
        assert has_strict_permission(rows, "/dashboard/anything", "view")
        assert has_strict_permission(rows, "/dashboard/anything", "edit")

    def test_view_only_wildcard_denies_edit(self) -> None:
        rows = [PageGrant("*", True, False)]
        assert has_strict_permission(rows, "/dashboard/billing") is True
        assert has_strict_permission(rows, "/dashboard/billing", "edit") is False

    def test_exact_row_beats_wildcard(self) -> None:
        """An explicit restrictive row wins over a permissive wildcard."""
        rows = [PageGrant("*", True, True), PageGrant("/dashboard/config", False, False)]
        assert has_strict_permission(rows, "/dashboard/config") is False
        assert has_strict_permission(rows, "/dashboard/billing") is True

    def test_edit_without_view_denies_edit(self) -> None:
        rows = [PageGrant("/dashboard/billing", False, True)]
        assert has_strict_permission(rows, "/dashboard/billing", "edit") is False

    def test_empty_rows_deny(self) -> None:
        assert has_strict_permission([], "/dashboard") is False

    def test_unknown_action_denies(self) -> None:
        rows = [PageGrant("*", True, True)]
        assert has_strict_permission(rows, "/dashboard", "delete") is False


class TestLegacyEvaluator:
    """Tests for check_path_permission."""

    def test_wildcard_short_circuits(self) -> None:
        rows = [PageGrant("*", True, True)]
        assert check_path_permission(rows, "/dashboard/config") == AccessResult(True, True)

    def test_wildcard_edit_follows_its_own_flag(self) -> None:
        rows = [PageGrant("*", True, False)]
        assert check_path_permission(rows, "/dashboard/config") == AccessResult(True, False)
        assert check_path_permission(rows, "/dashboard/config", require_edit=True) == NO_ACCESS

    def test_exact_row(self) -> None:
        result = check_path_permission(MANAGER_LIKE, "/dashboard/billing/entries")
        assert result == AccessResult(has_access=True, can_edit=True)

    def test_section_root_inherits_from_dashboard(self) -> None:
        """A section root without rows below it falls back to /dashboard."""
        rows = [PageGrant("/dashboard", True, False)]
        result = check_path_permission(rows, "/dashboard/inventory")
        assert result == AccessResult(has_access=True, can_edit=False)

    def test_explicit_child_row_blocks_inheritance(self) -> None:
        rows = [
            PageGrant("/dashboard", True, True),
            PageGrant("/dashboard/inventory/packages", False, False),
        ]
        assert check_path_permission(rows, "/dashboard/inventory") == NO_ACCESS

    def test_leaf_pages_never_inherit(self) -> None:
        rows = [PageGrant("/dashboard", True, True)]
        assert check_path_permission(rows, "/dashboard/billing/invoice") == NO_ACCESS

    def test_unregistered_path_falls_back_to_dashboard(self) -> None:
        rows = [PageGrant("/dashboard", True, False)]
        assert check_path_permission(rows, "/dashboard/unknown").has_access is True

    def test_require_edit(self) -> None:
        result = check_path_permission(MANAGER_LIKE, "/dashboard/billing", require_edit=True)
        assert result == NO_ACCESS

    def test_row_without_page_is_skipped(self) -> None:
        rows = [PageGrant(None, True, True), PageGrant("/dashboard", True, False)]  # type: ignore[arg-type]
        result = check_path_permission(rows, "/dashboard/inventory")
        assert result == AccessResult(has_access=True, can_edit=False)


class TestEvaluate:
    """Tests for strategy selection."""

    def test_strict_is_default(self) -> None:
        rows = [PageGrant("/dashboard", True, False)]
        assert evaluate(rows, "/dashboard/inventory") is False

    def test_inherited_strategy(self) -> None:
        rows = [PageGrant("/dashboard", True, False)]
        assert evaluate(rows, "/dashboard/inventory", Action.VIEW, EvaluationStrategy.INHERITED)

    def test_strategies_agree_on_exact_rows(self) -> None:
        for page in ("/dashboard", "/dashboard/billing", "/dashboard/billing/entries"):
            for action in ("view", "edit"):
                assert evaluate(MANAGER_LIKE, page, action, "strict") == evaluate(
                    MANAGER_LIKE, page, action, "inherited"
                )

    def test_unknown_strategy_denies(self) -> None:
        assert evaluate([PageGrant("*", True, True)], "/dashboard", "view", "magic") is False

    def test_unknown_action_denies(self) -> None:
        assert evaluate([PageGrant("*", True, True)], "/dashboard", "purge") is False

    def test_edit_implies_view(self) -> None:
        """Whenever edit is granted, view is granted too."""
        rows = [
            PageGrant("/dashboard/billing", False, True),
            PageGrant("/dashboard/billing/entries", True, True),
            PageGrant("*", True, False),
        ]
        for strategy in EvaluationStrategy:
            for page in ("/dashboard/billing", "/dashboard/billing/entries", "/dashboard"):
                if evaluate(rows, page, "edit", strategy):
                    assert evaluate(rows, page, "view", strategy)


class TestHelpers:
    """Tests for the row helpers."""

    def test_find_permission(self) -> None:
        assert find_permission(MANAGER_LIKE, "/dashboard") == MANAGER_LIKE[0]
        assert find_permission(MANAGER_LIKE, "/dashboard/config") is None

    def test_has_full_access(self) -> None:
        assert has_full_access([PageGrant("*", True, False)]) is True
        assert has_full_access([PageGrant("*", False, False)]) is False
        assert has_full_access(MANAGER_LIKE) is False

    def test_accessible_and_editable_paths(self) -> None:
        assert accessible_paths(MANAGER_LIKE) == [
            "/dashboard",
            "/dashboard/billing",
            "/dashboard/billing/entries",
        ]
        assert editable_paths(MANAGER_LIKE) == ["/dashboard/billing/entries"]

    def test_validate_drops_rows_without_page(self) -> None:
        rows = [PageGrant("", True, True), PageGrant("/dashboard", True, False)]
        assert validate_permission_hierarchy(rows) == [rows[1]]
