"""Per-request permission state machine.

A :class:`PermissionController` answers "may this user see / edit this
page" for one page at a time::

    loading --load ok, view granted--> authorized
    loading --load ok, view denied---> unauthorized
    loading --any failure------------> errored

Every :meth:`PermissionController.load` re-enters ``loading`` and reads the
store again; nothing is cached between checks. A load that is superseded by
a newer one, or that finishes after :meth:`PermissionController.close`,
leaves the state untouched.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any
from uuid import UUID

import structlog

from backoffice.core.errors import AppException
from backoffice.core.permissions import rules
from backoffice.core.permissions.registry import PermissionLike
from backoffice.core.permissions.rules import Action, EvaluationStrategy
from backoffice.core.permissions.store import PermissionStore


logger = structlog.get_logger()


class ControllerState(StrEnum):
    LOADING = "loading"
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"
    ERRORED = "errored"


@dataclass(frozen=True)
class ControllerError:
    code: str
    message: str


UNAUTHENTICATED = ControllerError("unauthenticated", "User not authenticated")


class PermissionController:
    """Loads a user's permission rows and evaluates them for a page.

    Args:
        store: Where profiles and rows are read from
        strategy: Evaluator used for every decision this controller makes
    """

    def __init__(
        self,
        store: PermissionStore,
        strategy: str = EvaluationStrategy.STRICT,
    ) -> None:
        self.store = store
        self.strategy = EvaluationStrategy(strategy)
        self.state = ControllerState.LOADING
        self.user_id: UUID | None = None
        self.role_id: UUID | None = None
        self.path: str | None = None
        self.permissions: list[PermissionLike] = []
        self.error: ControllerError | None = None
        self._can_view = False
        self._can_edit = False
        self._generation = 0
        self._closed = False

    @property
    def is_loading(self) -> bool:
        return self.state is ControllerState.LOADING

    @property
    def is_ready(self) -> bool:
        return self.state in (ControllerState.AUTHORIZED, ControllerState.UNAUTHORIZED)

    @property
    def can_view(self) -> bool:
        return self.state is ControllerState.AUTHORIZED and self._can_view

    @property
    def can_edit(self) -> bool:
        return self.state is ControllerState.AUTHORIZED and self._can_edit

    def close(self) -> None:
        """Stop accepting results from loads still in flight."""
        self._closed = True

    async def load(self, user_id: UUID | None, path: str | None) -> ControllerState:
        """Resolve the user's role, read its rows and evaluate ``path``.

        Never raises for store failures; they land in ``errored``.

        Returns:
            The state after this load. When the load went stale this is the
            state some newer load (or none) left behind.
        """
        self._generation += 1
        generation = self._generation
        page = rules.normalize_path(path)
        self._enter_loading(user_id, page)

        if user_id is None:
            self._fail(generation, UNAUTHENTICATED)
            return self.state

        try:
            role_id = await self.store.resolve_role_id(user_id)
            permissions = await self.store.load_permissions(role_id)
        except AppException as exc:
            self._fail(generation, ControllerError(exc.error_code, exc.message))
            return self.state

        if self._is_stale(generation):
            logger.debug("permission_result_discarded", user_id=str(user_id), path=page)
            return self.state

        self.role_id = role_id
        self.permissions = list(permissions)
        self._can_view = rules.evaluate(self.permissions, page, Action.VIEW, self.strategy)
        self._can_edit = rules.evaluate(self.permissions, page, Action.EDIT, self.strategy)

        if self._can_view:
            self.state = ControllerState.AUTHORIZED
        else:
            self.state = ControllerState.UNAUTHORIZED
            logger.info(
                "permission_denied",
                user_id=str(user_id),
                role_id=str(role_id),
                path=page,
                strategy=self.strategy.value,
            )
        return self.state

    def has_permission_for(self, path: str | None, action: str = Action.VIEW) -> bool:
        """Evaluate another page against the rows already loaded."""
        if not self.is_ready:
            return False
        return rules.evaluate(self.permissions, path, action, self.strategy)

    def accessible_paths(self) -> list[str]:
        return rules.accessible_paths(self.permissions) if self.is_ready else []

    def editable_paths(self) -> list[str]:
        return rules.editable_paths(self.permissions) if self.is_ready else []

    @property
    def has_full_access(self) -> bool:
        return self.is_ready and rules.has_full_access(self.permissions)

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the controller for debugging endpoints."""
        return {
            "state": self.state.value,
            "strategy": self.strategy.value,
            "user_id": str(self.user_id) if self.user_id else None,
            "role_id": str(self.role_id) if self.role_id else None,
            "path": self.path,
            "can_view": self.can_view,
            "can_edit": self.can_edit,
            "has_full_access": self.has_full_access,
            "accessible_paths": self.accessible_paths(),
            "editable_paths": self.editable_paths(),
            "permission_count": len(self.permissions),
            "error": (
                {"code": self.error.code, "message": self.error.message}
                if self.error
                else None
            ),
        }

    def _enter_loading(self, user_id: UUID | None, page: str) -> None:
        if self._closed:
            return
        self.state = ControllerState.LOADING
        self.user_id = user_id
        self.role_id = None
        self.path = page
        self.permissions = []
        self.error = None
        self._can_view = False
        self._can_edit = False

    def _is_stale(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    def _fail(self, generation: int, error: ControllerError) -> None:
        if self._is_stale(generation):
            return
        self.state = ControllerState.ERRORED
        self.error = error
        logger.warning(
            "permission_check_errored",
            user_id=str(self.user_id) if self.user_id else None,
            path=self.path,
            error_code=error.code,
        )


def decide(
    permissions: Sequence[PermissionLike],
    path: str | None,
    strategy: str = EvaluationStrategy.STRICT,
) -> tuple[bool, bool]:
    """(can_view, can_edit) for rows already in hand, as a controller would."""
    return (
        rules.evaluate(permissions, path, Action.VIEW, strategy),
        rules.evaluate(permissions, path, Action.EDIT, strategy),
    )
