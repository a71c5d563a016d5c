"""Permission system database models.

- Role: a named access level (Owner, Admin, Manager, ...)
- Permission: one row per (role, page) granting view and/or edit
- Profile: the back-office user record keyed by the auth identity,
  pointing at exactly one role
"""

from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    String,
    UniqueConstraint,
    false,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PAGE_NAME_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from backoffice.core.database.base import Base, TimestampMixin, UUIDMixin


class Role(Base, UUIDMixin, TimestampMixin):
    """Role model representing an access level.

    Attributes:
        name: Unique role name (e.g., "Owner", "Manager", "Viewer")
        description: Human-readable description of the role
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"


class Permission(Base, UUIDMixin, TimestampMixin):
    """A role's access to one page.

    `page_name` is a normalized dashboard path or the wildcard `*`.
    Edit implies view: a row with `can_edit` set must also have `can_view`.

    Attributes:
        role_id: The role this row belongs to
        page_name: Page path or `*`
        can_view: Whether the page may be rendered
        can_edit: Whether mutating controls may be rendered
    """

    __tablename__ = "permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "page_name", name="uq_permission_role_page"),
        CheckConstraint(
            "NOT can_edit OR can_view",
            name="ck_permission_edit_implies_view",
        ),
    )

    role_id: Mapped[UUID] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    page_name: Mapped[str] = mapped_column(
        String(MAX_PAGE_NAME_LENGTH),
        nullable=False,
    )
    can_view: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )
    can_edit: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Permission(role_id={self.role_id}, page={self.page_name}, "
            f"view={self.can_view}, edit={self.can_edit})>"
        )


class Profile(Base, TimestampMixin):
    """Back-office user profile.

    The primary key is the identity issued by the auth provider, so a
    profile is found straight from the bearer token's subject.

    Attributes:
        id: Auth user id
        email: Contact email, if known
        full_name: Display name
        role_id: Assigned role; None until an administrator assigns one
        is_active: Deactivated profiles resolve to no role
    """

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(primary_key=True, index=True)
    email: Mapped[str | None] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=True,
        index=True,
    )
    full_name: Mapped[str | None] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    role_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        server_default=true(),
        nullable=False,
    )

    role: Mapped[Role | None] = relationship(
        "Role",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email}, role_id={self.role_id})>"
