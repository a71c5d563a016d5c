"""Pydantic schemas for dashboard navigation and pages."""

from pydantic import BaseModel


class NavigationItem(BaseModel):
    path: str
    display_name: str
    accessible: bool
    children: list["NavigationItem"] = []


class NavigationResponse(BaseModel):
    items: list[NavigationItem]
    has_full_access: bool


class PageLink(BaseModel):
    path: str
    display_name: str


class PagePayload(BaseModel):
    """What the dashboard renders for one page.

    ``controls`` only lists mutating actions when the caller may edit the
    page; ``children`` only lists sub-pages the caller may view.
    """

    path: str
    display_name: str
    description: str
    can_edit: bool
    controls: list[str]
    children: list[PageLink]
