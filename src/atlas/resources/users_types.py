"""Types for the users resource."""

from __future__ import annotations

from typing import Literal, TypedDict
from typing_extensions import ReadOnly

AccessRole = Literal["OWNER", "MEMBER"]


class OrganizationUserInfo(TypedDict, total=False):
    """Readonly organization membership entry of a user."""
    organization_id: ReadOnly[str]
    nickname: ReadOnly[str]
    user_id: ReadOnly[str]
    access_role: ReadOnly[AccessRole]


class UserInfo(TypedDict, total=False):
    """Readonly user dict returned by the user endpoint."""
    sub: ReadOnly[str]
    nickname: ReadOnly[str]
    name: ReadOnly[str]
    picture: ReadOnly[str]
    updated_at: ReadOnly[str]
    default_organization: ReadOnly[str]
    organizations: ReadOnly[list[OrganizationUserInfo]]

__all__ = ["AccessRole", "OrganizationUserInfo", "UserInfo"]
