"""Types for the organizations resource."""

from __future__ import annotations

from typing import TypedDict
from typing_extensions import ReadOnly

from .projects_types import ProjectResponse


class OrganizationInfo(TypedDict, total=False):
    """Readonly organization dict returned by the organization endpoint."""
    id: ReadOnly[str]
    nickname: ReadOnly[str]
    projects: ReadOnly[list[ProjectResponse]]

__all__ = ["OrganizationInfo"]
