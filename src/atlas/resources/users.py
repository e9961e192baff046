"""Current user resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from .base import Resource
from .users_types import UserInfo


class Users(Resource):
    """Operations on the authenticated user."""

    def info(self, *, timeout: Optional[int] = None) -> UserInfo | None:
        """Fetch the authenticated user's profile.

        Parameters
        ----------
        timeout
            Request timeout in seconds.

        Returns
        -------
        UserInfo or None
            User dict, or ``None`` on error.
        """
        response = self._get("/user/", timeout=timeout)
        if isinstance(response, dict):
            return cast(UserInfo, response)
        self._logger.warning("User response missing expected data.")
        return None

    def default_organization(self, *, timeout: Optional[int] = None) -> str | None:
        """Return the user's default organization id.

        Falls back to the first organization membership when no default is
        set. Returns ``None`` when the user belongs to no organization or the
        request fails.
        """
        info = self.info(timeout=timeout)
        if info is None:
            return None
        default = info.get("default_organization")
        if isinstance(default, str) and default:
            return default
        organizations = info.get("organizations")
        if isinstance(organizations, list) and organizations:
            first = organizations[0]
            organization_id = first.get("organization_id") if isinstance(first, dict) else None
            if isinstance(organization_id, str):
                return organization_id
        self._logger.warning("User has no organization memberships.")
        return None
