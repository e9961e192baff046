"""Core Atlas client with a raw-request escape hatch."""

from __future__ import annotations

import logging
import os
from typing import Any, Literal, Optional

import requests

from .resources.organizations import Organizations
from .resources.projections import Projections
from .resources.projects import Projects
from .resources.tags import Tags
from .resources.users import Users

Environment = Literal["staging", "production"]

TENANTS: dict[str, dict[str, str]] = {
    "staging": {
        "frontend_domain": "staging-atlas.nomic.ai",
        "api_domain": "staging-api-atlas.nomic.ai",
    },
    "production": {
        "frontend_domain": "atlas.nomic.ai",
        "api_domain": "api-atlas.nomic.ai",
    },
}

DEFAULT_ENVIRONMENT = os.environ.get("ATLAS_ENVIRONMENT", "production")
DEFAULT_API_DOMAIN = os.environ.get("ATLAS_API_DOMAIN")

_BINARY_CONTENT_TYPES = ("application/octet-stream", "application/vnd.apache.arrow")


class Atlas:
    """Resource-grouped client for the Atlas API."""

    users: Users
    organizations: Organizations
    projects: Projects
    projections: Projections

    def __init__(
        self,
        *,
        environment: Optional[Environment] = None,
        api_domain: Optional[str] = None,
        api_key: Optional[str] = None,
        bearer_token: Optional[str] = None,
        default_timeout: int = 20,
        session: Optional[requests.Session] = None,
        raise_on_error: bool = False,
    ) -> None:
        """Create an Atlas client bound to a tenant.

        Parameters
        ----------
        environment
            Tenant name, ``"staging"`` or ``"production"``.
        api_domain
            API host (and optional port) overriding the tenant's domain.
        api_key
            API key exchanged for a bearer token on first use. Defaults to
            ``ATLAS_API_KEY`` when no bearer token is given.
        bearer_token
            Access token sent as-is; takes precedence over ``api_key``.
        default_timeout
            Default request timeout in seconds.
        session
            Optional requests session to reuse connections.
        raise_on_error
            If True, raise HTTP errors instead of returning None.
        """
        self.environment = environment or DEFAULT_ENVIRONMENT
        if self.environment not in TENANTS:
            raise ValueError(f"Unknown environment: {self.environment}")
        self.api_domain = api_domain or DEFAULT_API_DOMAIN or TENANTS[self.environment]["api_domain"]
        self.default_timeout = default_timeout
        self.raise_on_error = raise_on_error
        self._logger = logging.getLogger(__name__)
        self._session = session
        self._bearer_token = bearer_token
        self._api_key = api_key if api_key is not None or bearer_token is not None else os.environ.get("ATLAS_API_KEY")

        self.users: Users = Users(self)
        self.organizations: Organizations = Organizations(self)
        self.projects: Projects = Projects(self)
        self.projections: Projections = Projections(self, projects=self.projects)
        self.projections.tags = Tags(self)

    @property
    def protocol(self) -> str:
        return "http" if self.api_domain.startswith("localhost") else "https"

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.api_domain}"

    @property
    def is_authenticated(self) -> bool:
        return bool(self._bearer_token or self._api_key)

    def _build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        if not path.startswith("/v1/"):
            path = "/v1" + path
        return f"{self.base_url}{path}"

    def _access_token(self) -> Optional[str]:
        """Return the bearer token, exchanging the API key on first use."""
        if self._bearer_token is not None or not self._api_key:
            return self._bearer_token

        url = self._build_url(f"/user/token/refresh/{self._api_key}")
        requester = self._session or requests
        response = requester.request("GET", url, timeout=self.default_timeout)
        try:
            response.raise_for_status()
        except requests.HTTPError:
            # The failing URL embeds the key; keep it out of the message.
            raise ValueError("Could not authorize with the provided API key.") from None
        payload = response.json()
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise ValueError("Could not authorize with the provided API key.")
        self._bearer_token = token
        return token

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any] | list[tuple[str, Any]]] = None,
        json: Optional[dict[str, Any]] = None,
        data: Optional[bytes] = None,
        timeout: Optional[int] = None,
    ) -> Optional[dict[str, Any] | list[Any] | bytes]:
        """Send an authenticated request to the Atlas API.

        Parameters
        ----------
        method
            HTTP method (GET, POST, PATCH, DELETE).
        path
            Endpoint path, with or without a leading `/v1`.
        params
            Query parameters for the request.
        json
            JSON payload for the request.
        data
            Raw bytes body, sent as ``application/octet-stream``.
        timeout
            Timeout in seconds for this request.

        Returns
        -------
        dict | list | bytes | None
            Parsed JSON payload, raw bytes for Arrow responses, or None if the
            response is empty or non-JSON.
        """
        url = self._build_url(path)
        headers: dict[str, str] = {}
        if data is not None:
            headers["Content-Type"] = "application/octet-stream"

        requester = self._session or requests
        response = None
        try:
            token = self._access_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
            response = requester.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                headers=headers,
                timeout=timeout or self.default_timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            if self.raise_on_error:
                raise
            # Extract error message from response body if available
            error_msg = str(exc)
            try:
                error_body = response.json() if response is not None else None
                if isinstance(error_body, dict):
                    if "message" in error_body:
                        error_msg = f"{exc}\nServer message: {error_body['message']}"
                    elif "error" in error_body:
                        error_msg = f"{exc}\nServer error: {error_body['error']}"
                    elif "detail" in error_body:
                        error_msg = f"{exc}\nDetails: {error_body['detail']}"
            except (ValueError, AttributeError, KeyError):
                pass  # Response wasn't JSON or didn't have expected fields
            self._logger.warning("Request failed for %s %s: %s", method, path, error_msg)
            return None
        except Exception as exc:  # noqa: BLE001 - surface request failures
            if self.raise_on_error:
                raise
            self._logger.warning("Request failed for %s %s: %s", method, path, exc)
            return None

        if not response.content:
            return None
        content_type = (getattr(response, "headers", None) or {}).get("Content-Type", "")
        if content_type.startswith(_BINARY_CONTENT_TYPES):
            return response.content
        try:
            payload = response.json()
        except ValueError:  # noqa: PERF203 - only attempt JSON when present
            self._logger.warning("Response from %s %s was not JSON", method, path)
            return None
        if isinstance(payload, (dict, list)):
            return payload
        return None
