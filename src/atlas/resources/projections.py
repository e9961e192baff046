"""Projection resource wrapper."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING, cast

from .base import Resource
from .projects import Projects
from .projects_types import IndexResponse
from ._common_types import ValidationMode, _normalize_id

if TYPE_CHECKING:  # pragma: no cover
    from .tags import Tags


class Projections(Resource):
    """Operations on the 2D projections of a project's indices."""

    tags: Tags

    def __init__(self, client, *, projects: Projects) -> None:
        """Initialize projection helpers.

        Parameters
        ----------
        client
            Core Atlas client instance.
        projects
            Projects resource wrapper, used to discover indices.
        """
        super().__init__(client)
        self._projects = projects

    def _check_ids(
        self,
        project_id: object,
        projection_id: object,
        action: str,
        validation: ValidationMode,
    ) -> tuple[str, str] | None:
        if validation == "off":
            return cast(str, project_id), cast(str, projection_id)
        normalized_project = _normalize_id(project_id)
        normalized_projection = _normalize_id(projection_id)
        if normalized_project is None or normalized_projection is None:
            if validation == "strict":
                raise ValueError(f"Invalid project_id/projection_id: {project_id}/{projection_id}")
            self._logger.warning("Invalid project_id/projection_id for %s: %s/%s", action, project_id, projection_id)
            return None
        return normalized_project, normalized_projection

    def info(
        self,
        project_id: str,
        projection_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> dict[str, object] | None:
        """Fetch projection details.

        Parameters
        ----------
        project_id
            Project owning the projection.
        projection_id
            Projection identifier.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        dict or None
            Projection dict, or ``None`` on error.
        """
        checked = self._check_ids(project_id, projection_id, "info", validation)
        if checked is None:
            return None
        project_id, projection_id = checked

        response = self._get(f"/project/{project_id}/index/projection/{projection_id}", timeout=timeout)
        if isinstance(response, dict):
            return response
        self._logger.warning("Projection response missing expected data.")
        return None

    def quadtree_root(self, project_id: str, projection_id: str) -> str:
        """Return the URL of the quadtree root for a projection."""
        return f"{self._client.base_url}/v1/project/{project_id}/index/projection/{projection_id}/quadtree"

    def find_index(
        self,
        project_id: str,
        projection_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> IndexResponse | None:
        """Return the index a projection belongs to.

        Scans the project's indices for one listing ``projection_id`` among its
        projections. Returns ``None`` when no index matches or the lookup fails.
        """
        checked = self._check_ids(project_id, projection_id, "find_index", validation)
        if checked is None:
            return None
        project_id, projection_id = checked

        indices = self._projects.indices(project_id, validation=validation, timeout=timeout)
        if indices is None:
            return None
        for index in indices:
            projections = index.get("projections") if isinstance(index, dict) else None
            if not isinstance(projections, list):
                continue
            for projection in projections:
                if isinstance(projection, dict) and projection.get("id") == projection_id:
                    return index
        self._logger.warning("Could not find index for projection %s", projection_id)
        return None
