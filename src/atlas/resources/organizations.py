"""Organization resource wrapper."""

from __future__ import annotations

from typing import Optional, cast

from .base import Resource
from ._common_types import ValidationMode, _normalize_id
from .organizations_types import OrganizationInfo
from .projects_types import MODALITIES, Modality, ProjectResponse


class Organizations(Resource):
    """Organization operations."""

    def info(
        self,
        organization_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> OrganizationInfo | None:
        """Fetch an organization by ID.

        Parameters
        ----------
        organization_id
            Organization identifier.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        OrganizationInfo or None
            Organization dict, or ``None`` on error.
        """
        if validation != "off":
            normalized = _normalize_id(organization_id)
            if normalized is None:
                if validation == "strict":
                    raise ValueError(f"Invalid organization_id: {organization_id}")
                self._logger.warning("Invalid organization_id for info: %s", organization_id)
                return None
            organization_id = normalized

        response = self._get(f"/organization/{organization_id}", timeout=timeout)
        if isinstance(response, dict):
            return cast(OrganizationInfo, response)
        self._logger.warning("Organization response missing expected data.")
        return None

    def projects(
        self,
        organization_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> list[ProjectResponse] | None:
        """Return the projects of an organization, or ``None`` on error."""
        info = self.info(organization_id, validation=validation, timeout=timeout)
        if info is None:
            return None
        projects = info.get("projects")
        if isinstance(projects, list):
            return projects
        self._logger.warning("Organization response missing expected projects list.")
        return None

    def create_project(
        self,
        organization_id: str,
        project_name: str,
        *,
        unique_id_field: str,
        modality: Modality,
        description: str = "",
        is_public: bool = True,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> ProjectResponse | None:
        """Create a project in an organization.

        Parameters
        ----------
        organization_id
            Organization that will own the project.
        project_name
            Display name of the project.
        unique_id_field
            Name of the field that uniquely identifies each data row.
        modality
            ``"text"`` or ``"embedding"``.
        description
            Optional project description.
        is_public
            Whether the project is publicly viewable.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        ProjectResponse or None
            Created project dict, or ``None`` on error.
        """
        if validation != "off":
            problems: list[str] = []
            if _normalize_id(organization_id) is None:
                problems.append(f"organization_id={organization_id!r}")
            if not isinstance(project_name, str) or not project_name.strip():
                problems.append(f"project_name={project_name!r}")
            if not isinstance(unique_id_field, str) or not unique_id_field.strip():
                problems.append(f"unique_id_field={unique_id_field!r}")
            if modality not in MODALITIES:
                problems.append(f"modality={modality!r}")
            if problems:
                if validation == "strict":
                    raise ValueError(f"Invalid create_project input: {', '.join(problems)}")
                self._logger.warning("Invalid create_project input: %s", ", ".join(problems))
                return None

        payload: dict[str, object] = {
            "organization_id": organization_id,
            "project_name": project_name,
            "description": description,
            "unique_id_field": unique_id_field,
            "modality": modality,
            "is_public": is_public,
        }
        response = self._post("/project/create", json=payload, timeout=timeout)
        if isinstance(response, dict) and "id" in response:
            return cast(ProjectResponse, response)
        self._logger.warning("Create project response missing expected data. Response was %s", response)
        return None
