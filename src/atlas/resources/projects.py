"""Project resource wrapper."""

from __future__ import annotations

from typing import Optional, Sequence, cast

import pyarrow as pa

from ..codec import encode_table, read_table
from .base import Resource
from ._common_types import ValidationMode, _normalize_id
from .projects_types import IndexResponse, ProjectResponse


class Projects(Resource):
    """Project operations."""

    def _check_id(self, project_id: object, action: str, validation: ValidationMode) -> str | None:
        if validation == "off":
            return cast(str, project_id)
        normalized = _normalize_id(project_id)
        if normalized is None:
            if validation == "strict":
                raise ValueError(f"Invalid project_id: {project_id}")
            self._logger.warning("Invalid project_id for %s: %s", action, project_id)
        return normalized

    def info(
        self,
        project_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> ProjectResponse | None:
        """Fetch a project by ID.

        Parameters
        ----------
        project_id
            Project identifier.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        ProjectResponse or None
            Project dict, or ``None`` on error.
        """
        checked = self._check_id(project_id, "info", validation)
        if checked is None:
            return None

        response = self._get(f"/project/{checked}", timeout=timeout)
        if isinstance(response, dict):
            return cast(ProjectResponse, response)
        self._logger.warning("Project response missing expected data.")
        return None

    def delete(
        self,
        project_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> bool:
        """Delete a project. Returns ``True`` when the request succeeds."""
        checked = self._check_id(project_id, "delete", validation)
        if checked is None:
            return False
        response = self._post("/project/remove", json={"project_id": checked}, timeout=timeout)
        return response is not None

    def indices(
        self,
        project_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> list[IndexResponse] | None:
        """Return the indices built on a project, or ``None`` on error."""
        info = self.info(project_id, validation=validation, timeout=timeout)
        if info is None:
            return None
        indices = info.get("atlas_indices")
        if isinstance(indices, list):
            return indices
        self._logger.warning("Project response missing expected atlas_indices list.")
        return None

    def is_locked(
        self,
        project_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> bool | None:
        """Return whether the project is locked by a running insert/update/delete job."""
        info = self.info(project_id, validation=validation, timeout=timeout)
        if info is None:
            return None
        return bool(info.get("insert_update_delete_lock"))

    def upload_arrow(
        self,
        project_id: str,
        table: pa.Table | bytes,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> bool:
        """Upload rows to a project as an Arrow table.

        Parameters
        ----------
        project_id
            Target project identifier.
        table
            A ``pyarrow.Table`` or Arrow IPC bytes. The ``project_id`` is
            stamped into the schema metadata before upload.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        bool
            ``True`` when the upload request succeeds.

        Raises
        ------
        CodecError
            If ``table`` bytes are not an Arrow IPC table.
        """
        checked = self._check_id(project_id, "upload_arrow", validation)
        if checked is None:
            return False

        if not isinstance(table, pa.Table):
            table = read_table(table)
        if table.num_rows == 0:
            self._logger.warning("Refusing to upload an empty table to project %s", checked)
            return False

        payload = encode_table(table, {"project_id": checked})
        response = self._post("/project/data/add/arrow", data=payload, timeout=timeout)
        return response is not None

    def create_index(
        self,
        project_id: str,
        index_name: str,
        *,
        indexed_field: Optional[str] = None,
        colorable_fields: Sequence[str] = (),
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> dict[str, object] | None:
        """Start building an index (and its default projection) on a project.

        Parameters
        ----------
        project_id
            Project identifier.
        index_name
            Display name of the index.
        indexed_field
            Text field to embed; omit for embedding projects.
        colorable_fields
            Fields the map may color points by.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        dict or None
            The index job response, or ``None`` on error.
        """
        checked = self._check_id(project_id, "create_index", validation)
        if checked is None:
            return None
        if validation != "off" and (not isinstance(index_name, str) or not index_name.strip()):
            if validation == "strict":
                raise ValueError(f"Invalid index_name: {index_name}")
            self._logger.warning("Invalid index_name for create_index: %s", index_name)
            return None

        payload: dict[str, object] = {
            "project_id": checked,
            "index_name": index_name,
            "colorable_fields": list(colorable_fields),
        }
        if indexed_field is not None:
            payload["indexed_field"] = indexed_field

        response = self._post("/project/index/create", json=payload, timeout=timeout)
        if isinstance(response, dict):
            return response
        self._logger.warning("Create index response missing expected data.")
        return None
