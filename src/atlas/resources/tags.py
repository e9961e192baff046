"""Projection tag resource wrapper."""

from __future__ import annotations

from typing import Optional, Sequence, cast

import pyarrow as pa

from ..codec import RuleInput, compute_definition_id, encode_mask, parse_rule
from .base import Resource
from .tags_types import TagResponse
from ._common_types import ValidationMode, _normalize_id, _normalize_id_sequence


def _rule_fields(dsl_rule: Optional[RuleInput]) -> dict[str, object]:
    """Return the ``dsl_rule``/``tag_definition_id`` body fields for a rule.

    An absent rule contributes no fields at all.
    """
    if dsl_rule is None:
        return {}
    parsed = parse_rule(dsl_rule)
    return {
        "dsl_rule": parsed.to_json(),
        "tag_definition_id": compute_definition_id(parsed),
    }


class Tags(Resource):
    """Tag operations scoped to a projection."""

    def _check_ids(self, action: str, validation: ValidationMode, **ids: object) -> dict[str, str] | None:
        """Return the identifiers stripped, or ``None`` after warning about an invalid one."""
        if validation == "off":
            return cast(dict[str, str], ids)
        normalized = {name: _normalize_id(value) for name, value in ids.items()}
        if any(value is None for value in normalized.values()):
            names = "/".join(ids)
            values = "/".join(str(value) for value in ids.values())
            if validation == "strict":
                raise ValueError(f"Invalid {names}: {values}")
            self._logger.warning("Invalid %s for %s: %s", names, action, values)
            return None
        return cast(dict[str, str], normalized)

    def list(
        self,
        project_id: str,
        projection_id: str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> list[TagResponse] | None:
        """Fetch all tags of a projection.

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
        list[TagResponse] or None
            List of tag dicts, or ``None`` on error.
        """
        params = self._check_ids("list", validation, project_id=project_id, projection_id=projection_id)
        if params is None:
            return None

        response = self._get("/project/projection/tags/get/all", params=params, timeout=timeout)
        if isinstance(response, list):
            return cast(list[TagResponse], response)
        self._logger.warning("Tags response missing expected tags list.")
        return None

    def create(
        self,
        project_id: str,
        projection_id: str,
        tag_name: str,
        *,
        dsl_rule: Optional[RuleInput] = None,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> TagResponse | None:
        """Create a tag on a projection.

        Parameters
        ----------
        project_id
            Project owning the projection.
        projection_id
            Projection identifier.
        tag_name
            Tag name.
        dsl_rule
            Optional rule defining the tag. When given, its tag definition id
            is computed and sent alongside it; when omitted, neither field is
            sent.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        TagResponse or None
            Created tag dict, or ``None`` on error.

        Raises
        ------
        InvalidRuleError
            If ``dsl_rule`` is malformed, regardless of ``validation``.
        """
        ids = self._check_ids("create", validation, project_id=project_id, projection_id=projection_id)
        if ids is None:
            return None
        if validation != "off":
            if not isinstance(tag_name, str) or not tag_name.strip():
                if validation == "strict":
                    raise ValueError(f"Invalid tag_name: {tag_name}")
                self._logger.warning("Invalid tag_name for create: %s", tag_name)
                return None

        payload: dict[str, object] = {
            **ids,
            "tag_name": tag_name,
            **_rule_fields(dsl_rule),
        }
        response = self._post("/project/projection/tags/create", json=payload, timeout=timeout)
        if isinstance(response, dict) and "tag_id" in response:
            return cast(TagResponse, response)
        self._logger.warning("Create tag response missing expected data. Response was %s", response)
        return None

    def update(
        self,
        project_id: str,
        tag_id: str,
        *,
        tag_name: Optional[str] = None,
        dsl_rule: Optional[RuleInput] = None,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> TagResponse | None:
        """Rename a tag and/or replace its rule.

        Parameters
        ----------
        project_id
            Project owning the tag.
        tag_id
            Tag identifier.
        tag_name
            New tag name.
        dsl_rule
            New rule; its tag definition id is recomputed.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        TagResponse or None
            Updated tag dict, or ``None`` on error.
        """
        ids = self._check_ids("update", validation, project_id=project_id, tag_id=tag_id)
        if ids is None:
            return None
        if validation != "off":
            if tag_name is not None and (not isinstance(tag_name, str) or not tag_name.strip()):
                if validation == "strict":
                    raise ValueError(f"Invalid tag_name: {tag_name}")
                self._logger.warning("Invalid tag_name for update: %s", tag_name)
                return None

        if tag_name is None and dsl_rule is None:
            self._logger.warning("No updates provided for tag %s", tag_id)
            return None

        payload: dict[str, object] = {**ids, **_rule_fields(dsl_rule)}
        if tag_name is not None:
            payload["tag_name"] = tag_name

        response = self._post("/project/projection/tags/update", json=payload, timeout=timeout)
        if isinstance(response, dict) and "tag_id" in response:
            return cast(TagResponse, response)
        self._logger.warning("Update tag response missing expected data.")
        return None

    def delete(
        self,
        project_id: str,
        tag_ids: Sequence[str] | str,
        *,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> bool:
        """Delete one or more tags by ID.

        Parameters
        ----------
        project_id
            Project owning the tags.
        tag_ids
            Tag ID or sequence of tag identifiers.
        validation
            Validation mode: ``"off"`` sends inputs as-is, ``"warn"`` drops invalid
            inputs with warnings, and ``"strict"`` raises on invalid inputs.
        timeout
            Request timeout in seconds.

        Returns
        -------
        bool
            ``True`` when every delete request succeeds.
        """
        # When validation is off, pass input directly without transformation
        if validation == "off":
            ids = [tag_ids] if isinstance(tag_ids, str) else list(tag_ids)
        else:
            ids = _normalize_id_sequence(tag_ids)
            normalized_project = _normalize_id(project_id)
            if ids is None or normalized_project is None:
                if validation == "strict":
                    raise ValueError(f"Invalid project_id/tag_ids: {project_id}/{tag_ids}")
                self._logger.warning("Invalid project_id/tag_ids for delete: %s/%s", project_id, tag_ids)
                return False
            project_id = normalized_project

        for tag_id in ids:
            payload = {"project_id": project_id, "tag_id": tag_id}
            response = self._post("/project/projection/tags/delete", json=payload, timeout=timeout)
            if response is None:
                return False
        return True

    def update_mask(
        self,
        project_id: str,
        tag_id: str,
        mask: bytes | pa.Table,
        *,
        tag_definition_id: Optional[str] = None,
        dsl_rule: Optional[RuleInput] = None,
        validation: ValidationMode = "warn",
        timeout: Optional[int] = None,
    ) -> bool:
        """Upsert the membership bitmask of a tag.

        Parameters
        ----------
        project_id
            Project owning the tag.
        tag_id
            Tag identifier.
        mask
            Arrow IPC bytes or a ``pyarrow.Table`` with a boolean membership
            column keyed by tile.
        tag_definition_id
            Definition id the mask was computed for.
        dsl_rule
            Rule to hash when ``tag_definition_id`` is omitted.
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
        MissingTagDefinitionError
            If neither ``tag_definition_id`` nor ``dsl_rule`` is given.
        InvalidRuleError
            If ``dsl_rule`` is malformed.
        CodecError
            If ``mask`` is not an Arrow table with a boolean column.
        """
        ids = self._check_ids("update_mask", validation, project_id=project_id, tag_id=tag_id)
        if ids is None:
            return False

        payload = encode_mask(
            mask,
            tag_id=ids["tag_id"],
            project_id=ids["project_id"],
            tag_definition_id=tag_definition_id,
            dsl_rule=dsl_rule,
        )
        response = self._post("/project/projection/tags/update/mask", data=payload, timeout=timeout)
        return response is not None
