"""Types and validation helpers for projects resource."""

from __future__ import annotations

from typing import Literal, TypedDict, get_args
from typing_extensions import ReadOnly

Modality = Literal["text", "embedding"]
MODALITIES: tuple[Modality, ...] = get_args(Modality)


class ProjectionResponse(TypedDict, total=False):
    """Readonly projection dict nested in index responses."""
    id: ReadOnly[str]
    projection_name: ReadOnly[str]
    ready: ReadOnly[bool]


class IndexResponse(TypedDict, total=False):
    """Readonly index dict nested in project responses."""
    id: ReadOnly[str]
    index_name: ReadOnly[str]
    indexed_field: ReadOnly[str]
    projections: ReadOnly[list[ProjectionResponse]]


class ProjectResponse(TypedDict, total=False):
    """Readonly project dict returned by project endpoints."""
    id: ReadOnly[str]
    project_name: ReadOnly[str]
    organization_id: ReadOnly[str]
    unique_id_field: ReadOnly[str]
    modality: ReadOnly[Modality]
    is_public: ReadOnly[bool]
    insert_update_delete_lock: ReadOnly[bool]
    atlas_indices: ReadOnly[list[IndexResponse]]

__all__ = ["IndexResponse", "MODALITIES", "Modality", "ProjectResponse", "ProjectionResponse"]
