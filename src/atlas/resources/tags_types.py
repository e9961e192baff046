"""Types for the projection tags resource.

Rule inputs are validated and hashed by :mod:`atlas.codec`; the response
shape is all that lives here.
"""

from __future__ import annotations

from typing import TypedDict
from typing_extensions import ReadOnly


class TagResponse(TypedDict, total=False):
    """Readonly tag dict returned by tag endpoints."""
    tag_id: ReadOnly[str]
    tag_definition_id: ReadOnly[str]
    tag_name: ReadOnly[str]
    user_id: ReadOnly[str]

__all__ = ["TagResponse"]
