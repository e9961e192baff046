"""Shared types and validation helpers for resources.

This module contains:
- Validation mode type (shared across all resources)
- Identifier normalizers (single ids and id sequences)
"""

from __future__ import annotations

from typing import Literal, Sequence

from ..utils import unique_in_order

# --- Shared Validation Mode --- #
ValidationMode = Literal["off", "warn", "strict"]


# --- Identifier Normalization --- #
def _normalize_id(value: object) -> str | None:
    """Normalize an Atlas identifier (UUID string).

    Parameters
    ----------
    value
        Identifier input.

    Returns
    -------
    str | None
        The stripped identifier, or None if the input is not a non-empty string.
    """
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _normalize_id_sequence(ids: str | Sequence[str] | object) -> list[str] | None:
    """Normalize single ID or sequence of IDs to a deduplicated list.

    Parameters
    ----------
    ids
        Single identifier or sequence of identifiers.

    Returns
    -------
    list[str] | None
        Deduplicated list of valid IDs, or None if:
        - Input is not a string or sequence (or is bytes)
        - No valid IDs found

    Notes
    -----
    Filters out any non-string or blank elements, then deduplicates.
    """
    if isinstance(ids, str):
        id_list: list[object] = [ids]
    elif isinstance(ids, Sequence) and not isinstance(ids, bytes):
        id_list = list(ids)
    else:
        return None

    valid_ids = [normalized for normalized in map(_normalize_id, id_list) if normalized is not None]
    if not valid_ids:
        return None

    return unique_in_order(valid_ids)
