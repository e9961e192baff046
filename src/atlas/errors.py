"""Exception types raised by the Atlas client."""

from __future__ import annotations


class AtlasError(Exception):
    """Base class for errors raised by this package."""


class InvalidRuleError(AtlasError, ValueError):
    """A tag composition is malformed or uses an unknown combinator."""


class MissingTagDefinitionError(AtlasError, ValueError):
    """Neither a tag definition id nor a rule to hash was supplied."""


class CodecError(AtlasError, ValueError):
    """Table bytes could not be decoded or lack a boolean membership column."""


__all__ = [
    "AtlasError",
    "CodecError",
    "InvalidRuleError",
    "MissingTagDefinitionError",
]
