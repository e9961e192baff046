"""Public package surface for the Atlas Python client."""

from .client import DEFAULT_ENVIRONMENT, TENANTS, Atlas
from .codec import (
    Combinator,
    Predicate,
    TagComposition,
    build_mask_table,
    compute_definition_id,
    decode_mask,
    encode_mask,
    parse_rule,
)
from .errors import AtlasError, CodecError, InvalidRuleError, MissingTagDefinitionError



__all__ = [
    "DEFAULT_ENVIRONMENT",
    "TENANTS",
    "Atlas",
    "AtlasError",
    "CodecError",
    "Combinator",
    "InvalidRuleError",
    "MissingTagDefinitionError",
    "Predicate",
    "TagComposition",
    "build_mask_table",
    "compute_definition_id",
    "decode_mask",
    "encode_mask",
    "parse_rule",
]
