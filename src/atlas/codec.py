"""Tag definition hashing and tag mask encoding.

Tag rules are boolean compositions over predicates. A rule is either a flat
predicate::

    {"field": "topic", "op": "eq", "value": "cats"}

or a combinator list whose first element names the operation::

    ["AND", {"field": "topic", "op": "eq", "value": "cats"},
            ["NOT", {"field": "lang", "op": "eq", "value": "de"}]]

``compute_definition_id`` hashes the canonical JSON form of a rule so every
client that sends the same rule arrives at the same tag definition id.
``encode_mask`` stamps tag metadata onto an Arrow table and writes it with the
IPC file framing for upload.
"""

from __future__ import annotations

import hashlib
import logging
import math
from dataclasses import dataclass
from typing import Literal, Mapping, Optional, Sequence, Union, get_args

import pyarrow as pa

from .errors import CodecError, InvalidRuleError, MissingTagDefinitionError
from .utils import MAX_SAFE_INTEGER, canonical_json

_logger = logging.getLogger(__name__)

# --- Rule Types --- #
CombinatorTag = Literal["OR", "AND", "NOT", "ANY", "ALL"]
COMBINATOR_TAGS: tuple[CombinatorTag, ...] = get_args(CombinatorTag)

PREDICATE_KEYS: tuple[str, ...] = ("field", "op", "value")

Scalar = Union[str, int, float, bool]
PredicateValue = Union[Scalar, tuple[Scalar, ...]]


def _normalize_scalar(value: object) -> Scalar:
    if isinstance(value, (str, bool)):
        return value
    if isinstance(value, int):
        if abs(value) > MAX_SAFE_INTEGER:
            raise InvalidRuleError(f"Integer predicate value outside the exact JSON number range: {value!r}")
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidRuleError(f"Non-finite number in predicate value: {value!r}")
        return value
    raise InvalidRuleError(f"Unsupported predicate value type {type(value).__name__}")


def _normalize_value(value: object) -> Optional[PredicateValue]:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return tuple(_normalize_scalar(item) for item in value)
    return _normalize_scalar(value)


@dataclass(frozen=True)
class Predicate:
    """A single constraint on a dataset field."""

    field: str
    op: str
    value: Optional[PredicateValue] = None

    def __post_init__(self) -> None:
        if not isinstance(self.field, str) or not self.field:
            raise InvalidRuleError(f"Predicate field must be a non-empty string, got {self.field!r}")
        if not isinstance(self.op, str) or not self.op:
            raise InvalidRuleError(f"Predicate op must be a non-empty string, got {self.op!r}")
        object.__setattr__(self, "value", _normalize_value(self.value))

    def to_json(self) -> dict[str, object]:
        payload: dict[str, object] = {"field": self.field, "op": self.op}
        if self.value is not None:
            payload["value"] = list(self.value) if isinstance(self.value, tuple) else self.value
        return payload


@dataclass(frozen=True)
class Combinator:
    """A boolean combination of nested rules."""

    tag: CombinatorTag
    children: tuple["TagComposition", ...]

    def __post_init__(self) -> None:
        if self.tag not in COMBINATOR_TAGS:
            raise InvalidRuleError(f"Unknown combinator {self.tag!r}; expected one of {', '.join(COMBINATOR_TAGS)}")
        if isinstance(self.children, (str, bytes, Mapping)) or not isinstance(self.children, Sequence):
            raise InvalidRuleError(f"Combinator {self.tag} children must be a sequence")
        if not self.children:
            raise InvalidRuleError(f"Combinator {self.tag} has no operands")
        object.__setattr__(self, "children", tuple(parse_rule(child) for child in self.children))

    def to_json(self) -> list[object]:
        return [self.tag, *(child.to_json() for child in self.children)]


TagComposition = Union[Predicate, Combinator]
RuleInput = Union[TagComposition, Mapping[str, object], Sequence[object]]


def parse_rule(rule: RuleInput | object) -> TagComposition:
    """Convert a JSON-shaped rule into a typed ``TagComposition``.

    Parameters
    ----------
    rule
        A ``Predicate`` or ``Combinator``, a predicate mapping with the keys
        ``field``, ``op`` and optionally ``value``, or a list/tuple of the form
        ``[tag, *children]``.

    Returns
    -------
    TagComposition
        The typed rule tree.

    Raises
    ------
    InvalidRuleError
        If the rule is malformed: unknown predicate keys, unknown combinator
        tag, an empty combinator or an unsupported value type.
    """
    if isinstance(rule, (Predicate, Combinator)):
        return rule
    if isinstance(rule, Mapping):
        unknown = sorted(str(key) for key in rule if key not in PREDICATE_KEYS)
        if unknown:
            raise InvalidRuleError(f"Unknown predicate keys: {', '.join(unknown)}")
        if "field" not in rule or "op" not in rule:
            raise InvalidRuleError("Predicate requires 'field' and 'op'")
        return Predicate(field=rule["field"], op=rule["op"], value=rule.get("value"))  # type: ignore[arg-type]
    if isinstance(rule, (list, tuple)):
        if not rule:
            raise InvalidRuleError("Empty combinator array")
        tag, *children = rule
        if not isinstance(tag, str):
            raise InvalidRuleError(f"Combinator tag must be a string, got {tag!r}")
        return Combinator(tag=tag, children=tuple(children))  # type: ignore[arg-type]
    raise InvalidRuleError(f"Unsupported rule type {type(rule).__name__}")


def canonical_rule(rule: RuleInput) -> str:
    """Return the canonical JSON text used to identify ``rule``."""
    parsed = parse_rule(rule)
    return canonical_json(parsed.to_json())


def compute_definition_id(rule: RuleInput) -> str:
    """Return the 32-character hex tag definition id of ``rule``.

    Key order inside predicates does not affect the id; operand order inside
    combinators does.
    """
    digest = hashlib.md5(canonical_rule(rule).encode("utf-8")).hexdigest()
    _logger.debug("Computed tag definition id %s", digest)
    return digest


def resolve_definition_id(
    tag_definition_id: Optional[str] = None,
    dsl_rule: Optional[RuleInput] = None,
) -> str:
    """Return the explicit definition id, or hash ``dsl_rule`` when absent.

    An empty ``tag_definition_id`` counts as absent.

    Raises
    ------
    MissingTagDefinitionError
        If neither argument is supplied.
    ValueError
        If ``tag_definition_id`` is not a string.
    """
    if tag_definition_id is not None and not isinstance(tag_definition_id, str):
        raise ValueError(f"Invalid tag_definition_id: {tag_definition_id!r}")
    if tag_definition_id:
        return tag_definition_id
    if dsl_rule is not None:
        return compute_definition_id(dsl_rule)
    raise MissingTagDefinitionError("tag_definition_id or dsl_rule is required")


# --- Arrow Tables --- #
def _is_boolean_column(data_type: pa.DataType) -> bool:
    if pa.types.is_boolean(data_type):
        return True
    if pa.types.is_list(data_type) or pa.types.is_large_list(data_type) or pa.types.is_fixed_size_list(data_type):
        return pa.types.is_boolean(data_type.value_type)
    return False


def read_table(payload: bytes | bytearray | memoryview) -> pa.Table:
    """Read an Arrow table from IPC bytes in file or stream framing.

    Raises
    ------
    CodecError
        If the bytes are not an Arrow IPC table.
    """
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise CodecError(f"Expected Arrow IPC bytes, got {type(payload).__name__}")
    if not payload:
        raise CodecError("Empty table payload")
    buffer = pa.py_buffer(payload)
    try:
        return pa.ipc.open_file(buffer).read_all()
    except (pa.ArrowException, OSError):
        pass
    try:
        return pa.ipc.open_stream(buffer).read_all()
    except (pa.ArrowException, OSError) as exc:
        raise CodecError(f"Payload is not an Arrow IPC table: {exc}") from exc


def encode_table(table: pa.Table, metadata: Mapping[str, str]) -> bytes:
    """Merge ``metadata`` into the table's schema metadata and write IPC file bytes.

    Existing schema metadata is kept; keys present in ``metadata`` are
    overwritten.
    """
    merged: dict[bytes, bytes] = dict(table.schema.metadata or {})
    for key, value in metadata.items():
        merged[key.encode("utf-8")] = value.encode("utf-8")
    stamped = table.replace_schema_metadata(merged)

    sink = pa.BufferOutputStream()
    with pa.ipc.new_file(sink, stamped.schema) as writer:
        writer.write_table(stamped)
    return sink.getvalue().to_pybytes()


def build_mask_table(
    keys: Sequence[str],
    membership: Sequence[bool] | Sequence[Sequence[bool]],
    *,
    key_column: str = "tile_key",
    mask_column: str = "bitmask",
) -> pa.Table:
    """Build a mask table from row keys and boolean membership values.

    ``membership`` holds either one boolean per key or one list of booleans
    per key (a per-tile bitmask).
    """
    try:
        table = pa.table(
            {
                key_column: pa.array(list(keys), type=pa.string()),
                mask_column: pa.array(list(membership)),
            }
        )
    except (pa.ArrowException, TypeError) as exc:
        raise CodecError(f"Could not build mask table: {exc}") from exc
    if not _is_boolean_column(table.schema.field(mask_column).type):
        raise CodecError(f"Mask column {mask_column!r} is not boolean")
    return table


def encode_mask(
    mask: bytes | bytearray | memoryview | pa.Table,
    *,
    tag_id: str,
    project_id: str,
    tag_definition_id: Optional[str] = None,
    dsl_rule: Optional[RuleInput] = None,
) -> bytes:
    """Stamp tag metadata onto a mask table and serialize it for upload.

    Parameters
    ----------
    mask
        Arrow IPC bytes (file or stream framing) or a ``pyarrow.Table`` holding
        at least one boolean or list-of-boolean column.
    tag_id
        Tag the mask belongs to.
    project_id
        Project owning the tag.
    tag_definition_id
        Definition id to attach. Computed from ``dsl_rule`` when omitted.
    dsl_rule
        Rule to hash when ``tag_definition_id`` is not given.

    Returns
    -------
    bytes
        Arrow IPC file bytes with ``tag_id``, ``project_id`` and
        ``tag_definition_id`` in the schema metadata.

    Raises
    ------
    MissingTagDefinitionError
        If neither ``tag_definition_id`` nor ``dsl_rule`` is given.
    CodecError
        If ``mask`` is not an Arrow table or has no boolean column.
    ValueError
        If ``tag_id`` or ``project_id`` is empty.
    """
    definition_id = resolve_definition_id(tag_definition_id, dsl_rule)
    if not isinstance(tag_id, str) or not tag_id:
        raise ValueError(f"Invalid tag_id: {tag_id!r}")
    if not isinstance(project_id, str) or not project_id:
        raise ValueError(f"Invalid project_id: {project_id!r}")

    table = mask if isinstance(mask, pa.Table) else read_table(mask)
    if not any(_is_boolean_column(field.type) for field in table.schema):
        raise CodecError("Mask table has no boolean column")

    return encode_table(
        table,
        {
            "tag_id": tag_id,
            "project_id": project_id,
            "tag_definition_id": definition_id,
        },
    )


def decode_mask(payload: bytes | bytearray | memoryview) -> tuple[pa.Table, dict[str, str]]:
    """Read an encoded mask back into a table and its decoded schema metadata."""
    table = read_table(payload)
    metadata = {
        key.decode("utf-8"): value.decode("utf-8")
        for key, value in (table.schema.metadata or {}).items()
    }
    return table, metadata


__all__ = [
    "COMBINATOR_TAGS",
    "Combinator",
    "CombinatorTag",
    "Predicate",
    "PredicateValue",
    "RuleInput",
    "TagComposition",
    "build_mask_table",
    "canonical_rule",
    "compute_definition_id",
    "decode_mask",
    "encode_mask",
    "encode_table",
    "parse_rule",
    "read_table",
    "resolve_definition_id",
]
