"""Shared helpers for the Atlas client."""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Hashable, Iterable, Mapping, TypeVar

T = TypeVar("T", bound=Hashable)

# Largest integer a JavaScript number holds exactly.
MAX_SAFE_INTEGER = 2**53 - 1


def unique_in_order(values: Iterable[T]) -> list[T]:
    """Return unique values preserving the original order."""
    seen: set[T] = set()
    output: list[T] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        output.append(value)
    return output


def format_number(value: int | float) -> str:
    """Render a number the way ECMAScript ``Number.prototype.toString`` does.

    Floats use their shortest round-trip digits. Plain notation is used when
    the decimal point falls within 21 digits of the first digit and the value
    is at least ``1e-6``; otherwise exponent form without a padded exponent
    (``1e-7``, ``1e+21``, ``1.5e+300``).

    Raises
    ------
    ValueError
        For NaN or infinite floats.
    """
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise ValueError(f"Out of range float value: {value!r}")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, raw_digits, exponent = Decimal(repr(abs(value))).as_tuple()
    # value == 0.<digits> * 10**point
    point = len(raw_digits) + int(exponent)
    digits = "".join(str(digit) for digit in raw_digits).rstrip("0")
    count = len(digits)

    if count <= point <= 21:
        return sign + digits + "0" * (point - count)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits
    power = point - 1
    mantissa = digits if count == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def canonical_json(value: object) -> str:
    """Serialize ``value`` to compact JSON with sorted keys.

    Strings are written unescaped beyond what JSON requires and numbers as
    ``format_number`` renders them, so the text matches ``JSON.stringify`` of
    the same sorted-key value.

    Raises
    ------
    ValueError
        For NaN or infinite floats.
    TypeError
        For values JSON cannot represent.
    """
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, Mapping):
        if not all(isinstance(key, str) for key in value):
            raise TypeError("Object keys must be strings")
        members = (f"{json.dumps(key, ensure_ascii=False)}:{canonical_json(value[key])}" for key in sorted(value))
        return "{" + ",".join(members) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(canonical_json(item) for item in value) + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
