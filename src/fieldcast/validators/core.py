"""Numeric, boolean, JSON, binary and referential validators."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from ..types import TEMPORAL_TYPES, FieldType
from .base import INVALID

_INTEGER = re.compile(r"[+-]?(?:0|[1-9]\d*)")
_FLOAT = re.compile(
    r"[+-]?(?:(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)

TRUE_TOKENS = frozenset({"1", "true", "on", "yes"})
FALSE_TOKENS = frozenset({"0", "false", "off", "no", ""})

# All-zero values that stand for "no value" in temporal and ip fields
PLACEHOLDERS: dict[FieldType, frozenset[str]] = {
    FieldType.DATETIME: frozenset({"0000-00-00 00:00:00", "0000-00-00"}),
    FieldType.DATE: frozenset({"0000-00-00"}),
    FieldType.TIME: frozenset({"00:00:00"}),
    FieldType.YEAR: frozenset({"0000"}),
    FieldType.IP: frozenset({"0.0.0.0"}),
}


def parse_integer(value: Any) -> Any:
    """Strictly parse `value` as an integer, without the empty-to-zero shortcut."""
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if value.is_integer() else INVALID
    if isinstance(value, bytes):
        try:
            value = value.decode()
        except UnicodeDecodeError:
            return INVALID
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER.fullmatch(text):
            return int(text)
    return INVALID


def validate_integer(value: Any) -> Any:
    """
    Validate a value as an integer.

    None, False, 0 and empty strings are converted to zero. Anything else
    must be an integer or an integer string; "12abc" and "1.5" fail.
    """
    if not value:
        return 0
    return parse_integer(value)


def validate_float(value: Any) -> Any:
    """
    Validate a value as a float.

    None, False, 0 and empty strings are converted to zero. Strings may use
    commas as thousands separators ("1,234.5").
    """
    if not value:
        return 0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if _FLOAT.fullmatch(text):
            return float(text.replace(",", ""))
    return INVALID


def validate_boolean(value: Any) -> Any:
    """
    Validate a value as a boolean.

    Recognises "1", "true", "on" and "yes" as True and "0", "false", "off",
    "no" and "" as False, case-insensitively. Anything else is INVALID.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, int):
        value = str(value)
    if isinstance(value, str):
        token = value.strip().lower()
        if token in TRUE_TOKENS:
            return True
        if token in FALSE_TOKENS:
            return False
    return INVALID


def validate_json(value: Any) -> Any:
    """
    Decode JSON strings, or check that other values can be encoded.

    Returns the decoded structure for strings and the original value
    otherwise.
    """
    if isinstance(value, (str, bytes, bytearray)):
        try:
            return json.loads(value)
        except ValueError:
            return INVALID
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return INVALID
    return value


def validate_binary(value: Any) -> Any:
    """Pass binary data through; non-bytes values are stringified."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return "" if value is None else str(value)


def validate_object(
    value: Any, cls: type | tuple[type, ...], nullable: bool = False
) -> Any:
    """Accept instances of `cls`, and None when `nullable` is set."""
    if isinstance(value, cls):
        return value
    if nullable and value is None:
        return value
    return INVALID


def is_empty(value: Any, field_type: FieldType | str = FieldType.TEXT) -> bool:
    """
    Check whether `value` counts as "no value" for a field of `field_type`.

    Falsy values and blank strings are always empty. Beyond that:

    - collection: no truthy elements
    - entity: the referenced entity has no identity (``id``)
    - datetime, date, time, year: the all-zero placeholder
    - ip: the all-zero address
    """
    if not value or (isinstance(value, str) and not value.strip()):
        return True

    field_type = FieldType(field_type)

    if field_type is FieldType.COLLECTION:
        items = value.values() if isinstance(value, Mapping) else value
        return not any(items)

    if field_type is FieldType.ENTITY:
        return not getattr(value, "id", None)

    if field_type in TEMPORAL_TYPES or field_type is FieldType.IP:
        if isinstance(value, str):
            return value.strip() in PLACEHOLDERS[field_type]
        if field_type is FieldType.IP and isinstance(value, int):
            return not value
        return False

    return False
