"""Timestamp, date/time and year validators."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from dateutil import parser as date_parser

from ..types import FieldType
from .base import INVALID
from .core import PLACEHOLDERS, parse_integer, validate_integer

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

ZERO_DATE = "0000-00-00"

# Strings that mean "no value" for every date/time field
_NO_VALUE = frozenset({"", "0", *PLACEHOLDERS[FieldType.TIME]})

YEAR_MIN = 1900
YEAR_MAX = 2155


def validate_timestamp(value: Any) -> Any:
    """
    Resolve a value to a unix timestamp.

    Integers (and integer strings) are taken as-is, "@1700000000" is an
    explicit epoch marker, and anything else is parsed as a free-form
    date/time string.
    """
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, date):
        return int(datetime.combine(value, time()).timestamp())

    ts = parse_integer(value)
    if ts is not INVALID:
        return ts
    if not isinstance(value, str):
        return INVALID

    text = value.strip()
    if text.startswith("@"):
        return parse_integer(text[1:])
    if not text:
        return INVALID

    try:
        return int(date_parser.parse(text).timestamp())
    except (ValueError, OverflowError):
        return INVALID


def validate_datetime(value: Any, fmt: str = DATETIME_FORMAT) -> Any:
    """
    Validate a date/time value and render it with `fmt`.

    Falsy and blank values, "0", and the all-zero placeholders ("0000-00-00",
    "00:00:00") mean "no value" and are converted to an empty string.
    """
    if not value:
        return ""
    if isinstance(value, str):
        text = value.strip()
        if text in _NO_VALUE or ZERO_DATE in text:
            return ""

    ts = validate_timestamp(value)
    if ts is INVALID:
        return INVALID

    try:
        return datetime.fromtimestamp(ts).strftime(fmt)
    except (OverflowError, OSError, ValueError):
        return INVALID


def validate_date(value: Any) -> Any:
    """Validate a date value and render it as YYYY-MM-DD."""
    return validate_datetime(value, DATE_FORMAT)


def validate_time(value: Any) -> Any:
    """Validate a time of day and render it as HH:MM:SS."""
    return validate_datetime(value, TIME_FORMAT)


def validate_year(
    value: Any, min_year: int = YEAR_MIN, max_year: int = YEAR_MAX
) -> bool:
    """
    Check that a value is a year between `min_year` and `max_year` inclusive.

    Unlike the other validators this returns an acceptability flag rather
    than a coerced value.
    """
    year = validate_integer(value)
    if year is INVALID:
        return False
    return min_year <= year <= max_year
