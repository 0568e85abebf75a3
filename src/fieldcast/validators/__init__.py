"""Per-type validators: each returns a coerced value or `INVALID`."""

from .base import INVALID
from .core import (
    is_empty,
    validate_binary,
    validate_boolean,
    validate_float,
    validate_integer,
    validate_json,
    validate_object,
)
from .datetime import (
    validate_date,
    validate_datetime,
    validate_time,
    validate_timestamp,
    validate_year,
)
from .shortcuts import (
    CHECKS,
    check,
    is_boolean,
    is_date,
    is_datetime,
    is_email,
    is_float,
    is_integer,
    is_ip,
    is_json,
    is_object,
    is_text,
    is_time,
    is_timestamp,
    is_url,
    is_year,
)
from .string import validate_email, validate_ip, validate_text, validate_url

__all__ = [
    "INVALID",
    "is_empty",
    "validate_text",
    "validate_integer",
    "validate_float",
    "validate_boolean",
    "validate_timestamp",
    "validate_datetime",
    "validate_date",
    "validate_time",
    "validate_year",
    "validate_ip",
    "validate_email",
    "validate_url",
    "validate_json",
    "validate_binary",
    "validate_object",
    # Short-hand predicates
    "CHECKS",
    "check",
    "is_text",
    "is_integer",
    "is_float",
    "is_boolean",
    "is_timestamp",
    "is_datetime",
    "is_date",
    "is_time",
    "is_year",
    "is_ip",
    "is_email",
    "is_url",
    "is_json",
    "is_object",
]
