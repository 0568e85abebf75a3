"""Boolean short-hand predicates, e.g. ``is_email(value)``."""

from __future__ import annotations

from typing import Any, Callable

from .base import INVALID
from .core import (
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
from .string import validate_email, validate_ip, validate_text, validate_url


def _passes(validator: Callable[..., Any]) -> Callable[..., bool]:
    def predicate(value: Any, *args: Any) -> bool:
        return validator(value, *args) is not INVALID

    predicate.__name__ = validator.__name__.replace("validate_", "is_")
    predicate.__doc__ = f"Return True if `{validator.__name__}` accepts the value."
    return predicate


is_text = _passes(validate_text)
is_integer = _passes(validate_integer)
is_float = _passes(validate_float)
is_boolean = _passes(validate_boolean)
is_timestamp = _passes(validate_timestamp)
is_datetime = _passes(validate_datetime)
is_date = _passes(validate_date)
is_time = _passes(validate_time)
is_ip = _passes(validate_ip)
is_email = _passes(validate_email)
is_url = _passes(validate_url)
is_json = _passes(validate_json)
is_object = _passes(validate_object)


def is_year(value: Any, *args: Any) -> bool:
    """Return True if `validate_year` accepts the value."""
    return validate_year(value, *args)


CHECKS: dict[str, Callable[..., bool]] = {
    "text": is_text,
    "integer": is_integer,
    "float": is_float,
    "boolean": is_boolean,
    "timestamp": is_timestamp,
    "datetime": is_datetime,
    "date": is_date,
    "time": is_time,
    "year": is_year,
    "ip": is_ip,
    "email": is_email,
    "url": is_url,
    "json": is_json,
    "object": is_object,
}


def check(name: str, value: Any, *args: Any) -> bool:
    """
    Run the named short-hand check.

    Raises
    ------
    LookupError
        If there is no check called `name`.
    """
    try:
        predicate = CHECKS[name.lower()]
    except KeyError:
        raise LookupError(f"No validator named '{name}'") from None
    return predicate(value, *args)
