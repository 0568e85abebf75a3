"""Text, email, url and ip validators."""

from __future__ import annotations

import ipaddress
from typing import Any

from pydantic import AnyUrl, EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .base import INVALID
from .core import parse_integer

# Built once; constructing a TypeAdapter compiles a pydantic-core schema
_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def validate_text(value: Any, encoding: str = "utf-8") -> Any:
    """
    Validate that a value is well-formed text and trim surrounding whitespace.

    Bytes are decoded with `encoding`; strings must be encodable with it
    (lone surrogates are rejected).
    """
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode(encoding)
        except UnicodeDecodeError:
            return INVALID
    elif not isinstance(value, str):
        value = str(value)
    else:
        try:
            value.encode(encoding)
        except UnicodeEncodeError:
            return INVALID
    return value.strip()


def validate_email(value: Any) -> Any:
    """
    Validate a value as an email address.

    Empty values are allowed and are converted to an empty string.
    """
    if not value:
        return ""
    if not isinstance(value, str):
        return INVALID
    try:
        _EMAIL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return INVALID
    return value


def validate_url(value: Any) -> Any:
    """
    Validate a value as an absolute URL.

    Empty values are allowed and are converted to an empty string.
    """
    if not value:
        return ""
    if not isinstance(value, str):
        return INVALID
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return INVALID
    return value


def validate_ip(value: Any) -> Any:
    """
    Validate a value as an IPv4 address and return it in dotted-quad form.

    Packed integers (and digit strings) are decoded first, so 3232235777
    becomes "192.168.1.1".
    """
    if isinstance(value, bool):
        return INVALID
    packed = parse_integer(value)
    if packed is not INVALID and packed:
        value = packed
    elif not isinstance(value, str):
        return INVALID
    try:
        return str(ipaddress.IPv4Address(value))
    except ValueError:
        return INVALID
