"""Field type and error kind enumerations."""

from enum import Enum


class FieldType(str, Enum):
    """
    Closed set of field types.

    The type drives both casting (`Field.cast`) and validation dispatch
    (`Field.validate`).
    """

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    YEAR = "year"
    TIMESTAMP = "timestamp"
    EMAIL = "email"
    URL = "url"
    IP = "ip"
    JSON = "json"
    BINARY = "binary"
    OBJECT = "object"
    ENTITY = "entity"
    COLLECTION = "collection"

    def __str__(self) -> str:
        return self.value


NUMERIC_TYPES = frozenset({FieldType.INTEGER, FieldType.FLOAT})
TEMPORAL_TYPES = frozenset(
    {FieldType.DATETIME, FieldType.DATE, FieldType.TIME, FieldType.YEAR}
)
TEXT_TYPES = frozenset(
    {FieldType.TEXT, FieldType.IP, FieldType.EMAIL, FieldType.URL, FieldType.JSON}
)
# Types whose fields must declare a `class` rule
COMPOSITE_TYPES = frozenset(
    {FieldType.OBJECT, FieldType.ENTITY, FieldType.COLLECTION}
)


class ErrorKind(str, Enum):
    """
    Reason a single field failed validation.

    `ErrorKind.NONE` is falsy so results can be tested with ``if error:``.
    """

    NONE = "none"
    REQUIRED = "required"
    NULL = "null"
    BOOLEAN = "boolean"
    MIN = "min"
    MAX = "max"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    VALUE = "value"
    REGEX = "regex"
    # Per-type coercion failures
    INVALID_TEXT = "invalid_text"
    INVALID_INTEGER = "invalid_integer"
    INVALID_FLOAT = "invalid_float"
    INVALID_DATETIME = "invalid_datetime"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"
    INVALID_YEAR = "invalid_year"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_EMAIL = "invalid_email"
    INVALID_URL = "invalid_url"
    INVALID_IP = "invalid_ip"
    INVALID_JSON = "invalid_json"
    INVALID_BINARY = "invalid_binary"
    INVALID_OBJECT = "invalid_object"
    INVALID_ENTITY = "invalid_entity"
    INVALID_COLLECTION = "invalid_collection"

    def __bool__(self) -> bool:
        return self is not ErrorKind.NONE

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_type(cls, field_type: FieldType) -> "ErrorKind":
        """Return the error reported when a value cannot be coerced to `field_type`."""
        if field_type is FieldType.BOOLEAN:
            return cls.BOOLEAN
        return cls(f"invalid_{FieldType(field_type).value}")

    @property
    def description(self) -> str:
        """Human-readable description of this error."""
        if self.value.startswith("invalid_"):
            return f"must be a valid {self.value.removeprefix('invalid_')}"
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.NONE: "is valid",
    ErrorKind.REQUIRED: "is required",
    ErrorKind.NULL: "must not be null",
    ErrorKind.BOOLEAN: "must be a boolean",
    ErrorKind.MIN: "is below the minimum",
    ErrorKind.MAX: "is above the maximum",
    ErrorKind.TOO_SHORT: "is too short",
    ErrorKind.TOO_LONG: "is too long",
    ErrorKind.VALUE: "is not an allowed value",
    ErrorKind.REGEX: "does not match the required pattern",
}
