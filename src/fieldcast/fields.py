"""Field definitions with type casting, defaults and rule validation."""

from __future__ import annotations

import copy
import json
import math
import operator
import re
from collections.abc import Collection, Mapping, Sized
from dataclasses import dataclass
from functools import partial
from types import MappingProxyType
from typing import Any, Callable

from .errors import ConfigurationError
from .types import (
    COMPOSITE_TYPES,
    NUMERIC_TYPES,
    TEMPORAL_TYPES,
    TEXT_TYPES,
    ErrorKind,
    FieldType,
)
from .validators import (
    INVALID,
    is_empty,
    validate_binary,
    validate_boolean,
    validate_date,
    validate_datetime,
    validate_email,
    validate_float,
    validate_integer,
    validate_ip,
    validate_json,
    validate_object,
    validate_text,
    validate_time,
    validate_timestamp,
    validate_url,
    validate_year,
)
from .validators.datetime import ZERO_DATE

# Sentinel value to distinguish "not found" from a stored None
MISSING = object()

# Recognised constraint names; any other residual rule is kept but ignored
RULE_NAMES = frozenset(
    {"min", "max", "min_length", "max_length", "regex", "values", "class", "container"}
)

_ATTRIBUTES = (
    "name",
    "type",
    "required",
    "nullable",
    "unique",
    "label",
    "readonly",
    "guarded",
)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Constant:
    """A default value stored once and cast on every read."""

    value: Any


@dataclass(frozen=True)
class Deferred:
    """
    A default produced by calling `factory` on every read.

    Used for composite defaults (collections, related entities) so that no
    two records ever share the same mutable instance.
    """

    factory: Callable[[], Any]

    def __call__(self) -> Any:
        return self.factory()


def _validate_year_flag(value: Any) -> Any:
    # Year validation only reports acceptability; True becomes the clean value
    return True if validate_year(value) else INVALID


_TYPE_VALIDATORS: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.TEXT: validate_text,
    FieldType.INTEGER: validate_integer,
    FieldType.FLOAT: validate_float,
    FieldType.BOOLEAN: validate_boolean,
    FieldType.DATETIME: validate_datetime,
    FieldType.DATE: validate_date,
    FieldType.TIME: validate_time,
    FieldType.YEAR: _validate_year_flag,
    FieldType.TIMESTAMP: validate_timestamp,
    FieldType.EMAIL: validate_email,
    FieldType.URL: validate_url,
    FieldType.IP: validate_ip,
    FieldType.JSON: validate_json,
    FieldType.BINARY: validate_binary,
}


class Field:
    """
    Definition of a single named, typed field and its validation rules.

    Parameters
    ----------
    name : str
        Field name, unique within a `Fieldset`.
    type : FieldType or str, default FieldType.TEXT
        The field type.
    rules : Mapping, optional
        Metadata and constraints. Keyword arguments are merged on top.

    Metadata keys are extracted into attributes:

    - ``required`` (False): the value must not be empty
    - ``nullable`` (False, True for object fields): None is acceptable
    - ``unique`` (False): advisory, for persistence layers
    - ``default``: a value, or a `Deferred` factory (composite values are
      copied on every read)
    - ``label`` (the field name), ``readonly`` (False), ``guarded`` (False)

    What remains is the rule mapping: ``min``, ``max``, ``min_length``,
    ``max_length``, ``regex``, ``values``, ``class`` (alias ``class_``) and
    ``container``.

    Raises
    ------
    ConfigurationError
        If the type is unknown, an object/entity/collection field has no
        ``class`` rule, or a rule value is malformed.

    Examples
    --------
        >>> from fieldcast import Field
        >>> score = Field("score", "integer", min=0, max=100)
        >>> score.validate("42")
        (42, <ErrorKind.NONE: 'none'>)
        >>> score.validate("150")
        (150, <ErrorKind.MAX: 'max'>)
    """

    def __init__(
        self,
        name: str,
        type: FieldType | str = FieldType.TEXT,
        rules: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ):
        rules = {**(rules or {}), **kwargs}
        if "class_" in rules:
            rules["class"] = rules.pop("class_")

        self.name = name
        self.type = _resolve_type(name, type)
        self.required = bool(rules.pop("required", False))
        self.nullable = bool(rules.pop("nullable", self.type is FieldType.OBJECT))
        self.unique = bool(rules.pop("unique", False))
        self.label = rules.pop("label", None) or name
        self.readonly = bool(rules.pop("readonly", False))
        self.guarded = bool(rules.pop("guarded", False))
        default = rules.pop("default", MISSING)

        self._pattern = self._check_rules(rules)
        self._default = self._build_default(default, rules)
        self.rules: Mapping[str, Any] = MappingProxyType(rules)

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.type.value!r})"

    def _check_rules(self, rules: dict[str, Any]) -> re.Pattern[str] | None:
        """Validate rule values, returning the compiled regex if there is one."""
        if self.type in COMPOSITE_TYPES:
            cls = rules.get("class")
            if not cls:
                raise ConfigurationError(
                    f"Missing class for {self.type.value} field: {self.name}"
                )
            if isinstance(cls, tuple) and self.type is not FieldType.OBJECT:
                # Entity and collection classes are instantiated for defaults
                raise ConfigurationError(
                    f"Field '{self.name}': {self.type.value} fields take a single "
                    f"class, got {cls!r}"
                )
            classes = cls if isinstance(cls, tuple) else (cls,)
            if not all(isinstance(c, type) for c in classes):
                raise ConfigurationError(
                    f"Field '{self.name}': 'class' must be a class or tuple of "
                    f"classes, got {cls!r}"
                )

        container = rules.get("container")
        if container is not None and not callable(container):
            raise ConfigurationError(
                f"Field '{self.name}': 'container' must be callable, got {container!r}"
            )

        values = rules.get("values")
        if values is not None and (
            not isinstance(values, Collection) or isinstance(values, (str, bytes))
        ):
            raise ConfigurationError(
                f"Field '{self.name}': 'values' must be a collection, got {values!r}"
            )

        regex = rules.get("regex")
        if regex is None:
            return None
        try:
            return re.compile(regex)
        except (re.error, TypeError) as e:
            raise ConfigurationError(
                f"Field '{self.name}': invalid regex {regex!r}: {e}"
            ) from e

    def _build_default(
        self, default: Any, rules: dict[str, Any]
    ) -> Constant | Deferred:
        if isinstance(default, Deferred):
            return default
        if isinstance(default, Constant):
            default = default.value
        if default is not MISSING:
            if self.type in COMPOSITE_TYPES and default is not None:
                # Every read gets its own copy of a composite default
                return Deferred(partial(copy.copy, default))
            return Constant(default)

        if self.type is FieldType.COLLECTION:
            item_class = rules["class"]
            container = rules.get("container")
            if container is None:
                return Deferred(list)
            return Deferred(lambda: container(item_class))
        if self.type is FieldType.ENTITY:
            return Deferred(rules["class"])
        if self.type is FieldType.OBJECT:
            return Constant(None)
        return Constant("")

    @property
    def default(self) -> Any:
        """Resolved default: a fresh value for `Deferred`, else the cast constant."""
        if isinstance(self._default, Deferred):
            return self._default()
        return self.cast(self._default.value)

    @property
    def default_spec(self) -> Constant | Deferred:
        """The stored (unresolved) default."""
        return self._default

    def get(self, key: str, default: Any = MISSING) -> Any:
        """
        Look up a field attribute or rule by name.

        Known attributes (name, type, required, ...) are checked first, then
        the rule mapping. Returns `default` (`MISSING` unless given) when
        neither has `key`.
        """
        if key == "default":
            return self.default
        if key in _ATTRIBUTES:
            return getattr(self, key)
        return self.rules.get(key, default)

    def is_numeric(self) -> bool:
        return self.type in NUMERIC_TYPES

    def is_temporal(self) -> bool:
        return self.type in TEMPORAL_TYPES

    def is_text(self) -> bool:
        return self.type in TEXT_TYPES

    def is_object(self) -> bool:
        return self.type in (FieldType.OBJECT, FieldType.ENTITY)

    def is_collection(self) -> bool:
        return self.type is FieldType.COLLECTION

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dictionary describing this field."""
        return {
            "name": self.name,
            "type": self.type.value,
            "required": self.required,
            "nullable": self.nullable,
            "unique": self.unique,
            "default": self._default,
            "label": self.label,
            "readonly": self.readonly,
            "guarded": self.guarded,
            "rules": dict(self.rules),
        }

    def cast(self, value: Any) -> Any:
        """
        Best-effort conversion to the field's type, without validation.

        Used for values that are already trusted, e.g. read from storage.
        """
        if self.type in (FieldType.INTEGER, FieldType.TIMESTAMP, FieldType.YEAR):
            return _to_int(value)
        if self.type is FieldType.FLOAT:
            return _to_float(value)
        if self.type is FieldType.BOOLEAN:
            return _to_bool(value)
        if self.type in (FieldType.DATETIME, FieldType.DATE):
            if isinstance(value, str) and ZERO_DATE in value:
                return ""
            return value
        if self.type is FieldType.JSON:
            if not value:
                return {}
            if isinstance(value, (str, bytes, bytearray)):
                try:
                    decoded = json.loads(value)
                except ValueError:
                    return value
                return decoded if isinstance(decoded, (dict, list)) else value
            return value
        return value

    def validate(self, value: Any) -> tuple[Any, ErrorKind]:
        """
        Validate and coerce a raw value.

        Checks run in a fixed order and stop at the first failure: required,
        null, type coercion, then the rules (range, length, values, regex).

        Returns
        -------
        tuple[Any, ErrorKind]
            The coerced value (or the raw value if coercion failed) and the
            error, which is `ErrorKind.NONE` on success.
        """
        if self.required and is_empty(value, self.type):
            return value, ErrorKind.REQUIRED
        if not self.nullable and value is None:
            return value, ErrorKind.NULL

        clean = self._validate_type(value)
        if clean is INVALID:
            return value, ErrorKind.for_type(self.type)

        return clean, self._validate_rules(clean)

    def _validate_type(self, value: Any) -> Any:
        if self.type in (FieldType.OBJECT, FieldType.ENTITY):
            return validate_object(value, self.rules["class"], self.nullable)
        validator = _TYPE_VALIDATORS.get(self.type)
        if validator is None:
            # Collections are validated by their own fieldset
            return value
        return validator(value)

    def _validate_rules(self, value: Any) -> ErrorKind:
        for check in (
            self._validate_range,
            self._validate_length,
            self._validate_values,
            self._validate_regex,
        ):
            error = check(value)
            if error:
                return error
        return ErrorKind.NONE

    def _validate_range(self, value: Any) -> ErrorKind:
        # Falsy values (0, "") are never range-checked
        if not value:
            return ErrorKind.NONE
        minimum = self.rules.get("min")
        if minimum is not None and _violates(operator.lt, value, minimum):
            return ErrorKind.MIN
        maximum = self.rules.get("max")
        if maximum is not None and _violates(operator.gt, value, maximum):
            return ErrorKind.MAX
        return ErrorKind.NONE

    def _validate_length(self, value: Any) -> ErrorKind:
        min_length = self.rules.get("min_length")
        max_length = self.rules.get("max_length")
        if min_length is None and max_length is None:
            return ErrorKind.NONE
        length = _length(value)
        if min_length is not None and length < min_length:
            return ErrorKind.TOO_SHORT
        if max_length is not None and length > max_length:
            return ErrorKind.TOO_LONG
        return ErrorKind.NONE

    def _validate_values(self, value: Any) -> ErrorKind:
        values = self.rules.get("values")
        if values is None:
            return ErrorKind.NONE
        try:
            allowed = value in values
        except TypeError:
            allowed = False
        return ErrorKind.NONE if allowed else ErrorKind.VALUE

    def _validate_regex(self, value: Any) -> ErrorKind:
        if self._pattern is None:
            return ErrorKind.NONE
        text = "" if value is None else str(value)
        return ErrorKind.NONE if self._pattern.search(text) else ErrorKind.REGEX


class FieldInfo:
    """
    Stores a field's type and rules until its name is known.

    Created by `field()` inside `Schema` class bodies; the Schema metaclass
    turns it into a `Field`.
    """

    def __init__(
        self,
        type: FieldType | str = FieldType.TEXT,
        rules: Mapping[str, Any] | None = None,
    ):
        self.type = type
        self.rules = dict(rules or {})

    def to_field(self, name: str) -> Field:
        return Field(name, self.type, self.rules)


def field(
    type: FieldType | str = FieldType.TEXT,
    rules: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> Any:
    """
    Declare a field inside a `Schema` class body.

    Accepts the same type and rules as `Field`, minus the name, which is
    taken from the attribute the result is assigned to.

    Examples
    --------
        >>> from fieldcast import Schema, field
        >>> class UserSchema(Schema):
        ...     email = field("email", required=True, unique=True)
        ...     age = field("integer", min=0, max=150)
        >>> UserSchema.validate({"email": "ada@acme.io", "age": "36"})[1]
        {}
    """
    return FieldInfo(type, {**(rules or {}), **kwargs})


def _resolve_type(name: str, field_type: FieldType | str) -> FieldType:
    try:
        if isinstance(field_type, FieldType):
            return field_type
        return FieldType(str(field_type).lower())
    except ValueError:
        raise ConfigurationError(
            f"Field '{name}': unknown type '{field_type}'. "
            f"Supported types: {', '.join(t.value for t in FieldType)}"
        ) from None


def _violates(compare: Callable[[Any, Any], bool], value: Any, bound: Any) -> bool:
    try:
        return bool(compare(value, bound))
    except TypeError:
        # A value that cannot be ordered against the bound does not satisfy it
        return True


def _length(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, Sized):
        return len(value)
    return len(str(value))


def _to_int(value: Any) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group()) if match else 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        return float(match.group()) if match else 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        parsed = validate_boolean(value)
        return bool(value.strip()) if parsed is INVALID else parsed
    return bool(value)
