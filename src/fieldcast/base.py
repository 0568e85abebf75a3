"""`Fieldset` collections and the declarative `Schema` class."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from .errors import FieldsetFrozenError, ValidationError
from .fields import Field, FieldInfo
from .types import ErrorKind, FieldType

if TYPE_CHECKING:  # pragma: no cover
    from pydantic import BaseModel

    from .generators.polars import PolarsValidator

_UNIQUE = "unique"


class Fieldset:
    """
    An ordered set of field definitions used to validate whole records.

    Fields are validated in the order they were added. The first call to
    `validate` freezes the fieldset: definitions are meant to be built once,
    before any records are validated, and `add` raises
    `FieldsetFrozenError` afterwards.

    Examples
    --------
        >>> from fieldcast import Fieldset
        >>> fs = (
        ...     Fieldset()
        ...     .add("age", "integer", required=True)
        ...     .add("email", "email")
        ... )
        >>> fs.validate({"email": ""})
        ({'email': '', 'age': None}, {'age': <ErrorKind.REQUIRED: 'required'>})
    """

    def __init__(self) -> None:
        self._fields: dict[str, Field] = {}
        # Derived name indices keyed by field type (plus "unique"); rebuilt
        # lazily after any change to the fields
        self._index: dict[str, list[str]] | None = None
        self._frozen = False

    def add(
        self,
        name: str,
        type: FieldType | str = FieldType.TEXT,
        rules: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Fieldset:
        """
        Add a field definition, replacing any existing field with the same name.

        A replaced field keeps its position in the definition order.

        Accepts the same arguments as `Field`. Returns the fieldset so calls
        can be chained.
        """
        return self.add_field(Field(name, type, rules, **kwargs))

    def add_field(self, field: Field) -> Fieldset:
        """Add a pre-built `Field`, replacing any existing field with its name."""
        if self._frozen:
            raise FieldsetFrozenError(
                f"Cannot add field '{field.name}': fieldset is frozen"
            )
        if field.name in self._fields:
            logger.debug(f"Replacing definition of field '{field.name}'")
        self._fields[field.name] = field
        self._index = None
        return self

    def freeze(self) -> Fieldset:
        """Prevent further changes to the field definitions."""
        if not self._frozen:
            logger.debug(f"Freezing fieldset with fields: {self.list_names()}")
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def validate(
        self,
        record: Mapping[str, Any],
        *,
        strict: bool = False,
        source: str | None = None,
    ) -> tuple[dict[str, Any], dict[str, ErrorKind]]:
        """
        Validate a record against every non-collection field.

        Missing keys are validated as None. Fields that pass are written back
        with their coerced value; fields that fail keep their raw value.
        Collection fields are skipped entirely.

        Parameters
        ----------
        record : Mapping[str, Any]
            Raw field values. Keys without a field definition are copied
            through untouched.
        strict : bool, default False
            If True, raise instead of returning errors.
        source : str, optional
            Identifies the record in the `ValidationError` message.

        Returns
        -------
        tuple[dict, dict]
            The cleaned record and the errors of the fields that failed.

        Raises
        ------
        ValidationError
            If any field failed and `strict=True`.
        """
        self.freeze()

        cleaned = dict(record)
        errors: dict[str, ErrorKind] = {}

        for name, field in self._fields.items():
            if field.is_collection():
                continue
            raw = record.get(name)
            clean, error = field.validate(raw)
            if error:
                errors[name] = error
                cleaned[name] = raw
            else:
                cleaned[name] = clean

        if errors:
            logger.debug(f"Validation of {source or 'record'} failed: {errors}")
            if strict:
                raise ValidationError(errors, source or "record")

        return cleaned, errors

    def get_defaults(self) -> dict[str, Any]:
        """Return a fresh default value for every field, collections included."""
        return {name: field.default for name, field in self._fields.items()}

    def list_names(self) -> list[str]:
        return list(self._fields)

    def describe_errors(self, errors: Mapping[str, ErrorKind]) -> dict[str, str]:
        """Turn an error map into readable messages keyed by field name."""
        messages = {}
        for name, error in errors.items():
            label = self._fields[name].label if name in self._fields else name
            messages[name] = f"{label}: {ErrorKind(error).description}"
        return messages

    def get(self, name: str) -> Field | None:
        return self._fields.get(name)

    def __getitem__(self, name: str) -> Field:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Fieldset({self.list_names()!r})"

    def _build_index(self) -> dict[str, list[str]]:
        index: dict[str, list[str]] = {_UNIQUE: []}
        for name, field in self._fields.items():
            index.setdefault(field.type.value, []).append(name)
            if field.unique:
                index[_UNIQUE].append(name)
        return index

    def get_by_type(self, type: FieldType | str) -> list[str]:
        """
        Return the names of fields of the given type, in definition order.

        ``"unique"`` is also accepted and returns the unique fields.
        """
        if self._index is None:
            self._index = self._build_index()
        key = type.value if isinstance(type, FieldType) else str(type).lower()
        return list(self._index.get(key, []))

    def get_objects(self) -> list[str]:
        """Names of object and entity fields."""
        objects = set(self.get_by_type(FieldType.OBJECT))
        objects.update(self.get_by_type(FieldType.ENTITY))
        return [name for name in self._fields if name in objects]

    def get_collections(self) -> list[str]:
        return self.get_by_type(FieldType.COLLECTION)

    def get_uniques(self) -> list[str]:
        return self.get_by_type(_UNIQUE)

    def to_pydantic(self, model_name: str = "Record") -> type[BaseModel]:
        """Generate a Pydantic model that validates through this fieldset."""
        from .generators.pydantic import create_pydantic_model

        return create_pydantic_model(self, model_name=model_name)

    def to_polars_validator(self) -> PolarsValidator:
        """Generate a validator for Polars DataFrames."""
        from .generators.polars import create_polars_validator

        return create_polars_validator(self)


class SchemaMeta(type):
    """
    Metaclass that collects `field()` declarations from the class body.

    Fields declared on base schemas come first; a field redeclared in a
    subclass replaces the inherited definition in its original position.

        class UserSchema(Schema):
            name = field("text", required=True)
            age = field("integer", min=0)
    """

    def __new__(mcs, name, bases, namespace):
        fieldset = Fieldset()

        for base in reversed(bases):
            inherited = getattr(base, "_fieldset", None)
            if isinstance(inherited, Fieldset):
                for field in inherited:
                    fieldset.add_field(field)

        for attr, value in list(namespace.items()):
            if isinstance(value, FieldInfo):
                fieldset.add_field(value.to_field(attr))
                del namespace[attr]

        namespace["_fieldset"] = fieldset
        return super().__new__(mcs, name, bases, namespace)


class Schema(metaclass=SchemaMeta):
    """
    Base class for declarative schemas.

    Examples
    --------
        >>> from fieldcast import Schema, field
        >>> class ArticleSchema(Schema):
        ...     title = field("text", required=True, max_length=120)
        ...     published = field("date", nullable=True)
        ...     rating = field("float", min=0, max=5)
        >>> cleaned, errors = ArticleSchema.validate(
        ...     {"title": "  Hello ", "published": "2024-03-01", "rating": "4.5"}
        ... )
        >>> cleaned["title"], cleaned["rating"]
        ('Hello', 4.5)
    """

    _fieldset: Fieldset

    @classmethod
    def fieldset(cls) -> Fieldset:
        return cls._fieldset

    @classmethod
    def fields(cls) -> dict[str, Field]:
        """Return the schema's fields keyed by name."""
        return {field.name: field for field in cls._fieldset}

    @classmethod
    def validate(
        cls, record: Mapping[str, Any], strict: bool = False
    ) -> tuple[dict[str, Any], dict[str, ErrorKind]]:
        """Validate a record; see `Fieldset.validate`."""
        return cls._fieldset.validate(record, strict=strict, source=cls.__name__)

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        return cls._fieldset.get_defaults()

    @classmethod
    def to_pydantic(cls) -> type[BaseModel]:
        return cls._fieldset.to_pydantic(
            model_name=cls.__name__.removesuffix("Schema") + "Model"
        )

    @classmethod
    def to_polars_validator(cls) -> PolarsValidator:
        return cls._fieldset.to_polars_validator()
