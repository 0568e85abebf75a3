"""Pydantic model generator backed by fieldset validation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from loguru import logger
from pydantic import BaseModel, create_model, model_validator
from pydantic import Field as PydanticField

from ..types import FieldType

if TYPE_CHECKING:
    from ..base import Fieldset

# Python types of successfully validated values
_PYTHON_TYPES: dict[FieldType, Any] = {
    FieldType.TEXT: str,
    FieldType.INTEGER: int,
    FieldType.FLOAT: float,
    FieldType.BOOLEAN: bool,
    FieldType.DATETIME: str,
    FieldType.DATE: str,
    FieldType.TIME: str,
    FieldType.TIMESTAMP: int,
    FieldType.EMAIL: str,
    FieldType.URL: str,
    FieldType.IP: str,
}


def create_pydantic_model(
    fieldset: Fieldset, model_name: str = "Record"
) -> type[BaseModel]:
    """
    Generate a Pydantic BaseModel from a Fieldset.

    Each field becomes a model attribute whose default is resolved from the
    field on every instantiation. A "before" model validator fills in missing
    keys from `Fieldset.get_defaults()` and runs `Fieldset.validate`, so the
    model accepts exactly what the fieldset accepts, with cleaned values.

    Parameters
    ----------
    fieldset : Fieldset
        The field definitions.
    model_name : str, default "Record"
        Name of the generated class.

    Returns
    -------
    type[BaseModel]
        A dynamically created Pydantic BaseModel class.
    """
    pydantic_fields: dict[str, Any] = {}

    for field in fieldset:
        python_type = _PYTHON_TYPES.get(field.type, Any)
        if field.nullable and python_type is not Any:
            python_type = Optional[python_type]

        field_kwargs: dict[str, Any] = {
            "default_factory": lambda f=field: f.default,
            "title": field.label,
        }
        pydantic_fields[field.name] = (python_type, PydanticField(**field_kwargs))

    # Pydantic's create_model is dynamically typed
    base_model: type[BaseModel] = create_model(model_name, **pydantic_fields)  # type: ignore[call-overload]

    class ModelWithFieldset(base_model):  # type: ignore[misc, valid-type]
        """Pydantic model validated by a fieldcast Fieldset."""

        @model_validator(mode="before")
        @classmethod
        def validate_fieldset(cls, data: Any) -> Any:
            if not isinstance(data, Mapping):
                return data
            record = {**fieldset.get_defaults(), **data}
            cleaned, errors = fieldset.validate(record, source=model_name)
            if errors:
                messages = fieldset.describe_errors(errors)
                logger.debug(f"{model_name} rejected record: {messages}")
                raise ValueError("; ".join(messages.values()))
            return cleaned

    ModelWithFieldset.__name__ = model_name
    ModelWithFieldset.__qualname__ = model_name
    return ModelWithFieldset
