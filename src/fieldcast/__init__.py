"""
Fieldcast: schema-driven field validation and casting.

Declare typed fields once. Validate and clean records against them.
"""

from .base import Fieldset, Schema, SchemaMeta
from .errors import (
    ConfigurationError,
    FieldcastError,
    FieldsetFrozenError,
    ValidationError,
)
from .fields import MISSING, Constant, Deferred, Field, FieldInfo, field
from .types import ErrorKind, FieldType

__version__ = "0.1.0"

__all__ = [
    # Core
    "Field",
    "Fieldset",
    "FieldType",
    "ErrorKind",
    # Defaults
    "Constant",
    "Deferred",
    "MISSING",
    # Declarative schemas
    "Schema",
    "field",
    # Errors
    "FieldcastError",
    "ConfigurationError",
    "FieldsetFrozenError",
    "ValidationError",
    # Internal (for advanced use)
    "FieldInfo",
    "SchemaMeta",
]
