"""Exception hierarchy.

Configuration problems are raised as soon as a field or fieldset is built.
Validation problems are normally returned as `ErrorKind` values and only
raised, as `ValidationError`, when a caller asks for strict validation.
"""

from collections.abc import Mapping

from .types import ErrorKind


class FieldcastError(Exception):
    """Base class for all fieldcast exceptions."""


class ConfigurationError(FieldcastError, ValueError):
    """A field or fieldset definition is invalid."""


class FieldsetFrozenError(ConfigurationError):
    """A fieldset was modified after it started validating records."""


class ValidationError(FieldcastError, ValueError):
    """
    A record failed validation.

    Parameters
    ----------
    errors : Mapping[str, ErrorKind]
        Error kind per failed field name.
    source : str
        What was being validated (schema name, row number, ...).
    """

    def __init__(self, errors: Mapping[str, ErrorKind], source: str):
        self.errors = dict(errors)
        self.source = source
        failed = ", ".join(f"{name}={error}" for name, error in self.errors.items())
        super().__init__(f"Validation Error: {source} ({failed})")
