"""Generators for different frameworks."""

from .polars import PolarsValidator, create_polars_validator
from .pydantic import create_pydantic_model

__all__ = [
    "PolarsValidator",
    "create_polars_validator",
    "create_pydantic_model",
]
