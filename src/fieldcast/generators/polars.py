"""Polars DataFrame validator that runs each row through a Fieldset."""

from typing import TYPE_CHECKING, Any, Dict, List

import polars as pl
from loguru import logger

from ..errors import ValidationError
from ..types import FieldType

if TYPE_CHECKING:
    from ..base import Fieldset

# Dtypes of the columnar field types; other types are left to inference
_POLARS_DTYPES: Dict[FieldType, Any] = {
    FieldType.TEXT: pl.Utf8,
    FieldType.INTEGER: pl.Int64,
    FieldType.FLOAT: pl.Float64,
    FieldType.BOOLEAN: pl.Boolean,
    FieldType.DATETIME: pl.Utf8,
    FieldType.DATE: pl.Utf8,
    FieldType.TIME: pl.Utf8,
    FieldType.TIMESTAMP: pl.Int64,
    FieldType.EMAIL: pl.Utf8,
    FieldType.URL: pl.Utf8,
    FieldType.IP: pl.Utf8,
}


class PolarsValidator:
    """A validator for Polars DataFrames based on a fieldset."""

    def __init__(self, fieldset: "Fieldset") -> None:
        self.fieldset = fieldset
        self._polars_schema = self._build_polars_schema()

    def _build_polars_schema(self) -> Dict[str, Any]:
        """Build Polars schema dict from the columnar fields."""
        schema = {}
        for field in self.fieldset:
            dtype = _POLARS_DTYPES.get(field.type)
            if dtype is not None:
                schema[field.name] = dtype
        return schema

    def _validate_rows(self, df: pl.DataFrame):
        for row_number, row in enumerate(df.iter_rows(named=True)):
            cleaned, errors = self.fieldset.validate(row, source=f"row {row_number}")
            yield row_number, cleaned, errors

    def validate(
        self,
        df: pl.DataFrame,
        strict: bool = True,
        show_violations: bool = False,
    ) -> pl.DataFrame:
        """
        Validate and clean every row of a DataFrame.

        Parameters
        ----------
        df : pl.DataFrame
            Input Polars DataFrame. Columns without a field definition are
            kept as they are; missing field columns are validated as nulls.
        strict : bool, default True
            If True, raise on the first invalid row. If False, drop invalid
            rows.
        show_violations : bool, default False
            If True, log each dropped row and its errors.

        Returns
        -------
        pl.DataFrame
            DataFrame of cleaned rows, with the columnar fields cast to their
            Polars dtypes.

        Raises
        ------
        ValidationError
            If a row fails validation and strict=True.
        """
        rows: List[Dict[str, Any]] = []
        violations = []

        for row_number, cleaned, errors in self._validate_rows(df):
            if not errors:
                rows.append(cleaned)
                continue
            if strict:
                raise ValidationError(errors, f"row {row_number}")
            violations.append((row_number, errors))

        if violations:
            logger.info(f"Dropped {len(violations)} invalid rows of {df.height}")
        if show_violations:
            for row_number, errors in violations:
                logger.warning(f"Row {row_number} violations: {errors}")

        # Collection fields are never validated, so they are only present
        # when the input has them
        columns = list(df.columns) + [
            field.name
            for field in self.fieldset
            if field.name not in df.columns and not field.is_collection()
        ]
        schema_overrides = {
            name: dtype
            for name, dtype in self._polars_schema.items()
            if name in columns
        }

        if not rows:
            return pl.DataFrame(
                schema={
                    name: schema_overrides.get(name, df.schema.get(name, pl.Null))
                    for name in columns
                }
            )

        result = pl.from_dicts(
            rows,
            schema_overrides=schema_overrides,
            infer_schema_length=None,
        )
        return result.select(columns)

    def errors(self, df: pl.DataFrame) -> pl.DataFrame:
        """
        Return one row per field failure, without raising.

        The result has the columns ``row`` (position in `df`), ``field`` and
        ``error`` (the `ErrorKind` value).
        """
        records = [
            {"row": row_number, "field": name, "error": error.value}
            for row_number, _cleaned, errors in self._validate_rows(df)
            for name, error in errors.items()
        ]
        return pl.DataFrame(
            records,
            schema={"row": pl.Int64, "field": pl.Utf8, "error": pl.Utf8},
        )

    @property
    def schema(self) -> Dict[str, Any]:
        """Return the Polars schema dict."""
        return self._polars_schema.copy()


def create_polars_validator(fieldset: "Fieldset") -> PolarsValidator:
    """
    Create a Polars validator from a Fieldset.

    Parameters
    ----------
    fieldset : Fieldset
        The field definitions to validate rows against.

    Returns
    -------
    PolarsValidator
        An instance of PolarsValidator for the given fieldset.
    """
    return PolarsValidator(fieldset)
