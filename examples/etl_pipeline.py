"""
ETL Pipeline Example: Importing Customer Exports

This example demonstrates a fieldset inside an ETL workflow:
1. Extract: Read a raw export where every column is a string
2. Transform: Validate, coerce and filter the rows with the Polars validator
3. Report: Summarise the rejected rows from the error frame
"""

import polars as pl

from fieldcast import Fieldset

customers = (
    Fieldset()
    .add("customer_id", "integer", required=True, unique=True)
    .add("name", "text", required=True, max_length=100)
    .add("email", "email", unique=True)
    .add("signup", "datetime", nullable=True)
    .add("last_login_ip", "ip")
    .add("balance", "float", min=0)
    .add("vip", "boolean")
)


def extract_data() -> pl.DataFrame:
    """
    Extract: Read the raw export.

    In production, you'd use: df = pl.read_csv(path, infer_schema=False)
    """
    print("[EXTRACT] Reading raw export...")
    raw = pl.DataFrame(
        {
            "customer_id": ["1", "2", "3", "x4"],
            "name": [" Ada ", "Grace", "", "Linus"],
            "email": ["ada@acme.io", "grace@acme.io", "nobody@acme.io", "linus"],
            "signup": ["2023-01-05 09:00", "0000-00-00 00:00:00", "", "2023-02-01"],
            "last_login_ip": ["10.0.0.1", "3232235777", "", "10.0.0.300"],
            "balance": ["1,250.50", "0", "12", "-3"],
            "vip": ["yes", "no", "", "1"],
        }
    )
    print(f"   [OK] Loaded {raw.height} rows")
    return raw


def transform_data(raw: pl.DataFrame) -> pl.DataFrame:
    """Transform: Validate and clean, dropping invalid rows."""
    print("\n[TRANSFORM] Validating rows...")
    validator = customers.to_polars_validator()
    clean = validator.validate(raw, strict=False, show_violations=True)
    print(f"   [OK] Kept {clean.height} of {raw.height} rows")
    return clean


def report_errors(raw: pl.DataFrame) -> None:
    """Report: Count failures per field and error kind."""
    print("\n[REPORT] Rejected fields")
    report = customers.to_polars_validator().errors(raw)
    print(report.group_by("field", "error").len().sort("field"))


def run_etl_pipeline() -> None:
    raw = extract_data()
    clean = transform_data(raw)
    print(clean)
    report_errors(raw)


if __name__ == "__main__":
    run_etl_pipeline()
