"""Failure sentinel shared by all validators."""


class _Invalid:
    """Type of the `INVALID` sentinel."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INVALID"

    def __bool__(self) -> bool:
        return False


# Returned by validate_* functions when a value cannot be coerced.
# False, 0, "" and None are all legitimate coerced values.
INVALID = _Invalid()
