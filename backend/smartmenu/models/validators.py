"""Model-level validation utilities for data integrity."""

from decimal import Decimal


def non_negative(key: str, value):
    """Validate that a numeric value is >= 0."""
    if value is not None:
        v = Decimal(str(value)) if not isinstance(value, Decimal) else value
        if v < 0:
            raise ValueError(f"{key} cannot be negative, got {value}")
    return value


def positive(key: str, value):
    """Validate that a numeric value is > 0."""
    if value is not None:
        v = Decimal(str(value)) if not isinstance(value, Decimal) else value
        if v <= 0:
            raise ValueError(f"{key} must be positive, got {value}")
    return value


def rating_score(key: str, value):
    """Validate that a star rating is an integer between 1 and 5."""
    if value is not None:
        if int(value) != value or not 1 <= value <= 5:
            raise ValueError(f"{key} must be between 1 and 5, got {value}")
    return value


def validate_list(key: str, value):
    """Validate that a JSON column value is a list (or None)."""
    if value is not None and not isinstance(value, list):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    return value
