"""Typed views of raw JSON values.

Raw records keep whatever scalar the remote dataset sent. Comparisons and
ordering go through the typed variant of a value for its field type:
``bool | int | float | str | pandas.Timestamp | None``.
"""

from __future__ import annotations

import math
import re
import warnings
from typing import Any

import pandas as pd

from dataset_query.models.schema import FieldType

TypedValue = bool | int | float | str | pd.Timestamp | None

# Plain decimal: optional sign, optional integer part, optional fraction.
DECIMAL_PATTERN = re.compile(r"-?\d*(\.\d+)?")
INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_HAS_DIGIT = re.compile(r"\d")


def is_blank(value: Any) -> bool:
    """True for null and empty-string values."""
    return value is None or (isinstance(value, str) and value == "")


def to_number(value: Any) -> int | float | None:
    """Convert a raw value to a number, or None if it is not numeric.

    Booleans count as 0/1 and strings are parsed after stripping
    whitespace. Digit-group underscores and blank strings are rejected.
    Integer strings parse exactly, however many digits they have.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            if INTEGER_PATTERN.fullmatch(text):
                return int(text)
            return float(text)
        except ValueError:
            return None
    return None


def to_float(value: Any) -> float | None:
    """Convert a raw value to a float, or None if it is not numeric.

    Integers beyond the float range count as non-numeric.
    """
    number = to_number(value)
    if number is None:
        return None
    try:
        return float(number)
    except OverflowError:
        return None


def is_integral(value: Any) -> bool:
    number = to_number(value)
    if number is None:
        return False
    if isinstance(number, int):
        return True
    return math.isfinite(number) and number.is_integer()


def is_plain_decimal(value: Any) -> bool:
    """True when value is numeric and written as a plain decimal number."""
    if isinstance(value, bool):
        return False
    number = to_float(value)
    if number is None or math.isnan(number):
        return False
    text = value if isinstance(value, str) else repr(value)
    return DECIMAL_PATTERN.fullmatch(text) is not None


def parse_date(value: Any) -> pd.Timestamp | None:
    """Parse a date/time string permissively, returning a UTC timestamp.

    Returns None when no date interpretation exists. Strings without any
    digit are never dates, so relative words such as ``"now"`` or a bare
    month name stay text.
    """
    if not isinstance(value, str) or not _HAS_DIGIT.search(value):
        return None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            parsed = pd.to_datetime(value, errors="coerce", utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed


def distinct_key(value: Any) -> tuple[str, Any]:
    """Hashable identity for a raw value that keeps 1, 1.0, True and "1" apart."""
    kind = type(value).__name__
    try:
        hash(value)
    except TypeError:
        return kind, repr(value)
    return kind, value


def to_typed_value(value: Any, field_type: FieldType) -> TypedValue:
    """Convert a raw value to the typed variant for its field.

    Raises:
        ValueError: If the value cannot be represented in the field type.
    """
    if is_blank(value):
        return None

    if field_type == FieldType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if value in ("true", "false"):
            return value == "true"
        raise ValueError(f"{value!r} is not a boolean")

    if field_type == FieldType.INTEGER:
        if not is_integral(value):
            raise ValueError(f"{value!r} is not an integer")
        return int(to_number(value))

    if field_type == FieldType.FLOAT:
        number = to_float(value)
        if number is None or math.isnan(number):
            raise ValueError(f"{value!r} is not a number in the float range")
        return number

    if field_type == FieldType.DATE:
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(f"{value!r} is not a date")
        return parsed

    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
