"""Validation utilities for the expense endpoint."""

import re
import math
from typing import Any, Dict, List, Union
from datetime import datetime, timezone

from dateutil import parser as date_parser

from .exceptions import ValidationError


AMOUNT_ERROR = "Invalid field: amount must be a number"
DATE_ERROR = "Invalid field: date must be a valid date string (e.g. 2025-01-01)"

# Fields that only count as missing when absent, null or an empty string
NULLABLE_ONLY_FIELDS = ("amount",)

DECIMAL_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')
PREFIXED_INT_PATTERN = re.compile(r'^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$')


def is_missing(field: str, value: Any) -> bool:
    """
    Check whether a field value counts as missing.

    Args:
        field: Field name
        value: Field value (None when absent)

    Returns:
        True if the value is missing
    """
    if field in NULLABLE_ONLY_FIELDS:
        return value is None or value == ''
    if value is None or value is False or value == '':
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
    """
    Validate that required fields are present in data.

    Args:
        data: Data dictionary to validate
        required_fields: List of required field names, in reporting order

    Raises:
        ValidationError: If any required field is missing
    """
    missing_fields = [field for field in required_fields if is_missing(field, data.get(field))]

    if missing_fields:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing_fields)}"
        )


def parse_amount(amount: Any) -> Union[int, float]:
    """
    Parse a monetary amount given as a JSON number or a numeric string.

    Args:
        amount: Amount to parse

    Returns:
        Parsed amount; integral values come back as int

    Raises:
        ValidationError: If amount is not a finite number
    """
    if isinstance(amount, bool):
        raise ValidationError(AMOUNT_ERROR)

    if isinstance(amount, (int, float)):
        number = amount
    elif isinstance(amount, str):
        number = _parse_numeric_string(amount)
    else:
        raise ValidationError(AMOUNT_ERROR)

    if isinstance(number, float):
        if not math.isfinite(number):
            raise ValidationError(AMOUNT_ERROR)
        if number.is_integer():
            return int(number)

    return number


def _parse_numeric_string(value: str) -> Union[int, float]:
    """Parse a numeric string; blank strings are zero."""
    text = value.strip()

    if not text:
        return 0

    if PREFIXED_INT_PATTERN.match(text):
        return int(text, 0)

    if not DECIMAL_PATTERN.match(text):
        raise ValidationError(AMOUNT_ERROR)

    return float(text)


def parse_date(date_str: Any) -> str:
    """
    Parse a date or timestamp string and normalize it to YYYY-MM-DD.

    Timestamps with a UTC offset are converted to UTC first; naive
    timestamps are taken as UTC.

    Args:
        date_str: Date string to parse

    Returns:
        Calendar date (YYYY-MM-DD)

    Raises:
        ValidationError: If date cannot be parsed
    """
    if not isinstance(date_str, str):
        raise ValidationError(DATE_ERROR)

    default = datetime.now(timezone.utc).replace(
        month=1, day=1, hour=0, minute=0, second=0, microsecond=0, tzinfo=None
    )

    try:
        parsed = date_parser.parse(date_str, default=default)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise ValidationError(DATE_ERROR)

    return parsed.date().isoformat()


def to_text(value: Any) -> str:
    """
    Coerce a JSON value to text; arrays join their items with commas.

    Args:
        value: Value to coerce

    Returns:
        Text form of the value
    """
    if isinstance(value, str):
        return value

    if isinstance(value, bool):
        return 'true' if value else 'false'

    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    if isinstance(value, list):
        # nulls inside arrays render as empty strings
        return ','.join('' if item is None else to_text(item) for item in value)

    if isinstance(value, dict):
        return '[object Object]'

    return str(value)
