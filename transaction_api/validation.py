"""Identifier checks and coercion of loosely typed request fields."""

import math
import re
from datetime import datetime, timezone
from typing import Any

from .errors import InvalidField

OBJECT_ID_PATTERN = re.compile(r'[0-9a-fA-F]{24}')
DECIMAL_PATTERN = re.compile(r'[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?')


def is_valid_object_id(value: Any) -> bool:
    """Return True if value is a 24-character hexadecimal string."""
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def coerce_amount(value: Any) -> float:
    """Convert a number or plain decimal string to a finite float."""
    if isinstance(value, bool) or value is None:
        raise InvalidField('amount')
    if isinstance(value, str):
        value = value.strip()
        if DECIMAL_PATTERN.fullmatch(value) is None:
            raise InvalidField('amount')
    elif not isinstance(value, (int, float)):
        raise InvalidField('amount')
    try:
        amount = float(value)
    except (OverflowError, ValueError):
        raise InvalidField('amount')
    if not math.isfinite(amount):
        raise InvalidField('amount')
    return amount


def coerce_date(value: Any) -> datetime:
    """Convert an ISO-8601 string or epoch milliseconds to an aware UTC datetime.

    Naive strings are read as UTC. A trailing ``Z`` is accepted.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidField('date')
    if isinstance(value, (int, float)):
        try:
            if not math.isfinite(value):
                raise InvalidField('date')
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidField('date')
    if not isinstance(value, str):
        raise InvalidField('date')

    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        raise InvalidField('date')
