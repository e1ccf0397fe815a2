"""Lenient conversions for values read out of device snapshots.

None of these raise. Anything that cannot be interpreted falls back to the
supplied default.
"""

import math
from typing import Any

from thinqbridge.constants import ONE_HOUR_IN_SECONDS


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Built-in round() uses banker's rounding, which would map 72.5F to 72.
    """
    return math.floor(value + 0.5)


def safe_parse_int(value: Any, default: int = 0) -> int:
    """Parse an integer out of a snapshot value."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default


def safe_parse_float(value: Any, default: float = 0.0) -> float:
    """Parse a float out of a snapshot value."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def normalize_boolean(value: Any) -> bool:
    """Interpret the usual vendor encodings of a flag.

    ``True``, non-zero numbers, ``"1"`` and ``"true"`` (any case) are true.
    Other strings are false; everything else follows truthiness.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value == "1" or value.lower() == "true"
    return bool(value)


def normalize_number(value: Any, default: float = 0.0) -> float:
    return safe_parse_float(value, default)


def to_seconds(hours: Any = 0, minutes: Any = 0, seconds: Any = 0) -> int:
    """Combine an hours/minutes/seconds triple into seconds."""
    return (
        safe_parse_int(hours) * ONE_HOUR_IN_SECONDS
        + safe_parse_int(minutes) * 60
        + safe_parse_int(seconds)
    )
