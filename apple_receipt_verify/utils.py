"""
Shared utilities for the Apple Receipt Verify API.
"""

import re
import math
import time
from datetime import datetime, timezone
from typing import Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Apple's legacy date strings, e.g. "2019-01-01 12:00:00 Etc/GMT"
_APPLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_APPLE_TZ_SUFFIXES = (" Etc/GMT", " GMT", " UTC")


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def is_numeric(value) -> bool:
    """True for numbers and strings that read as a finite number. Booleans never count."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not isinstance(value, float) or math.isfinite(value)
    if isinstance(value, str) and value.strip() and "_" not in value:
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def parse_int(value) -> Optional[int]:
    """Read the leading integer of a value, or None if there isn't one.

    "1550000000000" -> 1550000000000, 3.9 -> 3, "12abc" -> 12, "abc" -> None
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return None


def id_to_string(value) -> str:
    """Render a transaction identifier as a string without a float suffix."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_epoch_ms(value) -> Optional[int]:
    """Interpret an App Store date value as epoch milliseconds.

    Accepts epoch-ms numbers or numeric strings, Apple's
    "YYYY-MM-DD HH:MM:SS Etc/GMT" strings and ISO-8601 strings.
    Returns None when the value can't be understood.
    """
    if is_numeric(value):
        return int(float(value))
    if not isinstance(value, str):
        return None

    text = value.strip()
    for suffix in _APPLE_TZ_SUFFIXES:
        if text.endswith(suffix):
            try:
                parsed = datetime.strptime(text[: -len(suffix)], _APPLE_DATE_FORMAT)
            except ValueError:
                return None
            return int(parsed.replace(tzinfo=timezone.utc).timestamp() * 1000)

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)
