"""
Value coercion helpers.

Filter values typed into a UI arrive as strings, while document values
keep their JSON types. These helpers are the single place where strings
become numbers, booleans or dates. Each returns a defined failure value
(None, or a caller-supplied default) instead of raising.
"""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Union

Number = Union[int, float]

# Dates must at least start with YYYY-MM-DD
DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")

# Leading integer, as read by a lenient integer parser ("12abc" -> 12)
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})
FALSE_STRINGS = frozenset({"false", "0", "no", "n", "off", ""})


def coerce_number(value: Any) -> Optional[Number]:
    """
    Coerce a value to an int or float.

    Booleans are not numbers. Strings are stripped and parsed as int,
    then float. NaN, infinities, empty strings and anything else that
    does not parse yield None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def coerce_integer(value: Any) -> Optional[int]:
    """
    Coerce a value to an int by its leading digits.

    ``"12abc"`` gives 12 and ``"3.7"`` gives 3; values without a leading
    integer give None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None
    match = LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def coerce_boolean(value: Any, default: Optional[bool] = None) -> Optional[bool]:
    """
    Coerce a value to a bool.

    Recognizes true/false, 1/0, yes/no, y/n and on/off (any case); the
    empty string is False. Numbers are True when non-zero. Anything
    else returns ``default``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_STRINGS:
            return True
        if text in FALSE_STRINGS:
            return False
    return default


def coerce_date(value: Any) -> Optional[datetime]:
    """
    Coerce a value to a timezone-aware datetime.

    Naive datetimes and plain dates are taken as UTC. Strings must start
    with ``YYYY-MM-DD`` and be valid ISO-8601; a trailing ``Z`` is
    accepted.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not DATE_PREFIX.match(text):
        return None
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_to_millis(value: datetime) -> float:
    """Epoch milliseconds of an aware datetime."""
    return value.timestamp() * 1000.0


def to_text(value: Any) -> str:
    """
    String form of a value for text matching.

    Mirrors how browsers stringify JSON values: null is empty, booleans
    are lower case, integral floats drop the ``.0`` and lists are joined
    with commas.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"), default=str)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
