"""Content Fields — lenient coercions for pricing/review columns.

Invariants:
    - Text fields accept strings or numbers and are stored trimmed
    - sort_order is always an int (non-numeric input → 0)
    - rating is always an int in [1, 5]
    - features is always a list (anything else → [])
    - row ids are integers; anything non-integral reads as missing
"""

import json
import math
from typing import Any

MIN_RATING = 1
MAX_RATING = 5


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def coerce_text(value: Any) -> Any:
    """Stringify numbers and trim strings; other types pass through to validation."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


def optional_text(value: Any) -> str | None:
    """Nullable text column: empty or missing → None."""
    if value is None or value == "":
        return None
    text = str(coerce_text(value))
    return text or None


def coerce_sort_order(value: Any) -> int:
    number = _as_number(value)
    return math.floor(number) if number is not None else 0


def clamp_rating(value: Any) -> int:
    number = _as_number(value)
    if number is None:
        raise ValueError("rating must be a number")
    return max(MIN_RATING, min(MAX_RATING, math.floor(number)))


def coerce_features(value: Any) -> list:
    return list(value) if isinstance(value, list) else []


def parse_features(stored: Any) -> list:
    """Read a features column that may hold a list or a JSON-encoded list."""
    if isinstance(stored, list):
        return stored
    if isinstance(stored, str):
        try:
            decoded = json.loads(stored)
        except ValueError:
            return []
        return decoded if isinstance(decoded, list) else []
    return []


def coerce_row_id(value: Any) -> int | None:
    """Integer row id from an int, integral float or digit string; else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        return int(value.strip())
    return None
