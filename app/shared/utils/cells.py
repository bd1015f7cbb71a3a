"""Lenient coercion of record cells (cells may be blank or hand-edited)."""

from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """Return value as a float; blanks and non-numeric text yield default."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", "").strip())
        except ValueError:
            return default
    return default
