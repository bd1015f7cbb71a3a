"""Shared utilities: datetime helpers and cell coercion."""

from app.shared.utils.cells import to_number
from app.shared.utils.datetime import parse_iso, utc_now, utc_now_iso
from app.shared.utils.sanitization import InputSanitizer, sanitize_text

__all__ = [
    "InputSanitizer",
    "parse_iso",
    "sanitize_text",
    "to_number",
    "utc_now",
    "utc_now_iso",
]
