"""Domain value objects and shared value types."""

from app.domain.value_objects.core import RecordId, validate_prefix

__all__ = [
    "RecordId",
    "validate_prefix",
]
