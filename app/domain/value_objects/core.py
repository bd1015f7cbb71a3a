"""Domain value objects for the shop ledger.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Uppercase alphanumeric tag (e.g. SALE, CUST, FIN).
_PREFIX_RE = re.compile(r"^[A-Z][A-Z0-9]*$")

ID_SEP = "-"
DEFAULT_PAD_WIDTH = 3


def validate_prefix(prefix: str) -> None:
    """Raise ValueError if prefix is not a short uppercase tag."""
    if not prefix:
        raise ValueError("ID prefix must be a non-empty string")
    if not _PREFIX_RE.match(prefix):
        raise ValueError(
            f"ID prefix must be uppercase alphanumeric (e.g. 'SALE'), got {prefix!r}"
        )


@dataclass(frozen=True)
class RecordId:
    """Value object for a sequential identifier of the form PREFIX-NNN.

    The number is zero-padded to at least pad_width digits and widens
    naturally past 999 (ITEM-1000).
    """

    prefix: str
    number: int
    pad_width: int = DEFAULT_PAD_WIDTH

    def __post_init__(self) -> None:
        """Validate prefix and number.

        Raises:
            ValueError: If prefix is malformed or number is not positive.
        """
        validate_prefix(self.prefix)
        if self.number < 1:
            raise ValueError("ID number must be a positive integer")

    def __str__(self) -> str:
        return f"{self.prefix}{ID_SEP}{self.number:0{self.pad_width}d}"

    @staticmethod
    def parse_suffix(value: object, prefix: str) -> int | None:
        """Return the numeric suffix of value if it is a well-formed ID for prefix.

        Cells that are not strings, do not start with PREFIX-, or whose
        suffix is not a plain ASCII non-negative integer yield None. Suffixes
        too long for int() are malformed too.
        """
        if not isinstance(value, str):
            return None
        head = prefix + ID_SEP
        if not value.startswith(head):
            return None
        suffix = value[len(head):].strip()
        if not (suffix.isascii() and suffix.isdigit()):
            return None
        try:
            return int(suffix)
        except ValueError:
            return None
