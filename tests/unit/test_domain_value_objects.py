"""Tests for domain value objects (RecordId, prefix validation)."""

import pytest

from app.domain.value_objects.core import RecordId, validate_prefix


class TestValidatePrefix:
    """Prefixes are uppercase alphanumeric tags starting with a letter."""

    @pytest.mark.parametrize("prefix", ["SALE", "CUST", "FIN", "A1"])
    def test_valid(self, prefix: str) -> None:
        validate_prefix(prefix)

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            validate_prefix("")

    @pytest.mark.parametrize("prefix", ["sale", "SA-LE", "1SALE", "SALE "])
    def test_malformed_rejected(self, prefix: str) -> None:
        with pytest.raises(ValueError, match="uppercase"):
            validate_prefix(prefix)


class TestRecordId:
    """RecordId: PREFIX-NNN with at least three digits."""

    def test_zero_padded(self) -> None:
        assert str(RecordId("SALE", 1)) == "SALE-001"
        assert str(RecordId("SALE", 42)) == "SALE-042"

    def test_widens_past_pad(self) -> None:
        assert str(RecordId("ITEM", 1000)) == "ITEM-1000"

    def test_custom_pad_width(self) -> None:
        assert str(RecordId("FIN", 7, pad_width=5)) == "FIN-00007"

    @pytest.mark.parametrize("number", [0, -1])
    def test_non_positive_number_rejected(self, number: int) -> None:
        with pytest.raises(ValueError, match="positive"):
            RecordId("SALE", number)

    def test_immutable(self) -> None:
        record_id = RecordId("SALE", 1)
        with pytest.raises(AttributeError):
            record_id.number = 2  # type: ignore[misc]


class TestParseSuffix:
    """parse_suffix reads the number of a well-formed ID and ignores anything else."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("SALE-001", 1),
            ("SALE-1000", 1000),
            ("SALE-7", 7),
            ("SALE-012 ", 12),
        ],
    )
    def test_well_formed(self, value: str, expected: int) -> None:
        assert RecordId.parse_suffix(value, "SALE") == expected

    @pytest.mark.parametrize(
        "value",
        ["", "SALE-", "SALE-abc", "SALE-1.5", "SALE--1", "sale-001", "FIN-001", "SALES-001", None, 12, 1.0],
    )
    def test_not_matching(self, value: object) -> None:
        assert RecordId.parse_suffix(value, "SALE") is None

    @pytest.mark.parametrize(
        "value",
        ["SALE-²", "SALE-٣١", "SALE-１", "SALE-" + "9" * 5000],
    )
    def test_unicode_digits_and_oversized_suffixes_are_malformed(self, value: str) -> None:
        assert RecordId.parse_suffix(value, "SALE") is None
