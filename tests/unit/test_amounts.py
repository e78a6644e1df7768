"""Tests for auc_common.amounts — integer formatting and blind masking."""

from src.auc_common.amounts import format_amount, mask_amount


class TestFormatAmount:
    def test_groups_thousands(self) -> None:
        assert format_amount(1234567) == "1,234,567"

    def test_small_values(self) -> None:
        assert format_amount(0) == "0"
        assert format_amount(999) == "999"


class TestMaskAmount:
    def test_every_digit_replaced(self) -> None:
        assert mask_amount(1234567) == "?,???,???"

    def test_zero_is_masked(self) -> None:
        assert mask_amount(0) == "?"

    def test_custom_mask_char(self) -> None:
        assert mask_amount(2500, mask_char="*") == "*,***"

    def test_no_digit_survives(self) -> None:
        assert not any(c.isdigit() for c in mask_amount(987654321))
