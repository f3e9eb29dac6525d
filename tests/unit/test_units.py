"""Unit tests for ether/wei conversion."""
from __future__ import annotations

import pytest

from chain_adapter.errors import AmountParseError
from chain_adapter.units import to_wei


class TestToWei:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            ("0.1", 10**17),
            ("1", 10**18),
            ("1.", 10**18),
            (".5", 5 * 10**17),
            (" 2.25 ", 2_250_000_000_000_000_000),
            ("0.000000000000000001", 1),
            ("1.500000000000000000000", 15 * 10**17),
            ("123456789012.123456789012345678", 123456789012123456789012345678),
        ],
    )
    def test_valid(self, amount: str, expected: int) -> None:
        assert to_wei(amount) == expected

    @pytest.mark.parametrize(
        "amount",
        [
            "", ".", "abc", "-1", "+1", "1e18", "nan", "inf", "1,5",
            "0.0000000000000000001",
            "\u0661.\u0665",  # Arabic-Indic digits
            "\u0967",
        ],
    )
    def test_invalid(self, amount: str) -> None:
        with pytest.raises(AmountParseError):
            to_wei(amount)
