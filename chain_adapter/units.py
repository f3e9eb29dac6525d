"""Ether/wei conversion."""
from __future__ import annotations

import re

from .errors import AmountParseError

WEI_PER_ETHER = 10**18
ETHER_DECIMALS = 18

_DECIMAL_RE = re.compile(r"^([0-9]*)(?:\.([0-9]*))?$")


def to_wei(amount_eth: str) -> int:
    """Convert a plain decimal ether string (``"0.1"``) to integer wei.

    Conversion is exact. Signs, exponents, ``nan``/``inf`` and more than 18
    significant fractional digits are rejected.
    """
    if not isinstance(amount_eth, str):
        raise AmountParseError(repr(amount_eth), "expected a string")
    match = _DECIMAL_RE.match(amount_eth.strip())
    if match is None:
        raise AmountParseError(amount_eth)

    whole, fraction = match.group(1), (match.group(2) or "")
    if not whole and not fraction:
        raise AmountParseError(amount_eth)

    fraction = fraction.rstrip("0")
    if len(fraction) > ETHER_DECIMALS:
        raise AmountParseError(amount_eth, "more than 18 fractional digits")

    return int(whole or "0") * WEI_PER_ETHER + int(
        fraction.ljust(ETHER_DECIMALS, "0")
    )
