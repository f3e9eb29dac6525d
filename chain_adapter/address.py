"""Hex address parsing, normalisation and EIP-55 checksums."""
from __future__ import annotations

import re

from eth_hash.auto import keccak

from .errors import AddressFormatError

ZERO_ADDRESS = "0x" + "0" * 40

_HEX_ADDRESS_RE = re.compile(r"^(?:0[xX])?([0-9a-fA-F]{40})$")


def normalize(address: str) -> str:
    """Lowercase an address string for comparisons and registry keys."""
    return address.strip().lower()


def parse_address(value: str) -> str:
    """Validate a 20-byte hex address and return it as lowercase ``0x...``.

    The ``0x`` prefix is optional on input. Checksum casing is not enforced.

    Raises:
        AddressFormatError: if ``value`` is not 40 hex digits.
    """
    if not isinstance(value, str):
        raise AddressFormatError(repr(value))
    match = _HEX_ADDRESS_RE.match(value.strip())
    if match is None:
        raise AddressFormatError(value)
    return "0x" + match.group(1).lower()


def is_zero_address(address: str) -> bool:
    return normalize(address) == ZERO_ADDRESS


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 mixed-case form.

    eth-account requires checksummed (or all-lowercase) addresses in
    transaction fields; signing payloads always use the checksummed form.
    """
    addr = parse_address(address)[2:]
    addr_hash = keccak(addr.encode("ascii")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef" and int(addr_hash[i], 16) >= 8:
            result += c.upper()
        else:
            result += c
    return result
