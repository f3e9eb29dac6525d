"""Typed errors raised by the chain adapter."""
from __future__ import annotations


class AdapterError(Exception):
    """Base class for every error the adapter surfaces to callers."""


class AddressFormatError(AdapterError, ValueError):
    """Malformed hex address."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid address: {value!r}")
        self.value = value


class AmountParseError(AdapterError, ValueError):
    """Malformed decimal ether amount."""

    def __init__(self, value: str, reason: str = "not a decimal amount") -> None:
        super().__init__(f"invalid amount {value!r}: {reason}")
        self.value = value


class ChainIdMismatch(AdapterError):
    def __init__(self, got: int, expected: int) -> None:
        super().__init__(f"unexpected chain id: got {got} expected {expected}")
        self.got = got
        self.expected = expected


class GasCapExceeded(AdapterError):
    def __init__(self, estimated: int, cap: int) -> None:
        super().__init__(f"estimated gas {estimated} exceeds cap {cap}")
        self.estimated = estimated
        self.cap = cap


class MissingLocalKey(AdapterError):
    def __init__(self, address: str) -> None:
        super().__init__(f"no local key for from address {address}")
        self.address = address


class ProviderError(AdapterError):
    """Node or transport failure: connection, JSON-RPC error, revert, bad payload."""

    def __init__(
        self, message: str, code: int | None = None, method: str | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.method = method


class NameNotResolved(ProviderError):
    """ENS name has no resolver or resolves to the zero address."""

    def __init__(self, name: str) -> None:
        super().__init__(f"ENS name not resolvable: {name}")
        self.name = name


class RequestBuildError(ValueError):
    """TransferRequest builder is missing a required field."""
