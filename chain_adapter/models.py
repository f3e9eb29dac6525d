"""Frozen request and response models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .errors import RequestBuildError


@dataclass(frozen=True, eq=False)
class Address:
    """Hex account or contract address as supplied by the caller.

    Not validated here; the resolver parses it. Equality ignores case and the
    optional ``0x`` prefix.
    """

    value: str

    def _canonical(self) -> str:
        return self.value.strip().lower().removeprefix("0x")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self._canonical() == other._canonical()

    def __hash__(self) -> int:
        return hash(self._canonical())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Name:
    """ENS name, e.g. ``vitalik.eth``."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("ENS name must not be empty")

    def __str__(self) -> str:
        return self.value


AddressOrName = Union[Address, Name]


def parse_identity(text: str) -> AddressOrName:
    """Pick the Address variant for ``0x``-prefixed input, Name otherwise."""
    text = text.strip()
    if text[:2].lower() == "0x":
        return Address(text)
    return Name(text)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BalanceRequest:
    who: AddressOrName


@dataclass(frozen=True)
class CodeRequest:
    addr: Address


@dataclass(frozen=True)
class FungibleBalanceRequest:
    """ERC-20 ``balanceOf(holder)`` on ``token``."""

    token: Address
    holder: Address


@dataclass(frozen=True)
class TransferRequest:
    """Native value transfer. Build through :meth:`builder`."""

    sender: Address
    recipient: Address
    amount_eth: str
    simulate: bool = True
    fork_block: int | None = None

    @staticmethod
    def builder() -> TransferRequestBuilder:
        return TransferRequestBuilder()


@dataclass
class TransferRequestBuilder:
    """Collects TransferRequest fields; ``build()`` enforces the required ones."""

    _sender: Address | None = field(default=None, repr=False)
    _recipient: Address | None = field(default=None, repr=False)
    _amount_eth: str | None = field(default=None, repr=False)
    _simulate: bool | None = field(default=None, repr=False)
    _fork_block: int | None = field(default=None, repr=False)

    def sender(self, sender: Address) -> TransferRequestBuilder:
        self._sender = sender
        return self

    def recipient(self, recipient: Address) -> TransferRequestBuilder:
        self._recipient = recipient
        return self

    def amount_eth(self, amount_eth: str) -> TransferRequestBuilder:
        self._amount_eth = amount_eth
        return self

    def simulate(self, simulate: bool) -> TransferRequestBuilder:
        self._simulate = simulate
        return self

    def fork_block(self, fork_block: int | None) -> TransferRequestBuilder:
        self._fork_block = fork_block
        return self

    def build(self) -> TransferRequest:
        if self._sender is None:
            raise RequestBuildError("sender required")
        if self._recipient is None:
            raise RequestBuildError("recipient required")
        if self._amount_eth is None:
            raise RequestBuildError("amount_eth required")
        return TransferRequest(
            sender=self._sender,
            recipient=self._recipient,
            amount_eth=self._amount_eth,
            simulate=True if self._simulate is None else self._simulate,
            fork_block=self._fork_block,
        )


Request = Union[BalanceRequest, CodeRequest, FungibleBalanceRequest, TransferRequest]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BalanceResponse:
    wei: str


@dataclass(frozen=True)
class CodeResponse:
    deployed: bool
    bytecode_len: int


@dataclass(frozen=True)
class FungibleBalanceResponse:
    amount: str


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a transfer. ``tx_hash`` is empty when only simulated."""

    tx_hash: str
    gas_used: int | None = None
    status: bool | None = None


Response = Union[BalanceResponse, CodeResponse, FungibleBalanceResponse, TransactionResult]
