"""Async EVM chain adapter: balance, code and ERC-20 reads plus guarded transfers."""
from .adapter import ChainAdapter
from .config import AdapterConfig, WalletConfig, load_config
from .errors import (
    AdapterError,
    AddressFormatError,
    AmountParseError,
    ChainIdMismatch,
    GasCapExceeded,
    MissingLocalKey,
    NameNotResolved,
    ProviderError,
    RequestBuildError,
)
from .models import (
    Address,
    BalanceRequest,
    BalanceResponse,
    CodeRequest,
    CodeResponse,
    FungibleBalanceRequest,
    FungibleBalanceResponse,
    Name,
    TransactionResult,
    TransferRequest,
    parse_identity,
)

__all__ = [
    "AdapterConfig",
    "AdapterError",
    "Address",
    "AddressFormatError",
    "AmountParseError",
    "BalanceRequest",
    "BalanceResponse",
    "ChainAdapter",
    "ChainIdMismatch",
    "CodeRequest",
    "CodeResponse",
    "FungibleBalanceRequest",
    "FungibleBalanceResponse",
    "GasCapExceeded",
    "MissingLocalKey",
    "Name",
    "NameNotResolved",
    "ProviderError",
    "RequestBuildError",
    "TransactionResult",
    "TransferRequest",
    "WalletConfig",
    "load_config",
    "parse_identity",
]
