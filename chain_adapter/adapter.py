"""Single entry point for typed read and transfer requests."""
from __future__ import annotations

import logging

from .chains.evm import EvmClient
from .config import AdapterConfig
from .interfaces.chain import NodeClient
from .models import (
    Address,
    AddressOrName,
    BalanceRequest,
    BalanceResponse,
    CodeRequest,
    CodeResponse,
    FungibleBalanceRequest,
    FungibleBalanceResponse,
    Request,
    Response,
    TransactionResult,
    TransferRequest,
)
from .pipeline import TransactionPipeline
from .queries import ReadQueryService
from .resolver import NameResolver
from .wallets import WalletRegistry

logger = logging.getLogger(__name__)


class ChainAdapter:
    """Wires the node client, resolver, queries and transfer pipeline.

    Instances are immutable and safe to share between concurrent callers;
    ``with_*`` methods return a reconfigured copy.
    """

    def __init__(
        self,
        config: AdapterConfig,
        client: NodeClient | None = None,
        registry: WalletRegistry | None = None,
    ) -> None:
        self._config = config
        self._client: NodeClient = client if client is not None else EvmClient(config)
        self._registry = registry if registry is not None else WalletRegistry(config.wallets)
        self._resolver = NameResolver(self._client)
        self._queries = ReadQueryService(self._client, self._resolver)
        self._pipeline = TransactionPipeline(self._client, self._registry, config)
        logger.debug(
            "Adapter for %s (gas cap %d, expected chain %s)",
            config.rpc_url, config.gas_cap, config.expected_chain_id,
        )

    @property
    def config(self) -> AdapterConfig:
        return self._config

    def with_expected_chain_id(self, chain_id: int) -> ChainAdapter:
        return ChainAdapter(
            self._config.with_expected_chain_id(chain_id), self._client, self._registry
        )

    def with_gas_cap(self, gas_cap: int) -> ChainAdapter:
        return ChainAdapter(self._config.with_gas_cap(gas_cap), self._client, self._registry)

    async def resolve(self, identity: AddressOrName) -> Address:
        return await self._resolver.resolve(identity)

    async def get_balance(self, request: BalanceRequest) -> BalanceResponse:
        return await self._queries.balance(request)

    async def get_code(self, request: CodeRequest) -> CodeResponse:
        return await self._queries.code(request)

    async def get_fungible_balance(
        self, request: FungibleBalanceRequest
    ) -> FungibleBalanceResponse:
        return await self._queries.fungible_balance(request)

    async def send(self, request: TransferRequest) -> TransactionResult:
        return await self._pipeline.execute(request)

    async def handle(self, request: Request) -> Response:
        """Dispatch one request variant to its operation."""
        if isinstance(request, BalanceRequest):
            return await self.get_balance(request)
        if isinstance(request, CodeRequest):
            return await self.get_code(request)
        if isinstance(request, FungibleBalanceRequest):
            return await self.get_fungible_balance(request)
        if isinstance(request, TransferRequest):
            return await self.send(request)
        raise TypeError(f"Unsupported request type: {type(request).__name__}")
