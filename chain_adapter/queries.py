"""Read-only queries: native balance, code probe, ERC-20 balance."""
from __future__ import annotations

import logging

from eth_abi.exceptions import DecodingError

from . import abi
from .address import parse_address
from .errors import ProviderError
from .interfaces.chain import NodeClient
from .models import (
    BalanceRequest,
    BalanceResponse,
    CodeRequest,
    CodeResponse,
    FungibleBalanceRequest,
    FungibleBalanceResponse,
)
from .resolver import NameResolver

logger = logging.getLogger(__name__)


class ReadQueryService:
    """Stateless reads; no chain identity check and no retries."""

    def __init__(self, client: NodeClient, resolver: NameResolver) -> None:
        self._client = client
        self._resolver = resolver

    async def balance(self, request: BalanceRequest) -> BalanceResponse:
        address = await self._resolver.resolve(request.who)
        wei = await self._client.get_balance(address.value)
        return BalanceResponse(wei=str(wei))

    async def code(self, request: CodeRequest) -> CodeResponse:
        address = parse_address(request.addr.value)
        code = await self._client.get_code(address)
        length = len(code.removeprefix("0x")) // 2
        return CodeResponse(deployed=length > 0, bytecode_len=length)

    async def fungible_balance(
        self, request: FungibleBalanceRequest
    ) -> FungibleBalanceResponse:
        token = parse_address(request.token.value)
        holder = parse_address(request.holder.value)

        calldata = abi.encode_function_call(abi.ERC20_ABI, "balanceOf", [holder])
        result = await self._client.call({"to": token, "data": calldata})
        if not result or result == "0x":
            raise ProviderError(
                f"balanceOf returned no data; is {token} a token contract?",
                method="eth_call",
            )

        try:
            amount = abi.decode_function_result(abi.ERC20_ABI, "balanceOf", result)
        except (DecodingError, ValueError) as e:
            raise ProviderError(
                f"Undecodable balanceOf result: {result!r}", method="eth_call"
            ) from e
        logger.debug("balanceOf(%s) on %s = %s", holder, token, amount)
        return FungibleBalanceResponse(amount=str(amount))
