"""Integration tests for name resolution and read queries with a mocked node."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from eth_abi import encode

from chain_adapter.address import ZERO_ADDRESS
from chain_adapter.constants import ENS_REGISTRY
from chain_adapter.errors import AddressFormatError, NameNotResolved, ProviderError
from chain_adapter.models import (
    Address,
    BalanceRequest,
    CodeRequest,
    CodeResponse,
    FungibleBalanceRequest,
    Name,
)
from chain_adapter.queries import ReadQueryService
from chain_adapter.resolver import NameResolver

ALICE = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
RESOLVER = "0x4976fb03c32e5b8cfe2b6ccb31c09ba78ebaba41"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def _address_result(address: str) -> str:
    return "0x" + encode(["address"], [address]).hex()


@pytest.fixture()
def resolver(mock_client: AsyncMock) -> NameResolver:
    return NameResolver(mock_client)


@pytest.fixture()
def queries(mock_client: AsyncMock, resolver: NameResolver) -> ReadQueryService:
    return ReadQueryService(mock_client, resolver)


class TestNameResolver:
    @pytest.mark.asyncio
    async def test_address_is_parsed_without_network(
        self, resolver: NameResolver, mock_client: AsyncMock
    ) -> None:
        resolved = await resolver.resolve(Address(ALICE.upper().replace("0X", "0x")))
        assert resolved.value == ALICE
        mock_client.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_address_resolution_is_idempotent(self, resolver: NameResolver) -> None:
        once = await resolver.resolve(Address("0xF39FD6E51AAD88F6F4CE6AB8827279CFFFB92266"))
        assert await resolver.resolve(once) == once
        assert (await resolver.resolve(once)).value == once.value

    @pytest.mark.asyncio
    async def test_malformed_address(self, resolver: NameResolver) -> None:
        with pytest.raises(AddressFormatError):
            await resolver.resolve(Address("not-an-address"))

    @pytest.mark.asyncio
    async def test_ens_lookup(self, resolver: NameResolver, mock_client: AsyncMock) -> None:
        mock_client.call.side_effect = [_address_result(RESOLVER), _address_result(ALICE)]

        resolved = await resolver.resolve(Name("Alice.eth"))

        assert resolved == Address(ALICE)
        registry_call, resolver_call = mock_client.call.await_args_list
        assert registry_call.args[0]["to"] == ENS_REGISTRY.lower()
        assert registry_call.args[0]["data"].startswith("0x0178b8bf")
        assert resolver_call.args[0]["to"] == RESOLVER
        assert resolver_call.args[0]["data"].startswith("0x3b3b57de")
        # namehash of the lowercased name
        assert registry_call.args[0]["data"] == resolver_call.args[0]["data"].replace(
            "0x3b3b57de", "0x0178b8bf"
        )

    @pytest.mark.asyncio
    async def test_no_resolver(self, resolver: NameResolver, mock_client: AsyncMock) -> None:
        mock_client.call.return_value = _address_result(ZERO_ADDRESS)

        with pytest.raises(NameNotResolved):
            await resolver.resolve(Name("missing.eth"))
        assert mock_client.call.await_count == 1

    @pytest.mark.asyncio
    async def test_zero_address_is_not_accepted(
        self, resolver: NameResolver, mock_client: AsyncMock
    ) -> None:
        mock_client.call.side_effect = [_address_result(RESOLVER), _address_result(ZERO_ADDRESS)]

        with pytest.raises(NameNotResolved) as exc:
            await resolver.resolve(Name("unset.eth"))
        assert exc.value.name == "unset.eth"
        assert isinstance(exc.value, ProviderError)

    @pytest.mark.asyncio
    async def test_empty_call_result(self, resolver: NameResolver, mock_client: AsyncMock) -> None:
        mock_client.call.return_value = "0x"

        with pytest.raises(NameNotResolved):
            await resolver.resolve(Name("vitalik.eth"))

    @pytest.mark.asyncio
    async def test_provider_error_propagates(
        self, resolver: NameResolver, mock_client: AsyncMock
    ) -> None:
        mock_client.call.side_effect = ProviderError("connection refused")

        with pytest.raises(ProviderError, match="connection refused"):
            await resolver.resolve(Name("vitalik.eth"))


class TestBalance:
    @pytest.mark.asyncio
    async def test_balance_by_ens_name(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        mock_client.call.side_effect = [_address_result(RESOLVER), _address_result(ALICE)]
        mock_client.get_balance.return_value = 1_000_000_000_000_000_000

        response = await queries.balance(BalanceRequest(who=Name("alice.eth")))

        assert response.wei == "1000000000000000000"
        mock_client.get_balance.assert_awaited_once_with(ALICE)

    @pytest.mark.asyncio
    async def test_no_chain_id_check(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        await queries.balance(BalanceRequest(who=Address(ALICE)))
        mock_client.get_chain_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_address_before_network(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        with pytest.raises(AddressFormatError):
            await queries.balance(BalanceRequest(who=Address("0x1234")))
        mock_client.get_balance.assert_not_called()


class TestCode:
    @pytest.mark.asyncio
    async def test_zero_length_code(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        mock_client.get_code.return_value = "0x"

        response = await queries.code(CodeRequest(addr=Address(ZERO_ADDRESS)))

        assert response == CodeResponse(deployed=False, bytecode_len=0)

    @pytest.mark.asyncio
    async def test_deployed_contract(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        mock_client.get_code.return_value = "0x608060405234"

        response = await queries.code(CodeRequest(addr=Address(USDC)))

        assert response == CodeResponse(deployed=True, bytecode_len=6)
        mock_client.get_code.assert_awaited_once_with(USDC.lower())

    @pytest.mark.asyncio
    async def test_malformed_address(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        with pytest.raises(AddressFormatError):
            await queries.code(CodeRequest(addr=Address("not-an-address")))
        mock_client.get_code.assert_not_called()


class TestFungibleBalance:
    @pytest.mark.asyncio
    async def test_balance_of(self, queries: ReadQueryService, mock_client: AsyncMock) -> None:
        mock_client.call.return_value = "0x" + encode(["uint256"], [2_500_000]).hex()

        response = await queries.fungible_balance(
            FungibleBalanceRequest(token=Address(USDC), holder=Address(ALICE))
        )

        assert response.amount == "2500000"
        tx = mock_client.call.await_args.args[0]
        assert tx["to"] == USDC.lower()
        assert tx["data"] == "0x70a08231" + "0" * 24 + ALICE[2:]

    @pytest.mark.asyncio
    async def test_malformed_token(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        with pytest.raises(AddressFormatError):
            await queries.fungible_balance(
                FungibleBalanceRequest(token=Address("0xnot-a-token"), holder=Address(ALICE))
            )
        mock_client.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_holder(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        with pytest.raises(AddressFormatError):
            await queries.fungible_balance(
                FungibleBalanceRequest(token=Address(USDC), holder=Address("bob"))
            )
        mock_client.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_code_at_token(
        self, queries: ReadQueryService, mock_client: AsyncMock
    ) -> None:
        mock_client.call.return_value = "0x"

        with pytest.raises(ProviderError, match="no data"):
            await queries.fungible_balance(
                FungibleBalanceRequest(token=Address(USDC), holder=Address(ALICE))
            )
