"""Resolve an Address-or-Name identity to a concrete address."""
from __future__ import annotations

import logging

from eth_abi.exceptions import DecodingError

from . import abi
from .address import ZERO_ADDRESS, is_zero_address, parse_address
from .constants import ENS_REGISTRY
from .errors import NameNotResolved, ProviderError
from .interfaces.chain import NodeClient
from .models import Address, AddressOrName, Name

logger = logging.getLogger(__name__)


class NameResolver:
    """Parses addresses locally; looks names up in the ENS registry."""

    def __init__(self, client: NodeClient, registry: str = ENS_REGISTRY) -> None:
        self._client = client
        self._registry = parse_address(registry)

    async def resolve(self, identity: AddressOrName) -> Address:
        if isinstance(identity, Address):
            return Address(parse_address(identity.value))
        if isinstance(identity, Name):
            return await self._lookup(identity)
        raise TypeError(f"Expected Address or Name, got {type(identity).__name__}")

    async def _lookup(self, name: Name) -> Address:
        normalized = name.value.strip().lower()
        node = abi.namehash(normalized)

        resolver = await self._read_address(
            self._registry, abi.ENS_REGISTRY_ABI, "resolver", node
        )
        if is_zero_address(resolver):
            raise NameNotResolved(name.value)

        resolved = await self._read_address(resolver, abi.ENS_RESOLVER_ABI, "addr", node)
        if is_zero_address(resolved):
            raise NameNotResolved(name.value)

        logger.debug("Resolved %s to %s", name.value, resolved)
        return Address(resolved)

    async def _read_address(
        self, contract: str, contract_abi: list, function_name: str, node: bytes
    ) -> str:
        calldata = abi.encode_function_call(contract_abi, function_name, [node])
        result = await self._client.call({"to": contract, "data": calldata})
        if not result or result == "0x":
            # no code at the target
            return ZERO_ADDRESS
        try:
            decoded = abi.decode_function_result(contract_abi, function_name, result)
        except (DecodingError, ValueError) as e:
            raise ProviderError(
                f"Undecodable {function_name} result: {result!r}", method="eth_call"
            ) from e
        return parse_address(decoded)
