"""EVM JSON-RPC client over aiohttp."""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import AdapterConfig
from ...errors import ProviderError

logger = logging.getLogger(__name__)


def _to_int(value: Any, method: str) -> int:
    """Decode a JSON-RPC hex quantity (``"0x1a"``)."""
    if not isinstance(value, str) or not value.startswith("0x"):
        raise ProviderError(f"Malformed quantity from {method}: {value!r}", method=method)
    try:
        return int(value, 16)
    except ValueError as e:
        raise ProviderError(
            f"Malformed quantity from {method}: {value!r}", method=method
        ) from e


class EvmClient:
    """Single-endpoint EVM node client.

    Every call is one HTTP round-trip; failures surface as ProviderError and
    are never retried here.
    """

    def __init__(self, config: AdapterConfig) -> None:
        self.rpc_url = config.rpc_url
        self.timeout = config.rpc_timeout

    async def rpc_call(self, method: str, params: list[Any]) -> Any:
        """Make a JSON-RPC call and return its ``result`` field."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        logger.debug("RPC %s %s", method, params)

        try:
            connector = aiohttp.TCPConnector(ssl=ssl_context)
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.rpc_url,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    result = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ProviderError(
                f"RPC call {method} to {self.rpc_url} failed: {e}", method=method
            ) from e

        if not isinstance(result, dict):
            raise ProviderError(f"Malformed RPC response for {method}", method=method)

        if "error" in result:
            error = result["error"] or {}
            if isinstance(error, dict):
                raise ProviderError(
                    f"RPC error: {error.get('message', error)}",
                    code=error.get("code"),
                    method=method,
                )
            raise ProviderError(f"RPC error: {error}", method=method)

        return result.get("result")

    async def get_chain_id(self) -> int:
        return _to_int(await self.rpc_call("eth_chainId", []), "eth_chainId")

    async def get_balance(self, address: str, block: str = "latest") -> int:
        """Get native balance in wei."""
        result = await self.rpc_call("eth_getBalance", [address, block])
        return _to_int(result, "eth_getBalance")

    async def get_code(self, address: str, block: str = "latest") -> str:
        """Get deployed bytecode as 0x-prefixed hex (``"0x"`` when none)."""
        result = await self.rpc_call("eth_getCode", [address, block])
        if not isinstance(result, str) or not result.startswith("0x"):
            raise ProviderError(
                f"Malformed code from eth_getCode: {result!r}", method="eth_getCode"
            )
        return result

    async def call(self, tx: dict[str, Any], block: str = "latest") -> str:
        """Read-only execution (eth_call); a revert surfaces as ProviderError."""
        result = await self.rpc_call("eth_call", [tx, block])
        if not isinstance(result, str):
            raise ProviderError(f"Malformed eth_call result: {result!r}", method="eth_call")
        return result

    async def estimate_gas(self, tx: dict[str, Any], block: str | None = None) -> int:
        params: list[Any] = [tx] if block is None else [tx, block]
        return _to_int(await self.rpc_call("eth_estimateGas", params), "eth_estimateGas")

    async def get_transaction_count(self, address: str, block: str = "pending") -> int:
        result = await self.rpc_call("eth_getTransactionCount", [address, block])
        return _to_int(result, "eth_getTransactionCount")

    async def get_gas_price(self) -> int:
        return _to_int(await self.rpc_call("eth_gasPrice", []), "eth_gasPrice")

    async def send_raw_transaction(self, raw_tx: str) -> str:
        """Submit a signed transaction and return its hash."""
        result = await self.rpc_call("eth_sendRawTransaction", [raw_tx])
        if not isinstance(result, str):
            raise ProviderError(
                f"Malformed transaction hash: {result!r}", method="eth_sendRawTransaction"
            )
        return result

    async def wait_for_receipt(
        self, tx_hash: str, timeout: float, poll_interval: float
    ) -> dict[str, Any] | None:
        """Poll for a receipt until it appears or ``timeout`` seconds pass.

        Returns None when no receipt shows up in time.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout

        while True:
            receipt = await self.rpc_call("eth_getTransactionReceipt", [tx_hash])
            if isinstance(receipt, dict):
                return receipt
            if receipt is not None:
                raise ProviderError(
                    f"Malformed receipt for {tx_hash}: {receipt!r}",
                    method="eth_getTransactionReceipt",
                )
            if loop.time() >= deadline:
                logger.warning("No receipt for %s within %ss", tx_hash, timeout)
                return None
            await asyncio.sleep(poll_interval)
