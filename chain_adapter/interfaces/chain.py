"""Node client protocol — EVM JSON-RPC abstraction."""
from typing import Any, Protocol


class NodeClient(Protocol):
    """Async interface for the node calls the adapter issues."""

    async def get_chain_id(self) -> int: ...

    async def get_balance(self, address: str, block: str = "latest") -> int: ...

    async def get_code(self, address: str, block: str = "latest") -> str: ...

    async def call(self, tx: dict[str, Any], block: str = "latest") -> str: ...

    async def estimate_gas(self, tx: dict[str, Any], block: str | None = None) -> int: ...

    async def get_transaction_count(self, address: str, block: str = "pending") -> int: ...

    async def get_gas_price(self) -> int: ...

    async def send_raw_transaction(self, raw_tx: str) -> str: ...

    async def wait_for_receipt(
        self, tx_hash: str, timeout: float, poll_interval: float
    ) -> dict[str, Any] | None: ...
