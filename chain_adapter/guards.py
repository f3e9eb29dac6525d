"""Safety guards run before a transfer touches the network state."""
from __future__ import annotations

import logging
from typing import Any

from .errors import ChainIdMismatch, GasCapExceeded
from .interfaces.chain import NodeClient

logger = logging.getLogger(__name__)


class ChainIdentityGuard:
    """Refuses to continue when the node reports an unexpected chain id.

    A no-op when no expected id is configured.
    """

    def __init__(self, expected_chain_id: int | None) -> None:
        self.expected_chain_id = expected_chain_id

    async def check(self, client: NodeClient) -> None:
        if self.expected_chain_id is None:
            return
        got = await client.get_chain_id()
        if got != self.expected_chain_id:
            raise ChainIdMismatch(got=got, expected=self.expected_chain_id)
        logger.debug("Chain id %d matches", got)


class GasCapEnforcer:
    """Estimates gas for a call object and rejects estimates above the cap."""

    def __init__(self, cap: int) -> None:
        self.cap = cap

    async def estimate(
        self, client: NodeClient, tx: dict[str, Any], block: str | None = None
    ) -> int:
        estimated = await client.estimate_gas(tx, block)
        if estimated > self.cap:
            raise GasCapExceeded(estimated=estimated, cap=self.cap)
        logger.debug("Gas estimate %d within cap %d", estimated, self.cap)
        return estimated
