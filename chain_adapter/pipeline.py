"""Native transfer pipeline: guards, simulation, then sign and submit.

Steps run strictly in order; each one gates the next:

    BUILT -> IDENTITY_CHECKED -> RESOLVED -> GAS_ESTIMATED -> SIMULATED
        -> SIMULATED_ONLY
        -> SIGNED -> SUBMITTED -> CONFIRMED | UNCONFIRMED

No key material is touched before SIMULATED, and nothing irreversible happens
before SUBMITTED.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from .address import parse_address, to_checksum_address
from .config import AdapterConfig
from .errors import ProviderError
from .guards import ChainIdentityGuard, GasCapEnforcer
from .interfaces.chain import NodeClient
from .models import TransactionResult, TransferRequest
from .units import to_wei
from .wallets import WalletRegistry

logger = logging.getLogger(__name__)


class TransferState(str, Enum):
    BUILT = "built"
    IDENTITY_CHECKED = "identity_checked"
    RESOLVED = "resolved"
    GAS_ESTIMATED = "gas_estimated"
    SIMULATED = "simulated"
    SIMULATED_ONLY = "simulated_only"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    UNCONFIRMED = "unconfirmed"


def _hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def _receipt_quantity(receipt: dict[str, Any], key: str) -> int | None:
    value = receipt.get(key)
    if value is None:
        return None
    try:
        return int(value, 16) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as e:
        raise ProviderError(f"Malformed receipt field {key}: {value!r}") from e


class TransactionPipeline:
    """Runs one TransferRequest through the transfer state machine."""

    def __init__(
        self, client: NodeClient, registry: WalletRegistry, config: AdapterConfig
    ) -> None:
        self._client = client
        self._registry = registry
        self._identity_guard = ChainIdentityGuard(config.expected_chain_id)
        self._gas_enforcer = GasCapEnforcer(config.gas_cap)
        self._receipt_timeout = config.receipt_timeout
        self._receipt_poll_interval = config.receipt_poll_interval

    @staticmethod
    def _enter(request: TransferRequest, state: TransferState) -> None:
        logger.debug(
            "transfer %s -> %s: %s", request.sender, request.recipient, state.value
        )

    async def execute(self, request: TransferRequest) -> TransactionResult:
        value = to_wei(request.amount_eth)
        self._enter(request, TransferState.BUILT)

        await self._identity_guard.check(self._client)
        self._enter(request, TransferState.IDENTITY_CHECKED)

        sender = parse_address(request.sender.value)
        recipient = parse_address(request.recipient.value)
        self._enter(request, TransferState.RESOLVED)

        block = hex(request.fork_block) if request.fork_block is not None else None
        call_tx: dict[str, Any] = {"from": sender, "to": recipient, "value": hex(value)}
        gas = await self._gas_enforcer.estimate(self._client, call_tx, block)
        self._enter(request, TransferState.GAS_ESTIMATED)

        # Result discarded; a revert raises ProviderError before any signing.
        await self._client.call({**call_tx, "gas": hex(gas)}, block or "latest")
        self._enter(request, TransferState.SIMULATED)

        if request.simulate:
            self._enter(request, TransferState.SIMULATED_ONLY)
            return TransactionResult(tx_hash="", gas_used=gas, status=None)

        return await self._broadcast(request, sender, recipient, value, gas)

    async def _broadcast(
        self,
        request: TransferRequest,
        sender: str,
        recipient: str,
        value: int,
        gas: int,
    ) -> TransactionResult:
        account = self._registry.lookup(sender)
        chain_id = await self._client.get_chain_id()

        async with self._registry.submission_lock(sender):
            nonce = await self._client.get_transaction_count(sender, "pending")
            gas_price = await self._client.get_gas_price()
            signed = account.sign_transaction(
                {
                    "to": to_checksum_address(recipient),
                    "value": value,
                    "gas": gas,
                    "gasPrice": gas_price,
                    "nonce": nonce,
                    "chainId": chain_id,
                }
            )
            self._enter(request, TransferState.SIGNED)

            tx_hash = await self._client.send_raw_transaction(_hex(signed.raw_transaction))
            self._enter(request, TransferState.SUBMITTED)
        logger.info("Submitted transfer %s (nonce %d, chain %d)", tx_hash, nonce, chain_id)

        receipt = await self._client.wait_for_receipt(
            tx_hash, self._receipt_timeout, self._receipt_poll_interval
        )
        if receipt is None:
            self._enter(request, TransferState.UNCONFIRMED)
            logger.warning("Transfer %s broadcast but not confirmed", tx_hash)
            return TransactionResult(tx_hash=tx_hash, gas_used=gas, status=None)
        if not isinstance(receipt, dict):
            raise ProviderError(f"Malformed receipt for {tx_hash}: {receipt!r}")

        status = _receipt_quantity(receipt, "status")
        result = TransactionResult(
            tx_hash=receipt.get("transactionHash") or tx_hash,
            gas_used=_receipt_quantity(receipt, "gasUsed"),
            status=None if status is None else status == 1,
        )
        self._enter(request, TransferState.CONFIRMED)
        logger.info(
            "Transfer %s confirmed: status=%s gas_used=%s",
            result.tx_hash, result.status, result.gas_used,
        )
        return result
