"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from chain_adapter.config import AdapterConfig, anvil_wallets
from chain_adapter.wallets import WalletRegistry


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def adapter_config() -> AdapterConfig:
    return AdapterConfig(
        rpc_url="http://node.test:8545",
        rpc_timeout=5,
        receipt_timeout=5.0,
        receipt_poll_interval=0.01,
    )


@pytest.fixture()
def registry() -> WalletRegistry:
    return WalletRegistry(anvil_wallets())


# ---------------------------------------------------------------------------
# Node client fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_receipt() -> dict:
    return {
        "transactionHash": "0x" + "ab" * 32,
        "gasUsed": "0x5208",  # 21000
        "status": "0x1",
    }


@pytest.fixture()
def mock_client(sample_receipt: dict) -> AsyncMock:
    """Node client answering like a healthy Anvil instance."""
    client = AsyncMock()
    client.get_chain_id.return_value = 31337
    client.get_balance.return_value = 10**18
    client.get_code.return_value = "0x"
    client.estimate_gas.return_value = 21000
    client.call.return_value = "0x"
    client.get_transaction_count.return_value = 0
    client.get_gas_price.return_value = 1_000_000_000
    client.send_raw_transaction.return_value = "0x" + "ab" * 32
    client.wait_for_receipt.return_value = sample_receipt
    return client


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      rpc_url: "http://127.0.0.1:8545"
      rpc_timeout: 10
      gas_cap: 5000000
      expected_chain_id: 31337
      receipt_timeout: 30
      receipt_poll_interval: 0.5
    wallets:
      - label: alice
        address: "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
        private_key: "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
