"""Defaults and well-known addresses."""
from __future__ import annotations

DEFAULT_RPC_URL = "http://127.0.0.1:8545"  # Anvil
DEFAULT_RPC_TIMEOUT = 30
DEFAULT_GAS_CAP = 30_000_000
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_RECEIPT_POLL_INTERVAL = 1.0

# ENS registry, same address on mainnet and its forks
ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

# Anvil's default mnemonic accounts, seeded with 10000 ETH each.
# (label, address, private key)
ANVIL_TEST_ACCOUNTS: tuple[tuple[str, str, str], ...] = (
    (
        "alice",
        "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266",
        "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80",
    ),
    (
        "bob",
        "0x70997970c51812dc3a010c7d01b50e0d17dc79c8",
        "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d",
    ),
    (
        "charlie",
        "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc",
        "0x5de4111afa1a4b94908f83103eb1f1706367c2e68ca870fc3fb9a804cdab365a",
    ),
    (
        "david",
        "0x90f79bf6eb2c4f870365e785982e1f101e93b906",
        "0x7c852118294e51e653712a81e05800f419141751be58f605c371e15141b007a6",
    ),
    (
        "eve",
        "0x15d34aaf54267db7d7c367839aaf71a00a2c6a65",
        "0x47e179ec197488593b187f80a00eb0da91f1b9d0b13f8733639f19c30a34926a",
    ),
)
