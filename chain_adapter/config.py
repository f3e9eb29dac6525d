"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .constants import (
    ANVIL_TEST_ACCOUNTS,
    DEFAULT_GAS_CAP,
    DEFAULT_RECEIPT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    DEFAULT_RPC_TIMEOUT,
    DEFAULT_RPC_URL,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WalletConfig:
    label: str = ""
    address: str = ""
    private_key: str = field(default="", repr=False)


def anvil_wallets() -> tuple[WalletConfig, ...]:
    """The Anvil default accounts as wallet entries."""
    return tuple(
        WalletConfig(label=label, address=address, private_key=key)
        for label, address, key in ANVIL_TEST_ACCOUNTS
    )


@dataclass(frozen=True)
class AdapterConfig:
    rpc_url: str = DEFAULT_RPC_URL
    rpc_timeout: int = DEFAULT_RPC_TIMEOUT
    gas_cap: int = DEFAULT_GAS_CAP
    expected_chain_id: int | None = None
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    receipt_poll_interval: float = DEFAULT_RECEIPT_POLL_INTERVAL
    wallets: tuple[WalletConfig, ...] = field(default_factory=anvil_wallets)

    def with_expected_chain_id(self, chain_id: int) -> AdapterConfig:
        return replace(self, expected_chain_id=chain_id)

    def with_gas_cap(self, gas_cap: int) -> AdapterConfig:
        return replace(self, gas_cap=gas_cap)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _optional_int(value: Any) -> int | None:
    # "${UNSET_VAR}" interpolates to ""
    if value is None or value == "":
        return None
    return int(value)


def _build_wallets(raw: list[dict[str, Any]] | None) -> tuple[WalletConfig, ...]:
    if raw is None:
        return anvil_wallets()
    wallets: list[WalletConfig] = []
    for w in raw:
        wallets.append(
            WalletConfig(
                label=w.get("label", ""),
                address=w.get("address", ""),
                private_key=w.get("private_key", ""),
            )
        )
    return tuple(wallets)


def _build_adapter(raw: dict[str, Any]) -> AdapterConfig:
    chain = raw.get("chain") or {}
    return AdapterConfig(
        rpc_url=chain.get("rpc_url") or DEFAULT_RPC_URL,
        rpc_timeout=int(chain.get("rpc_timeout", DEFAULT_RPC_TIMEOUT)),
        gas_cap=int(chain.get("gas_cap", DEFAULT_GAS_CAP)),
        expected_chain_id=_optional_int(chain.get("expected_chain_id")),
        receipt_timeout=float(chain.get("receipt_timeout", DEFAULT_RECEIPT_TIMEOUT)),
        receipt_poll_interval=float(
            chain.get("receipt_poll_interval", DEFAULT_RECEIPT_POLL_INTERVAL)
        ),
        wallets=_build_wallets(raw.get("wallets")),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AdapterConfig:
    """Load and validate adapter configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (one level up from this package).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = _build_adapter(raw)

    validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def validate(cfg: AdapterConfig) -> None:
    """Raise on invalid configuration."""
    if not cfg.rpc_url.startswith(("http://", "https://")):
        raise ValueError(f"rpc_url must be an http(s) URL, got '{cfg.rpc_url}'")
    if cfg.rpc_timeout <= 0:
        raise ValueError("rpc_timeout must be positive")
    if cfg.gas_cap <= 0:
        raise ValueError("gas_cap must be positive")
    if cfg.expected_chain_id is not None and cfg.expected_chain_id <= 0:
        raise ValueError("expected_chain_id must be positive")
    if cfg.receipt_timeout <= 0 or cfg.receipt_poll_interval <= 0:
        raise ValueError("receipt_timeout and receipt_poll_interval must be positive")

    for wallet in cfg.wallets:
        if not wallet.private_key:
            raise ValueError(f"Wallet '{wallet.label or wallet.address}' has no private key")
