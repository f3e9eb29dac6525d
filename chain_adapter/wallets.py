"""Fixed mapping from sender address to a local signing key."""
from __future__ import annotations

import asyncio
import logging
import threading
import weakref
from collections.abc import Iterable
from types import MappingProxyType

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .address import normalize, parse_address
from .config import WalletConfig
from .errors import MissingLocalKey

logger = logging.getLogger(__name__)


class WalletRegistry:
    """Accounts are read-only after construction; keys are lowercase addresses.

    Submission locks are created lazily, one per sender per event loop, so a
    registry can outlive the loop that first used it.
    """

    def __init__(self, wallets: Iterable[WalletConfig]) -> None:
        accounts: dict[str, LocalAccount] = {}
        for wallet in wallets:
            account = Account.from_key(wallet.private_key)
            derived = normalize(account.address)
            if wallet.address and parse_address(wallet.address) != derived:
                raise ValueError(
                    f"Wallet '{wallet.label}': key belongs to {derived}, "
                    f"not {wallet.address}"
                )
            accounts[derived] = account
        self._accounts = MappingProxyType(accounts)
        self._submit_locks: weakref.WeakKeyDictionary[
            asyncio.AbstractEventLoop, dict[str, asyncio.Lock]
        ] = weakref.WeakKeyDictionary()
        self._locks_guard = threading.Lock()
        logger.debug("Wallet registry holds %d keys", len(accounts))

    def lookup(self, address: str) -> LocalAccount:
        """Return the signing account for ``address`` or raise MissingLocalKey."""
        account = self._accounts.get(normalize(address))
        if account is None:
            raise MissingLocalKey(address)
        return account

    def submission_lock(self, address: str) -> asyncio.Lock:
        """Lock serialising nonce fetch, signing and submission for ``address``.

        Must be called from a running event loop.
        """
        key = normalize(address)
        if key not in self._accounts:
            raise MissingLocalKey(address)
        loop = asyncio.get_running_loop()
        with self._locks_guard:
            locks = self._submit_locks.setdefault(loop, {})
            return locks.setdefault(key, asyncio.Lock())
