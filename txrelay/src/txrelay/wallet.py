"""Signing wallet derivation.

Every wallet index maps to one account on the provider's HD tree at
``m/44'/60'/0'/0/<index>``. The mnemonic is handed in explicitly, there is no
module level key material.
"""

import logging
from typing import Any, Protocol

from eth_account import Account
from eth_account.signers.local import LocalAccount

from txrelay.constants import DERIVATION_PATH_PREFIX
from txrelay.models import ConfigError

log = logging.getLogger("txrelay.wallet")

Account.enable_unaudited_hdwallet_features()


class SigningWalletDeriver(Protocol):
    def __call__(self, provider: Any, index: str) -> LocalAccount: ...


def derivation_path(index: str) -> str:
    # Wallet indices arrive as string keys, reject anything that isn't a plain non-negative int
    if not isinstance(index, str) or not index.isdigit():
        raise ValueError(f"Invalid wallet index: {index!r}")
    return f"{DERIVATION_PATH_PREFIX}/{int(index)}"


def derive_signing_wallet(mnemonic: str, index: str) -> LocalAccount:
    path = derivation_path(index)
    account = Account.from_mnemonic(mnemonic, account_path=path)
    log.debug("Derived %s at %s", account.address, path)
    return account


class MnemonicDeriver:
    """Deriver bound to one mnemonic, results cached per index."""

    def __init__(self, mnemonic: str):
        if not mnemonic:
            raise ConfigError("No mnemonic configured (set [wallet].mnemonic or MNEMONIC)")
        self._mnemonic = mnemonic
        self._cache: dict[str, LocalAccount] = {}

    def __call__(self, provider: Any, index: str) -> LocalAccount:
        account = self._cache.get(index)
        if account is None:
            account = derive_signing_wallet(self._mnemonic, index)
            self._cache[index] = account
        return account
