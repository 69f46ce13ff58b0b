from typing import Final
from enum import StrEnum


class RequestType(StrEnum):
    API_CALL           = "ApiCall"
    WITHDRAWAL         = "Withdrawal"
    WALLET_DESIGNATION = "WalletDesignation"


class RequestStatus(StrEnum):
    PENDING   = "Pending"
    FULFILLED = "Fulfilled"
    IGNORED   = "Ignored"
    BLOCKED   = "Blocked"
    ERRORED   = "Errored"


# BIP-44 path for the provider's wallets, the index is the last component
DERIVATION_PATH_PREFIX: Final = "m/44'/60'/0'/0"

GAS_LIMIT = 500_000
SUBMIT_TIMEOUT = 20
RPC_TIMEOUT = 2.0
DEFAULT_GAS_PRICE_GWEI = 40

__all__ = [
    "DEFAULT_GAS_PRICE_GWEI",
    "DERIVATION_PATH_PREFIX",
    "GAS_LIMIT",
    "RPC_TIMEOUT",
    "SUBMIT_TIMEOUT",

    ######
    "RequestStatus",
    "RequestType",
]
