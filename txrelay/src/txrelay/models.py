"""Domain data structures shared by the orchestrator, the submitters and the API."""

from dataclasses import dataclass, field
from typing import Any

from txrelay.constants import RequestStatus, RequestType


class TxRelayError(Exception):
    """Base class for errors raised by txrelay."""


class ConfigError(TxRelayError):
    pass


class DerivationError(TxRelayError):
    """The signing wallet for an index could not be derived.

    Every request owned by that wallet is reported with this error instead of
    being submitted.
    """

    def __init__(self, index: str, cause: BaseException):
        super().__init__(f"Unable to derive signing wallet for index {index!r}: {cause}")
        self.index = index
        self.cause = cause


class MissingTransactionDataError(TxRelayError):
    """A submitter finished without an error but also without a transaction."""

    def __init__(self, request_id: str):
        super().__init__(f"No transaction data returned for request {request_id}")
        self.request_id = request_id


@dataclass(frozen=True, slots=True)
class ApiCall:
    id: str
    requester_index: str | None = None
    client_address: str | None = None
    designated_wallet: str | None = None
    fulfill_address: str | None = None
    fulfill_function_id: str | None = None
    error_address: str | None = None
    error_function_id: str | None = None
    endpoint_id: str | None = None
    template_id: str | None = None
    encoded_parameters: str | None = None
    response_value: str | None = None
    error_code: int | None = None
    status: RequestStatus = RequestStatus.PENDING
    nonce: int | None = None

    type = RequestType.API_CALL


@dataclass(frozen=True, slots=True)
class Withdrawal:
    id: str
    provider_id: str | None = None
    requester_index: str | None = None
    designated_wallet: str | None = None
    destination_address: str | None = None
    status: RequestStatus = RequestStatus.PENDING
    nonce: int | None = None

    type = RequestType.WITHDRAWAL


@dataclass(frozen=True, slots=True)
class WalletDesignation:
    id: str
    provider_id: str | None = None
    requester_index: str | None = None
    wallet_index: str | None = None
    deposit_amount: int | None = None
    status: RequestStatus = RequestStatus.PENDING
    nonce: int | None = None

    type = RequestType.WALLET_DESIGNATION


PendingRequest = ApiCall | Withdrawal | WalletDesignation


@dataclass(frozen=True, slots=True)
class GroupedRequests:
    api_calls: tuple[ApiCall, ...] = ()
    withdrawals: tuple[Withdrawal, ...] = ()
    wallet_designations: tuple[WalletDesignation, ...] = ()

    def __iter__(self):
        yield from self.api_calls
        yield from self.withdrawals
        yield from self.wallet_designations

    def __len__(self) -> int:
        return len(self.api_calls) + len(self.withdrawals) + len(self.wallet_designations)


@dataclass(frozen=True, slots=True)
class WalletData:
    requests: GroupedRequests = field(default_factory=GroupedRequests)
    address: str | None = None


@dataclass(frozen=True, slots=True)
class ChainConfig:
    name: str
    chain_id: int


@dataclass(frozen=True, slots=True)
class TransactionOptions:
    gas_price: int | None  # wei, None lets the node price the transaction
    provider: Any


@dataclass(frozen=True)
class ProviderState:
    """Read-only snapshot handed to the orchestrator for one run."""

    config: ChainConfig
    provider: Any
    gas_price: int | None
    wallet_data_by_index: dict[str, WalletData] = field(default_factory=dict)

    def request_count(self) -> int:
        return sum(len(w.requests) for w in self.wallet_data_by_index.values())


@dataclass(frozen=True, slots=True)
class Receipt:
    id: str
    type: RequestType
    data: str | None = None
    error: BaseException | None = None

    def __post_init__(self):
        if (self.data is None) == (self.error is None):
            raise ValueError(f"Receipt {self.id} must carry exactly one of data or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "type": self.type.value}
        if self.error is not None:
            out["error"] = str(self.error)
        else:
            out["data"] = self.data
        return out
