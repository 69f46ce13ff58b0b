"""Fan-out submission of every pending request in a snapshot.

One task per request, all started together and joined once. Each wallet index
gets its own signer and contract binding; a wallet whose signer can't be
derived has its requests reported as failed receipts, other wallets are
unaffected.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from eth_account.signers.local import LocalAccount

from txrelay.constants import RequestType
from txrelay.contracts import AIRNODE_ABI, BoundContract, airnode_address, bind_contract
from txrelay.logger import PendingLog, log_pending_messages, pend
from txrelay.models import (
    DerivationError,
    MissingTransactionDataError,
    PendingRequest,
    ProviderState,
    Receipt,
    TransactionOptions,
)
from txrelay.transactions.api_calls import submit_api_call
from txrelay.transactions.sending import LogsErrorData
from txrelay.transactions.wallet_designations import submit_wallet_designation
from txrelay.transactions.withdrawals import submit_withdrawal
from txrelay.wallet import SigningWalletDeriver

log = logging.getLogger("txrelay.submission")

Submitter = Callable[[BoundContract, Any, TransactionOptions], Awaitable[LogsErrorData]]
ContractBinder = Callable[[str, list[dict], LocalAccount, Any], BoundContract]
PendingLogger = Callable[[str, list[PendingLog]], None]

SUBMITTERS: dict[RequestType, Submitter] = {
    RequestType.API_CALL: submit_api_call,
    RequestType.WITHDRAWAL: submit_withdrawal,
    RequestType.WALLET_DESIGNATION: submit_wallet_designation,
}


@dataclass(frozen=True, slots=True)
class WalletContext:
    index: str
    signer: LocalAccount
    contract: BoundContract
    options: TransactionOptions


def build_wallet_context(
    state: ProviderState,
    index: str,
    *,
    derive: SigningWalletDeriver,
    contract_address: str,
    bind: ContractBinder = bind_contract,
) -> WalletContext:
    try:
        signer = derive(state.provider, index)
    except Exception as e:
        raise DerivationError(index, e) from e
    contract = bind(contract_address, AIRNODE_ABI, signer, state.provider)
    options = TransactionOptions(gas_price=state.gas_price, provider=state.provider)
    return WalletContext(index=index, signer=signer, contract=contract, options=options)


def to_receipt(request: PendingRequest, err: BaseException | None, data: str | None) -> Receipt:
    if err is not None or not data:
        return Receipt(id=request.id, type=request.type, error=err or MissingTransactionDataError(request.id))
    return Receipt(id=request.id, type=request.type, data=data)


async def submit_request(
    ctx: WalletContext,
    request: PendingRequest,
    *,
    name: str,
    submitters: dict[RequestType, Submitter] = SUBMITTERS,
    log_pending: PendingLogger = log_pending_messages,
) -> Receipt:
    """Submit one request and map the outcome to a receipt. Never raises for the request itself."""
    try:
        submitter = submitters[request.type]
        logs, err, data = await submitter(ctx.contract, request, ctx.options)
    except Exception as e:
        # A submitter should report failures in its return value, don't let one that raises take out its siblings
        logs, err, data = [pend(logging.ERROR, f"Unexpected error submitting {request.type} Request:{request.id}", e)], e, None
    log_pending(name, logs)
    return to_receipt(request, err, data)


async def submit(
    state: ProviderState,
    *,
    derive: SigningWalletDeriver,
    bind: ContractBinder = bind_contract,
    submitters: dict[RequestType, Submitter] = SUBMITTERS,
    log_pending: PendingLogger = log_pending_messages,
    contract_address: str | None = None,
) -> list[Receipt]:
    """Submit every pending request in the snapshot and return one receipt per request."""
    if not state.request_count():
        return []

    address = contract_address or airnode_address(state.config.chain_id)
    name = state.config.name

    # Each slot is either a receipt decided up front or the (context, request) to submit
    slots: list[Receipt | tuple[WalletContext, PendingRequest]] = []
    for index, wallet_data in state.wallet_data_by_index.items():
        if not wallet_data.requests:
            continue
        try:
            ctx = build_wallet_context(state, index, derive=derive, contract_address=address, bind=bind)
        except DerivationError as e:
            log.error("[%s] %s, failing %d request(s)", name, e, len(wallet_data.requests))
            slots.extend(Receipt(id=r.id, type=r.type, error=e) for r in wallet_data.requests)
            continue
        slots.extend((ctx, request) for request in wallet_data.requests)

    async with asyncio.TaskGroup() as tg:
        entries = [
            s if isinstance(s, Receipt)
            else tg.create_task(submit_request(*s, name=name, submitters=submitters, log_pending=log_pending))
            for s in slots
        ]

    receipts = [e if isinstance(e, Receipt) else e.result() for e in entries]
    failed = sum(1 for r in receipts if not r.ok)
    log.info("[%s] Submitted %d request(s), %d failed", name, len(receipts), failed)
    return receipts
