import logging

from txrelay.constants import RequestStatus
from txrelay.contracts import BoundContract
from txrelay.logger import pend
from txrelay.models import TransactionOptions, WalletDesignation
from txrelay.transactions.sending import LogsErrorData, send_contract_transaction


async def submit_wallet_designation(
    contract: BoundContract,
    wallet_designation: WalletDesignation,
    options: TransactionOptions,
) -> LogsErrorData:
    if wallet_designation.status != RequestStatus.PENDING:
        log = pend(
            logging.INFO,
            f"Wallet designation for Request:{wallet_designation.id} not actioned as it has status:{wallet_designation.status}",
        )
        return [log], None, None

    notice_log = pend(
        logging.INFO,
        f"Submitting wallet designation index:{wallet_designation.wallet_index} for Request:{wallet_designation.id}...",
    )
    try:
        fn_call = contract.contract.functions.fulfillWalletDesignation(
            wallet_designation.id,
            wallet_designation.provider_id,
            int(wallet_designation.requester_index),
            int(wallet_designation.wallet_index),
        )
        tx_hash = await send_contract_transaction(
            contract,
            fn_call,
            options,
            nonce=wallet_designation.nonce,
            value=wallet_designation.deposit_amount or 0,
        )
    except Exception as e:
        err_log = pend(logging.ERROR, f"Error submitting wallet designation transaction for Request:{wallet_designation.id}", e)
        return [notice_log, err_log], e, None
    return [notice_log, pend(logging.INFO, f"Tx submitted for Request:{wallet_designation.id} ({tx_hash})")], None, tx_hash
