import asyncio
import logging
from dataclasses import replace

from txrelay.constants import RequestStatus
from txrelay.contracts import BoundContract
from txrelay.logger import pend
from txrelay.models import TransactionOptions, Withdrawal
from txrelay.transactions.sending import LogsErrorData, send_contract_transaction
import txrelay.constants as C


class InsufficientFundsError(Exception):
    def __init__(self, message: str = "insufficient funds"):
        super().__init__(message)


async def submit_withdrawal(contract: BoundContract, withdrawal: Withdrawal, options: TransactionOptions) -> LogsErrorData:
    """Fulfil a withdrawal by sending the designated wallet's balance, minus gas, to the destination."""
    if withdrawal.status != RequestStatus.PENDING:
        log = pend(logging.INFO, f"Withdrawal for Request:{withdrawal.id} not actioned as it has status:{withdrawal.status}")
        return [log], None, None

    try:
        balance = await asyncio.wait_for(
            contract.w3.eth.get_balance(withdrawal.designated_wallet), timeout=C.RPC_TIMEOUT
        )
        gas_price = options.gas_price
        if gas_price is None:
            gas_price = await asyncio.wait_for(contract.w3.eth.gas_price, timeout=C.RPC_TIMEOUT)
    except Exception as e:
        err_log = pend(logging.ERROR, f"Failed to fetch wallet balance or gas price for Request:{withdrawal.id}", e)
        return [err_log], e, None

    # The fee charged must be the one the amount was computed against
    options = replace(options, gas_price=gas_price)
    tx_cost = C.GAS_LIMIT * gas_price
    amount = balance - tx_cost
    if amount <= 0:
        e = InsufficientFundsError()
        log = pend(
            logging.ERROR,
            f"Unable to submit withdrawal for Request:{withdrawal.id}, balance {balance} does not cover gas cost {tx_cost}",
        )
        return [log], e, None

    notice_log = pend(logging.INFO, f"Submitting withdrawal wallet:{withdrawal.designated_wallet} for Request:{withdrawal.id}...")
    try:
        fn_call = contract.contract.functions.fulfillWithdrawal(
            withdrawal.id,
            withdrawal.provider_id,
            int(withdrawal.requester_index),
            withdrawal.destination_address,
        )
        tx_hash = await send_contract_transaction(contract, fn_call, options, nonce=withdrawal.nonce, value=amount)
    except Exception as e:
        err_log = pend(logging.ERROR, f"Error submitting withdrawal transaction for Request:{withdrawal.id}", e)
        return [notice_log, err_log], e, None
    return [notice_log, pend(logging.INFO, f"Tx submitted for Request:{withdrawal.id} ({tx_hash})")], None, tx_hash
