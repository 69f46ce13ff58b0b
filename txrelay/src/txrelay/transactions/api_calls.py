import logging

from txrelay.constants import RequestStatus
from txrelay.contracts import BoundContract
from txrelay.logger import pend
from txrelay.models import ApiCall, TransactionOptions
from txrelay.transactions.sending import LogsErrorData, send_contract_transaction

FULFILLED_STATUS_CODE = 0


async def submit_fulfill(contract: BoundContract, api_call: ApiCall, options: TransactionOptions) -> LogsErrorData:
    notice_log = pend(logging.INFO, f"Submitting API call fulfillment for Request:{api_call.id}...")
    try:
        fn_call = contract.contract.functions.fulfill(
            api_call.id,
            FULFILLED_STATUS_CODE,
            api_call.response_value,
            api_call.fulfill_address,
            api_call.fulfill_function_id,
        )
        tx_hash = await send_contract_transaction(contract, fn_call, options, nonce=api_call.nonce)
    except Exception as e:
        err_log = pend(logging.ERROR, f"Error submitting API call fulfillment transaction for Request:{api_call.id}", e)
        return [notice_log, err_log], e, None
    return [notice_log, pend(logging.INFO, f"Tx submitted for Request:{api_call.id} ({tx_hash})")], None, tx_hash


async def submit_error(contract: BoundContract, api_call: ApiCall, options: TransactionOptions) -> LogsErrorData:
    notice_log = pend(
        logging.INFO,
        f"Submitting API call error for Request:{api_call.id} with ErrorCode:{api_call.error_code}...",
    )
    try:
        fn_call = contract.contract.functions.error(
            api_call.id,
            api_call.error_code,
            api_call.error_address,
            api_call.error_function_id,
        )
        tx_hash = await send_contract_transaction(contract, fn_call, options, nonce=api_call.nonce)
    except Exception as e:
        err_log = pend(logging.ERROR, f"Error submitting API call error transaction for Request:{api_call.id}", e)
        return [notice_log, err_log], e, None
    return [notice_log, pend(logging.INFO, f"Tx submitted for Request:{api_call.id} ({tx_hash})")], None, tx_hash


async def submit_api_call(contract: BoundContract, api_call: ApiCall, options: TransactionOptions) -> LogsErrorData:
    if api_call.status != RequestStatus.PENDING:
        log = pend(logging.INFO, f"API call for Request:{api_call.id} not actioned as it has status:{api_call.status}")
        return [log], None, None

    if api_call.error_code is not None:
        return await submit_error(contract, api_call, options)

    if api_call.response_value is None:
        e = ValueError(f"API call for Request:{api_call.id} has no response value and no error code")
        return [pend(logging.ERROR, str(e))], e, None

    return await submit_fulfill(contract, api_call, options)
