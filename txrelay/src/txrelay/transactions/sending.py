import asyncio
from typing import Any

from web3 import Web3

from txrelay.contracts import BoundContract
from txrelay.logger import PendingLog
from txrelay.models import TransactionOptions
import txrelay.constants as C

# (logs, error, tx hash) as returned by every kind-specific submitter
LogsErrorData = tuple[list[PendingLog], BaseException | None, str | None]


async def send_contract_transaction(
    contract: BoundContract,
    fn_call: Any,
    options: TransactionOptions,
    *,
    nonce: int | None = None,
    value: int = 0,
    timeout: float = C.SUBMIT_TIMEOUT,
) -> str:
    """Build, sign locally and broadcast a contract call. Returns the tx hash as hex."""
    params: dict[str, Any] = {
        "from": contract.signer.address,
        "gas": C.GAS_LIMIT,
        "value": value,
    }
    if options.gas_price is not None:
        params["gasPrice"] = options.gas_price
    if nonce is not None:
        params["nonce"] = nonce

    tx = await fn_call.build_transaction(params)
    signed = contract.signer.sign_transaction(tx)
    tx_hash = await asyncio.wait_for(
        contract.w3.eth.send_raw_transaction(signed.raw_transaction), timeout=timeout
    )
    return Web3.to_hex(tx_hash)
