import asyncio
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, HTTPException, Request
from pydantic import BaseModel, NonNegativeInt
from web3 import AsyncHTTPProvider, AsyncWeb3

from txrelay.config import cfg
from txrelay.constants import RequestStatus, RequestType
from txrelay.gas_prices import get_gas_price
from txrelay.logging_config import setup_logging
from txrelay.models import (
    ApiCall,
    ChainConfig,
    ConfigError,
    GroupedRequests,
    ProviderState,
    WalletData,
    WalletDesignation,
    Withdrawal,
)
from txrelay.transactions import submit
from txrelay.wallet import MnemonicDeriver

setup_logging()
log = logging.getLogger("txrelay.app")

RPC = cfg["provider"]["rpc_url"]
TIMEOUT = 3.0


async def _probe_node(url: str, max_retries: int = 10, retry_delay: float = 2.0) -> int:
    """Probe the node's JSON-RPC endpoint until it answers eth_chainId.

    Args:
        url: RPC endpoint URL
        max_retries: Maximum number of attempts
        retry_delay: Seconds to wait between attempts

    Returns:
        The chain id reported by the node
    """
    payload = {"jsonrpc": "2.0", "id": 1, "method": "eth_chainId", "params": []}

    for attempt in range(1, max_retries + 1):
        try:
            async with httpx.AsyncClient(timeout=TIMEOUT) as http:
                r = await http.post(url, json=payload)
                r.raise_for_status()
                chain_id = int(r.json()["result"], 16)
                log.info(f"RPC endpoint responding with chain {chain_id} (attempt {attempt}/{max_retries})")
                return chain_id
        except Exception as e:
            if attempt < max_retries:
                log.info(f"RPC not ready yet (attempt {attempt}/{max_retries}): {e.__class__.__name__} - retrying in {retry_delay}s...")
                await asyncio.sleep(retry_delay)
            else:
                log.error(f"RPC failed after {max_retries} attempts")
                raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    chain = ChainConfig(name=cfg["provider"]["name"], chain_id=int(cfg["provider"]["chain_id"]))

    chain_id = await _probe_node(RPC)
    if chain_id != chain.chain_id:
        raise ConfigError(f"Node at {RPC} is on chain {chain_id}, configured for {chain.chain_id}")

    app.state.chain = chain
    app.state.provider = AsyncWeb3(AsyncHTTPProvider(RPC))
    app.state.derive = MnemonicDeriver(cfg["wallet"]["mnemonic"])
    log.info("Ready to submit for %s (chain %s)", chain.name, chain.chain_id)
    yield
    log.info("Shutdown complete")


app = FastAPI(
    title="txrelay",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Transactions", "description": "Submit pending requests"},
    ],
)

r_transaction = APIRouter(tags=["Transactions"])


class ApiCallReq(BaseModel):
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
    error_code: NonNegativeInt | None = None
    status: RequestStatus = RequestStatus.PENDING
    nonce: NonNegativeInt | None = None


class WithdrawalReq(BaseModel):
    id: str
    provider_id: str | None = None
    requester_index: str | None = None
    designated_wallet: str | None = None
    destination_address: str | None = None
    status: RequestStatus = RequestStatus.PENDING
    nonce: NonNegativeInt | None = None


class WalletDesignationReq(BaseModel):
    id: str
    provider_id: str | None = None
    requester_index: str | None = None
    wallet_index: str | None = None
    deposit_amount: NonNegativeInt | None = None
    status: RequestStatus = RequestStatus.PENDING
    nonce: NonNegativeInt | None = None


class GroupedRequestsReq(BaseModel):
    api_calls: list[ApiCallReq] = []
    withdrawals: list[WithdrawalReq] = []
    wallet_designations: list[WalletDesignationReq] = []


class WalletDataReq(BaseModel):
    address: str | None = None
    requests: GroupedRequestsReq = GroupedRequestsReq()


class SubmitReq(BaseModel):
    gas_price: NonNegativeInt | None = None  # wei
    wallet_data_by_index: dict[str, WalletDataReq] = {}


class ReceiptResp(BaseModel):
    id: str
    type: RequestType
    data: str | None = None
    error: str | None = None


def _wallet_data(req: WalletDataReq) -> WalletData:
    rs = req.requests
    return WalletData(
        address=req.address,
        requests=GroupedRequests(
            api_calls=tuple(ApiCall(**r.model_dump()) for r in rs.api_calls),
            withdrawals=tuple(Withdrawal(**r.model_dump()) for r in rs.withdrawals),
            wallet_designations=tuple(WalletDesignation(**r.model_dump()) for r in rs.wallet_designations),
        ),
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@r_transaction.post("/submit", response_model=list[ReceiptResp], response_model_exclude_none=True)
async def submit_pending(req: SubmitReq, request: Request):
    """Submit every pending request in the snapshot, one receipt per request."""
    st = request.app.state
    if getattr(st, "derive", None) is None:
        raise HTTPException(status_code=503, detail="Relayer not initialised")

    gas_price = req.gas_price
    if gas_price is None and any(w.requests.api_calls or w.requests.withdrawals or w.requests.wallet_designations
                                 for w in req.wallet_data_by_index.values()):
        gas_price = await get_gas_price(st.provider)

    state = ProviderState(
        config=st.chain,
        provider=st.provider,
        gas_price=gas_price,
        wallet_data_by_index={index: _wallet_data(w) for index, w in req.wallet_data_by_index.items()},
    )
    try:
        receipts = await submit(state, derive=st.derive)
    except ConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [r.to_dict() for r in receipts]


app.include_router(r_transaction)
