import asyncio
import logging

from web3 import AsyncWeb3, Web3

from txrelay.config import cfg
import txrelay.constants as C

log = logging.getLogger("txrelay.gas")


async def get_gas_price(provider: AsyncWeb3, *, timeout: float = C.RPC_TIMEOUT) -> int:
    """Current gas price in wei, falling back to the configured default."""
    try:
        return await asyncio.wait_for(provider.eth.gas_price, timeout=timeout)
    except Exception as e:
        fallback = Web3.to_wei(cfg["gas"]["default_gas_price_gwei"], "gwei")
        log.warning("Unable to fetch gas price (%s: %s), using default %s wei", e.__class__.__name__, e, fallback)
        return fallback
