from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest
from web3 import Web3

from txrelay.config import cfg
from txrelay.gas_prices import get_gas_price


def provider_with(gas_price_coro):
    provider = MagicMock()
    provider.eth.gas_price = gas_price_coro
    return provider


@pytest.mark.asyncio
async def test_node_gas_price():
    async def price():
        return 12_345

    assert await get_gas_price(provider_with(price())) == 12_345


@pytest.mark.asyncio
async def test_falls_back_to_configured_default_when_node_errors():
    async def price():
        raise ConnectionError("connection refused")

    expected = Web3.to_wei(cfg["gas"]["default_gas_price_gwei"], "gwei")
    assert await get_gas_price(provider_with(price())) == expected


@pytest.mark.asyncio
async def test_falls_back_on_timeout():
    async def price():
        await asyncio.sleep(1)
        return 1

    expected = Web3.to_wei(cfg["gas"]["default_gas_price_gwei"], "gwei")
    assert await get_gas_price(provider_with(price()), timeout=0.01) == expected
