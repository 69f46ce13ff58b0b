"""
Pytest configuration and shared doubles for txrelay tests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest

from txrelay.constants import RequestType
from txrelay.models import ChainConfig, GroupedRequests, ProviderState, WalletData

# Well known development mnemonic, index 0 and 1 addresses are published test vectors
TEST_MNEMONIC = "test test test test test test test test test test test junk"
AIRNODE_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


@dataclass
class FakeContract:
    address: str
    signer: object


def fake_derive(provider, index: str):
    return SimpleNamespace(address=f"0xsigner{index}")


def fake_bind(address, abi, signer, provider):
    return FakeContract(address=address, signer=signer)


@dataclass
class RecordingLogger:
    batches: list = field(default_factory=list)

    def __call__(self, name, logs):
        self.batches.append((name, list(logs)))


def scripted_submitters(outcomes: dict[str, tuple]):
    """Submitters that answer from a request id -> (logs, err, data) table and record their inputs."""
    calls = []

    async def _submit(contract, request, options):
        calls.append((contract, request, options))
        return outcomes[request.id]

    table = {kind: _submit for kind in RequestType}
    return table, calls


def make_state(wallets: dict[str, GroupedRequests], *, name: str = "test-provider", gas_price: int | None = 1000, chain_id: int = 31337) -> ProviderState:
    return ProviderState(
        config=ChainConfig(name=name, chain_id=chain_id),
        provider=SimpleNamespace(name="provider"),
        gas_price=gas_price,
        wallet_data_by_index={index: WalletData(requests=reqs) for index, reqs in wallets.items()},
    )


@pytest.fixture
def recording_logger():
    return RecordingLogger()
