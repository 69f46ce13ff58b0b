"""Airnode contract addresses, ABI and signer binding."""

import json
from dataclasses import dataclass
from typing import Any

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3, Web3

from txrelay.config import cfg
from txrelay.models import ConfigError

# Only the fulfillment entry points the relayer calls
AIRNODE_ABI = json.loads('''[
    {"inputs":[{"internalType":"bytes32","name":"requestId","type":"bytes32"},
               {"internalType":"uint256","name":"statusCode","type":"uint256"},
               {"internalType":"bytes32","name":"data","type":"bytes32"},
               {"internalType":"address","name":"fulfillAddress","type":"address"},
               {"internalType":"bytes4","name":"fulfillFunctionId","type":"bytes4"}],
     "name":"fulfill","outputs":[{"internalType":"bool","name":"callSuccess","type":"bool"},
                                 {"internalType":"bytes","name":"callData","type":"bytes"}],
     "stateMutability":"nonpayable","type":"function"},
    {"inputs":[{"internalType":"bytes32","name":"requestId","type":"bytes32"},
               {"internalType":"uint256","name":"errorCode","type":"uint256"},
               {"internalType":"address","name":"errorAddress","type":"address"},
               {"internalType":"bytes4","name":"errorFunctionId","type":"bytes4"}],
     "name":"error","outputs":[{"internalType":"bool","name":"callSuccess","type":"bool"},
                               {"internalType":"bytes","name":"callData","type":"bytes"}],
     "stateMutability":"nonpayable","type":"function"},
    {"inputs":[{"internalType":"bytes32","name":"withdrawalRequestId","type":"bytes32"},
               {"internalType":"bytes32","name":"providerId","type":"bytes32"},
               {"internalType":"uint256","name":"requesterInd","type":"uint256"},
               {"internalType":"address","name":"destination","type":"address"}],
     "name":"fulfillWithdrawal","outputs":[],
     "stateMutability":"payable","type":"function"},
    {"inputs":[{"internalType":"bytes32","name":"walletDesignationRequestId","type":"bytes32"},
               {"internalType":"bytes32","name":"providerId","type":"bytes32"},
               {"internalType":"uint256","name":"requesterInd","type":"uint256"},
               {"internalType":"uint256","name":"walletInd","type":"uint256"}],
     "name":"fulfillWalletDesignation","outputs":[],
     "stateMutability":"payable","type":"function"}
]''')

ADDRESSES: dict[int, str] = {int(k): v for k, v in cfg["contracts"]["airnode"].items()}


@dataclass(frozen=True, slots=True)
class BoundContract:
    """A contract instance paired with the account that signs its transactions."""

    contract: Any
    signer: LocalAccount

    @property
    def w3(self) -> AsyncWeb3:
        return self.contract.w3

    @property
    def address(self) -> str:
        return self.contract.address


def airnode_address(chain_id: int) -> str:
    try:
        return ADDRESSES[chain_id]
    except KeyError:
        raise ConfigError(f"No Airnode address configured for chain {chain_id}") from None


def bind_contract(address: str, abi: list[dict], signer: LocalAccount, provider: AsyncWeb3) -> BoundContract:
    contract = provider.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
    return BoundContract(contract=contract, signer=signer)
