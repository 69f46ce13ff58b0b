from __future__ import annotations

import pytest

from conftest import TEST_MNEMONIC
from txrelay.models import ConfigError
from txrelay.wallet import MnemonicDeriver, derivation_path, derive_signing_wallet


def test_derivation_path():
    assert derivation_path("0") == "m/44'/60'/0'/0/0"
    assert derivation_path("12") == "m/44'/60'/0'/0/12"


@pytest.mark.parametrize("index", ["", "-1", "1.5", "abc", " 1"])
def test_invalid_index(index):
    with pytest.raises(ValueError):
        derivation_path(index)


def test_known_addresses():
    assert derive_signing_wallet(TEST_MNEMONIC, "0").address == "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
    assert derive_signing_wallet(TEST_MNEMONIC, "1").address == "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


def test_deriver_is_deterministic_and_cached():
    derive = MnemonicDeriver(TEST_MNEMONIC)
    first = derive(None, "4")
    assert derive(None, "4") is first
    assert MnemonicDeriver(TEST_MNEMONIC)(None, "4").address == first.address


def test_deriver_requires_mnemonic():
    with pytest.raises(ConfigError):
        MnemonicDeriver("")
