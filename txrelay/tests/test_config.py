from __future__ import annotations

import txrelay.constants as C
from txrelay.config import load_config


def test_defaults_for_missing_sections(tmp_path, monkeypatch):
    monkeypatch.delenv("RPC_URL", raising=False)
    monkeypatch.delenv("MNEMONIC", raising=False)
    path = tmp_path / "config.toml"
    path.write_text('[provider]\nname = "x"\nchain_id = 1\n')

    conf = load_config(path)

    assert conf["gas"]["default_gas_price_gwei"] == C.DEFAULT_GAS_PRICE_GWEI
    assert conf["wallet"]["mnemonic"] == ""
    assert conf["contracts"]["airnode"] == {}
    assert conf["provider"]["rpc_url"] == "http://127.0.0.1:8545"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("RPC_URL", "http://node:8545")
    monkeypatch.setenv("MNEMONIC", "some words")
    path = tmp_path / "config.toml"
    path.write_text('[provider]\nrpc_url = "http://ignored"\n[wallet]\nmnemonic = "ignored"\n')

    conf = load_config(path)

    assert conf["provider"]["rpc_url"] == "http://node:8545"
    assert conf["wallet"]["mnemonic"] == "some words"
