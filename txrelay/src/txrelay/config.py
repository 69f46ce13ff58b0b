import os
import tomllib
from pathlib import Path

import txrelay.constants as C

pkg_root = Path(__file__).parent
config_file = Path(os.getenv("TXRELAY_CONFIG", pkg_root / "config.toml"))


def load_config(path: str | Path = config_file) -> dict:
    """Read the TOML config and apply environment overrides."""
    conf = tomllib.loads(Path(path).read_text())
    provider = conf.setdefault("provider", {})
    provider["rpc_url"] = os.getenv("RPC_URL", provider.get("rpc_url", "http://127.0.0.1:8545"))
    wallet = conf.setdefault("wallet", {})
    wallet["mnemonic"] = os.getenv("MNEMONIC", wallet.get("mnemonic", ""))
    conf.setdefault("gas", {}).setdefault("default_gas_price_gwei", C.DEFAULT_GAS_PRICE_GWEI)
    conf.setdefault("contracts", {}).setdefault("airnode", {})
    return conf


cfg = load_config()
