from txrelay.transactions.submission import SUBMITTERS, WalletContext, build_wallet_context, submit

__all__ = ["SUBMITTERS", "WalletContext", "build_wallet_context", "submit"]
