"""ASA Quick Creator - a terminal-first tool for minting Algorand Standard Assets.

This package is organized into feature-based modules:
- features.asset: Draft validation, fee hint, submission and the creation form
- ledger: algod client for params, submission and confirmation
- wallet: Wallet provider capability and the local mnemonic wallet
- shared: Shared utilities (network, logging)
"""

from asa_creator.config import AppConfig
from asa_creator.ledger import LedgerClient
from asa_creator.shared import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from asa_creator.wallet import MnemonicWallet, WalletContext, WalletProvider

__version__ = "0.1.0"
__all__ = [
    "AppConfig",
    "LedgerClient",
    "MnemonicWallet",
    "WalletContext",
    "WalletProvider",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
]
