"""Wallet provider capability and a mnemonic-backed local implementation."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from algosdk import account, encoding, mnemonic, transaction

logger = logging.getLogger(__name__)

TransactionSigner = Callable[[list[transaction.Transaction], list[int]], list[bytes]]


class SigningError(Exception):
    """The wallet declined or failed to sign."""


class WalletProvider(Protocol):
    """Capability supplied by whatever wallet the user connected."""

    def active_account(self) -> str | None: ...

    def sign_transactions(
        self, transactions: list[transaction.Transaction], indexes: list[int]
    ) -> list[bytes]: ...

    def disconnect(self) -> None: ...


@dataclass(frozen=True)
class WalletContext:
    """Snapshot of the connected wallet handed to the submission service."""

    address: str | None = None
    signer: TransactionSigner | None = None

    @property
    def is_connected(self) -> bool:
        return bool(self.address) and self.signer is not None

    @classmethod
    def from_provider(cls, provider: WalletProvider | None) -> "WalletContext":
        if provider is None:
            return cls()
        return cls(
            address=provider.active_account(),
            signer=getattr(provider, "sign_transactions", None),
        )


class MnemonicWallet:
    """Holds one account's key in memory for the lifetime of the session."""

    def __init__(self):
        self._private_key: str | None = None
        self._address: str | None = None

    @property
    def is_connected(self) -> bool:
        return self._private_key is not None

    def connect(self, passphrase: str) -> str:
        words = " ".join(passphrase.split())
        if not words:
            raise ValueError("Mnemonic is required")
        try:
            private_key = mnemonic.to_private_key(words)
        except Exception as e:
            raise ValueError(f"Invalid mnemonic: {e}") from e

        self._private_key = private_key
        self._address = account.address_from_private_key(private_key)
        logger.info("Wallet connected: %s", self._address)
        return self._address

    def active_account(self) -> str | None:
        return self._address

    def sign_transactions(
        self, transactions: list[transaction.Transaction], indexes: list[int]
    ) -> list[bytes]:
        if self._private_key is None or self._address is None:
            raise SigningError("Wallet is not connected")

        signed: list[bytes] = []
        for index in indexes:
            if index < 0 or index >= len(transactions):
                raise SigningError(f"No transaction at index {index}")
            txn = transactions[index]
            if txn.sender != self._address:
                raise SigningError(
                    f"Refusing to sign transaction {index}: sender is not the active account"
                )
            stxn = txn.sign(self._private_key)
            signed.append(base64.b64decode(encoding.msgpack_encode(stxn)))

        logger.info("Signed %d transaction(s)", len(signed))
        return signed

    def disconnect(self) -> None:
        if self._address:
            logger.info("Wallet disconnected: %s", self._address)
        self._private_key = None
        self._address = None
