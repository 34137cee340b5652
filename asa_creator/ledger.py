from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar
from urllib.error import URLError

from algosdk import error as algo_error
from algosdk import transaction
from algosdk.v2client import algod

from asa_creator.shared.network import NetworkError, NetworkErrorType

if TYPE_CHECKING:
    from asa_creator.config import AppConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

_REJECTED_PREFIX = "Transaction rejected: "


class ConfirmationTimeoutError(Exception):
    """The transaction was not confirmed within the requested number of rounds."""

    def __init__(self, tx_id: str, rounds: int):
        super().__init__(f"Transaction {tx_id} not confirmed after {rounds} rounds")
        self.tx_id = tx_id
        self.rounds = rounds


class TransactionRejectedError(Exception):
    """The node dropped the transaction from its pool."""

    def __init__(self, tx_id: str, pool_error: str):
        super().__init__(f"Transaction {tx_id} rejected: {pool_error}")
        self.tx_id = tx_id
        self.pool_error = pool_error


def _is_timeout(error: BaseException) -> bool:
    reason = getattr(error, "reason", None)
    return isinstance(error, TimeoutError) or isinstance(reason, TimeoutError)


def describe_algod_failure(error: Exception, node_url: str, context: str) -> NetworkError:
    """Map an algosdk or urllib failure onto ``NetworkError``."""
    prefix = f"{context}: " if context else ""

    if isinstance(error, algo_error.AlgodHTTPError):
        return NetworkError(
            error_type=NetworkErrorType.HTTP_ERROR,
            message=f"{prefix}HTTP error {error.code}: {error}",
            original_error=error,
            status_code=error.code,
            response_text=str(error),
        )
    if _is_timeout(error):
        return NetworkError(
            error_type=NetworkErrorType.TIMEOUT,
            message=f"{prefix}Connection timeout. Node may be unavailable: {node_url}",
            original_error=error,
        )
    if isinstance(error, (URLError, ConnectionError)):
        return NetworkError(
            error_type=NetworkErrorType.CONNECTION_ERROR,
            message=f"{prefix}Cannot connect to node: {node_url}. Check your network connection.",
            original_error=error,
        )
    return NetworkError(
        error_type=NetworkErrorType.UNKNOWN,
        message=f"{prefix}Network error: {error}",
        original_error=error,
    )


class LedgerClient:
    """The algod calls needed to create an asset, over ``algosdk``'s ``AlgodClient``."""

    def __init__(
        self,
        node_url: str,
        api_token: str = "",
        algod_client: algod.AlgodClient | None = None,
    ):
        self.node_url = node_url
        self.algod = algod_client or algod.AlgodClient(api_token, node_url)

    @classmethod
    def from_config(cls, config: "AppConfig") -> "LedgerClient":
        return cls(node_url=config.node_url, api_token=config.node_token)

    def _call(self, context: str, fn: Callable[..., T], *args: Any) -> T:
        try:
            return fn(*args)
        except (algo_error.AlgodHTTPError, algo_error.AlgodResponseError, OSError) as e:
            raise describe_algod_failure(e, self.node_url, context) from e

    def get_suggested_params(self) -> transaction.SuggestedParams:
        params = self._call("Fetch transaction params", self.algod.suggested_params)
        logger.info(
            "Fetched suggested params: round=%s min_fee=%s genesis=%s",
            params.first,
            params.min_fee,
            params.gen,
        )
        return params

    def send_raw(self, signed: bytes | list[bytes]) -> str:
        """Submit signed transaction bytes; returns the transaction id."""
        payload = b"".join(signed) if isinstance(signed, list) else signed
        tx_id = self._call(
            "Send transaction",
            self.algod.send_raw_transaction,
            base64.b64encode(payload).decode("ascii"),
        )
        logger.info("Transaction submitted: %s", tx_id)
        return tx_id

    def wait_for_confirmation(self, tx_id: str, max_rounds: int) -> dict[str, Any]:
        """Block until ``tx_id`` is confirmed, at most ``max_rounds`` rounds.

        Returns the pending-transaction record, which carries ``asset-index``
        for asset creation.
        """
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")

        try:
            info = self._call(
                "Wait for confirmation",
                transaction.wait_for_confirmation,
                self.algod,
                tx_id,
                max_rounds,
            )
        except algo_error.ConfirmationTimeoutError as e:
            raise ConfirmationTimeoutError(tx_id, max_rounds) from e
        except algo_error.TransactionRejectedError as e:
            pool_error = str(e).removeprefix(_REJECTED_PREFIX)
            logger.warning("Transaction %s rejected: %s", tx_id, pool_error)
            raise TransactionRejectedError(tx_id, pool_error) from e

        logger.info("Transaction %s confirmed in round %s", tx_id, info.get("confirmed-round"))
        return info
