"""Asset creation: validate, assemble, sign, send and confirm."""

from __future__ import annotations

import base64
import logging
from typing import Any, Protocol

from algosdk import transaction

from asa_creator.config import DEFAULT_CONFIRMATION_ROUNDS
from asa_creator.features.asset.models import (
    AUTHORITY_FIELDS,
    AssetCreationError,
    AssetCreationErrorType,
    AssetDraft,
    SubmissionResult,
)
from asa_creator.features.asset.validators import validate_draft
from asa_creator.ledger import ConfirmationTimeoutError, TransactionRejectedError
from asa_creator.shared.logging import ContextAdapter
from asa_creator.shared.network import NetworkError
from asa_creator.wallet import WalletContext

logger = logging.getLogger(__name__)


class LedgerProtocol(Protocol):
    """Ledger calls needed to create an asset."""

    def get_suggested_params(self) -> transaction.SuggestedParams: ...
    def send_raw(self, signed: bytes | list[bytes]) -> str: ...
    def wait_for_confirmation(self, tx_id: str, max_rounds: int) -> dict[str, Any]: ...


def build_asset_create_txn(
    draft: AssetDraft,
    sender: str,
    params: transaction.SuggestedParams,
) -> transaction.AssetCreateTxn:
    """Assemble the creation transaction for ``draft``.

    Each blank authority field is filled with ``sender`` independently, so
    leaving a role empty keeps it with the creator rather than disabling it.
    """
    authorities = {
        role: getattr(draft, role) or sender for role in AUTHORITY_FIELDS
    }
    metadata_hash = (
        base64.b64decode(draft.metadata_hash) if draft.metadata_hash else None
    )
    return transaction.AssetCreateTxn(
        sender=sender,
        sp=params,
        total=draft.total_supply,
        decimals=draft.decimals,
        default_frozen=False,
        unit_name=draft.unit_name,
        asset_name=draft.name,
        url=draft.url or "",
        metadata_hash=metadata_hash,
        **authorities,
    )


class AssetCreationService:
    """Runs one asset creation from draft to confirmed asset id.

    Every failure is reported through the returned ``SubmissionResult``;
    ``submit`` does not raise.
    """

    def __init__(
        self,
        ledger: LedgerProtocol,
        confirmation_rounds: int = DEFAULT_CONFIRMATION_ROUNDS,
    ):
        self.ledger = ledger
        self.confirmation_rounds = confirmation_rounds

    def submit(self, draft: AssetDraft, wallet: WalletContext) -> SubmissionResult:
        try:
            asset_id, tx_id = self._create(draft, wallet)
        except AssetCreationError as e:
            if e.error_type == AssetCreationErrorType.VALIDATION_FAILED:
                logger.info("Asset creation blocked by validation: %s", e.validation_errors)
            else:
                logger.error(
                    "Asset creation failed (%s): %s", e.error_type.value, e.message
                )
            return SubmissionResult.failed(e)
        except Exception as e:
            logger.error("Unexpected error creating asset: %s", e, exc_info=True)
            return SubmissionResult.failed(
                AssetCreationError(
                    error_type=AssetCreationErrorType.UNKNOWN,
                    message=f"Error: {e}",
                    original_error=e,
                )
            )
        return SubmissionResult.created(asset_id, tx_id)

    def _create(self, draft: AssetDraft, wallet: WalletContext) -> tuple[int, str]:
        sender, signer = wallet.address, wallet.signer
        if not sender or signer is None:
            raise AssetCreationError(
                error_type=AssetCreationErrorType.NOT_CONNECTED,
                message="Please connect your wallet first.",
            )

        errors = validate_draft(draft)
        if errors:
            raise AssetCreationError(
                error_type=AssetCreationErrorType.VALIDATION_FAILED,
                message="Fix validation errors.",
                validation_errors=errors,
            )

        log = ContextAdapter(logger, {"sender": sender, "unit_name": draft.unit_name})

        try:
            params = self.ledger.get_suggested_params()
        except NetworkError as e:
            raise self._network_failure(e) from e

        txn = build_asset_create_txn(draft, sender, params)
        log.info(
            "Assembled asset create txn: name=%s total=%s decimals=%s",
            draft.name,
            draft.total_supply,
            draft.decimals,
        )

        try:
            signed = signer([txn], [0])
        except Exception as e:
            raise AssetCreationError(
                error_type=AssetCreationErrorType.SIGNING_REJECTED,
                message=f"Error: signing rejected: {e}",
                original_error=e,
            ) from e

        try:
            tx_id = self.ledger.send_raw(signed)
        except NetworkError as e:
            raise self._network_failure(e) from e

        log = log.with_context(tx_id=tx_id)
        log.info("Waiting up to %d rounds for confirmation", self.confirmation_rounds)

        try:
            confirmed = self.ledger.wait_for_confirmation(
                tx_id, self.confirmation_rounds
            )
        except ConfirmationTimeoutError as e:
            raise AssetCreationError(
                error_type=AssetCreationErrorType.CONFIRMATION_TIMEOUT,
                message=f"Error: {e}",
                original_error=e,
            ) from e
        except TransactionRejectedError as e:
            raise AssetCreationError(
                error_type=AssetCreationErrorType.TRANSACTION_REJECTED,
                message=f"Error: {e}",
                original_error=e,
            ) from e
        except NetworkError as e:
            raise self._network_failure(e) from e

        asset_id = confirmed.get("asset-index")
        if asset_id is None:
            raise AssetCreationError(
                error_type=AssetCreationErrorType.UNKNOWN,
                message=f"Error: transaction {tx_id} confirmed without an asset index",
            )

        log.info("ASA created: %s (%s) id=%s", draft.name, draft.unit_name, asset_id)
        return int(asset_id), tx_id

    @staticmethod
    def _network_failure(error: NetworkError) -> AssetCreationError:
        return AssetCreationError(
            error_type=AssetCreationErrorType.NETWORK_ERROR,
            message=f"Error: {error.message}",
            original_error=error,
        )
