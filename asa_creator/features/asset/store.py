"""Draft state for the asset creation form."""

from __future__ import annotations

import logging
import re
import threading
from enum import Enum
from typing import Any, Protocol

from asa_creator.features.asset.fees import estimate_fee, format_fee
from asa_creator.features.asset.models import (
    INTEGER_FIELDS,
    AssetCreationErrorType,
    AssetDraft,
    SubmissionResult,
)
from asa_creator.wallet import WalletContext

logger = logging.getLogger(__name__)

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


class StoreState(Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"


class SubmissionServiceProtocol(Protocol):
    def submit(self, draft: AssetDraft, wallet: WalletContext) -> SubmissionResult: ...


def coerce_integer(value: Any) -> int:
    """Read the leading integer of text input ("12abc" is 12, "1e6" is 1); otherwise 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if value is None:
        return 0
    match = _LEADING_INTEGER.match(str(value))
    return int(match.group(1)) if match else 0


class AssetConfigStore:
    """Owns the draft, its field errors and the Editing/Submitting gate.

    Editing a field clears that field's error immediately, before anything
    re-validates it; errors are only recomputed on the next submit. Only one
    submission can be in flight; further submit requests are ignored until it
    completes.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._state = StoreState.EDITING
        self._draft = AssetDraft()
        self._errors: dict[str, str] = {}
        self._fee_estimate = estimate_fee(self._draft.total_supply)
        self.last_result: SubmissionResult | None = None

    @property
    def draft(self) -> AssetDraft:
        return self._draft.copy()

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def is_submitting(self) -> bool:
        return self._state == StoreState.SUBMITTING

    @property
    def fee_estimate(self) -> float:
        return self._fee_estimate

    @property
    def fee_estimate_display(self) -> str:
        return format_fee(self._fee_estimate)

    def edit(self, field_name: str, value: Any) -> bool:
        """Update one field; returns False (and changes nothing) while submitting."""
        field_name = AssetDraft.canonical_field(field_name)
        with self._lock:
            if self._state != StoreState.EDITING:
                logger.debug("Ignoring edit of %s while submitting", field_name)
                return False

            if field_name in INTEGER_FIELDS:
                value = coerce_integer(value)
            elif value is None:
                value = ""
            else:
                value = str(value)

            setattr(self._draft, field_name, value)
            self._errors.pop(field_name, None)

            if field_name == "total_supply":
                self._fee_estimate = estimate_fee(self._draft.total_supply)
        return True

    def begin_submit(self) -> AssetDraft | None:
        """Enter Submitting and return the frozen draft, or None if already submitting."""
        with self._lock:
            if self._state == StoreState.SUBMITTING:
                logger.info("Submission already in progress; ignoring request")
                return None
            self._state = StoreState.SUBMITTING
            return self._draft.copy()

    def complete_submit(self, result: SubmissionResult) -> None:
        if result.success:
            self.on_submit_success(result)
        else:
            self.on_submit_failure(result)

    def submit(
        self, service: SubmissionServiceProtocol, wallet: WalletContext
    ) -> SubmissionResult | None:
        draft = self.begin_submit()
        if draft is None:
            return None
        try:
            result = service.submit(draft, wallet)
        except Exception as e:
            logger.error("Submission service raised: %s", e, exc_info=True)
            result = SubmissionResult(
                error_type=AssetCreationErrorType.UNKNOWN, message=f"Error: {e}"
            )
        self.complete_submit(result)
        return result

    def on_submit_success(self, result: SubmissionResult) -> None:
        with self._lock:
            self._draft = AssetDraft()
            self._errors = {}
            self._fee_estimate = estimate_fee(self._draft.total_supply)
            self.last_result = result
            self._state = StoreState.EDITING
        logger.info("Draft reset after asset %s was created", result.asset_id)

    def on_submit_failure(self, result: SubmissionResult) -> None:
        with self._lock:
            if result.error_type == AssetCreationErrorType.VALIDATION_FAILED:
                self._errors = dict(result.validation_errors)
            elif result.error_type != AssetCreationErrorType.NOT_CONNECTED:
                # Validation ran and passed before the failure happened.
                self._errors = {}
            self.last_result = result
            self._state = StoreState.EDITING
        logger.info("Submission failed: %s", result.message)

    def close(self) -> bool:
        """Discard the draft and errors; refused while a submission is in flight."""
        with self._lock:
            if self._state == StoreState.SUBMITTING:
                return False
            self._draft = AssetDraft()
            self._errors = {}
            self._fee_estimate = estimate_fee(self._draft.total_supply)
            self.last_result = None
        return True
