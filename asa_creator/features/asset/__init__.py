"""Asset creation feature module for ASA Quick Creator."""

from asa_creator.features.asset.fees import BASE_FEE_ALGO, estimate_fee, format_fee
from asa_creator.features.asset.models import (
    AssetCreationError,
    AssetCreationErrorType,
    AssetDraft,
    SubmissionResult,
)
from asa_creator.features.asset.service import (
    AssetCreationService,
    build_asset_create_txn,
)
from asa_creator.features.asset.store import AssetConfigStore, StoreState
from asa_creator.features.asset.validators import (
    AssetFieldValidator,
    ValidationResult,
    validate_draft,
    validate_field,
)

__all__ = [
    "BASE_FEE_ALGO",
    "estimate_fee",
    "format_fee",
    "AssetCreationError",
    "AssetCreationErrorType",
    "AssetDraft",
    "SubmissionResult",
    "AssetCreationService",
    "build_asset_create_txn",
    "AssetConfigStore",
    "StoreState",
    "AssetFieldValidator",
    "ValidationResult",
    "validate_draft",
    "validate_field",
]
