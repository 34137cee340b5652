"""Data types shared by the asset creation feature."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum

DEFAULT_TOTAL_SUPPLY = 1_000_000

AUTHORITY_FIELDS = ("manager", "reserve", "freeze", "clawback")
INTEGER_FIELDS = ("total_supply", "decimals")

FIELD_ALIASES = {
    "unitName": "unit_name",
    "totalSupply": "total_supply",
    "metadataHash": "metadata_hash",
}


@dataclass
class AssetDraft:
    name: str = ""
    unit_name: str = ""
    total_supply: int = DEFAULT_TOTAL_SUPPLY
    decimals: int = 0
    url: str = ""
    metadata_hash: str = ""
    manager: str = ""
    reserve: str = ""
    freeze: str = ""
    clawback: str = ""

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @staticmethod
    def canonical_field(name: str) -> str:
        canonical = FIELD_ALIASES.get(name, name)
        if canonical not in AssetDraft.field_names():
            raise ValueError(f"Unknown asset field: {name}")
        return canonical

    def copy(self) -> "AssetDraft":
        return replace(self)


class AssetCreationErrorType(Enum):
    NOT_CONNECTED = "not_connected"
    VALIDATION_FAILED = "validation_failed"
    NETWORK_ERROR = "network_error"
    SIGNING_REJECTED = "signing_rejected"
    TRANSACTION_REJECTED = "transaction_rejected"
    CONFIRMATION_TIMEOUT = "confirmation_timeout"
    UNKNOWN = "unknown"


@dataclass
class AssetCreationError(Exception):
    error_type: AssetCreationErrorType
    message: str
    validation_errors: dict[str, str] = field(default_factory=dict)
    original_error: Exception | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class SubmissionResult:
    asset_id: int | None = None
    tx_id: str | None = None
    error_type: AssetCreationErrorType | None = None
    message: str = ""
    validation_errors: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.error_type is None and self.asset_id is not None

    @classmethod
    def created(cls, asset_id: int, tx_id: str) -> "SubmissionResult":
        return cls(
            asset_id=asset_id,
            tx_id=tx_id,
            message=f"ASA created! Asset ID: {asset_id}",
        )

    @classmethod
    def failed(cls, error: AssetCreationError) -> "SubmissionResult":
        return cls(
            error_type=error.error_type,
            message=error.message,
            validation_errors=dict(error.validation_errors),
        )
