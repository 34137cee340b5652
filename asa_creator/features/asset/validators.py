"""Asset field validation utilities."""

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from algosdk import encoding

from asa_creator.features.asset.models import AUTHORITY_FIELDS, AssetDraft


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


MAX_ASSET_NAME_LENGTH = 32
MAX_UNIT_NAME_LENGTH = 8
MIN_TOTAL_SUPPLY = 1
MAX_TOTAL_SUPPLY = 2**64 - 1
MIN_DECIMALS = 0
MAX_DECIMALS = 19


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _length_error(value: str, limit: int) -> str | None:
    """Both the character count and the UTF-8 byte count must be within ``limit``."""
    if len(value) > limit:
        return f"Max {limit} characters"
    if len(value.encode("utf-8")) > limit:
        return f"Max {limit} bytes (UTF-8)"
    return None


class AssetFieldValidator:
    @staticmethod
    def validate_name(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False, error_message="Asset name is required"
            )
        length_error = _length_error(value, MAX_ASSET_NAME_LENGTH)
        if length_error:
            return ValidationResult(is_valid=False, error_message=length_error)
        return ValidationResult(is_valid=True, normalized_value=value)

    @staticmethod
    def validate_unit_name(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(is_valid=False, error_message="Unit name required")
        length_error = _length_error(value, MAX_UNIT_NAME_LENGTH)
        if length_error:
            return ValidationResult(is_valid=False, error_message=length_error)
        return ValidationResult(is_valid=True, normalized_value=value)

    @staticmethod
    def validate_total_supply(value: Any) -> ValidationResult:
        if not _is_integer(value):
            return ValidationResult(
                is_valid=False, error_message="Must be a whole number"
            )
        if value < MIN_TOTAL_SUPPLY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Must be at least {MIN_TOTAL_SUPPLY}",
            )
        if value > MAX_TOTAL_SUPPLY:
            return ValidationResult(is_valid=False, error_message="Max 2^64-1")
        return ValidationResult(is_valid=True, normalized_value=value)

    @staticmethod
    def validate_decimals(value: Any) -> ValidationResult:
        if not _is_integer(value) or not MIN_DECIMALS <= value <= MAX_DECIMALS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Between {MIN_DECIMALS} and {MAX_DECIMALS} only",
            )
        return ValidationResult(is_valid=True, normalized_value=value)

    @staticmethod
    def validate_base64(value: str) -> ValidationResult:
        """Empty is valid; otherwise decoding then re-encoding must give ``value`` back."""
        if not value:
            return ValidationResult(is_valid=True, normalized_value=None)
        try:
            raw = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            return ValidationResult(
                is_valid=False, error_message="Invalid Base64 hash"
            )
        if base64.b64encode(raw).decode("ascii") != value:
            return ValidationResult(
                is_valid=False, error_message="Invalid Base64 hash"
            )
        return ValidationResult(is_valid=True, normalized_value=raw)

    @staticmethod
    def validate_address(value: str, role: str = "") -> ValidationResult:
        """Empty is valid (the creator keeps the role)."""
        if not value:
            return ValidationResult(is_valid=True, normalized_value=None)
        if not encoding.is_valid_address(value):
            label = f"{role} " if role else ""
            return ValidationResult(
                is_valid=False, error_message=f"Invalid {label}address"
            )
        return ValidationResult(is_valid=True, normalized_value=value)


def validate_field(field_name: str, value: Any) -> ValidationResult:
    if field_name == "name":
        return AssetFieldValidator.validate_name(value)
    if field_name == "unit_name":
        return AssetFieldValidator.validate_unit_name(value)
    if field_name == "total_supply":
        return AssetFieldValidator.validate_total_supply(value)
    if field_name == "decimals":
        return AssetFieldValidator.validate_decimals(value)
    if field_name == "metadata_hash":
        return AssetFieldValidator.validate_base64(value)
    if field_name in AUTHORITY_FIELDS:
        return AssetFieldValidator.validate_address(value, role=field_name)
    return ValidationResult(is_valid=True, normalized_value=value)


def validate_draft(draft: AssetDraft) -> dict[str, str]:
    """Run every field validator and collect all failures, keyed by field."""
    errors: dict[str, str] = {}
    for field_name in AssetDraft.field_names():
        result = validate_field(field_name, getattr(draft, field_name))
        if not result.is_valid:
            errors[field_name] = result.error_message or "Invalid value"
    return errors
