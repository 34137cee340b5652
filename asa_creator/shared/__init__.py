"""Shared utilities for ASA Quick Creator."""

from asa_creator.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    format_error_for_user,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from asa_creator.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)

__all__ = [
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "ContextAdapter",
    "LoggingConfig",
    "format_error_for_user",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
