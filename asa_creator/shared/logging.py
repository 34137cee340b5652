"""Logging setup for ASA Quick Creator.

Provides:
- ``LoggingConfig`` read from ``ASA_CREATOR_LOG_*`` environment variables
- redaction of wallet secrets (25-word mnemonics, base64 private keys)
- text or JSON log lines written to a file in the config directory
- ``ContextAdapter`` for attaching fields such as sender or tx id
- friendly explanations for common algod failures
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

LOG_FORMATS = ("human", "json")
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class LoggingConfig:
    level: int = logging.INFO
    to_file: bool = True
    to_stdout: bool = False
    log_format: str = "human"
    log_dir: Path | None = None
    log_filename: str = "asa-creator.log"
    redact: bool = True

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        level_name = os.getenv("ASA_CREATOR_LOG_LEVEL", "INFO").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO

        log_format = os.getenv("ASA_CREATOR_LOG_FORMAT", "human").strip().lower()
        if log_format not in LOG_FORMATS:
            log_format = "human"

        return cls(
            level=level,
            to_stdout=os.getenv("ASA_CREATOR_LOG_STDOUT", "").lower() in _TRUE_VALUES,
            log_format=log_format,
        )


# Algorand mnemonic words are 3 to 8 lowercase letters.
MNEMONIC_PATTERN = re.compile(r"\b(?:[a-z]{3,8}\s+){24}[a-z]{3,8}\b")
ADDRESS_PATTERN = re.compile(r"\b[A-Z2-7]{58}\b")

_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"(mnemonic['\"]?\s*[:=]\s*['\"]?)[a-z ]{20,}", re.IGNORECASE),
        r"\1[REDACTED]",
    ),
    (
        re.compile(
            r"(private[_-]?key['\"]?\s*[:=]\s*['\"]?)[A-Za-z0-9+/=]{20,}",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
    (MNEMONIC_PATTERN, "[MNEMONIC_REDACTED]"),
    # base64 of a 64-byte ed25519 secret key
    (
        re.compile(r"(?<![A-Za-z0-9+/])[A-Za-z0-9+/]{86}==(?![A-Za-z0-9+/=])"),
        "[KEY_REDACTED]",
    ),
)

_SECRET_KEYS = ("private_key", "privatekey", "mnemonic", "secret", "passphrase")


def sanitize_message(message: str, preserve_addresses: bool = True) -> str:
    if not message:
        return message
    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)
    if not preserve_addresses:
        message = ADDRESS_PATTERN.sub("[ADDRESS_REDACTED]", message)
    return message


def _sanitize_value(value: Any, preserve_addresses: bool) -> Any:
    if isinstance(value, str):
        return sanitize_message(value, preserve_addresses)
    if isinstance(value, dict):
        return sanitize_dict(value, preserve_addresses)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item, preserve_addresses) for item in value]
    return value


def sanitize_dict(data: dict[str, Any], preserve_addresses: bool = True) -> dict[str, Any]:
    """Redact values under secret-looking keys and scrub every nested string."""
    return {
        key: "[REDACTED]"
        if any(secret in key.lower() for secret in _SECRET_KEYS)
        else _sanitize_value(value, preserve_addresses)
        for key, value in data.items()
    }


# (pattern, explanation, suggestion); first match wins.
_FRIENDLY_ERRORS: tuple[tuple[re.Pattern[str], str, str | None], ...] = tuple(
    (re.compile(pattern), explanation, suggestion)
    for pattern, explanation, suggestion in (
        (
            r"timeout|timed out|not confirmed after",
            "The network did not confirm the transaction in time.",
            "Check the explorer before trying again.",
        ),
        (
            r"connection refused|cannot connect|connection error",
            "Unable to connect to the Algorand node.",
            "Check your internet connection and node URL.",
        ),
        (
            r"overspend|insufficient|below min",
            "Insufficient ALGO balance for this transaction.",
            "Fund the account (TestNet dispenser) and try again.",
        ),
        (
            r"wallet.*not connected|connect your wallet",
            "No wallet is connected.",
            "Connect a wallet first.",
        ),
        (
            r"invalid.*address|address.*invalid",
            "An address provided is not valid.",
            "Please check the authority address fields.",
        ),
        (
            r"sign.*(reject|declin|fail)|(reject|declin).*sign",
            "The wallet did not sign the transaction.",
            "Approve the request in your wallet to continue.",
        ),
        (
            r"unauthorized|forbidden|\b40[13]\b",
            "Access denied by the node.",
            "Check the node API token.",
        ),
        (
            r"rate limit|too many requests|\b429\b",
            "Too many requests. Please slow down.",
            "Wait a moment and try again.",
        ),
        (
            r"txn dead|round outside|expired",
            "Transaction validity window has passed.",
            "Submit again to use fresh network parameters.",
        ),
        (
            r"network.*error",
            "A network error occurred.",
            "Check your internet connection.",
        ),
    )
)


def get_user_friendly_error(error: Exception | str) -> tuple[str, str | None]:
    text = str(error).lower()
    for pattern, explanation, suggestion in _FRIENDLY_ERRORS:
        if pattern.search(text):
            return explanation, suggestion
    return "An unexpected error occurred.", None


def format_error_for_user(error: Exception | str) -> str:
    explanation, suggestion = get_user_friendly_error(error)
    return f"{explanation} {suggestion}" if suggestion else explanation


class _RedactingFormatter(logging.Formatter):
    def __init__(self, redact: bool = True, preserve_addresses: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.redact = redact
        self.preserve_addresses = preserve_addresses

    def _clean(self, text: str) -> str:
        return sanitize_message(text, self.preserve_addresses) if self.redact else text


class HumanReadableFormatter(_RedactingFormatter):
    def __init__(self, redact: bool = True, preserve_addresses: bool = True):
        super().__init__(
            redact,
            preserve_addresses,
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return self._clean(line)


class StructuredFormatter(_RedactingFormatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._clean(record.getMessage()),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            entry["context"] = (
                sanitize_dict(context, self.preserve_addresses) if self.redact else context
            )

        if record.exc_info:
            entry["exception"] = self._clean(self.formatException(record.exc_info))

        return json.dumps(entry, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Attaches a dict of fields to each record as ``record.context``."""

    def __init__(self, logger: logging.Logger, context: dict[str, Any] | None = None):
        super().__init__(logger, dict(context or {}))

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **fields: Any) -> "ContextAdapter":
        return ContextAdapter(self.logger, {**self.extra, **fields})


def default_log_dir() -> Path:
    env_dir = os.getenv("ASA_CREATOR_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".config" / "asa-creator"


def _build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    formatter: logging.Formatter
    if config.log_format == "json":
        formatter = StructuredFormatter(redact=config.redact)
    else:
        formatter = HumanReadableFormatter(redact=config.redact)

    handlers: list[logging.Handler] = []
    if config.to_file:
        log_dir = config.log_dir or default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(log_dir / config.log_filename, encoding="utf-8")
        )
    # The TUI owns the terminal, so stdout logging is opt-in.
    if config.to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


_configured = False


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Install handlers on the root logger. Later calls are no-ops."""
    global _configured
    if _configured:
        return

    config = config or LoggingConfig.from_environment()
    root = logging.getLogger()
    root.setLevel(config.level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in _build_handlers(config):
        root.addHandler(handler)

    _configured = True


__all__ = [
    "LoggingConfig",
    "ContextAdapter",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "sanitize_message",
    "sanitize_dict",
    "get_user_friendly_error",
    "format_error_for_user",
    "default_log_dir",
    "setup_logging",
]
