"""Application configuration: config.json in the config dir, then environment."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from asa_creator.shared.network import RetryConfig, TimeoutConfig

logger = logging.getLogger(__name__)

DEFAULT_NODE_URLS = {
    "testnet": "https://testnet-api.algonode.cloud",
    "mainnet": "https://mainnet-api.algonode.cloud",
}

EXPLORER_URLS = {
    "testnet": "https://testnet.explorer.perawallet.app",
    "mainnet": "https://explorer.perawallet.app",
}

DEFAULT_CONFIRMATION_ROUNDS = 4


def resolve_config_dir(config_dir: str | Path | None = None) -> Path:
    if config_dir:
        return Path(config_dir).expanduser()

    env_dir = os.getenv("ASA_CREATOR_DIR")
    if env_dir:
        return Path(env_dir).expanduser()

    return Path.home() / ".config" / "asa-creator"


@dataclass
class AppConfig:
    network: str = "testnet"
    node_url: str = DEFAULT_NODE_URLS["testnet"]
    node_token: str = ""
    confirmation_rounds: int = DEFAULT_CONFIRMATION_ROUNDS
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry_config: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self):
        if self.network not in DEFAULT_NODE_URLS:
            raise ValueError(
                f"Unknown network '{self.network}'. Expected one of: "
                + ", ".join(sorted(DEFAULT_NODE_URLS))
            )

    @property
    def explorer_url(self) -> str:
        return EXPLORER_URLS[self.network]

    def asset_explorer_url(self, asset_id: int) -> str:
        return f"{self.explorer_url}/asset/{asset_id}"

    def transaction_explorer_url(self, tx_id: str) -> str:
        return f"{self.explorer_url}/tx/{tx_id}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "network": self.network,
            "node_url": self.node_url,
            "node_token": self.node_token,
            "confirmation_rounds": self.confirmation_rounds,
            "timeout": {
                "connect_timeout": self.timeout_config.connect_timeout,
                "read_timeout": self.timeout_config.read_timeout,
            },
            "retry": {
                "max_retries": self.retry_config.max_retries,
                "base_delay": self.retry_config.base_delay,
                "max_delay": self.retry_config.max_delay,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        network = data.get("network", "testnet")
        timeout_cfg = data.get("timeout", {})
        retry_cfg = data.get("retry", {})
        return cls(
            network=network,
            node_url=data.get("node_url") or DEFAULT_NODE_URLS.get(network, ""),
            node_token=data.get("node_token", ""),
            confirmation_rounds=int(
                data.get("confirmation_rounds", DEFAULT_CONFIRMATION_ROUNDS)
            ),
            timeout_config=TimeoutConfig(
                connect_timeout=timeout_cfg.get("connect_timeout", 5.0),
                read_timeout=timeout_cfg.get("read_timeout", 15.0),
            ),
            retry_config=RetryConfig(
                max_retries=retry_cfg.get("max_retries", 0),
                base_delay=retry_cfg.get("base_delay", 1.0),
                max_delay=retry_cfg.get("max_delay", 30.0),
            ),
        )

    def apply_environment(self) -> "AppConfig":
        network = os.getenv("ASA_CREATOR_NETWORK")
        if network:
            network = network.strip().lower()
            if network not in DEFAULT_NODE_URLS:
                raise ValueError(f"Unknown network in ASA_CREATOR_NETWORK: {network}")
            if network != self.network:
                self.network = network
                self.node_url = DEFAULT_NODE_URLS[network]

        node_url = os.getenv("ASA_CREATOR_NODE_URL")
        if node_url:
            self.node_url = node_url.strip()

        node_token = os.getenv("ASA_CREATOR_NODE_TOKEN")
        if node_token is not None:
            self.node_token = node_token.strip()

        return self


def load_config(config_dir: str | Path | None = None) -> AppConfig:
    """Load config.json (writing defaults when absent), then apply env overrides."""
    directory = resolve_config_dir(config_dir)
    directory.mkdir(parents=True, exist_ok=True)
    config_file = directory / "config.json"

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            config = AppConfig.from_dict(json.load(f))
        logger.info("Loaded configuration from %s", config_file)
    else:
        config = AppConfig()
        save_config(config, directory)

    return config.apply_environment()


def save_config(config: AppConfig, config_dir: str | Path | None = None) -> Path:
    directory = resolve_config_dir(config_dir)
    directory.mkdir(parents=True, exist_ok=True)
    config_file = directory / "config.json"
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info("Saved configuration to %s", config_file)
    return config_file
