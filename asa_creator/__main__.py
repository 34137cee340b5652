"""Main application entry point for ASA Quick Creator."""

import logging
import os
import threading
from typing import cast

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Label, Static

from asa_creator.config import AppConfig, load_config, resolve_config_dir
from asa_creator.features.asset.handlers import AssetHandlersMixin
from asa_creator.features.asset.service import AssetCreationService
from asa_creator.features.asset.store import AssetConfigStore
from asa_creator.ledger import LedgerClient
from asa_creator.shared.logging import LoggingConfig, format_error_for_user, setup_logging
from asa_creator.shared.network import NetworkClient, NetworkError
from asa_creator.styles import CSS
from asa_creator.wallet import MnemonicWallet

logger = logging.getLogger(__name__)


class AssetCreatorApp(AssetHandlersMixin, App):
    CSS = CSS
    TITLE = "ASA Quick Creator"

    BINDINGS = [
        ("c", "create_asset", "Create ASA"),
        ("w", "connect_wallet", "Connect"),
        ("d", "disconnect_wallet", "Disconnect"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: AppConfig | None = None):
        super().__init__()
        self.config = config or AppConfig()
        self.wallet = MnemonicWallet()
        self.ledger = LedgerClient.from_config(self.config)
        self.asset_store = AssetConfigStore()
        self.asset_service = AssetCreationService(
            self.ledger, confirmation_rounds=self.config.confirmation_rounds
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Node: checking...", id="connection-status")
        with Vertical(id="content"):
            yield Label("⚡ ASA Token Creator", id="dashboard-title")
            yield Static(
                "Create your own Algorand Standard Assets in seconds. "
                "Connect a wallet, fill in the form and deploy.",
                id="dashboard-helper",
            )
            yield Static("", id="wallet-info")
            yield Horizontal(
                Button("🔑 Connect Wallet", id="connect-wallet-button"),
                Button("🚀 Create ASA", id="create-asset-button", variant="primary"),
                Button("⏏ Disconnect", id="disconnect-wallet-button"),
                id="dashboard-actions-row",
            )
        yield Footer()

    def on_mount(self) -> None:
        self.update_account_status()
        self.test_node_connection()

    def update_account_status(self) -> None:
        address = self.wallet.active_account()
        info = cast(Static, self.query_one("#wallet-info"))
        if address:
            info.update(
                f"[bold]Network:[/bold] {self.config.network}\n"
                f"[bold]Account:[/bold] {address}"
            )
        else:
            info.update(
                f"[bold]Network:[/bold] {self.config.network}\n"
                "[bold]Account:[/bold] not connected"
            )
        cast(Button, self.query_one("#disconnect-wallet-button")).disabled = not address

    def test_node_connection(self) -> None:
        client = NetworkClient(
            node_url=self.config.node_url,
            api_token=self.config.node_token,
            timeout_config=self.config.timeout_config,
            retry_config=self.config.retry_config,
        )

        def worker() -> None:
            try:
                result = client.node_health()
                self.call_from_thread(self._on_node_connection_test_finished, result, None)
            except NetworkError as e:
                self.call_from_thread(self._on_node_connection_test_finished, None, e)

        threading.Thread(target=worker, daemon=True).start()

    def _on_node_connection_test_finished(
        self, result: dict | None, error: Exception | None
    ) -> None:
        status = cast(Static, self.query_one("#connection-status"))
        if error is not None or result is None:
            logger.warning("Node connection test failed: %s", error)
            status.update(f"Node: offline ({self.config.node_url})")
            self.notify(format_error_for_user(error or "connection error"), severity="warning")
            return
        state = "online" if result["healthy"] else "syncing"
        status.update(f"Node: {state} · round {result['last_round']:,}")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "connect-wallet-button":
            self.show_connect_wallet_dialog()
        elif event.button.id == "create-asset-button":
            self.show_create_asset_dialog()
        elif event.button.id == "disconnect-wallet-button":
            self.disconnect_wallet()

    def action_create_asset(self) -> None:
        self.show_create_asset_dialog()

    def action_connect_wallet(self) -> None:
        self.show_connect_wallet_dialog()

    def action_disconnect_wallet(self) -> None:
        self.disconnect_wallet()


def main():
    """Entry point for the application."""
    config_dir = resolve_config_dir()
    logging_config = LoggingConfig.from_environment()
    logging_config.log_dir = config_dir
    setup_logging(logging_config)
    logger.info("Logging system initialized in %s", config_dir)

    config = load_config(config_dir)
    app = AssetCreatorApp(config)

    passphrase = os.getenv("ASA_CREATOR_MNEMONIC")
    if passphrase:
        try:
            app.wallet.connect(passphrase)
        except ValueError as e:
            logger.error("ASA_CREATOR_MNEMONIC rejected: %s", e)

    app.run()


if __name__ == "__main__":
    main()
