"""Asset creation event handlers for the ASA Quick Creator TUI."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from asa_creator.features.asset.models import AssetCreationErrorType, SubmissionResult
from asa_creator.features.asset.screen import (
    AssetResultScreen,
    ConnectWalletScreen,
    CreateAssetScreen,
    LoadingScreen,
)
from asa_creator.features.asset.service import AssetCreationService
from asa_creator.features.asset.store import AssetConfigStore
from asa_creator.shared.logging import get_user_friendly_error
from asa_creator.wallet import MnemonicWallet, WalletContext

if TYPE_CHECKING:
    from asa_creator.__main__ import AssetCreatorApp
    from asa_creator.config import AppConfig

logger = logging.getLogger(__name__)


class AssetHandlersMixin:
    """Mixin class providing asset creation handlers for AssetCreatorApp."""

    config: "AppConfig"
    wallet: MnemonicWallet
    asset_store: AssetConfigStore
    asset_service: AssetCreationService
    _asset_screen: CreateAssetScreen | None = None
    _loading_screen: LoadingScreen | None = None

    def show_create_asset_dialog(self: "AssetCreatorApp") -> None:
        if not self.wallet.is_connected:
            self.notify("Please connect your wallet first.", severity="error")
            self.show_connect_wallet_dialog()
            return
        self._asset_screen = CreateAssetScreen(self.asset_store, self.config.network)
        self.push_screen(self._asset_screen)

    def show_connect_wallet_dialog(self: "AssetCreatorApp") -> None:
        self.push_screen(ConnectWalletScreen())

    def on_connect_wallet_screen_connect_requested(
        self: "AssetCreatorApp", event: ConnectWalletScreen.ConnectRequested
    ) -> None:
        try:
            address = self.wallet.connect(event.mnemonic)
        except ValueError as e:
            self.notify(str(e), severity="error")
            return
        self.notify(f"Connected: {address[:6]}...{address[-6:]}", severity="information")
        self.update_account_status()

    def disconnect_wallet(self: "AssetCreatorApp") -> None:
        self.wallet.disconnect()
        self.notify("Wallet disconnected", severity="information")
        self.update_account_status()

    def on_create_asset_screen_create_requested(
        self: "AssetCreatorApp", event: CreateAssetScreen.CreateRequested
    ) -> None:
        draft = self.asset_store.begin_submit()
        if draft is None:
            return

        wallet = WalletContext.from_provider(self.wallet)
        if self._asset_screen is not None:
            self._asset_screen.refresh_from_store()
        self._loading_screen = LoadingScreen("Creating asset...")
        self.push_screen(self._loading_screen)

        def worker() -> None:
            try:
                result = self.asset_service.submit(draft, wallet)
            except Exception as e:
                logger.error("Asset worker failed: %s", e, exc_info=True)
                result = SubmissionResult(
                    error_type=AssetCreationErrorType.UNKNOWN, message=f"Error: {e}"
                )
            self.call_from_thread(self._on_asset_submission_finished, result)

        threading.Thread(target=worker, daemon=True).start()

    def _on_asset_submission_finished(
        self: "AssetCreatorApp", result: SubmissionResult
    ) -> None:
        if self._loading_screen is not None:
            try:
                self._loading_screen.dismiss()
            except Exception as e:
                logger.debug("Loading screen already closed: %s", e)
            self._loading_screen = None

        self.asset_store.complete_submit(result)

        if result.success and result.asset_id is not None and result.tx_id:
            self.notify(f"✅ {result.message}", severity="information")
            if self._asset_screen is not None:
                self._asset_screen.refresh_from_store(reload_values=True)
            self.push_screen(
                AssetResultScreen(
                    result.asset_id,
                    result.tx_id,
                    self.config.asset_explorer_url(result.asset_id),
                    self.config.transaction_explorer_url(result.tx_id),
                )
            )
            return

        if self._asset_screen is not None:
            self._asset_screen.refresh_from_store()

        message = result.message
        if result.error_type not in (
            AssetCreationErrorType.VALIDATION_FAILED,
            AssetCreationErrorType.NOT_CONNECTED,
        ):
            _, suggestion = get_user_friendly_error(result.message)
            if suggestion:
                message = f"{message} {suggestion}"
        self.notify(message, severity="error")
