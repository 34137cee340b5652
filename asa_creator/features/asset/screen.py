"""Asset creation modal screens for ASA Quick Creator."""

import logging
from typing import cast

import pyperclip
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from asa_creator.features.asset.models import AssetDraft
from asa_creator.features.asset.store import AssetConfigStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: list[tuple[str, str, str]] = [
    ("name", "Asset Name *", "MyToken"),
    ("unit_name", "Unit Name *", "MTK"),
    ("total_supply", "Total Supply", "1000000"),
    ("decimals", "Decimals", "0"),
]

OPTIONAL_FIELDS: list[tuple[str, str, str]] = [
    ("url", "Asset URL", "https://example.com"),
    ("metadata_hash", "Metadata Hash (Base64)", "Optional metadata hash"),
    ("manager", "Manager Address", "Leave empty to use your address"),
    ("reserve", "Reserve Address", "Leave empty to use your address"),
    ("freeze", "Freeze Address", "Leave empty to use your address"),
    ("clawback", "Clawback Address", "Leave empty to use your address"),
]


class BaseModalScreen(ModalScreen):
    """Base modal screen with common key bindings."""

    BINDINGS = [
        ("escape", "app.pop_screen", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]


class CreateAssetScreen(BaseModalScreen):
    class CreateRequested(Message):
        """The user pressed Create on the asset form."""

    BINDINGS = [
        ("escape", "cancel", "Close"),
        ("tab", "focus_next", "Next"),
        ("shift+tab", "focus_previous", "Previous"),
    ]

    def __init__(self, store: AssetConfigStore, network_name: str = "testnet"):
        super().__init__()
        self.store = store
        self.network_name = network_name

    def compose(self) -> ComposeResult:
        draft = self.store.draft
        with VerticalScroll(id="asset-form"):
            yield Label("🚀 Create ASA Token", id="asset-title")
            yield Static(
                f"Deploy your own Algorand asset on {self.network_name.capitalize()}",
                id="asset-subtitle",
            )
            yield Static(self._fee_text(), id="fee-estimate")
            for field_name, label, placeholder in REQUIRED_FIELDS + OPTIONAL_FIELDS:
                yield Label(label)
                yield Input(
                    value=str(getattr(draft, field_name)),
                    placeholder=placeholder,
                    id=f"{field_name}-input",
                    type="integer" if field_name in ("total_supply", "decimals") else "text",
                )
                yield Label("", id=f"{field_name}-error", classes="field-error")
            yield Static(
                "⚠️ Ensure sufficient ALGO balance for fees.\n"
                "Only Asset Name and Unit Name are required.\n"
                "Blank authority addresses default to your own address.",
                id="asset-notes",
            )
            yield Horizontal(
                Button("✗ Cancel", id="cancel-button"),
                Button("⚡ Create Token", id="create-button", variant="primary"),
            )

    def on_mount(self) -> None:
        self.refresh_from_store()

    def _fee_text(self) -> str:
        return f"Estimated Fee: ≈ {self.store.fee_estimate_display} ALGO"

    def on_input_changed(self, event: Input.Changed) -> None:
        input_id = event.input.id or ""
        if not input_id.endswith("-input"):
            return
        field_name = input_id[: -len("-input")]
        if not self.store.edit(field_name, event.value):
            return
        cast(Label, self.query_one(f"#{field_name}-error")).update("")
        if field_name == "total_supply":
            cast(Static, self.query_one("#fee-estimate")).update(self._fee_text())

    def refresh_from_store(self, reload_values: bool = False) -> None:
        """Redraw errors, fee and button state; optionally reload input values."""
        errors = self.store.errors
        draft = self.store.draft
        for field_name in AssetDraft.field_names():
            if reload_values:
                field_input = cast(Input, self.query_one(f"#{field_name}-input"))
                with field_input.prevent(Input.Changed):
                    field_input.value = str(getattr(draft, field_name))
            cast(Label, self.query_one(f"#{field_name}-error")).update(
                errors.get(field_name, "")
            )
        cast(Static, self.query_one("#fee-estimate")).update(self._fee_text())

        submitting = self.store.is_submitting
        create_button = cast(Button, self.query_one("#create-button"))
        create_button.disabled = submitting
        create_button.label = "Creating..." if submitting else "⚡ Create Token"
        cast(Button, self.query_one("#cancel-button")).disabled = submitting

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "create-button":
            self.post_message(self.CreateRequested())
        elif event.button.id == "cancel-button":
            self.action_cancel()

    def action_cancel(self) -> None:
        if self.store.is_submitting:
            self.notify("Asset creation in progress...", severity="warning")
            return
        self.store.close()
        self.app.pop_screen()


class ConnectWalletScreen(BaseModalScreen):
    class ConnectRequested(Message):
        def __init__(self, mnemonic: str):
            super().__init__()
            self.mnemonic = mnemonic

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("🔑 Connect Wallet")
            yield Label("25-word mnemonic:")
            yield Input(placeholder="word1 word2 ...", password=True, id="mnemonic-input")
            yield Static(
                "The key is kept in memory only and forgotten on disconnect.",
                id="wallet-helper",
            )
            yield Horizontal(
                Button("✓ Connect", id="connect-button", variant="primary"),
                Button("✗ Cancel", id="cancel-button"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "connect-button":
            mnemonic_input = cast(Input, self.query_one("#mnemonic-input"))
            if not mnemonic_input.value.strip():
                self.notify("Mnemonic is required", severity="error")
                return
            self.post_message(self.ConnectRequested(mnemonic_input.value))
            self.app.pop_screen()
        elif event.button.id == "cancel-button":
            self.app.pop_screen()


class LoadingScreen(ModalScreen):
    def __init__(self, message: str = "Loading..."):
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(f"⏳ {self.message}", id="loading-message")


class AssetResultScreen(BaseModalScreen):
    def __init__(self, asset_id: int, tx_id: str, asset_url: str, tx_url: str):
        super().__init__()
        self.asset_id = asset_id
        self.tx_id = tx_id
        self.asset_url = asset_url
        self.tx_url = tx_url

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("✅ ASA Created!", id="result-title")
            yield Label("Asset ID:")
            yield Static(str(self.asset_id), id="asset-id-display")
            yield Label("Transaction ID:")
            yield Static(self.tx_id, id="tx-hash-display")
            yield Label(f"Asset: {self.asset_url}")
            yield Label(f"Transaction: {self.tx_url}")
            yield Horizontal(
                Button("📋 Copy Asset ID", id="copy-id-button", variant="primary"),
                Button("❌ Close", id="close-button"),
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "copy-id-button":
            try:
                pyperclip.copy(str(self.asset_id))
                self.notify("Asset ID copied to clipboard!", severity="information")
            except pyperclip.PyperclipException as e:
                logger.warning("Clipboard unavailable: %s", e)
                self.notify(f"Clipboard unavailable: {e}", severity="warning")
        elif event.button.id == "close-button":
            self.app.pop_screen()
