"""Tests for the asset creation service using an in-memory ledger."""

from __future__ import annotations

import base64
import os

import pytest
from algosdk import encoding

from asa_creator.config import AppConfig
from asa_creator.features.asset.models import AssetCreationErrorType, AssetDraft
from asa_creator.features.asset.service import (
    AssetCreationService,
    build_asset_create_txn,
)
from asa_creator.features.asset.validators import validate_draft
from asa_creator.ledger import (
    ConfirmationTimeoutError,
    LedgerClient,
    TransactionRejectedError,
)
from asa_creator.shared.network import NetworkError, NetworkErrorType
from asa_creator.wallet import MnemonicWallet, SigningError, WalletContext

METADATA = base64.b64encode(b"\x07" * 32).decode()


@pytest.fixture
def draft():
    return AssetDraft(name="Quick Token", unit_name="QTK", total_supply=5000, decimals=2)


@pytest.fixture
def wallet_context(connected_wallet):
    return WalletContext.from_provider(connected_wallet)


@pytest.fixture
def service(fake_ledger):
    return AssetCreationService(fake_ledger)


class TestBuildAssetCreateTxn:
    def test_blank_authorities_default_to_sender(self, draft, suggested_params, other_address):
        txn = build_asset_create_txn(draft, other_address, suggested_params)

        assert txn.sender == other_address
        assert txn.manager == other_address
        assert txn.reserve == other_address
        assert txn.freeze == other_address
        assert txn.clawback == other_address

    def test_each_authority_defaults_independently(
        self, draft, suggested_params, algorand_account, other_address
    ):
        _, sender = algorand_account
        draft.freeze = other_address

        txn = build_asset_create_txn(draft, sender, suggested_params)

        assert txn.freeze == other_address
        assert txn.manager == sender
        assert txn.reserve == sender
        assert txn.clawback == sender

    def test_draft_fields_carried(self, draft, suggested_params, other_address):
        draft.url = "https://example.com/qtk.json"
        draft.metadata_hash = METADATA

        txn = build_asset_create_txn(draft, other_address, suggested_params)

        assert txn.asset_name == "Quick Token"
        assert txn.unit_name == "QTK"
        assert txn.total == 5000
        assert txn.decimals == 2
        assert txn.default_frozen is False
        assert txn.url == "https://example.com/qtk.json"
        assert txn.metadata_hash == b"\x07" * 32


class TestSubmitSuccess:
    def test_returns_asset_id(self, service, draft, wallet_context, fake_ledger):
        result = service.submit(draft, wallet_context)

        assert result.success is True
        assert result.asset_id == 1234
        assert result.tx_id == "TXID123"
        assert result.message == "ASA created! Asset ID: 1234"
        assert fake_ledger.waited == [("TXID123", 4)]

    def test_sends_signed_creation(self, service, draft, wallet_context, fake_ledger):
        service.submit(draft, wallet_context)

        (signed,) = fake_ledger.sent
        assert len(signed) == 1
        stxn = encoding.msgpack_decode(base64.b64encode(signed[0]).decode())
        assert stxn.transaction.asset_name == "Quick Token"
        assert stxn.transaction.sender == wallet_context.address
        assert stxn.transaction.manager == wallet_context.address

    def test_minimal_draft_hands_every_role_to_creator(
        self, service, wallet_context, fake_ledger
    ):
        draft = AssetDraft(
            name="MyToken", unit_name="MTK", total_supply=1_000_000, decimals=0
        )
        assert validate_draft(draft) == {}

        result = service.submit(draft, wallet_context)

        assert result.success is True
        (signed,) = fake_ledger.sent
        txn = encoding.msgpack_decode(base64.b64encode(signed[0]).decode()).transaction
        assert (txn.asset_name, txn.unit_name, txn.total, txn.decimals) == (
            "MyToken",
            "MTK",
            1_000_000,
            0,
        )
        for role in ("manager", "reserve", "freeze", "clawback"):
            assert getattr(txn, role) == wallet_context.address, role

    def test_confirmation_rounds_configurable(self, fake_ledger, draft, wallet_context):
        AssetCreationService(fake_ledger, confirmation_rounds=10).submit(
            draft, wallet_context
        )
        assert fake_ledger.waited[0][1] == 10


class TestSubmitFailures:
    def test_not_connected_checked_before_validation(self, service, fake_ledger):
        result = service.submit(AssetDraft(), WalletContext())

        assert result.error_type == AssetCreationErrorType.NOT_CONNECTED
        assert result.message == "Please connect your wallet first."
        assert result.validation_errors == {}
        assert fake_ledger.sent == []

    def test_validation_blocks_network(self, service, wallet_context, fake_ledger):
        result = service.submit(AssetDraft(unit_name="QTK"), wallet_context)

        assert result.error_type == AssetCreationErrorType.VALIDATION_FAILED
        assert result.message == "Fix validation errors."
        assert result.validation_errors == {"name": "Asset name is required"}
        assert fake_ledger.sent == []

    def test_params_network_error(self, service, draft, wallet_context, fake_ledger):
        fake_ledger.params_error = NetworkError(
            NetworkErrorType.CONNECTION_ERROR, "Cannot connect to node: http://x"
        )

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.NETWORK_ERROR
        assert result.message == "Error: Cannot connect to node: http://x"

    def test_multibyte_names_blocked_before_signing(
        self, service, wallet_context, fake_ledger
    ):
        draft = AssetDraft(name="\u00e9" * 32, unit_name="\u00fc" * 8)

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.VALIDATION_FAILED
        assert set(result.validation_errors) == {"name", "unit_name"}
        assert fake_ledger.sent == []

    def test_signing_rejected(self, service, draft, fake_ledger, other_address):
        def declining_signer(txns, indexes):
            raise SigningError("user declined")

        result = service.submit(draft, WalletContext(other_address, declining_signer))

        assert result.error_type == AssetCreationErrorType.SIGNING_REJECTED
        assert "user declined" in result.message
        assert fake_ledger.sent == []

    def test_send_http_error(self, service, draft, wallet_context, fake_ledger):
        fake_ledger.send_error = NetworkError(
            NetworkErrorType.HTTP_ERROR, "Send transaction: HTTP error 400: overspend"
        )

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.NETWORK_ERROR
        assert "overspend" in result.message

    def test_confirmation_timeout(self, service, draft, wallet_context, fake_ledger):
        fake_ledger.confirm_error = ConfirmationTimeoutError("TXID123", 4)

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.CONFIRMATION_TIMEOUT
        assert result.message == "Error: Transaction TXID123 not confirmed after 4 rounds"
        assert result.asset_id is None

    def test_pool_rejection(self, service, draft, wallet_context, fake_ledger):
        fake_ledger.confirm_error = TransactionRejectedError("TXID123", "overspend")

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.TRANSACTION_REJECTED

    def test_missing_asset_index(self, service, draft, wallet_context, fake_ledger):
        fake_ledger.asset_id = None

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.UNKNOWN
        assert result.success is False

    def test_unexpected_exception_does_not_escape(
        self, service, draft, wallet_context, fake_ledger
    ):
        fake_ledger.params_error = RuntimeError("surprise")

        result = service.submit(draft, wallet_context)

        assert result.error_type == AssetCreationErrorType.UNKNOWN
        assert result.message == "Error: surprise"

    def test_draft_not_mutated(self, service, draft, wallet_context, fake_ledger):
        before = draft.copy()
        fake_ledger.confirm_error = ConfirmationTimeoutError("TXID123", 4)

        service.submit(draft, wallet_context)

        assert draft == before


@pytest.mark.integration
@pytest.mark.slow
class TestLiveTestnet:
    """Needs ASA_CREATOR_TEST_MNEMONIC for a funded TestNet account."""

    def test_create_on_testnet(self, draft):
        passphrase = os.getenv("ASA_CREATOR_TEST_MNEMONIC")
        if not passphrase:
            pytest.skip("ASA_CREATOR_TEST_MNEMONIC not set")

        wallet = MnemonicWallet()
        wallet.connect(passphrase)
        service = AssetCreationService(LedgerClient.from_config(AppConfig()))

        result = service.submit(draft, WalletContext.from_provider(wallet))

        assert result.success is True, result.message
        assert result.asset_id > 0
