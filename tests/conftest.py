import pytest
from algosdk import account, mnemonic, transaction

from asa_creator.wallet import MnemonicWallet

TESTNET_GENESIS_HASH = "SGO1GKSzyE7IEPItTxCByw9x8FmnrCDexi9/cOUJOiI="


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep config and log files out of the real home directory."""
    monkeypatch.setenv("ASA_CREATOR_DIR", str(tmp_path / "asa-creator"))
    for name in (
        "ASA_CREATOR_NETWORK",
        "ASA_CREATOR_NODE_URL",
        "ASA_CREATOR_NODE_TOKEN",
        "ASA_CREATOR_MNEMONIC",
        "ASA_CREATOR_LOG_LEVEL",
        "ASA_CREATOR_LOG_STDOUT",
        "ASA_CREATOR_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def algorand_account():
    """Fixture providing a freshly generated (private_key, address) pair"""
    return account.generate_account()


@pytest.fixture
def other_address():
    """Fixture providing an address that is not the connected account"""
    _, address = account.generate_account()
    return address


@pytest.fixture
def account_mnemonic(algorand_account):
    private_key, _ = algorand_account
    return mnemonic.from_private_key(private_key)


@pytest.fixture
def connected_wallet(account_mnemonic):
    wallet = MnemonicWallet()
    wallet.connect(account_mnemonic)
    return wallet


@pytest.fixture
def suggested_params():
    return transaction.SuggestedParams(
        fee=0,
        first=1000,
        last=2000,
        gh=TESTNET_GENESIS_HASH,
        gen="testnet-v1.0",
        flat_fee=False,
        min_fee=1000,
    )


class FakeLedger:
    """In-memory ledger recording what the service sends."""

    def __init__(self, params, asset_id=1234, tx_id="TXID123"):
        self.params = params
        self.asset_id = asset_id
        self.tx_id = tx_id
        self.params_error = None
        self.send_error = None
        self.confirm_error = None
        self.sent = []
        self.waited = []

    def get_suggested_params(self):
        if self.params_error:
            raise self.params_error
        return self.params

    def send_raw(self, signed):
        if self.send_error:
            raise self.send_error
        self.sent.append(signed)
        return self.tx_id

    def wait_for_confirmation(self, tx_id, max_rounds):
        self.waited.append((tx_id, max_rounds))
        if self.confirm_error:
            raise self.confirm_error
        info = {"confirmed-round": 1001, "pool-error": ""}
        if self.asset_id is not None:
            info["asset-index"] = self.asset_id
        return info


@pytest.fixture
def fake_ledger(suggested_params):
    return FakeLedger(suggested_params)
