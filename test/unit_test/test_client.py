"""
BridgeClient Unit Tests

Stage / execute lifecycle end to end, with a mocked RPC client and a real
local keypair signer.
"""

import sys
import threading
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from bridge_adapter import BridgeClient
from bridge_adapter.errors import (
    AddressError,
    AmountError,
    BalanceError,
    RpcError,
    SignerError,
    StageError,
    SubmissionError,
    ErrorCode,
)
from bridge_adapter.infra import LocalSigner, TxBuilderConfig
from bridge_adapter.protocols.bridge import DISCRIMINATORS
from bridge_adapter.protocols.flywheel import BRIDGE_CAMPAIGN_ADDRESS, FLYWHEEL_ADDRESS, MULTICALL_ADDRESS
from bridge_adapter.protocols.token import ASSOCIATED_TOKEN_PROGRAM_ID
from bridge_adapter.types import AssetKind, CallKind, CallParameters

from conftest import DESTINATION, mint_account_info


ZERO_DESTINATION = "0x" + "0" * 40
SIGNATURE = "5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnbJLgp8uirBgmQpjKhoR4tjF3ZpRzrFmBV6UjKdiSZkQUW"


@pytest.fixture
def rpc():
    rpc = Mock()
    rpc.get_balance.return_value = 10_000_000_000
    rpc.get_latest_blockhash.return_value = {"blockhash": str(Hash.default()), "lastValidBlockHeight": 100}
    rpc.send_transaction.return_value = SIGNATURE
    rpc.confirm_transaction.return_value = True
    return rpc


@pytest.fixture
def signer(keypair):
    return LocalSigner(keypair)


@pytest.fixture
def client(devnet, rpc, signer):
    tx_config = TxBuilderConfig(max_retries=1, retry_delay=0.0, confirmation_timeout=1.0)
    return BridgeClient(environment=devnet, signer=signer, tx_config=tx_config, rpc=rpc)


def _sent_transaction(rpc) -> VersionedTransaction:
    return VersionedTransaction.from_bytes(rpc.send_transaction.call_args[0][0])


class TestStage:
    """Tests for staging requests"""

    def test_stage_native(self, client, signer):
        stage = client.stage("sol", "0.5", ZERO_DESTINATION)

        request = stage.request
        assert request.amount == 500_000_000
        assert request.asset.kind == AssetKind.NATIVE
        assert request.destination == ZERO_DESTINATION
        assert request.owner == signer.pubkey
        assert request.call is None
        assert client.pending_stage is stage

    def test_destination_lowercased(self, client):
        stage = client.stage("sol", "1", "0xABCDEF0000000000000000000000000000000001")
        assert stage.request.destination == "0xabcdef0000000000000000000000000000000001"

    def test_restage_replaces(self, client):
        first = client.stage("sol", "1", DESTINATION)
        second = client.stage("sol", "2", DESTINATION)

        assert client.pending_stage is second
        assert client.pending_stage is not first
        assert second.request.amount == 2_000_000_000

    def test_invalid_input_keeps_previous_stage(self, client, rpc):
        stage = client.stage("sol", "1", DESTINATION)

        with pytest.raises(AddressError):
            client.stage("sol", "1", "0x1234")
        with pytest.raises(AmountError):
            client.stage("sol", "1.0000000001", DESTINATION)

        assert client.pending_stage is stage
        rpc.send_transaction.assert_not_called()

    def test_prepare_does_not_stage(self, client):
        request = client.prepare("sol", "0.25", DESTINATION)

        assert request.amount == 250_000_000
        assert client.pending_stage is None

    def test_cancel(self, client):
        client.stage("sol", "1", DESTINATION)

        assert client.cancel() is True
        assert client.pending_stage is None
        assert client.cancel() is False

    def test_with_call(self, client):
        call = CallParameters(
            target="0x000000000000000000000000000000000000dead",
            signature="transfer(address,uint256)",
            args=(DESTINATION, "1000"),
        )

        stage = client.stage("sol", "1", DESTINATION, call=call)

        assert stage.request.call.kind == CallKind.DIRECT
        assert stage.request.call.target == "0x000000000000000000000000000000000000dead"
        assert stage.call_parameters is call


class TestBuilderCode:
    """Tests for builder-code attribution"""

    def test_builder_only(self, client):
        stage = client.stage("sol", "1", DESTINATION, builder_code="my-app", fee_bps=10)

        assert stage.request.destination == BRIDGE_CAMPAIGN_ADDRESS
        assert stage.request.call.target == FLYWHEEL_ADDRESS
        assert stage.builder.destination == DESTINATION
        assert stage.builder.fee_bps == 10

    def test_builder_with_call(self, client):
        call = CallParameters(
            target="0x000000000000000000000000000000000000dead",
            signature="ping()",
        )

        stage = client.stage("sol", "1", DESTINATION, call=call, builder_code="my-app")

        assert stage.request.call.kind == CallKind.BATCHED
        assert stage.request.call.target == MULTICALL_ADDRESS


class TestExecute:
    """Tests for executing staged requests"""

    def test_bridge_half_sol(self, client, rpc, keypair):
        client.stage("sol", "0.5", ZERO_DESTINATION)

        signature = client.execute()

        assert isinstance(signature, str) and signature
        assert client.pending_stage is None
        rpc.get_balance.assert_called_once_with(str(keypair.pubkey()))

        tx = _sent_transaction(rpc)
        assert tx.signatures[0] != Signature.default()
        assert tx.message.account_keys[0] == keypair.pubkey()
        # compute limit, compute price, bridge_sol
        assert len(tx.message.instructions) == 3
        assert bytes(tx.message.instructions[-1].data)[:8] == DISCRIMINATORS["bridge_sol"]

    def test_bridge_shortcut(self, client):
        assert client.bridge("sol", "0.5", ZERO_DESTINATION) == SIGNATURE
        assert client.pending_stage is None

    def test_nothing_staged(self, client):
        with pytest.raises(StageError) as exc_info:
            client.execute()
        assert exc_info.value.code == ErrorCode.STAGE_EMPTY

    def test_insufficient_sol(self, client, rpc):
        rpc.get_balance.return_value = 100
        stage = client.stage("sol", "0.5", DESTINATION)

        with pytest.raises(BalanceError):
            client.execute()

        assert client.pending_stage is stage
        rpc.send_transaction.assert_not_called()

    def test_sign_rejected_clears_stage(self, devnet, rpc, keypair):
        signer = Mock()
        signer.pubkey = str(keypair.pubkey())
        signer.sign_transaction.side_effect = SignerError.rejected()
        client = BridgeClient(environment=devnet, signer=signer, rpc=rpc)
        client.stage("sol", "0.5", DESTINATION)

        with pytest.raises(SubmissionError) as exc_info:
            client.execute()

        assert exc_info.value.code == ErrorCode.TX_SIGN_REJECTED
        assert client.pending_stage is None
        assert signer.sign_transaction.call_count == 1
        rpc.send_transaction.assert_not_called()

    def test_broadcast_failure_keeps_stage(self, client, rpc):
        rejected = RpcError("RPC error: Blockhash not found")
        rejected.details["rpc_error_code"] = -32002
        rpc.send_transaction.side_effect = rejected
        stage = client.stage("sol", "0.5", DESTINATION)

        with pytest.raises(SubmissionError) as exc_info:
            client.execute()

        assert exc_info.value.code == ErrorCode.TX_BROADCAST_FAILED
        assert client.pending_stage is stage

    def test_confirmation_timeout_keeps_stage(self, client, rpc):
        rpc.confirm_transaction.return_value = None
        stage = client.stage("sol", "0.5", DESTINATION)

        with pytest.raises(SubmissionError) as exc_info:
            client.execute()

        assert exc_info.value.code == ErrorCode.TX_CONFIRMATION_TIMEOUT
        assert exc_info.value.signature == SIGNATURE
        assert client.pending_stage is stage

    def test_manual_retry_after_failure(self, client, rpc):
        rpc.confirm_transaction.return_value = False
        client.stage("sol", "0.5", DESTINATION)

        with pytest.raises(SubmissionError):
            client.execute()

        rpc.confirm_transaction.return_value = True
        assert client.execute() == SIGNATURE
        assert client.pending_stage is None

    def test_token_account_created_in_same_transaction(self, client, rpc):
        # mint lookup at stage time, then the ATA probe at execute time
        rpc.get_account_info.side_effect = [mint_account_info(6), None]
        client.stage("usdc", "1.5", DESTINATION)

        client.execute()

        tx = _sent_transaction(rpc)
        instructions = tx.message.instructions
        keys = tx.message.account_keys
        # compute limit, compute price, create ATA, bridge_spl
        assert len(instructions) == 4
        assert keys[instructions[2].program_id_index] == Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
        assert bytes(instructions[3].data)[:8] == DISCRIMINATORS["bridge_spl"]


class TestConcurrency:
    """A second execute while one is in flight fails with IN_PROGRESS"""

    def test_execute_in_progress(self, devnet, rpc, keypair):
        local = LocalSigner(keypair)
        entered = threading.Event()
        release = threading.Event()

        def slow_sign(unsigned_tx):
            entered.set()
            release.wait(5)
            return local.sign_transaction(unsigned_tx)

        signer = Mock()
        signer.pubkey = local.pubkey
        signer.sign_transaction.side_effect = slow_sign
        client = BridgeClient(environment=devnet, signer=signer, rpc=rpc)
        client.stage("sol", "0.5", DESTINATION)

        results = []
        worker = threading.Thread(target=lambda: results.append(client.execute()))
        worker.start()
        try:
            assert entered.wait(5)
            assert client.is_executing is True

            with pytest.raises(SubmissionError) as exc_info:
                client.execute()
            assert exc_info.value.code == ErrorCode.TX_SUBMISSION_IN_PROGRESS
        finally:
            release.set()
            worker.join(5)

        assert results == [SIGNATURE]
        assert signer.sign_transaction.call_count == 1
        assert client.is_executing is False


class TestEnvironment:
    """Tests for explicit environment handling"""

    def test_with_environment(self, client, devnet, signer):
        client.stage("sol", "1", DESTINATION)
        mainnet = devnet.with_overrides(name="mainnet", label="Mainnet")

        other = client.with_environment(mainnet)

        assert other.environment is mainnet
        assert other.signer is signer
        assert other.pending_stage is None
        assert client.pending_stage is not None
        assert client.environment is devnet
        other.close()

    def test_repr(self, client, signer):
        assert signer.pubkey[:8] in repr(client)
        assert "devnet" in repr(client)
