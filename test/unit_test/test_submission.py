"""
Submission Pipeline Unit Tests

Signing delegation, failure classification and mutual exclusion.
"""

import sys
import threading
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.keypair import Keypair

from bridge_adapter.errors import SubmissionError, SignerError, RpcError, ErrorCode
from bridge_adapter.modules.submission import SubmissionPipeline, is_user_rejection
from bridge_adapter.types import BridgeTransaction, TxResult


@pytest.fixture
def transaction():
    payer = Keypair().pubkey()
    return BridgeTransaction(
        instructions=(),
        payer=payer,
        outgoing_message=Keypair().pubkey(),
        salt=bytes(32),
    )


@pytest.fixture
def tx_builder():
    builder = Mock()
    builder.build.return_value = b"unsigned"
    builder.send.return_value = TxResult.success("5ig")
    builder.config.confirmation_timeout = 60.0
    return builder


@pytest.fixture
def signer():
    signer = Mock()
    signer.pubkey = "Owner111"
    signer.sign_transaction.return_value = (b"signed", "5ig")
    return signer


@pytest.fixture
def pipeline(tx_builder):
    return SubmissionPipeline(Mock(), tx_builder, commitment="finalized")


class TestRejectionDetection:
    """Tests for is_user_rejection"""

    def test_signer_error(self):
        assert is_user_rejection(SignerError.rejected()) is True
        assert is_user_rejection(SignerError.failed("bad key")) is False

    def test_wallet_message(self):
        assert is_user_rejection(Exception("User rejected the request.")) is True
        assert is_user_rejection(Exception("user denied transaction signature")) is True
        assert is_user_rejection(Exception("socket closed")) is False


class TestSubmit:
    """Tests for SubmissionPipeline.submit"""

    def test_success(self, pipeline, tx_builder, signer, transaction):
        signature = pipeline.submit(transaction, signer)

        assert signature == "5ig"
        tx_builder.build.assert_called_once_with([], str(transaction.payer))
        signer.sign_transaction.assert_called_once_with(b"unsigned")
        tx_builder.send.assert_called_once_with(b"signed", commitment="finalized")

    def test_commitment_defaults_to_rpc(self, tx_builder):
        rpc = Mock()
        rpc.commitment = "processed"
        assert SubmissionPipeline(rpc, tx_builder).commitment == "processed"

    def test_sign_rejected(self, pipeline, tx_builder, signer, transaction):
        signer.sign_transaction.side_effect = SignerError.rejected()

        with pytest.raises(SubmissionError) as exc_info:
            pipeline.submit(transaction, signer)

        assert exc_info.value.code == ErrorCode.TX_SIGN_REJECTED
        assert exc_info.value.clears_stage is True
        assert signer.sign_transaction.call_count == 1
        tx_builder.send.assert_not_called()

    def test_sign_failed(self, pipeline, tx_builder, signer, transaction):
        signer.sign_transaction.side_effect = RuntimeError("device disconnected")

        with pytest.raises(SubmissionError) as exc_info:
            pipeline.submit(transaction, signer)

        assert exc_info.value.code == ErrorCode.TX_SIGN_FAILED
        assert exc_info.value.clears_stage is False
        tx_builder.send.assert_not_called()

    def test_blockhash_failure(self, pipeline, tx_builder, signer, transaction):
        tx_builder.build.side_effect = RpcError.timeout("https://rpc.example.com", 30)

        with pytest.raises(SubmissionError) as exc_info:
            pipeline.submit(transaction, signer)

        assert exc_info.value.code == ErrorCode.TX_BROADCAST_FAILED
        signer.sign_transaction.assert_not_called()

    def test_broadcast_failed(self, pipeline, tx_builder, signer, transaction):
        tx_builder.send.side_effect = SubmissionError.broadcast_failed("Blockhash not found")

        with pytest.raises(SubmissionError) as exc_info:
            pipeline.submit(transaction, signer)

        assert exc_info.value.code == ErrorCode.TX_BROADCAST_FAILED

    def test_failed_on_chain(self, pipeline, tx_builder, signer, transaction):
        tx_builder.send.return_value = TxResult.failed("custom program error: 0x1", signature="5ig")

        with pytest.raises(SubmissionError) as exc_info:
            pipeline.submit(transaction, signer)

        assert exc_info.value.code == ErrorCode.TX_BROADCAST_FAILED
        assert exc_info.value.signature == "5ig"

    def test_confirmation_timeout(self, pipeline, tx_builder, signer, transaction):
        tx_builder.send.return_value = TxResult.timeout("5ig")

        with pytest.raises(SubmissionError) as exc_info:
            pipeline.submit(transaction, signer)

        assert exc_info.value.code == ErrorCode.TX_CONFIRMATION_TIMEOUT
        assert exc_info.value.signature == "5ig"
        assert "finalized" in exc_info.value.message

    def test_lock_released_after_failure(self, pipeline, tx_builder, signer, transaction):
        signer.sign_transaction.side_effect = RuntimeError("boom")

        with pytest.raises(SubmissionError):
            pipeline.submit(transaction, signer)

        assert pipeline.is_busy is False
        signer.sign_transaction.side_effect = None
        assert pipeline.submit(transaction, signer) == "5ig"


class TestMutualExclusion:
    """A second submission while one is in flight is rejected, not queued"""

    def test_in_progress(self, pipeline, signer, transaction):
        entered = threading.Event()
        release = threading.Event()

        def slow_sign(unsigned_tx):
            entered.set()
            release.wait(5)
            return b"signed", "5ig"

        signer.sign_transaction.side_effect = slow_sign
        results = []
        worker = threading.Thread(target=lambda: results.append(pipeline.submit(transaction, signer)))
        worker.start()
        try:
            assert entered.wait(5)
            assert pipeline.is_busy is True

            with pytest.raises(SubmissionError) as exc_info:
                pipeline.submit(transaction, signer)
            assert exc_info.value.code == ErrorCode.TX_SUBMISSION_IN_PROGRESS
        finally:
            release.set()
            worker.join(5)

        assert results == ["5ig"]
        assert signer.sign_transaction.call_count == 1
