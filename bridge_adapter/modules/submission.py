"""
Submission Module

Compile, sign, broadcast and confirm a bridge transaction.

Failure kinds (SubmissionError.code):
    TX_SIGN_REJECTED         signer's owner declined (terminal, clears the stage)
    TX_SIGN_FAILED           signer errored for any other reason
    TX_BROADCAST_FAILED      node refused the transaction or it failed on chain
    TX_CONFIRMATION_TIMEOUT  commitment level not reached in time
"""

import logging
import threading
from typing import Optional, Tuple

from ..errors import SubmissionError, SignerError, RpcError
from ..infra import RpcClient, TxBuilder, Signer
from ..types import BridgeTransaction

logger = logging.getLogger(__name__)


REJECTION_MARKERS = ("user rejected", "rejected the request", "user denied")


def is_user_rejection(error: Exception) -> bool:
    """Whether a signer error means the owner declined"""
    if isinstance(error, SignerError) and error.is_rejection:
        return True
    message = str(error).lower()
    return any(marker in message for marker in REJECTION_MARKERS)


class SubmissionPipeline:
    """
    Non-reentrant signing and broadcast pipeline

    A second submit() while one is in flight fails immediately with
    SubmissionError.in_progress(); calls are never queued.

    Usage:
        pipeline = SubmissionPipeline(rpc)
        signature = pipeline.submit(bridge_tx, signer)
    """

    def __init__(
        self,
        rpc: RpcClient,
        tx_builder: Optional[TxBuilder] = None,
        commitment: Optional[str] = None,
    ):
        """
        Args:
            rpc: RPC client
            tx_builder: Transaction builder (created from rpc if None)
            commitment: Commitment level to await (defaults to the RPC client's)
        """
        self._rpc = rpc
        self._tx_builder = tx_builder or TxBuilder(rpc)
        self._commitment = commitment or rpc.commitment
        self._lock = threading.Lock()

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    @property
    def commitment(self) -> str:
        return self._commitment

    def submit(self, transaction: BridgeTransaction, signer: Signer) -> str:
        """
        Sign and send a bridge transaction

        Args:
            transaction: Instructions to submit
            signer: Signing capability, invoked exactly once

        Returns:
            Transaction signature (base58)

        Raises:
            SubmissionError: On any signing, broadcast or confirmation failure
        """
        if not self._lock.acquire(blocking=False):
            raise SubmissionError.in_progress()
        try:
            return self._submit(transaction, signer)
        finally:
            self._lock.release()

    def _submit(self, transaction: BridgeTransaction, signer: Signer) -> str:
        try:
            unsigned_tx = self._tx_builder.build(list(transaction.instructions), str(transaction.payer))
        except RpcError as e:
            raise SubmissionError.broadcast_failed(f"could not prepare transaction: {e.message}")

        signed_tx, signature = self._sign(signer, unsigned_tx)
        logger.info(f"Transaction signed: {signature}")

        result = self._tx_builder.send(signed_tx, commitment=self._commitment)

        if result.is_success:
            logger.info(f"Bridge transaction confirmed ({self._commitment}): {result.signature}")
            return result.signature or signature

        if result.is_timeout:
            raise SubmissionError.confirmation_timeout(
                result.signature or signature,
                self._commitment,
                self._tx_builder.config.confirmation_timeout,
            )

        raise SubmissionError.broadcast_failed(result.error or "unknown error", result.signature or signature)

    def _sign(self, signer: Signer, unsigned_tx: bytes) -> Tuple[bytes, str]:
        try:
            return signer.sign_transaction(unsigned_tx)
        except SubmissionError:
            raise
        except Exception as e:
            if is_user_rejection(e):
                logger.info(f"Signing declined: {e}")
                raise SubmissionError.sign_rejected(getattr(e, "message", str(e)))
            logger.error(f"Signing failed: {e}")
            raise SubmissionError.sign_failed(e)
