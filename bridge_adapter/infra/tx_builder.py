"""
Transaction builder and sender

Provides utilities for:
- Building versioned transactions
- Adding compute budget instructions
- Sending and confirming transactions
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from .rpc import RpcClient
from ..types import TxResult, TxStatus
from ..errors import SubmissionError, RpcError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@dataclass
class TxBuilderConfig:
    """
    Transaction builder runtime configuration

    Allows per-builder overrides while pulling defaults from the global
    config (bridge_adapter.config.TxConfig).

    Usage:
        # Use all defaults from environment
        builder = TxBuilder(rpc)

        # Override specific settings
        config = TxBuilderConfig(compute_units=400_000, skip_preflight=True)
        builder = TxBuilder(rpc, config=config)
    """
    compute_units: int = None
    compute_unit_price: int = None
    skip_preflight: bool = None
    preflight_commitment: str = None
    max_retries: int = None
    confirmation_timeout: float = None
    retry_delay: float = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.compute_units is None:
            self.compute_units = global_config.tx.compute_units
        if self.compute_unit_price is None:
            self.compute_unit_price = global_config.tx.compute_unit_price
        if self.skip_preflight is None:
            self.skip_preflight = global_config.tx.skip_preflight
        if self.preflight_commitment is None:
            self.preflight_commitment = global_config.tx.preflight_commitment
        if self.max_retries is None:
            self.max_retries = global_config.tx.max_retries
        if self.confirmation_timeout is None:
            self.confirmation_timeout = global_config.tx.confirmation_timeout
        if self.retry_delay is None:
            self.retry_delay = global_config.tx.retry_delay


class TxBuilder:
    """
    Transaction builder and sender

    Signing is not done here; the caller hands the unsigned bytes to a
    Signer and passes the result back to send().

    Usage:
        builder = TxBuilder(rpc)

        unsigned = builder.build(instructions, payer)
        signed, sig = signer.sign_transaction(unsigned)
        result = builder.send(signed)
    """

    def __init__(
        self,
        rpc: RpcClient,
        config: Optional[TxBuilderConfig] = None,
    ):
        self._rpc = rpc
        self._config = config or TxBuilderConfig()

    @property
    def config(self) -> TxBuilderConfig:
        return self._config

    def build(
        self,
        instructions: Sequence[Instruction],
        payer: str,
        compute_units: Optional[int] = None,
        compute_unit_price: Optional[int] = None,
        recent_blockhash: Optional[str] = None,
    ) -> bytes:
        """
        Build unsigned versioned transaction

        Args:
            instructions: List of instructions
            payer: Fee payer pubkey (base58)
            compute_units: Compute unit limit
            compute_unit_price: Priority fee in microlamports per CU
            recent_blockhash: Optional blockhash (fetched if not provided)

        Returns:
            Unsigned transaction bytes (null signatures)

        Raises:
            RpcError: If the blockhash cannot be fetched
            SubmissionError: If the node returns no blockhash
        """
        all_instructions: List[Instruction] = []

        cu_limit = compute_units or self._config.compute_units
        cu_price = compute_unit_price or self._config.compute_unit_price

        if cu_limit > 0:
            all_instructions.append(set_compute_unit_limit(cu_limit))

        if cu_price > 0:
            all_instructions.append(set_compute_unit_price(cu_price))

        all_instructions.extend(instructions)

        if recent_blockhash is None:
            blockhash_info = self._rpc.get_latest_blockhash()
            recent_blockhash = blockhash_info.get("blockhash")

        if not recent_blockhash:
            raise SubmissionError.broadcast_failed("Failed to get recent blockhash")

        message = MessageV0.try_compile(
            Pubkey.from_string(payer),
            all_instructions,
            [],  # Address lookup tables
            Hash.from_string(recent_blockhash),
        )

        # Signature slots must match num_required_signatures
        num_signers = message.header.num_required_signatures
        tx = VersionedTransaction.populate(message, [Signature.default()] * num_signers)

        logger.debug(
            f"Built transaction: {len(all_instructions)} instructions, "
            f"cu_limit={cu_limit}, cu_price={cu_price}"
        )
        return bytes(tx)

    def send(
        self,
        signed_tx: bytes,
        skip_preflight: Optional[bool] = None,
        wait_confirmation: bool = True,
        commitment: Optional[str] = None,
    ) -> TxResult:
        """
        Send signed transaction

        Recoverable transport errors are retried with linear backoff.
        Errors reported by the node itself (preflight failures) are not.

        Args:
            signed_tx: Signed transaction bytes
            skip_preflight: Skip simulation (default from config)
            wait_confirmation: Wait for confirmation
            commitment: Commitment level to await (defaults to preflight commitment)

        Returns:
            TxResult with status and signature

        Raises:
            SubmissionError: If the transaction cannot be broadcast
        """
        skip = skip_preflight if skip_preflight is not None else self._config.skip_preflight

        for attempt in range(self._config.max_retries):
            try:
                signature = self._rpc.send_transaction(
                    signed_tx,
                    skip_preflight=skip,
                    preflight_commitment=self._config.preflight_commitment,
                )
            except RpcError as e:
                node_rejected = "rpc_error_code" in e.details
                if e.recoverable and not node_rejected and attempt < self._config.max_retries - 1:
                    logger.warning(f"Send failed (attempt {attempt + 1}), retrying: {e}")
                    time.sleep(self._config.retry_delay * (attempt + 1))
                    continue
                raise SubmissionError.broadcast_failed(e.message)

            logger.info(f"Transaction sent: {signature}")

            if not wait_confirmation:
                return TxResult(status=TxStatus.PENDING, signature=signature)

            confirmed = self._rpc.confirm_transaction(
                signature,
                commitment=commitment or self._config.preflight_commitment,
                timeout_seconds=self._config.confirmation_timeout,
            )

            if confirmed is True:
                return TxResult.success(signature)
            if confirmed is False:
                return TxResult.failed(
                    "Transaction failed on-chain (check explorer for details)",
                    signature=signature,
                )
            return TxResult.timeout(signature)

        raise SubmissionError.broadcast_failed("No send attempts made (max_retries=0)")
