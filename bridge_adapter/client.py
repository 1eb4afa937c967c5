"""
BridgeClient - Unified entry point for Solana -> Base bridging

Wires asset resolution, amount parsing, call encoding, balance checks,
transaction assembly and submission to one explicit environment.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Optional, Union, List, TYPE_CHECKING

if TYPE_CHECKING:
    from solders.keypair import Keypair

from .config import config as global_config
from .errors import SubmissionError, StageError
from .infra import (
    RpcClient,
    RpcClientConfig,
    TxBuilder,
    TxBuilderConfig,
    Signer,
    create_signer,
    CorrelationContext,
    log_with_correlation,
)
from .modules import (
    AmountCodec,
    AssetResolver,
    BalanceGuard,
    BridgeTransactionBuilder,
    BuilderHookComposer,
    CallEncoder,
    StageSlot,
    SubmissionPipeline,
    AddressResolver,
    LiteralAddressResolver,
)
from .types import (
    AssetKind,
    AssetOverrides,
    BridgeEnvironment,
    BridgeRequest,
    BuilderHookParameters,
    CallParameters,
    PendingStage,
    get_environment,
)

logger = logging.getLogger(__name__)


class BridgeClient:
    """
    Solana -> Base bridge client

    Requests go through an explicit stage/execute lifecycle:
    - stage(): validate everything and hold the request (replaces any previous one)
    - execute(): balance checks, build, sign, broadcast, confirm
    - bridge(): stage + execute
    - cancel(): drop the staged request

    Usage:
        from solders.keypair import Keypair

        client = BridgeClient(environment=get_environment("devnet"), keypair=Keypair())

        client.stage("sol", "0.5", "0x1111111111111111111111111111111111111111")
        signature = client.execute()
    """

    def __init__(
        self,
        environment: Optional[BridgeEnvironment] = None,
        rpc_url: Optional[Union[str, List[str]]] = None,
        keypair: Optional["Keypair"] = None,
        keypair_path: Optional[str] = None,
        signer: Optional[Signer] = None,
        rpc_config: Optional[RpcClientConfig] = None,
        tx_config: Optional[TxBuilderConfig] = None,
        address_resolver: Optional[AddressResolver] = None,
        rpc: Optional[RpcClient] = None,
    ):
        """
        Initialize BridgeClient

        Args:
            environment: Network context (defaults to BRIDGE_ENVIRONMENT)
            rpc_url: RPC endpoint(s); defaults to SOLANA_RPC_URL, then the environment's
            keypair: Optional Keypair for local signing
            keypair_path: Optional path to keypair file
            signer: Signer implementation (takes precedence over keypair options)
            rpc_config: Optional RPC configuration
            tx_config: Optional transaction configuration
            address_resolver: Destination resolver (literal addresses by default)
            rpc: Pre-built RPC client (takes precedence over rpc_url)
        """
        self._environment = environment or get_environment()
        self._rpc_url = rpc_url
        self._rpc_config = rpc_config
        self._tx_config = tx_config

        self._rpc = rpc or RpcClient(
            rpc_url or global_config.rpc.url or self._environment.solana_rpc_url,
            config=rpc_config,
        )
        self._signer = signer or create_signer(keypair=keypair, keypair_path=keypair_path)
        self._address_resolver = address_resolver or LiteralAddressResolver()

        self._assets = AssetResolver(self._rpc, self._environment)
        self._calls = CallEncoder()
        self._builder_hooks = BuilderHookComposer()
        self._balance = BalanceGuard(self._rpc)
        self._transactions = BridgeTransactionBuilder(self._environment)
        self._pipeline = SubmissionPipeline(
            self._rpc,
            TxBuilder(self._rpc, config=tx_config),
            commitment=self._environment.commitment,
        )
        self._slot = StageSlot()
        self._execute_lock = threading.Lock()

    @property
    def environment(self) -> BridgeEnvironment:
        return self._environment

    @property
    def rpc(self) -> RpcClient:
        """Access to RPC client"""
        return self._rpc

    @property
    def signer(self) -> Signer:
        """Access to signer"""
        return self._signer

    @property
    def pubkey(self) -> str:
        """Owner's public key"""
        return self._signer.pubkey

    @property
    def assets(self) -> AssetResolver:
        return self._assets

    @property
    def pending_stage(self) -> Optional[PendingStage]:
        """Currently staged request, if any"""
        return self._slot.current

    @property
    def is_executing(self) -> bool:
        return self._execute_lock.locked()

    def with_environment(self, environment: BridgeEnvironment) -> "BridgeClient":
        """
        Return a new client bound to another environment

        The signer and resolver carry over; the staged request does not.
        """
        return BridgeClient(
            environment=environment,
            rpc_url=self._rpc_url,
            signer=self._signer,
            rpc_config=self._rpc_config,
            tx_config=self._tx_config,
            address_resolver=self._address_resolver,
        )

    def _prepare_stage(
        self,
        asset: str,
        amount: str,
        destination: str,
        overrides: Optional[AssetOverrides] = None,
        call: Optional[CallParameters] = None,
        builder_code: Optional[str] = None,
        fee_bps: int = 0,
    ) -> PendingStage:
        recipient = self._address_resolver.resolve(destination)
        descriptor = self._assets.resolve(asset, overrides)
        units = AmountCodec.parse(amount, descriptor.decimals)

        user_call = None
        if call is not None:
            user_call = self._calls.encode(call.target, call.signature, call.args, call.value)

        builder = None
        bridge_to = recipient
        final_call = user_call
        if builder_code is not None:
            hook = self._builder_hooks.compose(recipient, builder_code, fee_bps, descriptor.remote_address)
            final_call = self._builder_hooks.merge(user_call, hook)
            bridge_to = self._builder_hooks.bridge_recipient
            builder = BuilderHookParameters(
                destination=recipient,
                builder_code=builder_code,
                fee_bps=fee_bps,
            )

        request = BridgeRequest(
            asset=descriptor,
            amount=units,
            destination=bridge_to,
            owner=self._signer.pubkey,
            call=final_call,
        )
        return PendingStage(
            request=request,
            created_at=datetime.now(timezone.utc),
            builder=builder,
            call_parameters=call,
        )

    def prepare(
        self,
        asset: str,
        amount: str,
        destination: str,
        overrides: Optional[AssetOverrides] = None,
        call: Optional[CallParameters] = None,
        builder_code: Optional[str] = None,
        fee_bps: int = 0,
    ) -> BridgeRequest:
        """
        Validate inputs and build a request without staging it

        Args:
            asset: Preset symbol or literal mint address
            amount: Decimal amount in asset units (e.g., "0.5")
            destination: Base recipient
            overrides: Optional asset overrides
            call: Optional call to execute on Base
            builder_code: Optional builder attribution code
            fee_bps: Builder fee in basis points (0-255)

        Returns:
            BridgeRequest

        Raises:
            AddressError, AssetResolutionError, AmountError,
            CallEncodingError, FeeRangeError
        """
        return self._prepare_stage(asset, amount, destination, overrides, call, builder_code, fee_bps).request

    def stage(
        self,
        asset: str,
        amount: str,
        destination: str,
        overrides: Optional[AssetOverrides] = None,
        call: Optional[CallParameters] = None,
        builder_code: Optional[str] = None,
        fee_bps: int = 0,
    ) -> PendingStage:
        """Validate and stage a request, replacing any staged one"""
        stage = self._prepare_stage(asset, amount, destination, overrides, call, builder_code, fee_bps)
        self._slot.replace(stage)
        return stage

    def execute(self, stage: Optional[PendingStage] = None) -> str:
        """
        Execute a staged request

        Args:
            stage: Stage to execute (defaults to the current one)

        Returns:
            Transaction signature

        Raises:
            StageError: Nothing staged
            SubmissionError: IN_PROGRESS if another execution is running,
                or any signing / broadcast / confirmation failure
            BalanceError: Not enough SOL
        """
        if not self._execute_lock.acquire(blocking=False):
            raise SubmissionError.in_progress()
        try:
            stage = stage or self._slot.current
            if stage is None:
                raise StageError.empty()
            return self._execute(stage)
        finally:
            self._execute_lock.release()

    def _execute(self, stage: PendingStage) -> str:
        request = stage.request

        with CorrelationContext("bridge"):
            log_with_correlation(logging.INFO, f"Executing {request}", "execute", target=logger)

            token_account = None
            if request.asset.kind == AssetKind.NATIVE:
                self._balance.check_native(request.owner, request.amount)
            else:
                token_account = self._balance.check_token(request.owner, request.asset, request.amount)

            transaction = self._transactions.build(request, token_account=token_account)

            try:
                signature = self._pipeline.submit(transaction, self._signer)
            except SubmissionError as e:
                if e.clears_stage:
                    self._slot.clear(stage)
                    log_with_correlation(logging.INFO, "Request canceled by signer", "execute", target=logger)
                else:
                    log_with_correlation(
                        logging.WARNING, f"Submission failed, request kept staged: {e}", "execute", target=logger
                    )
                raise

            self._slot.clear(stage)
            log_with_correlation(logging.INFO, f"Bridge submitted: {signature}", "execute", target=logger)
            return signature

    def bridge(
        self,
        asset: str,
        amount: str,
        destination: str,
        overrides: Optional[AssetOverrides] = None,
        call: Optional[CallParameters] = None,
        builder_code: Optional[str] = None,
        fee_bps: int = 0,
    ) -> str:
        """Stage and execute in one call"""
        stage = self.stage(asset, amount, destination, overrides, call, builder_code, fee_bps)
        return self.execute(stage)

    def cancel(self) -> bool:
        """Drop the staged request; returns False if nothing was staged"""
        return self._slot.clear()

    def close(self):
        """Close client connections and release resources"""
        self._rpc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"BridgeClient(environment={self._environment.name}, pubkey={self.pubkey[:8]}...)"
