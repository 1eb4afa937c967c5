"""
Bridge Adapter - Solana -> Base bridging

Provides:
- Asset resolution for native SOL and SPL tokens
- Exact decimal amount handling
- Destination-chain call encoding, with optional builder-code fee routing
- Pre-flight balance checks, transaction assembly, signing and confirmation
"""

from .client import BridgeClient
from .types import (
    AssetKind,
    AssetOverrides,
    AssetDescriptor,
    BridgeEnvironment,
    BridgeRequest,
    CallKind,
    CallParameters,
    ContractCallDescriptor,
    PendingStage,
    TxResult,
    TxStatus,
    get_environment,
)
from .errors import (
    BridgeAdapterError,
    RpcError,
    AssetResolutionError,
    AddressError,
    AmountError,
    BalanceError,
    CallEncodingError,
    FeeRangeError,
    SubmissionError,
    SignerError,
    StageError,
    ConfigurationError,
    ErrorCode,
)
from .modules import AmountCodec, CallEncoder, AddressResolver, LiteralAddressResolver
from .infra import Signer, LocalSigner

__all__ = [
    # Client
    "BridgeClient",
    # Types
    "AssetKind",
    "AssetOverrides",
    "AssetDescriptor",
    "BridgeEnvironment",
    "BridgeRequest",
    "CallKind",
    "CallParameters",
    "ContractCallDescriptor",
    "PendingStage",
    "TxResult",
    "TxStatus",
    "get_environment",
    # Errors
    "BridgeAdapterError",
    "RpcError",
    "AssetResolutionError",
    "AddressError",
    "AmountError",
    "BalanceError",
    "CallEncodingError",
    "FeeRangeError",
    "SubmissionError",
    "SignerError",
    "StageError",
    "ConfigurationError",
    "ErrorCode",
    # Building blocks
    "AmountCodec",
    "CallEncoder",
    "AddressResolver",
    "LiteralAddressResolver",
    "Signer",
    "LocalSigner",
]
