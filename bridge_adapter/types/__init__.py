"""
Type definitions for the Bridge Adapter
"""

from .address import (
    EVM_ADDRESS_PATTERN,
    BASE58_ADDRESS_PATTERN,
    is_evm_address,
    normalize_evm_address,
    looks_like_base58_address,
    parse_pubkey,
)
from .asset import AssetKind, AssetPreset, AssetOverrides, AssetDescriptor
from .call import CallKind, ContractCallDescriptor, CallParameters, BuilderHookParameters
from .request import (
    BridgeRequest,
    TokenAccountState,
    TokenAccountCheck,
    BridgeTransaction,
    PendingStage,
)
from .result import TxResult, TxStatus
from .environment import (
    BridgeEnvironment,
    NATIVE_SYMBOL,
    NATIVE_DECIMALS,
    available_environments,
    get_environment,
)

__all__ = [
    # Addresses
    "EVM_ADDRESS_PATTERN",
    "BASE58_ADDRESS_PATTERN",
    "is_evm_address",
    "normalize_evm_address",
    "looks_like_base58_address",
    "parse_pubkey",
    # Assets
    "AssetKind",
    "AssetPreset",
    "AssetOverrides",
    "AssetDescriptor",
    # Calls
    "CallKind",
    "ContractCallDescriptor",
    "CallParameters",
    "BuilderHookParameters",
    # Requests
    "BridgeRequest",
    "TokenAccountState",
    "TokenAccountCheck",
    "BridgeTransaction",
    "PendingStage",
    # Results
    "TxResult",
    "TxStatus",
    # Environment
    "BridgeEnvironment",
    "NATIVE_SYMBOL",
    "NATIVE_DECIMALS",
    "available_environments",
    "get_environment",
]
