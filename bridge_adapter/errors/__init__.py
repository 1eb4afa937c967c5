"""
Error definitions for the bridge adapter
"""

from .exceptions import (
    ErrorCode,
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
)

__all__ = [
    "ErrorCode",
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
]
