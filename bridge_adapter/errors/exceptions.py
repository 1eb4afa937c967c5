"""
Exception definitions for the bridge adapter
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for bridge operations

    1xxx - RPC errors
    2xxx - Submission errors
    3xxx - Asset resolution / address errors
    4xxx - Amount errors
    5xxx - Balance errors
    6xxx - Signer errors
    7xxx - Call encoding errors
    8xxx - Staging errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Submission errors
    TX_SIGN_REJECTED = "2001"
    TX_SIGN_FAILED = "2002"
    TX_BROADCAST_FAILED = "2003"
    TX_CONFIRMATION_TIMEOUT = "2004"
    TX_SUBMISSION_IN_PROGRESS = "2005"

    # Asset resolution errors
    ASSET_INVALID_IDENTITY = "3001"
    ASSET_MISSING_REMOTE = "3002"
    ASSET_MISSING_TOKEN_IDENTITY = "3003"
    ASSET_UNKNOWN_DECIMALS = "3004"
    ASSET_INVALID_DECIMALS = "3005"
    ADDRESS_INVALID = "3010"

    # Amount errors
    AMOUNT_EMPTY = "4001"
    AMOUNT_NON_NUMERIC = "4002"
    AMOUNT_NON_POSITIVE = "4003"
    AMOUNT_PRECISION_EXCEEDED = "4004"
    AMOUNT_OUT_OF_RANGE = "4005"

    # Balance errors
    BALANCE_INSUFFICIENT_NATIVE = "5001"

    # Signer errors
    SIGNER_NOT_CONFIGURED = "6001"
    SIGNER_FAILED = "6002"
    SIGNER_REJECTED = "6003"

    # Call encoding errors
    CALL_SIGNATURE_SYNTAX = "7001"
    CALL_ARITY_MISMATCH = "7002"
    CALL_TYPE_COERCION = "7003"
    CALL_INVALID_TARGET = "7004"
    CALL_FEE_RANGE = "7005"

    # Staging errors
    STAGE_EMPTY = "8001"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class BridgeAdapterError(Exception):
    """
    Base exception for all bridge adapter errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the operation should be retried"""
        return self.recoverable


class RpcError(BridgeAdapterError):
    """
    RPC-related errors - typically recoverable

    Raised when:
    - Connection to RPC endpoint fails
    - Request times out
    - Rate limit is hit
    - Invalid response received
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(
            "RPC rate limit exceeded",
            ErrorCode.RPC_RATE_LIMITED,
            endpoint=endpoint,
        )


class AssetResolutionError(BridgeAdapterError):
    """
    Asset could not be resolved into a complete descriptor - not recoverable

    Raised when:
    - Remote (Base) token address is missing or malformed
    - Token kind has no mint, or the mint is not a valid public key
    - Decimals cannot be determined
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        symbol: Optional[str] = None,
        value: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"symbol": symbol, "value": value},
        )
        self.symbol = symbol
        self.value = value

    @classmethod
    def invalid_identity(cls, symbol: str, label: str, value: str) -> "AssetResolutionError":
        return cls(
            f"Invalid {label} address \"{value}\" for {symbol}",
            ErrorCode.ASSET_INVALID_IDENTITY,
            symbol=symbol,
            value=value,
        )

    @classmethod
    def missing_remote(cls, symbol: str) -> "AssetResolutionError":
        return cls(
            f"Remote Base token address is required for {symbol}. Provide --remote <0x...>.",
            ErrorCode.ASSET_MISSING_REMOTE,
            symbol=symbol,
        )

    @classmethod
    def missing_token_identity(cls, symbol: str) -> "AssetResolutionError":
        return cls(
            f"Mint address is required for {symbol}. Provide --mint <mintAddress>.",
            ErrorCode.ASSET_MISSING_TOKEN_IDENTITY,
            symbol=symbol,
        )

    @classmethod
    def unknown_decimals(cls, symbol: str) -> "AssetResolutionError":
        return cls(
            f"Unable to determine decimals for {symbol}. Provide --decimals <value>.",
            ErrorCode.ASSET_UNKNOWN_DECIMALS,
            symbol=symbol,
        )

    @classmethod
    def invalid_decimals(cls, symbol: str, decimals: object) -> "AssetResolutionError":
        return cls(
            f"Decimals for {symbol} must be an integer between 0 and 255, got {decimals!r}",
            ErrorCode.ASSET_INVALID_DECIMALS,
            symbol=symbol,
            value=str(decimals),
        )


class AddressError(BridgeAdapterError):
    """Destination-chain address is not 0x-prefixed 20-byte hex"""

    def __init__(self, label: str, value: str):
        super().__init__(
            f"Invalid {label} address \"{value}\". Expected 0x-prefixed 20-byte hex.",
            ErrorCode.ADDRESS_INVALID,
            recoverable=False,
            details={"label": label, "value": value},
        )
        self.label = label
        self.value = value


class AmountError(BridgeAdapterError):
    """
    Amount text could not be converted into base units

    Raised when:
    - Amount is blank or not a decimal number
    - Amount has more fractional digits than the asset supports
    - Amount is zero or negative
    - Amount does not fit the on-chain integer width
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        amount: Optional[str] = None,
        decimals: Optional[int] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={"amount": amount, "decimals": decimals},
        )
        self.amount = amount
        self.decimals = decimals

    @classmethod
    def empty(cls) -> "AmountError":
        return cls("Amount is required.", ErrorCode.AMOUNT_EMPTY, amount="")

    @classmethod
    def non_numeric(cls, amount: str) -> "AmountError":
        return cls(
            f"Invalid amount \"{amount}\". Provide a numeric value.",
            ErrorCode.AMOUNT_NON_NUMERIC,
            amount=amount,
        )

    @classmethod
    def non_positive(cls, amount: str) -> "AmountError":
        return cls(
            f"Amount must be greater than zero, got \"{amount}\".",
            ErrorCode.AMOUNT_NON_POSITIVE,
            amount=amount,
        )

    @classmethod
    def precision_exceeded(cls, amount: str, decimals: int) -> "AmountError":
        return cls(
            f"Amount \"{amount}\" has more than {decimals} decimal places.",
            ErrorCode.AMOUNT_PRECISION_EXCEEDED,
            amount=amount,
            decimals=decimals,
        )

    @classmethod
    def out_of_range(cls, amount: int, bits: int) -> "AmountError":
        return cls(
            f"Amount {amount} does not fit in an unsigned {bits}-bit integer.",
            ErrorCode.AMOUNT_OUT_OF_RANGE,
            amount=str(amount),
        )


class BalanceError(BridgeAdapterError):
    """
    Insufficient native balance - not recoverable without deposit
    """

    def __init__(
        self,
        message: str,
        owner: Optional[str] = None,
        required: Optional[str] = None,
        available: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.BALANCE_INSUFFICIENT_NATIVE,
            recoverable=False,
            details={"owner": owner, "required": required, "available": available},
        )
        self.owner = owner
        self.required = required
        self.available = available

    @classmethod
    def insufficient_native(cls, owner: str, available: str, required: str) -> "BalanceError":
        return cls(
            f"Insufficient SOL balance. You have {available} SOL but need {required} SOL.",
            owner=owner,
            required=required,
            available=available,
        )


class CallEncodingError(BridgeAdapterError):
    """
    Destination-chain call could not be encoded

    Raised when:
    - Function signature does not match name(type,...) grammar
    - Argument count differs from the declared type count
    - An argument cannot be coerced to its declared type
    - Target is not a valid address
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, recoverable=False, details=details)

    @classmethod
    def signature_syntax(cls, signature: str, reason: Optional[str] = None) -> "CallEncodingError":
        message = (
            "call selector must look like transfer(type1,type2,...) "
            "or function transfer(type1,type2,...)"
        )
        if reason:
            message = f"{message}: {reason}"
        return cls(
            message,
            ErrorCode.CALL_SIGNATURE_SYNTAX,
            details={"signature": signature, "reason": reason},
        )

    @classmethod
    def arity_mismatch(cls, signature: str, expected: int, actual: int) -> "CallEncodingError":
        return cls(
            f"number of call args must match function selector inputs: "
            f"{signature} expects {expected}, got {actual}",
            ErrorCode.CALL_ARITY_MISMATCH,
            details={"signature": signature, "expected": expected, "actual": actual},
        )

    @classmethod
    def type_coercion(cls, index: int, type_str: str, value: str, reason: str) -> "CallEncodingError":
        return cls(
            f"arg {index} must be {reason} for {type_str}, got \"{value}\"",
            ErrorCode.CALL_TYPE_COERCION,
            details={"index": index, "type": type_str, "value": value},
        )

    @classmethod
    def invalid_target(cls, target: str) -> "CallEncodingError":
        return cls(
            f"call target \"{target}\" must be a 0x-prefixed 20-byte hex address",
            ErrorCode.CALL_INVALID_TARGET,
            details={"target": target},
        )


class FeeRangeError(BridgeAdapterError):
    """Builder-code fee outside the uint8 range"""

    def __init__(self, fee_bps: object):
        super().__init__(
            f"bc-fee must be an integer between 0 and 255 (uint8), got {fee_bps!r}.",
            ErrorCode.CALL_FEE_RANGE,
            recoverable=False,
            details={"fee_bps": fee_bps},
        )
        self.fee_bps = fee_bps


class SubmissionError(BridgeAdapterError):
    """
    Signing, broadcast or confirmation failure

    SIGN_REJECTED is terminal and clears the staged request.
    Every other kind leaves the stage in place for a manual retry.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_BROADCAST_FAILED,
        signature: Optional[str] = None,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            original_error=original_error,
            details={"signature": signature},
        )
        self.signature = signature

    @property
    def clears_stage(self) -> bool:
        return self.code == ErrorCode.TX_SIGN_REJECTED

    @classmethod
    def sign_rejected(cls, reason: str = "User rejected the request") -> "SubmissionError":
        return cls(
            f"Bridge request was canceled: {reason}",
            ErrorCode.TX_SIGN_REJECTED,
        )

    @classmethod
    def sign_failed(cls, error: Exception) -> "SubmissionError":
        return cls(
            f"Signing failed: {error}",
            ErrorCode.TX_SIGN_FAILED,
            original_error=error,
        )

    @classmethod
    def broadcast_failed(cls, error: str, signature: Optional[str] = None) -> "SubmissionError":
        # Network issues are worth a manual retry
        recoverable = "timeout" in error.lower() or "connection" in error.lower()
        return cls(
            f"Failed to send transaction: {error}",
            ErrorCode.TX_BROADCAST_FAILED,
            signature=signature,
            recoverable=recoverable,
        )

    @classmethod
    def confirmation_timeout(cls, signature: str, commitment: str, timeout_seconds: float) -> "SubmissionError":
        return cls(
            f"Transaction {signature} not {commitment} after {timeout_seconds}s",
            ErrorCode.TX_CONFIRMATION_TIMEOUT,
            signature=signature,
            recoverable=True,
        )

    @classmethod
    def in_progress(cls) -> "SubmissionError":
        return cls(
            "A bridge submission is already in flight. Wait for it to finish.",
            ErrorCode.TX_SUBMISSION_IN_PROGRESS,
            recoverable=True,
        )


class SignerError(BridgeAdapterError):
    """
    Signing-related errors

    Raised when:
    - No signer configured
    - Signing operation fails
    - The wallet owner declined to sign
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_FAILED,
        recoverable: bool = False,
    ):
        super().__init__(message, code, recoverable=recoverable)

    @property
    def is_rejection(self) -> bool:
        return self.code == ErrorCode.SIGNER_REJECTED

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls(
            "No signer configured. Provide a keypair or a wallet signer.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Signing failed: {reason}", ErrorCode.SIGNER_FAILED)

    @classmethod
    def rejected(cls) -> "SignerError":
        return cls("User rejected the request", ErrorCode.SIGNER_REJECTED)


class StageError(BridgeAdapterError):
    """Execution requested with nothing staged"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STAGE_EMPTY, recoverable=False)

    @classmethod
    def empty(cls) -> "StageError":
        return cls("Execute blocked: no bridge command queued.")


class ConfigurationError(BridgeAdapterError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
