"""
Calls Module

Parses human-written function signatures and ABI-encodes calls that the
bridge executes on Base once the message is relayed.

Supported signature forms:
    transfer(address,uint256)
    function transfer(address,uint256)
    function (address,uint256)          -> name defaults to customCall
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from eth_abi import encode, is_encodable, is_encodable_type
from eth_abi.exceptions import EncodingError, ParseError
from eth_abi.grammar import normalize
from web3 import Web3

from ..errors import CallEncodingError, ErrorCode
from ..types import CallKind, ContractCallDescriptor, is_evm_address
from ..types.call import ETH_DECIMALS
from .amount import AmountCodec

logger = logging.getLogger(__name__)


DEFAULT_FUNCTION_NAME = "customCall"

_KEYWORD_SIGNATURE = re.compile(r"^function(?:\s+([A-Za-z_][A-Za-z0-9_]*))?\s*\((.*)\)$")
_BARE_SIGNATURE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\((.*)\)$")

_DIGITS = re.compile(r"^[0-9]+$")
_HEX_BYTES = re.compile(r"^0x[0-9a-fA-F]*$")


@dataclass(frozen=True)
class FunctionSignature:
    """Parsed function signature with canonical (normalized) types"""
    name: str
    types: Tuple[str, ...]

    @property
    def canonical(self) -> str:
        return f"{self.name}({','.join(self.types)})"

    @property
    def selector(self) -> bytes:
        return function_selector(self.canonical)


def function_selector(canonical_signature: str) -> bytes:
    """First 4 bytes of keccak256 over the canonical signature"""
    return bytes(Web3.keccak(text=canonical_signature)[:4])


def encode_function_data(canonical_signature: str, types: Sequence[str], values: Sequence[Any]) -> bytes:
    """Selector followed by the standard head/tail ABI encoding of values"""
    return function_selector(canonical_signature) + encode(list(types), list(values))


def parse_signature(signature: str) -> FunctionSignature:
    """
    Parse a function signature

    Raises:
        CallEncodingError: SIGNATURE_SYNTAX if the text does not match the
            grammar or declares a type eth_abi cannot encode
    """
    text = (signature or "").strip()

    match = _KEYWORD_SIGNATURE.match(text)
    if match:
        name = match.group(1) or DEFAULT_FUNCTION_NAME
        params = match.group(2)
    else:
        match = _BARE_SIGNATURE.match(text)
        if not match:
            raise CallEncodingError.signature_syntax(text)
        name, params = match.group(1), match.group(2)

    types: List[str] = []
    for raw_type in params.split(","):
        type_str = raw_type.strip()
        if not type_str:
            continue
        try:
            canonical = normalize(type_str)
            supported = is_encodable_type(canonical)
        except (ParseError, ValueError):
            supported = False
        if not supported:
            raise CallEncodingError.signature_syntax(text, f"unsupported type \"{type_str}\"")
        types.append(canonical)

    return FunctionSignature(name=name, types=tuple(types))


class ArgumentCoercer:
    """Turns one textual argument into the Python value eth_abi expects"""

    description = "a value"

    def __init__(self, type_str: str):
        self.type_str = type_str

    def coerce(self, index: int, raw: str) -> Any:
        return raw

    def fail(self, index: int, raw: str, reason: Optional[str] = None) -> CallEncodingError:
        return CallEncodingError.type_coercion(index, self.type_str, raw, reason or self.description)


class AddressArg(ArgumentCoercer):
    description = "a 0x-prefixed 20-byte hex address"

    def coerce(self, index: int, raw: str) -> str:
        if not is_evm_address(raw):
            raise self.fail(index, raw)
        return Web3.to_checksum_address(raw.lower())


class UintArg(ArgumentCoercer):
    description = "a non-negative base-10 integer"

    def coerce(self, index: int, raw: str) -> int:
        if not _DIGITS.match(raw):
            raise self.fail(index, raw)
        return int(raw)


class IntArg(UintArg):
    """Signed types take the same unsigned digit text; a leading "-" is rejected"""


class BytesArg(ArgumentCoercer):
    description = "0x-prefixed hex bytes"

    def coerce(self, index: int, raw: str) -> bytes:
        if not _HEX_BYTES.match(raw) or len(raw) % 2:
            raise self.fail(index, raw)
        return bytes.fromhex(raw[2:])


class RawArg(ArgumentCoercer):
    """Passed through unchanged (string and other types)"""


def coercer_for(type_str: str) -> ArgumentCoercer:
    """Select the coercion rule for a canonical ABI type"""
    if "[" in type_str or type_str.startswith("("):
        return RawArg(type_str)
    if type_str == "address":
        return AddressArg(type_str)
    if type_str.startswith("uint"):
        return UintArg(type_str)
    if type_str.startswith("int"):
        return IntArg(type_str)
    if type_str.startswith("bytes"):
        return BytesArg(type_str)
    return RawArg(type_str)


class CallEncoder:
    """
    Validates and encodes destination-chain calls

    Usage:
        encoder = CallEncoder()
        call = encoder.encode(
            "0x0000000000000000000000000000000000000001",
            "transfer(address,uint256)",
            ["0x0000000000000000000000000000000000000002", "1000"],
        )
    """

    def encode_arguments(self, signature: FunctionSignature, args: Sequence[str]) -> bytes:
        """
        ABI-encode textual arguments against a parsed signature

        Raises:
            CallEncodingError: ARITY_MISMATCH or TYPE_COERCION
        """
        if len(args) != len(signature.types):
            raise CallEncodingError.arity_mismatch(signature.canonical, len(signature.types), len(args))

        values = []
        for position, (type_str, raw) in enumerate(zip(signature.types, args), start=1):
            coercer = coercer_for(type_str)
            text = raw.strip() if isinstance(raw, str) else str(raw)
            value = coercer.coerce(position, text)
            if not is_encodable(type_str, value):
                raise coercer.fail(position, str(raw), f"{coercer.description} that fits")
            values.append(value)

        try:
            return encode(list(signature.types), values)
        except EncodingError as e:
            raise CallEncodingError(
                f"could not encode arguments for {signature.canonical}: {e}",
                ErrorCode.CALL_TYPE_COERCION,
                details={"signature": signature.canonical},
            )

    def encode(
        self,
        target: str,
        signature: str,
        args: Sequence[str] = (),
        value: Optional[str] = None,
    ) -> ContractCallDescriptor:
        """
        Build a direct call descriptor

        Args:
            target: Contract address on Base
            signature: Function signature text
            args: Textual arguments, one per declared type
            value: Optional ETH value as decimal text

        Returns:
            ContractCallDescriptor of kind DIRECT

        Raises:
            CallEncodingError: On any signature, arity, coercion or target problem
            AmountError: If value is not a valid ETH amount
        """
        target_text = (target or "").strip()
        if not is_evm_address(target_text):
            raise CallEncodingError.invalid_target(target_text)

        parsed = parse_signature(signature)
        payload = parsed.selector + self.encode_arguments(parsed, list(args))

        value_text = None
        if value is not None and str(value).strip():
            value_text = str(value).strip()
            AmountCodec.to_units(value_text, ETH_DECIMALS, allow_zero=True)

        logger.debug(f"Encoded {parsed.canonical} for {target_text.lower()} ({len(payload)} bytes)")

        return ContractCallDescriptor(
            kind=CallKind.DIRECT,
            target=target_text.lower(),
            data=payload,
            value=value_text,
        )
