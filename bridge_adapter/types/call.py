"""
Destination-chain call type definitions
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..errors import CallEncodingError
from .address import is_evm_address


class CallKind(Enum):
    """
    How the bridge executes the attached call on Base

    Wire values match the bridge program's CallType enum.
    """
    DIRECT = 0   # Call
    BATCHED = 1  # DelegateCall (used for multicall bundles)

    @property
    def wire_value(self) -> int:
        return self.value


ETH_DECIMALS = 18


@dataclass(frozen=True)
class ContractCallDescriptor:
    """
    Encoded call executed on Base after the bridge message lands

    Attributes:
        kind: Direct call or batched (delegatecall) bundle
        target: Lowercase contract address
        data: Selector + ABI-encoded arguments
        value: ETH sent with the call, as decimal text (None means zero)
    """
    kind: CallKind
    target: str
    data: bytes
    value: Optional[str] = None

    def __post_init__(self):
        if not is_evm_address(self.target):
            raise CallEncodingError.invalid_target(self.target)
        if self.target != self.target.lower():
            object.__setattr__(self, "target", self.target.lower())

    @property
    def value_wei(self) -> int:
        """Call value in wei (zero when unset)"""
        if self.value is None:
            return 0
        # Import here to avoid circular import
        from ..modules.amount import AmountCodec
        return AmountCodec.to_units(self.value, ETH_DECIMALS, allow_zero=True)

    @property
    def selector(self) -> bytes:
        return self.data[:4]

    def __repr__(self) -> str:
        return (
            f"ContractCallDescriptor({self.kind.name}, {self.target}, "
            f"data=0x{self.data[:4].hex()}..., value={self.value})"
        )


@dataclass(frozen=True)
class CallParameters:
    """User-facing call inputs, kept on the stage for display"""
    target: str
    signature: str
    args: Tuple[str, ...] = ()
    value: Optional[str] = None


@dataclass(frozen=True)
class BuilderHookParameters:
    """Builder-code attribution inputs"""
    destination: str
    builder_code: str
    fee_bps: int
