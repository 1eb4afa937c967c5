"""
Bridge request, staging and transaction type definitions
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from .asset import AssetDescriptor
from .call import ContractCallDescriptor, CallParameters, BuilderHookParameters


@dataclass(frozen=True)
class BridgeRequest:
    """
    A fully validated bridge request (in memory only)

    Attributes:
        asset: Resolved asset
        amount: Amount in base units (> 0)
        destination: Lowercase Base address receiving the funds
        owner: Signer public key (base58)
        call: Optional call executed on Base
    """
    asset: AssetDescriptor
    amount: int
    destination: str
    owner: str
    call: Optional[ContractCallDescriptor] = None

    @property
    def ui_amount(self) -> str:
        """Amount formatted in asset units"""
        from ..modules.amount import AmountCodec
        return AmountCodec.format(self.amount, self.asset.decimals)

    def __str__(self) -> str:
        suffix = f" +call {self.call.target}" if self.call else ""
        return f"BridgeRequest({self.ui_amount} {self.asset.label} -> {self.destination}{suffix})"


class TokenAccountState(Enum):
    """Whether the owner's associated token account already exists"""
    EXISTING = "existing"
    MUST_BE_CREATED = "must_be_created"


@dataclass(frozen=True)
class TokenAccountCheck:
    """Result of the token account probe"""
    state: TokenAccountState
    address: Pubkey

    @property
    def must_be_created(self) -> bool:
        return self.state == TokenAccountState.MUST_BE_CREATED


@dataclass(frozen=True)
class BridgeTransaction:
    """
    Instructions for one bridge submission

    Attributes:
        instructions: Ordered instructions (ATA creation first when needed)
        payer: Fee payer and signer
        outgoing_message: PDA holding the outgoing bridge message
        salt: 32-byte salt used to derive the outgoing message
        creates_token_account: Whether an ATA creation instruction is included
    """
    instructions: Tuple[Instruction, ...]
    payer: Pubkey
    outgoing_message: Pubkey
    salt: bytes
    creates_token_account: bool = False


@dataclass(frozen=True)
class PendingStage:
    """
    A request waiting for explicit execution

    Attributes:
        request: The validated request
        created_at: When the request was staged
        builder: Builder-code inputs, if any
        call_parameters: Raw call inputs, if any
    """
    request: BridgeRequest
    created_at: datetime
    builder: Optional[BuilderHookParameters] = None
    call_parameters: Optional[CallParameters] = None
