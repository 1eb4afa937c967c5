"""
Asset type definitions
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import AssetResolutionError
from .address import is_evm_address, parse_pubkey


class AssetKind(Enum):
    """How the asset is held on Solana"""
    NATIVE = "native"  # lamports held directly by the wallet
    TOKEN = "token"    # SPL token held in an associated token account


def validate_decimals(symbol: str, decimals: object) -> int:
    """Decimals must be an int in [0, 255] (u8 on chain)"""
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise AssetResolutionError.invalid_decimals(symbol, decimals)
    if decimals < 0 or decimals > 255:
        raise AssetResolutionError.invalid_decimals(symbol, decimals)
    return decimals


@dataclass(frozen=True)
class AssetPreset:
    """
    One row of an environment's asset table

    Attributes:
        symbol: Lowercase lookup key (e.g., "sol", "usdc")
        label: Display label (e.g., "SOL", "USDC")
        kind: Native or token
        decimals: Known decimals, if fixed
        remote_address: Base token address, if deployed
        mint_address: Solana mint, for token presets
    """
    symbol: str
    label: str
    kind: AssetKind
    decimals: Optional[int] = None
    remote_address: Optional[str] = None
    mint_address: Optional[str] = None


@dataclass(frozen=True)
class AssetOverrides:
    """Caller-supplied values that take precedence over presets"""
    mint: Optional[str] = None
    remote: Optional[str] = None
    decimals: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.mint is None and self.remote is None and self.decimals is None


@dataclass(frozen=True)
class AssetDescriptor:
    """
    Fully resolved cross-chain asset

    Attributes:
        symbol: Lowercase symbol, or the literal mint when resolved from an address
        label: Display label
        kind: Native or token
        decimals: Base-unit exponent (0-255)
        remote_address: Lowercase Base token address
        mint: Solana mint address (token kind only)
        token_program: Program owning the mint (token kind only)
    """
    symbol: str
    label: str
    kind: AssetKind
    decimals: int
    remote_address: str
    mint: Optional[str] = None
    token_program: Optional[str] = None

    def __post_init__(self):
        validate_decimals(self.label, self.decimals)
        if not is_evm_address(self.remote_address) or self.remote_address != self.remote_address.lower():
            raise AssetResolutionError.invalid_identity(self.label, "remote token", self.remote_address)

        if self.kind == AssetKind.TOKEN:
            if not self.mint:
                raise AssetResolutionError.missing_token_identity(self.label)
            if parse_pubkey(self.mint) is None:
                raise AssetResolutionError.invalid_identity(self.label, "mint", self.mint)
            if self.token_program is None or parse_pubkey(self.token_program) is None:
                raise AssetResolutionError.invalid_identity(
                    self.label, "token program", str(self.token_program)
                )
        elif self.mint is not None or self.token_program is not None:
            raise AssetResolutionError.invalid_identity(self.label, "mint", str(self.mint))

    @property
    def is_native(self) -> bool:
        return self.kind == AssetKind.NATIVE

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        if self.mint:
            return f"AssetDescriptor({self.label}, {self.mint[:8]}..., decimals={self.decimals})"
        return f"AssetDescriptor({self.label}, native, decimals={self.decimals})"
