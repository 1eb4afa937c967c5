"""
Network environment definitions

A BridgeEnvironment is an explicit value passed to the client and resolver.
Switching networks builds a new environment; nothing here mutates shared state.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from ..errors import ConfigurationError
from .asset import AssetKind, AssetPreset


NATIVE_SYMBOL = "sol"
NATIVE_DECIMALS = 9


@dataclass(frozen=True)
class BridgeEnvironment:
    """
    Network context for one bridge deployment

    Attributes:
        name: Environment key ("mainnet" or "devnet")
        label: Display label
        solana_rpc_url: Default Solana JSON-RPC endpoint
        base_chain_id: Destination chain id
        bridge_program_id: Bridge program on Solana (base58, may be empty if unconfigured)
        gas_fee_receiver: Account receiving the relay gas fee (base58, may be empty)
        assets: Asset preset table
        native_symbol: Symbol of the native asset
        commitment: Commitment level awaited after broadcast
    """
    name: str
    label: str
    solana_rpc_url: str
    base_chain_id: int
    bridge_program_id: str = ""
    gas_fee_receiver: str = ""
    assets: Tuple[AssetPreset, ...] = field(default_factory=tuple)
    native_symbol: str = NATIVE_SYMBOL
    commitment: str = "confirmed"

    def find_asset(self, symbol: str) -> Optional[AssetPreset]:
        """Case-insensitive preset lookup"""
        key = (symbol or "").strip().lower()
        for preset in self.assets:
            if preset.symbol == key:
                return preset
        return None

    def with_overrides(self, **changes) -> "BridgeEnvironment":
        """Return a copy with fields replaced"""
        return replace(self, **changes)

    @property
    def is_devnet(self) -> bool:
        return self.name == "devnet"


def _presets(sol_remote: str, usdc_mint: str, usdc_remote: str) -> Tuple[AssetPreset, ...]:
    return (
        AssetPreset(
            symbol=NATIVE_SYMBOL,
            label="SOL",
            kind=AssetKind.NATIVE,
            decimals=NATIVE_DECIMALS,
            remote_address=sol_remote or None,
        ),
        AssetPreset(
            symbol="usdc",
            label="USDC",
            kind=AssetKind.TOKEN,
            decimals=6,
            remote_address=usdc_remote or None,
            mint_address=usdc_mint,
        ),
    )


# Public per-network constants; deployment addresses come from BridgeConfig
_NETWORKS: Dict[str, dict] = {
    "mainnet": {
        "label": "Mainnet",
        "solana_rpc_url": "https://api.mainnet-beta.solana.com",
        "base_chain_id": 8453,
        "usdc_mint": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    },
    "devnet": {
        "label": "Devnet",
        "solana_rpc_url": "https://api.devnet.solana.com",
        "base_chain_id": 84532,
        "usdc_mint": "4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU",
    },
}


def available_environments() -> Tuple[str, ...]:
    return tuple(_NETWORKS)


def get_environment(name: Optional[str] = None, bridge_config=None) -> BridgeEnvironment:
    """
    Build the environment for a network

    Args:
        name: "mainnet" or "devnet" (defaults to config.bridge.environment)
        bridge_config: BridgeConfig supplying deployment addresses (uses global config if None)

    Returns:
        BridgeEnvironment

    Raises:
        ConfigurationError: If the network name is unknown
    """
    if bridge_config is None:
        from ..config import config as global_config
        bridge_config = global_config.bridge

    key = (name or bridge_config.environment or "").strip().lower()
    network = _NETWORKS.get(key)
    if network is None:
        raise ConfigurationError.invalid(
            "BRIDGE_ENVIRONMENT",
            f"unknown environment '{key}', expected one of {', '.join(_NETWORKS)}",
        )

    return BridgeEnvironment(
        name=key,
        label=network["label"],
        solana_rpc_url=network["solana_rpc_url"],
        base_chain_id=network["base_chain_id"],
        bridge_program_id=bridge_config.program_id,
        gas_fee_receiver=bridge_config.gas_fee_receiver,
        assets=_presets(
            sol_remote=(bridge_config.sol_remote_address or "").lower(),
            usdc_mint=network["usdc_mint"],
            usdc_remote=(bridge_config.usdc_remote_address or "").lower(),
        ),
    )
