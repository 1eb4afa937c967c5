"""
Assets Module

Resolves a user's asset reference (a preset symbol such as "sol" or "usdc",
or a literal mint address) plus optional overrides into a complete
AssetDescriptor for the active environment.
"""

import binascii
import logging
from typing import Optional, Tuple

from ..errors import AssetResolutionError, RpcError
from ..types import (
    AssetKind,
    AssetOverrides,
    AssetDescriptor,
    BridgeEnvironment,
    NATIVE_DECIMALS,
    is_evm_address,
    looks_like_base58_address,
    parse_pubkey,
)
from ..types.asset import validate_decimals
from ..protocols.token import (
    TOKEN_PROGRAM_ID,
    TOKEN_PROGRAMS,
    decode_account_data,
    parse_mint_decimals,
)

logger = logging.getLogger(__name__)


class AssetResolver:
    """
    Asset resolution against an explicit environment

    Resolution order:
    - literal base58 input is always a token; the input is the mint
    - overrides win over preset values
    - decimals: override, preset, on-chain mint, native default (9)

    Usage:
        resolver = AssetResolver(rpc, environment)

        sol = resolver.resolve("sol")
        token = resolver.resolve(mint_address, AssetOverrides(remote="0x..."))
    """

    def __init__(self, rpc, environment: BridgeEnvironment):
        """
        Args:
            rpc: RpcClient used for the best-effort mint lookup (may be None)
            environment: Default environment for preset lookup
        """
        self._rpc = rpc
        self._environment = environment

    @property
    def environment(self) -> BridgeEnvironment:
        return self._environment

    def resolve(
        self,
        asset: str,
        overrides: Optional[AssetOverrides] = None,
        environment: Optional[BridgeEnvironment] = None,
    ) -> AssetDescriptor:
        """
        Resolve an asset reference

        Args:
            asset: Preset symbol (case-insensitive) or literal mint address
            overrides: Optional mint / remote / decimals overrides
            environment: Environment to use instead of the resolver's default

        Returns:
            AssetDescriptor

        Raises:
            AssetResolutionError: MISSING_REMOTE, INVALID_IDENTITY,
                MISSING_TOKEN_IDENTITY, UNKNOWN_DECIMALS or INVALID_DECIMALS
        """
        env = environment or self._environment
        overrides = overrides or AssetOverrides()

        raw = (asset or "").strip()
        normalized = raw.lower()
        is_literal = looks_like_base58_address(raw)
        preset = env.find_asset(normalized)

        is_token = (
            is_literal
            or not overrides.is_empty
            or normalized != env.native_symbol
            or (preset is not None and preset.kind == AssetKind.TOKEN)
        )

        symbol = raw if is_literal else normalized
        if preset:
            label = preset.label
        else:
            label = raw if is_literal else normalized.upper()

        remote = overrides.remote if overrides.remote is not None else (preset.remote_address if preset else None)
        if not remote:
            raise AssetResolutionError.missing_remote(normalized)
        remote = remote.strip().lower()
        if not is_evm_address(remote):
            raise AssetResolutionError.invalid_identity(label, "remote token", remote)

        decimals = overrides.decimals if overrides.decimals is not None else (preset.decimals if preset else None)

        if not is_token:
            if decimals is None:
                decimals = NATIVE_DECIMALS
            validate_decimals(label, decimals)
            logger.debug(f"Resolved native asset {label} (decimals={decimals})")
            return AssetDescriptor(
                symbol=symbol,
                label=label,
                kind=AssetKind.NATIVE,
                decimals=decimals,
                remote_address=remote,
            )

        mint = raw if is_literal else (overrides.mint or (preset.mint_address if preset else None))
        if not mint:
            raise AssetResolutionError.missing_token_identity(normalized)
        mint = mint.strip()
        if parse_pubkey(mint) is None:
            raise AssetResolutionError.invalid_identity(label, "mint", mint)

        token_program, on_chain_decimals = self._lookup_mint(mint)
        if decimals is None:
            decimals = on_chain_decimals
        if decimals is None:
            raise AssetResolutionError.unknown_decimals(normalized)
        validate_decimals(label, decimals)

        logger.debug(
            f"Resolved token asset {label}: mint={mint}, program={token_program}, decimals={decimals}"
        )
        return AssetDescriptor(
            symbol=symbol,
            label=label,
            kind=AssetKind.TOKEN,
            decimals=decimals,
            remote_address=remote,
            mint=mint,
            token_program=token_program,
        )

    def _lookup_mint(self, mint: str) -> Tuple[str, Optional[int]]:
        """
        Best-effort mint lookup

        Returns:
            (owning token program, decimals or None)
        """
        if self._rpc is None:
            return TOKEN_PROGRAM_ID, None

        try:
            account_info = self._rpc.get_account_info(mint, encoding="base64")
        except RpcError as e:
            logger.warning(f"Mint lookup failed for {mint}, using defaults: {e}")
            return TOKEN_PROGRAM_ID, None

        if not account_info:
            logger.info(f"Mint {mint} not found on chain")
            return TOKEN_PROGRAM_ID, None

        owner = account_info.get("owner")
        if owner not in TOKEN_PROGRAMS:
            logger.warning(f"Account {mint} is owned by {owner}, not a token program")
            return TOKEN_PROGRAM_ID, None

        try:
            return owner, parse_mint_decimals(decode_account_data(account_info))
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Could not decode mint data for {mint}, using defaults: {e}")
            return TOKEN_PROGRAM_ID, None
