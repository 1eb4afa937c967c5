"""
Builder Hooks Module

Builder-code attribution routes a fee through the Flywheel contract on Base.
When the user also attaches their own call, both are bundled into a single
Multicall3 delegatecall so they succeed or fail together.
"""

import logging
from typing import Optional

from eth_abi import encode
from web3 import Web3

from ..errors import FeeRangeError
from ..types import CallKind, ContractCallDescriptor, normalize_evm_address
from ..protocols.flywheel import (
    FLYWHEEL_ADDRESS,
    BRIDGE_CAMPAIGN_ADDRESS,
    MULTICALL_ADDRESS,
    FLYWHEEL_SEND_SIGNATURE,
    MULTICALL_SIGNATURE,
    BUILDER_HOOK_TYPES,
    MAX_FEE_BPS,
)
from .calls import encode_function_data

logger = logging.getLogger(__name__)


def validate_fee_bps(fee_bps: object) -> int:
    """Fee must be a plain int in [0, 255] (uint8)"""
    if isinstance(fee_bps, bool) or not isinstance(fee_bps, int):
        raise FeeRangeError(fee_bps)
    if fee_bps < 0 or fee_bps > MAX_FEE_BPS:
        raise FeeRangeError(fee_bps)
    return fee_bps


class BuilderHookComposer:
    """
    Builds the fee-routing call and merges it with a user call

    Usage:
        composer = BuilderHookComposer()
        hook = composer.compose(destination, "my-app", 25, asset.remote_address)
        call = composer.merge(user_call, hook)
    """

    def __init__(
        self,
        flywheel_address: str = FLYWHEEL_ADDRESS,
        campaign_address: str = BRIDGE_CAMPAIGN_ADDRESS,
        multicall_address: str = MULTICALL_ADDRESS,
    ):
        self.flywheel_address = flywheel_address.lower()
        self.campaign_address = campaign_address.lower()
        self.multicall_address = multicall_address.lower()

    @property
    def bridge_recipient(self) -> str:
        """Where bridged funds land when a builder code is attached"""
        return self.campaign_address

    def compose(
        self,
        destination: str,
        builder_code: str,
        fee_bps: int,
        remote_token: str,
    ) -> ContractCallDescriptor:
        """
        Build the Flywheel send() call

        Args:
            destination: User's Base address (receives the funds net of fee)
            builder_code: Builder attribution code
            fee_bps: Fee in basis points (0-255)
            remote_token: Base token being bridged

        Returns:
            Direct call to the Flywheel contract, value "0"

        Raises:
            FeeRangeError: If fee_bps is not an int in [0, 255]
            AddressError: If destination or remote_token is malformed
        """
        fee = validate_fee_bps(fee_bps)
        user = normalize_evm_address(destination, "destination")
        token = normalize_evm_address(remote_token, "remote token")

        hook_data = encode(
            list(BUILDER_HOOK_TYPES),
            [Web3.to_checksum_address(user), str(builder_code), fee],
        )
        payload = encode_function_data(
            FLYWHEEL_SEND_SIGNATURE,
            ["address", "address", "bytes"],
            [
                Web3.to_checksum_address(self.campaign_address),
                Web3.to_checksum_address(token),
                hook_data,
            ],
        )

        logger.debug(f"Composed builder hook: code={builder_code}, fee_bps={fee}, recipient={user}")

        return ContractCallDescriptor(
            kind=CallKind.DIRECT,
            target=self.flywheel_address,
            data=payload,
            value="0",
        )

    def merge(
        self,
        primary: Optional[ContractCallDescriptor],
        secondary: ContractCallDescriptor,
    ) -> ContractCallDescriptor:
        """
        Combine a user call with the fee-routing call

        Args:
            primary: User call (may be None)
            secondary: Fee-routing call

        Returns:
            secondary unchanged when there is no primary, otherwise a BATCHED
            multicall over [secondary, primary] that carries no value of its own
        """
        if primary is None:
            return secondary

        calls = [
            (Web3.to_checksum_address(secondary.target), secondary.data),
            (Web3.to_checksum_address(primary.target), primary.data),
        ]
        payload = encode_function_data(MULTICALL_SIGNATURE, ["(address,bytes)[]"], [calls])

        logger.debug(f"Merged builder hook with call to {primary.target} via multicall")

        return ContractCallDescriptor(
            kind=CallKind.BATCHED,
            target=self.multicall_address,
            data=payload,
            value="0",
        )
