"""
Flywheel builder-code contracts on Base
"""

from .constants import (
    FLYWHEEL_ADDRESS,
    BRIDGE_CAMPAIGN_ADDRESS,
    MULTICALL_ADDRESS,
    FLYWHEEL_SEND_SIGNATURE,
    MULTICALL_SIGNATURE,
    BUILDER_HOOK_TYPES,
    MAX_FEE_BPS,
)

__all__ = [
    "FLYWHEEL_ADDRESS",
    "BRIDGE_CAMPAIGN_ADDRESS",
    "MULTICALL_ADDRESS",
    "FLYWHEEL_SEND_SIGNATURE",
    "MULTICALL_SIGNATURE",
    "BUILDER_HOOK_TYPES",
    "MAX_FEE_BPS",
]
