"""
Address formats used on both sides of the bridge
"""

import re
from typing import Optional

from solders.pubkey import Pubkey

from ..errors import AddressError


# Base (EVM) addresses: 0x + 20 bytes hex
EVM_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")

# Solana public keys rendered in base58
BASE58_ADDRESS_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_evm_address(value: Optional[str]) -> bool:
    """Check 0x-prefixed 20-byte hex"""
    return bool(value) and EVM_ADDRESS_PATTERN.match(value) is not None


def normalize_evm_address(value: str, label: str = "destination") -> str:
    """
    Validate and lowercase a Base address

    Args:
        value: Address text (surrounding whitespace is ignored)
        label: Name used in the error message

    Returns:
        Lowercase 0x-prefixed address

    Raises:
        AddressError: If the text is not 0x + 40 hex characters
    """
    text = (value or "").strip()
    if not EVM_ADDRESS_PATTERN.match(text):
        raise AddressError(label, value)
    return text.lower()


def looks_like_base58_address(value: Optional[str]) -> bool:
    """Check the textual shape of a Solana address (no curve or length decode)"""
    return bool(value) and BASE58_ADDRESS_PATTERN.match(value) is not None


def parse_pubkey(value: str) -> Optional[Pubkey]:
    """Parse a base58 public key, returning None when it does not decode to 32 bytes"""
    if not looks_like_base58_address(value):
        return None
    try:
        return Pubkey.from_string(value)
    except ValueError:
        return None
