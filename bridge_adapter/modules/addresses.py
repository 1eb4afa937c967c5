"""
Destination address resolution

Name services (ENS, basenames) are out of scope; they plug in through the
AddressResolver protocol. The default resolver accepts literal addresses only.
"""

from typing import Protocol, runtime_checkable

from ..types import normalize_evm_address


@runtime_checkable
class AddressResolver(Protocol):
    """Turns user destination text into a lowercase 0x address"""

    def resolve(self, destination: str) -> str:
        ...


class LiteralAddressResolver:
    """Accepts 0x + 40 hex characters, returns it lowercased"""

    def resolve(self, destination: str) -> str:
        return normalize_evm_address(destination, "destination")
