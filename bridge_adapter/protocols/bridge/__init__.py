"""
Solana -> Base bridge program
"""

from .constants import DISCRIMINATORS, SALT_SIZE, MAX_U64, MAX_U128
from .instructions import (
    evm_address_bytes,
    derive_bridge_address,
    derive_sol_vault_address,
    derive_token_vault_address,
    derive_outgoing_message_address,
    encode_call,
    encode_bridge_args,
    build_bridge_sol_instruction,
    build_bridge_spl_instruction,
)

__all__ = [
    "DISCRIMINATORS",
    "SALT_SIZE",
    "MAX_U64",
    "MAX_U128",
    "evm_address_bytes",
    "derive_bridge_address",
    "derive_sol_vault_address",
    "derive_token_vault_address",
    "derive_outgoing_message_address",
    "encode_call",
    "encode_bridge_args",
    "build_bridge_sol_instruction",
    "build_bridge_spl_instruction",
]
