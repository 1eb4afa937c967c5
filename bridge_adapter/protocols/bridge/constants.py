"""
Solana -> Base Bridge Program Constants
"""

import hashlib


def _anchor_discriminator(name: str) -> bytes:
    """Compute Anchor discriminator for instruction name"""
    return hashlib.sha256(f"global:{name}".encode("utf-8")).digest()[:8]


# Anchor discriminators for instructions
# Computed as sha256("global:<instruction_name>")[0:8]
DISCRIMINATORS = {
    "bridge_sol": _anchor_discriminator("bridge_sol"),
    "bridge_spl": _anchor_discriminator("bridge_spl"),
}

# PDA seeds
BRIDGE_SEED = b"bridge"
SOL_VAULT_SEED = b"sol_vault"
TOKEN_VAULT_SEED = b"token_vault"
OUTGOING_MESSAGE_SEED = b"outgoing_message"

# Outgoing message salt length (bytes)
SALT_SIZE = 32

# EVM address length (bytes)
EVM_ADDRESS_SIZE = 20

# Integer widths used in instruction data
MAX_U64 = 2 ** 64 - 1
MAX_U128 = 2 ** 128 - 1
