"""
Base-side contracts used for builder-code attribution

The same addresses are deployed on Base mainnet and Base Sepolia.
"""

# Flywheel fee-routing contract
FLYWHEEL_ADDRESS = "0x00000f14ad09382841db481403d1775adee1179f"

# Bridge campaign registered with Flywheel; receives bridged funds when a
# builder code is attached and forwards them to the user's destination
BRIDGE_CAMPAIGN_ADDRESS = "0xb61a842e4361c53c3f3c376df3758b330bd6201c"

# Multicall3
MULTICALL_ADDRESS = "0xca11bde05977b3631167028862be2a173976ca11"

# Function signatures
FLYWHEEL_SEND_SIGNATURE = "send(address,address,bytes)"
MULTICALL_SIGNATURE = "multicall((address,bytes)[])"

# abi.encode(destination, builderCode, feeBps)
BUILDER_HOOK_TYPES = ("address", "string", "uint8")

MAX_FEE_BPS = 255
