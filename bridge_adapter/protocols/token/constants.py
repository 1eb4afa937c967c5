"""
SPL Token Constants
"""

# Token Programs
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"

# Associated Token Program
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

# System Program
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Programs allowed to own a bridgeable mint
TOKEN_PROGRAMS = (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID)

# Mint account layout (shared by Token and Token-2022 base state):
# mint_authority COption<Pubkey> (36) + supply u64 (8) + decimals u8 (1) + ...
MINT_DECIMALS_OFFSET = 44
MINT_BASE_SIZE = 82

# Token account layout: mint (32) + owner (32) + amount u64 (8)
TOKEN_ACCOUNT_AMOUNT_OFFSET = 64
