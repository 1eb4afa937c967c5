"""
SPL Token program helpers
"""

from .constants import (
    TOKEN_PROGRAM_ID,
    TOKEN_2022_PROGRAM_ID,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAMS,
)
from .instructions import (
    get_associated_token_address,
    build_create_ata_idempotent_instruction,
    decode_account_data,
    parse_mint_decimals,
    parse_token_account_amount,
)

__all__ = [
    "TOKEN_PROGRAM_ID",
    "TOKEN_2022_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "TOKEN_PROGRAMS",
    "get_associated_token_address",
    "build_create_ata_idempotent_instruction",
    "decode_account_data",
    "parse_mint_decimals",
    "parse_token_account_amount",
]
