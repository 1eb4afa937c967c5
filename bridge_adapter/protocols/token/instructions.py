"""
SPL Token helpers

Associated token account derivation and creation, plus decoding of the
few mint / token account fields the bridge needs.
"""

import base64
import struct
from typing import Optional, Any, Dict

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey

from .constants import (
    TOKEN_PROGRAM_ID,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    MINT_DECIMALS_OFFSET,
    MINT_BASE_SIZE,
    TOKEN_ACCOUNT_AMOUNT_OFFSET,
)


def get_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program: Optional[Pubkey] = None,
) -> Pubkey:
    """
    Get associated token account address.

    Args:
        owner: Wallet owner
        mint: Token mint
        token_program: Token program (defaults to Tokenkeg)

    Returns:
        ATA address
    """
    ata_program = Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
    if token_program is None:
        token_program = Pubkey.from_string(TOKEN_PROGRAM_ID)

    seeds = [
        bytes(owner),
        bytes(token_program),
        bytes(mint),
    ]

    address, _ = Pubkey.find_program_address(seeds, ata_program)
    return address


def build_create_ata_idempotent_instruction(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program: Optional[Pubkey] = None,
) -> Instruction:
    """
    Build create_associated_token_account_idempotent instruction.

    This creates the ATA if it doesn't exist, or does nothing if it does.

    Args:
        payer: Fee payer
        owner: Account owner
        mint: Token mint
        token_program: Token program (defaults to Tokenkeg)

    Returns:
        Instruction to create ATA
    """
    ata_program = Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID)
    system_program = Pubkey.from_string(SYSTEM_PROGRAM_ID)

    if token_program is None:
        token_program = Pubkey.from_string(TOKEN_PROGRAM_ID)

    ata_address = get_associated_token_address(owner, mint, token_program)

    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(ata_address, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(system_program, is_signer=False, is_writable=False),
        AccountMeta(token_program, is_signer=False, is_writable=False),
    ]

    # Instruction data: single byte 1 for idempotent create
    return Instruction(ata_program, bytes([1]), accounts)


def decode_account_data(account_info: Dict[str, Any]) -> bytes:
    """Decode the base64 data field of a getAccountInfo value"""
    data = account_info.get("data")
    if isinstance(data, list) and data:
        return base64.b64decode(data[0])
    if isinstance(data, str):
        return base64.b64decode(data)
    return b""


def parse_mint_decimals(data: bytes) -> Optional[int]:
    """Read decimals from raw mint account data"""
    if len(data) < MINT_BASE_SIZE:
        return None
    return data[MINT_DECIMALS_OFFSET]


def parse_token_account_amount(data: bytes) -> Optional[int]:
    """Read the token amount from raw token account data"""
    if len(data) < TOKEN_ACCOUNT_AMOUNT_OFFSET + 8:
        return None
    return struct.unpack_from("<Q", data, TOKEN_ACCOUNT_AMOUNT_OFFSET)[0]
