"""
Bridge Program Instruction Builders

Instruction data is Anchor encoded: 8-byte discriminator followed by
little-endian Borsh fields.

    bridge_sol / bridge_spl args:
        outgoing_message_salt [u8; 32]
        to                    [u8; 20]
        remote_token          [u8; 20]
        amount                u64
        call                  Option<Call>

    Call:
        ty    u8 (0 = Call, 1 = DelegateCall)
        to    [u8; 20]
        value u128
        data  Vec<u8> (u32 length prefix)
"""

import struct
from typing import Optional, Tuple

from solders.instruction import Instruction, AccountMeta
from solders.pubkey import Pubkey

from .constants import (
    DISCRIMINATORS,
    BRIDGE_SEED,
    SOL_VAULT_SEED,
    TOKEN_VAULT_SEED,
    OUTGOING_MESSAGE_SEED,
    SALT_SIZE,
    EVM_ADDRESS_SIZE,
    MAX_U64,
    MAX_U128,
)
from ..token.constants import SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID
from ...types import ContractCallDescriptor
from ...errors import AmountError


def evm_address_bytes(address: str) -> bytes:
    """0x-prefixed hex address -> 20 raw bytes"""
    raw = bytes.fromhex(address[2:] if address.startswith("0x") else address)
    if len(raw) != EVM_ADDRESS_SIZE:
        raise ValueError(f"EVM address must be {EVM_ADDRESS_SIZE} bytes, got {len(raw)}")
    return raw


def derive_bridge_address(program_id: Pubkey) -> Pubkey:
    """Derive the bridge state PDA"""
    address, _ = Pubkey.find_program_address([BRIDGE_SEED], program_id)
    return address


def derive_sol_vault_address(program_id: Pubkey) -> Pubkey:
    """Derive the SOL vault PDA"""
    address, _ = Pubkey.find_program_address([SOL_VAULT_SEED], program_id)
    return address


def derive_token_vault_address(program_id: Pubkey, mint: Pubkey, remote_token: str) -> Pubkey:
    """Derive the token vault PDA for a (mint, remote token) pair"""
    seeds = [TOKEN_VAULT_SEED, bytes(mint), evm_address_bytes(remote_token)]
    address, _ = Pubkey.find_program_address(seeds, program_id)
    return address


def derive_outgoing_message_address(program_id: Pubkey, salt: bytes) -> Pubkey:
    """Derive the outgoing message PDA for a salt"""
    if len(salt) != SALT_SIZE:
        raise ValueError(f"Salt must be {SALT_SIZE} bytes, got {len(salt)}")
    address, _ = Pubkey.find_program_address([OUTGOING_MESSAGE_SEED, salt], program_id)
    return address


def encode_call(call: Optional[ContractCallDescriptor]) -> bytes:
    """Encode Option<Call>"""
    if call is None:
        return b"\x00"

    value = call.value_wei
    if value > MAX_U128:
        raise AmountError.out_of_range(value, 128)

    data = bytearray(b"\x01")
    data.extend(struct.pack("<B", call.kind.wire_value))
    data.extend(evm_address_bytes(call.target))
    data.extend(value.to_bytes(16, "little"))
    data.extend(struct.pack("<I", len(call.data)))
    data.extend(call.data)
    return bytes(data)


def encode_bridge_args(
    name: str,
    salt: bytes,
    to: str,
    remote_token: str,
    amount: int,
    call: Optional[ContractCallDescriptor] = None,
) -> bytes:
    """
    Encode bridge_sol / bridge_spl instruction data

    Raises:
        AmountError: If amount does not fit in u64
    """
    if amount < 0 or amount > MAX_U64:
        raise AmountError.out_of_range(amount, 64)

    data = bytearray(DISCRIMINATORS[name])
    data.extend(salt)
    data.extend(evm_address_bytes(to))
    data.extend(evm_address_bytes(remote_token))
    data.extend(struct.pack("<Q", amount))
    data.extend(encode_call(call))
    return bytes(data)


def build_bridge_sol_instruction(
    program_id: Pubkey,
    payer: Pubkey,
    gas_fee_receiver: Pubkey,
    salt: bytes,
    to: str,
    remote_token: str,
    amount: int,
    call: Optional[ContractCallDescriptor] = None,
) -> Tuple[Instruction, Pubkey]:
    """
    Build bridge_sol instruction.

    Lamports move from the payer into the SOL vault PDA.

    Returns:
        Tuple of (instruction, outgoing_message_address)
    """
    outgoing_message = derive_outgoing_message_address(program_id, salt)

    data = encode_bridge_args("bridge_sol", salt, to, remote_token, amount, call)

    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),                               # 0: payer
        AccountMeta(payer, is_signer=True, is_writable=True),                               # 1: from
        AccountMeta(gas_fee_receiver, is_signer=False, is_writable=True),                   # 2: gas_fee_receiver
        AccountMeta(derive_sol_vault_address(program_id), is_signer=False, is_writable=True),  # 3: sol_vault
        AccountMeta(derive_bridge_address(program_id), is_signer=False, is_writable=True),  # 4: bridge
        AccountMeta(outgoing_message, is_signer=False, is_writable=True),                   # 5: outgoing_message
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 6: system_program
    ]

    return Instruction(program_id, data, accounts), outgoing_message


def build_bridge_spl_instruction(
    program_id: Pubkey,
    payer: Pubkey,
    gas_fee_receiver: Pubkey,
    mint: Pubkey,
    from_token_account: Pubkey,
    salt: bytes,
    to: str,
    remote_token: str,
    amount: int,
    call: Optional[ContractCallDescriptor] = None,
    token_program: Optional[Pubkey] = None,
) -> Tuple[Instruction, Pubkey]:
    """
    Build bridge_spl instruction.

    Tokens move from the owner's token account into the token vault PDA.

    Returns:
        Tuple of (instruction, outgoing_message_address)
    """
    if token_program is None:
        token_program = Pubkey.from_string(TOKEN_PROGRAM_ID)

    outgoing_message = derive_outgoing_message_address(program_id, salt)
    token_vault = derive_token_vault_address(program_id, mint, remote_token)

    data = encode_bridge_args("bridge_spl", salt, to, remote_token, amount, call)

    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),                               # 0: payer
        AccountMeta(payer, is_signer=True, is_writable=True),                               # 1: from
        AccountMeta(gas_fee_receiver, is_signer=False, is_writable=True),                   # 2: gas_fee_receiver
        AccountMeta(mint, is_signer=False, is_writable=True),                               # 3: mint
        AccountMeta(from_token_account, is_signer=False, is_writable=True),                 # 4: from_token_account
        AccountMeta(derive_bridge_address(program_id), is_signer=False, is_writable=True),  # 5: bridge
        AccountMeta(token_vault, is_signer=False, is_writable=True),                        # 6: token_vault
        AccountMeta(outgoing_message, is_signer=False, is_writable=True),                   # 7: outgoing_message
        AccountMeta(token_program, is_signer=False, is_writable=False),                     # 8: token_program
        AccountMeta(Pubkey.from_string(SYSTEM_PROGRAM_ID), is_signer=False, is_writable=False),  # 9: system_program
    ]

    return Instruction(program_id, data, accounts), outgoing_message
