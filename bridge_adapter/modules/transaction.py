"""
Transaction Module

Assembles the Solana instructions that carry an outgoing bridge message.
"""

import logging
import os
from typing import List, Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from ..errors import ConfigurationError
from ..types import (
    AssetKind,
    BridgeEnvironment,
    BridgeRequest,
    BridgeTransaction,
    TokenAccountCheck,
    parse_pubkey,
)
from ..protocols.bridge import (
    SALT_SIZE,
    build_bridge_sol_instruction,
    build_bridge_spl_instruction,
)
from ..protocols.token import (
    get_associated_token_address,
    build_create_ata_idempotent_instruction,
)

logger = logging.getLogger(__name__)


def _require_pubkey(value: str, param: str) -> Pubkey:
    if not value:
        raise ConfigurationError.missing(param)
    pubkey = parse_pubkey(value.strip())
    if pubkey is None:
        raise ConfigurationError.invalid(param, f"'{value}' is not a valid Solana public key")
    return pubkey


class BridgeTransactionBuilder:
    """
    Builds bridge_sol / bridge_spl instructions for a request

    Usage:
        builder = BridgeTransactionBuilder(environment)
        tx = builder.build(request, token_account=check)
    """

    def __init__(self, environment: BridgeEnvironment):
        self._environment = environment

    @property
    def program_id(self) -> Pubkey:
        return _require_pubkey(self._environment.bridge_program_id, "BRIDGE_SOLANA_PROGRAM_ID")

    @property
    def gas_fee_receiver(self) -> Pubkey:
        return _require_pubkey(self._environment.gas_fee_receiver, "BRIDGE_GAS_FEE_RECEIVER")

    def build(
        self,
        request: BridgeRequest,
        token_account: Optional[TokenAccountCheck] = None,
        salt: Optional[bytes] = None,
    ) -> BridgeTransaction:
        """
        Build the instructions for one request

        Args:
            request: Validated bridge request
            token_account: Result of the token account probe (token requests);
                when it says MUST_BE_CREATED an idempotent ATA creation
                instruction is placed first in the same transaction
            salt: Outgoing message salt (random 32 bytes if omitted)

        Returns:
            BridgeTransaction

        Raises:
            ConfigurationError: If the program id or gas fee receiver is missing/invalid
            AmountError: If the amount does not fit in u64
        """
        program_id = self.program_id
        gas_fee_receiver = self.gas_fee_receiver
        payer = Pubkey.from_string(request.owner)

        if salt is None:
            salt = os.urandom(SALT_SIZE)

        asset = request.asset
        instructions: List[Instruction] = []
        creates_token_account = False

        if asset.kind == AssetKind.NATIVE:
            instruction, outgoing_message = build_bridge_sol_instruction(
                program_id=program_id,
                payer=payer,
                gas_fee_receiver=gas_fee_receiver,
                salt=salt,
                to=request.destination,
                remote_token=asset.remote_address,
                amount=request.amount,
                call=request.call,
            )
            instructions.append(instruction)
        else:
            mint = Pubkey.from_string(asset.mint)
            token_program = Pubkey.from_string(asset.token_program)

            if token_account is not None:
                from_token_account = token_account.address
            else:
                from_token_account = get_associated_token_address(payer, mint, token_program)

            if token_account is not None and token_account.must_be_created:
                instructions.append(
                    build_create_ata_idempotent_instruction(payer, payer, mint, token_program)
                )
                creates_token_account = True

            instruction, outgoing_message = build_bridge_spl_instruction(
                program_id=program_id,
                payer=payer,
                gas_fee_receiver=gas_fee_receiver,
                mint=mint,
                from_token_account=from_token_account,
                salt=salt,
                to=request.destination,
                remote_token=asset.remote_address,
                amount=request.amount,
                call=request.call,
                token_program=token_program,
            )
            instructions.append(instruction)

        logger.info(
            f"Built bridge transaction: {request.ui_amount} {asset.label} -> {request.destination}, "
            f"outgoing_message={outgoing_message}, create_ata={creates_token_account}"
        )

        return BridgeTransaction(
            instructions=tuple(instructions),
            payer=payer,
            outgoing_message=outgoing_message,
            salt=salt,
            creates_token_account=creates_token_account,
        )
