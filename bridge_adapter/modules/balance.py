"""
Balance Module

Pre-flight feasibility checks run before anything is signed.
"""

import logging

from solders.pubkey import Pubkey

from ..errors import BalanceError, RpcError
from ..types import (
    AssetDescriptor,
    NATIVE_DECIMALS,
    TokenAccountCheck,
    TokenAccountState,
)
from ..protocols.token import (
    get_associated_token_address,
    decode_account_data,
    parse_token_account_amount,
)
from .amount import AmountCodec

logger = logging.getLogger(__name__)


class BalanceGuard:
    """
    Native and token balance checks

    Usage:
        guard = BalanceGuard(rpc)
        guard.check_native(owner, 500_000_000)
        check = guard.check_token(owner, usdc, 1_000_000)
        if check.must_be_created:
            ...
    """

    def __init__(self, rpc):
        self._rpc = rpc

    def check_native(self, owner: str, required: int) -> int:
        """
        Ensure the owner holds at least `required` lamports

        Returns:
            Current balance in lamports

        Raises:
            BalanceError: If the balance is too low
            RpcError: If the balance cannot be fetched
        """
        lamports = self._rpc.get_balance(owner)
        if lamports < required:
            available_sol = AmountCodec.format(lamports, NATIVE_DECIMALS)
            required_sol = AmountCodec.format(required, NATIVE_DECIMALS)
            logger.warning(f"Insufficient SOL for {owner}: have {available_sol}, need {required_sol}")
            raise BalanceError.insufficient_native(owner, available_sol, required_sol)
        return lamports

    def check_token(self, owner: str, asset: AssetDescriptor, required: int) -> TokenAccountCheck:
        """
        Probe the owner's associated token account

        A missing account, or one that cannot be probed, is reported as
        MUST_BE_CREATED; creation is idempotent so a wrong guess is harmless.
        A low token balance is only logged, the bridge program rejects it on chain.

        Returns:
            TokenAccountCheck with state and derived address
        """
        token_account = get_associated_token_address(
            Pubkey.from_string(owner),
            Pubkey.from_string(asset.mint),
            Pubkey.from_string(asset.token_program),
        )

        try:
            account_info = self._rpc.get_account_info(str(token_account), encoding="base64")
        except RpcError as e:
            logger.warning(f"Token account probe failed for {token_account}, will create idempotently: {e}")
            return TokenAccountCheck(TokenAccountState.MUST_BE_CREATED, token_account)

        if not account_info:
            logger.info(f"Token account {token_account} for {asset.label} does not exist yet")
            return TokenAccountCheck(TokenAccountState.MUST_BE_CREATED, token_account)

        balance = parse_token_account_amount(decode_account_data(account_info))
        if balance is not None and balance < required:
            logger.warning(
                f"Token balance for {asset.label} is "
                f"{AmountCodec.format(balance, asset.decimals)}, "
                f"request is {AmountCodec.format(required, asset.decimals)}; "
                f"continuing, the bridge program will reject an overdraw"
            )

        return TokenAccountCheck(TokenAccountState.EXISTING, token_account)
