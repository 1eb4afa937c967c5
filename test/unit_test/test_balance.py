"""
Balance Guard Unit Tests

Native balance checks and associated token account probes.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from bridge_adapter.errors import BalanceError, RpcError, ErrorCode
from bridge_adapter.modules.balance import BalanceGuard
from bridge_adapter.protocols.token import TOKEN_PROGRAM_ID, get_associated_token_address
from bridge_adapter.types import AssetKind, AssetDescriptor, TokenAccountState

from conftest import USDC_REMOTE, DEVNET_USDC_MINT, token_account_info


@pytest.fixture
def rpc():
    return Mock()


@pytest.fixture
def guard(rpc):
    return BalanceGuard(rpc)


@pytest.fixture
def owner():
    return str(Keypair().pubkey())


@pytest.fixture
def usdc():
    return AssetDescriptor(
        symbol="usdc",
        label="USDC",
        kind=AssetKind.TOKEN,
        decimals=6,
        remote_address=USDC_REMOTE,
        mint=DEVNET_USDC_MINT,
        token_program=TOKEN_PROGRAM_ID,
    )


class TestCheckNative:
    """Tests for BalanceGuard.check_native"""

    def test_enough(self, guard, rpc, owner):
        rpc.get_balance.return_value = 2_000_000_000

        assert guard.check_native(owner, 500_000_000) == 2_000_000_000
        rpc.get_balance.assert_called_once_with(owner)

    def test_exact(self, guard, rpc, owner):
        rpc.get_balance.return_value = 500_000_000
        assert guard.check_native(owner, 500_000_000) == 500_000_000

    def test_insufficient(self, guard, rpc, owner):
        rpc.get_balance.return_value = 100_000_000

        with pytest.raises(BalanceError) as exc_info:
            guard.check_native(owner, 500_000_000)

        error = exc_info.value
        assert error.code == ErrorCode.BALANCE_INSUFFICIENT_NATIVE
        assert error.available == "0.1"
        assert error.required == "0.5"
        assert "You have 0.1 SOL but need 0.5 SOL" in error.message

    def test_rpc_error_propagates(self, guard, rpc, owner):
        rpc.get_balance.side_effect = RpcError.timeout("https://rpc.example.com", 30)

        with pytest.raises(RpcError):
            guard.check_native(owner, 1)


class TestCheckToken:
    """Tests for BalanceGuard.check_token"""

    def test_existing_account(self, guard, rpc, owner, usdc):
        rpc.get_account_info.return_value = token_account_info(5_000_000)

        check = guard.check_token(owner, usdc, 1_000_000)

        assert check.state == TokenAccountState.EXISTING
        assert check.must_be_created is False
        expected = get_associated_token_address(
            Pubkey.from_string(owner),
            Pubkey.from_string(DEVNET_USDC_MINT),
            Pubkey.from_string(TOKEN_PROGRAM_ID),
        )
        assert check.address == expected
        rpc.get_account_info.assert_called_once_with(str(expected), encoding="base64")

    def test_missing_account(self, guard, rpc, owner, usdc):
        rpc.get_account_info.return_value = None

        check = guard.check_token(owner, usdc, 1_000_000)

        assert check.state == TokenAccountState.MUST_BE_CREATED
        assert check.must_be_created is True

    def test_probe_failure_means_create(self, guard, rpc, owner, usdc):
        rpc.get_account_info.side_effect = RpcError.connection_failed("https://rpc.example.com")

        check = guard.check_token(owner, usdc, 1_000_000)

        assert check.must_be_created is True

    def test_low_token_balance_not_raised(self, guard, rpc, owner, usdc):
        """Token overdraw is left to the bridge program"""
        rpc.get_account_info.return_value = token_account_info(10)

        check = guard.check_token(owner, usdc, 1_000_000)

        assert check.state == TokenAccountState.EXISTING
