"""
Shared fixtures for bridge adapter unit tests.

No network access: RPC clients are mocks and keypairs are generated per test.
"""

import base64
import struct
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.keypair import Keypair

from bridge_adapter.config import BridgeConfig
from bridge_adapter.protocols.token import TOKEN_PROGRAM_ID
from bridge_adapter.types import get_environment


SOL_REMOTE = "0xc5102fe9359fd9a28f877a67e36b0f050d81a3cc"
USDC_REMOTE = "0x8c7e8c8a0c7f4e16a1c3b1d27e5f2a8b7c4d3e21"
DESTINATION = "0x1111111111111111111111111111111111111111"

DEVNET_USDC_MINT = "4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU"


def mint_account_info(decimals: int, owner: str = TOKEN_PROGRAM_ID) -> dict:
    """getAccountInfo value for a mint with the given decimals"""
    data = bytearray(82)
    data[44] = decimals
    return {
        "data": [base64.b64encode(bytes(data)).decode("ascii"), "base64"],
        "executable": False,
        "lamports": 1_461_600,
        "owner": owner,
    }


def token_account_info(amount: int, owner: str = TOKEN_PROGRAM_ID) -> dict:
    """getAccountInfo value for a token account holding amount"""
    data = bytearray(165)
    struct.pack_into("<Q", data, 64, amount)
    return {
        "data": [base64.b64encode(bytes(data)).decode("ascii"), "base64"],
        "executable": False,
        "lamports": 2_039_280,
        "owner": owner,
    }


@pytest.fixture
def bridge_config():
    """Deployment addresses for a throwaway bridge program"""
    return BridgeConfig(
        environment="devnet",
        program_id=str(Keypair().pubkey()),
        gas_fee_receiver=str(Keypair().pubkey()),
        sol_remote_address=SOL_REMOTE,
        usdc_remote_address=USDC_REMOTE,
    )


@pytest.fixture
def devnet(bridge_config):
    """Devnet environment with deployment addresses filled in"""
    return get_environment("devnet", bridge_config=bridge_config)


@pytest.fixture
def keypair():
    return Keypair()
