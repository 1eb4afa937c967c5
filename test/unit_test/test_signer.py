"""
Test Signer Module

Tests for local signer functionality.
"""

import sys
import json
import tempfile
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import base58
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

from bridge_adapter.infra.solana_signer import LocalSigner, Signer, create_signer, message_bytes_for_signing
from bridge_adapter.errors import SignerError, ConfigurationError, ErrorCode


def _unsigned_transfer(payer: Pubkey) -> bytes:
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Keypair().pubkey(), lamports=1))
    message = MessageV0.try_compile(payer, [ix], [], Hash.default())
    tx = VersionedTransaction.populate(message, [Signature.default()])
    return bytes(tx)


def test_local_signer_from_base58():
    """Test LocalSigner creation from base58 private key"""
    print("Testing LocalSigner from base58...")

    keypair = Keypair()
    secret = base58.b58encode(bytes(keypair)).decode("ascii")

    signer = LocalSigner.from_base58(secret)
    assert signer.pubkey == str(keypair.pubkey())

    print(f"  Pubkey: {signer.pubkey[:20]}...")
    print("  LocalSigner from base58: PASSED")


def test_local_signer_sign():
    """Test LocalSigner sign method"""
    print("Testing LocalSigner sign...")

    signer = LocalSigner(Keypair())

    signature = signer.sign(b"test message to sign")
    assert len(signature) == 64  # Ed25519 signature is 64 bytes

    print("  LocalSigner sign: PASSED")


def test_local_signer_sign_transaction():
    """Test LocalSigner sign_transaction method"""
    print("Testing LocalSigner sign_transaction...")

    keypair = Keypair()
    signer = LocalSigner(keypair)

    signed_bytes, signature = signer.sign_transaction(_unsigned_transfer(keypair.pubkey()))

    signed = VersionedTransaction.from_bytes(signed_bytes)
    assert str(signed.signatures[0]) == signature
    assert signed.signatures[0] != Signature.default()
    assert signed.signatures[0].verify(keypair.pubkey(), message_bytes_for_signing(signed.message))

    print("  LocalSigner sign_transaction: PASSED")


def test_sign_transaction_wrong_wallet():
    """Test signing a transaction that does not list the wallet as signer"""
    print("Testing sign_transaction with foreign payer...")

    signer = LocalSigner(Keypair())

    try:
        signer.sign_transaction(_unsigned_transfer(Keypair().pubkey()))
        assert False, "Should raise SignerError"
    except SignerError as e:
        assert e.code == ErrorCode.SIGNER_FAILED
        assert e.is_rejection is False
        assert "not in the required signers" in e.message

    print("  sign_transaction with foreign payer: PASSED")


def test_local_signer_from_file():
    """Test LocalSigner from Solana CLI keypair file"""
    print("Testing LocalSigner from file...")

    keypair = Keypair()

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "id.json"
        path.write_text(json.dumps(list(bytes(keypair))))

        signer = LocalSigner.from_file(str(path))
        assert signer.pubkey == str(keypair.pubkey())

        raw = Path(tmp) / "id.bin"
        raw.write_bytes(bytes(keypair))
        assert LocalSigner.from_file(str(raw)).pubkey == str(keypair.pubkey())

        bad = Path(tmp) / "bad.txt"
        bad.write_text("not a keypair")
        try:
            LocalSigner.from_file(str(bad))
            assert False, "Should raise ConfigurationError"
        except ConfigurationError as e:
            assert e.code == ErrorCode.CONFIG_INVALID

    print("  LocalSigner from file: PASSED")


def test_create_signer():
    """Test create_signer factory"""
    print("Testing create_signer...")

    keypair = Keypair()
    signer = create_signer(keypair=keypair)

    assert isinstance(signer, LocalSigner)
    assert isinstance(signer, Signer)
    assert signer.pubkey == str(keypair.pubkey())

    print("  create_signer: PASSED")


def test_signer_errors():
    """Test SignerError factories"""
    print("Testing SignerError...")

    assert SignerError.not_configured().code == ErrorCode.SIGNER_NOT_CONFIGURED
    assert SignerError.rejected().is_rejection is True
    assert SignerError.failed("boom").is_rejection is False

    print("  SignerError: PASSED")


def main():
    """Run all signer tests"""
    print("=" * 60)
    print("Signer Tests")
    print("=" * 60)

    tests = [
        test_local_signer_from_base58,
        test_local_signer_sign,
        test_local_signer_sign_transaction,
        test_sign_transaction_wrong_wallet,
        test_local_signer_from_file,
        test_create_signer,
        test_signer_errors,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
