"""
Stage Slot Unit Tests
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.keypair import Keypair

from bridge_adapter.modules.staging import StageSlot
from bridge_adapter.types import AssetKind, AssetDescriptor, BridgeRequest, PendingStage

from conftest import SOL_REMOTE, DESTINATION


def _stage(amount: int) -> PendingStage:
    asset = AssetDescriptor(
        symbol="sol",
        label="SOL",
        kind=AssetKind.NATIVE,
        decimals=9,
        remote_address=SOL_REMOTE,
    )
    request = BridgeRequest(
        asset=asset,
        amount=amount,
        destination=DESTINATION,
        owner=str(Keypair().pubkey()),
    )
    return PendingStage(request=request, created_at=datetime.now(timezone.utc))


class TestStageSlot:
    """Tests for StageSlot"""

    def test_empty(self):
        slot = StageSlot()
        assert slot.current is None
        assert slot.clear() is False

    def test_replace_returns_previous(self):
        slot = StageSlot()
        first, second = _stage(1), _stage(2)

        assert slot.replace(first) is None
        assert slot.replace(second) is first
        assert slot.current is second

    def test_clear(self):
        slot = StageSlot()
        slot.replace(_stage(1))

        assert slot.clear() is True
        assert slot.current is None

    def test_clear_only_if_current(self):
        """Clearing a stale stage leaves the newer one in place"""
        slot = StageSlot()
        stale, fresh = _stage(1), _stage(2)
        slot.replace(stale)
        slot.replace(fresh)

        assert slot.clear(stale) is False
        assert slot.current is fresh
        assert slot.clear(fresh) is True

    def test_stage_is_immutable(self):
        stage = _stage(1)
        with pytest.raises(AttributeError):
            stage.request = None
