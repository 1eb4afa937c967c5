"""
Staging Module

Holds at most one pending bridge request. Staging again replaces the
previous request (last write wins); nothing is queued.
"""

import logging
import threading
from typing import Optional

from ..types import PendingStage

logger = logging.getLogger(__name__)


class StageSlot:
    """Single replace-only slot for a PendingStage"""

    def __init__(self):
        self._stage: Optional[PendingStage] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[PendingStage]:
        with self._lock:
            return self._stage

    def replace(self, stage: PendingStage) -> Optional[PendingStage]:
        """Store a stage, returning the one it replaced"""
        with self._lock:
            previous, self._stage = self._stage, stage
        if previous is not None:
            logger.info(f"Replaced staged request {previous.request} with {stage.request}")
        else:
            logger.info(f"Staged {stage.request}")
        return previous

    def clear(self, stage: Optional[PendingStage] = None) -> bool:
        """
        Clear the slot

        Args:
            stage: Only clear if this stage is still current (None clears unconditionally)

        Returns:
            True if something was cleared
        """
        with self._lock:
            if self._stage is None:
                return False
            if stage is not None and self._stage is not stage:
                return False
            self._stage = None
        logger.info("Cleared staged request")
        return True
