"""
Mock action handler for exercising swipe effects without a backend.
"""
import logging
from typing import List, Optional, Tuple

from .types import Candidate, Direction

logger = logging.getLogger(__name__)


class MockActionHandler:
    """Mock handler that logs actions instead of calling the backend."""

    def __init__(self, fail_with: Optional[Exception] = None):
        """
        Initialize the mock handler.

        Args:
            fail_with: If set, every call records itself and then raises this
        """
        self.fail_with = fail_with
        self.calls: List[Tuple[Direction, str]] = []
        self.right_count = 0
        self.left_count = 0

    async def swipe_right(self, candidate: Candidate) -> None:
        """Record a like / confirm-match."""
        self.right_count += 1
        self.calls.append(("right", candidate.id))
        logger.info("[MockActionHandler] Right: %s (call #%d)", candidate.id, self.right_count)
        if self.fail_with is not None:
            raise self.fail_with

    async def swipe_left(self, candidate: Candidate) -> None:
        """Record a pass / decline."""
        self.left_count += 1
        self.calls.append(("left", candidate.id))
        logger.info("[MockActionHandler] Left: %s (call #%d)", candidate.id, self.left_count)
        if self.fail_with is not None:
            raise self.fail_with

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.calls.clear()
        self.right_count = 0
        self.left_count = 0
