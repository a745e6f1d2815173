"""
Action dispatcher: turns a committed swipe into exactly one domain effect.
"""
import logging
from typing import Awaitable, Callable, Optional, Set

from .types import ActionHandlerProto, Candidate, Direction
from .config import Cfg
from .notifications import NotificationQueue

logger = logging.getLogger(__name__)


class CallbackActionHandler:
    """
    Adapts two plain async callables to ActionHandlerProto.

    e.g. ``CallbackActionHandler(like_property, dislike_property)`` for the
    renter deck, or ``CallbackActionHandler(confirm_match, decline_interest)``
    for the landlord deck.
    """

    def __init__(self, on_right: Callable[[Candidate], Awaitable[None]],
                 on_left: Callable[[Candidate], Awaitable[None]]):
        self._on_right = on_right
        self._on_left = on_left

    async def swipe_right(self, candidate: Candidate) -> None:
        await self._on_right(candidate)

    async def swipe_left(self, candidate: Candidate) -> None:
        await self._on_left(candidate)


class ActionDispatcher:
    """
    Performs the domain effect for each committed card, once.

    Failures are logged and reported through the notification queue. They
    never propagate and never roll the deck back: the UI has already moved
    past the card.
    """

    def __init__(self, cfg: Cfg, handler: ActionHandlerProto,
                 notifications: Optional[NotificationQueue] = None):
        self.cfg = cfg
        self.handler = handler
        self.notifications = notifications
        self._dispatched: Set[str] = set()
        self.failures = 0

    def was_dispatched(self, candidate: Candidate) -> bool:
        return candidate.id in self._dispatched

    async def dispatch(self, direction: Direction, candidate: Candidate) -> bool:
        """
        Run the handler for ``direction`` on ``candidate``.

        Returns:
            True if the effect succeeded, False if it failed or was a
            duplicate for a candidate already dispatched
        """
        if candidate.id in self._dispatched:
            logger.warning("Duplicate dispatch for candidate %s ignored", candidate.id)
            return False
        self._dispatched.add(candidate.id)

        try:
            if direction == "right":
                await self.handler.swipe_right(candidate)
            else:
                await self.handler.swipe_left(candidate)
        except Exception as e:
            self.failures += 1
            logger.error("Swipe %s on %s failed: %s", direction, candidate.id, e)
            if self.notifications is not None:
                self.notifications.error(self.cfg.notifications.error_message)
            return False

        logger.info("Swipe %s on %s", direction, candidate.id)
        self._notify_success(direction)
        return True

    def _notify_success(self, direction: Direction) -> None:
        if self.notifications is None:
            return
        n = self.cfg.notifications
        message = n.right_message if direction == "right" else n.left_message
        if not message:
            return
        kind = "shortlist" if direction == "right" else "pass"
        self.notifications.push(kind, message, duration=n.swipe_toast_duration_s)
