"""
Swipe engine: wires gesture tracking, classification, the exit animation,
the deck and the action dispatcher for one deck of cards.

For a single card events run strictly as
drag_start -> drag_move* -> drag_end -> (exit | spring back) -> advance + dispatch.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Set

from .types import (
    ActionHandlerProto,
    Candidate,
    CardTransform,
    DeckProgress,
    Direction,
    SwipeOutcome,
    WindowSlot,
)
from .config import Cfg
from .gestures import GestureTracker, classify
from .animator import ExitAnimator
from .deck import DeckController
from .dispatcher import ActionDispatcher
from .notifications import NotificationQueue

logger = logging.getLogger(__name__)


@dataclass
class EngineSnapshot:
    """Everything a host needs to render the deck."""
    phase: str
    cursor: int
    exhausted: bool
    running_low: bool
    progress: DeckProgress
    window: List[WindowSlot]
    active_transform: CardTransform
    indicator: tuple  # (like_opacity, nope_opacity)


class SwipeEngine:
    """
    Drives one deck of swipeable cards.

    Only the active card takes drag input, and not while it is exiting.
    The deck advances when the exit timer completes; the domain effect is
    scheduled afterwards and the deck never waits for it.
    """

    def __init__(self, cfg: Cfg, candidates: Iterable[Candidate],
                 handler: ActionHandlerProto,
                 notifications: Optional[NotificationQueue] = None):
        self.cfg = cfg
        self.notifications = notifications if notifications is not None else NotificationQueue(cfg)
        self.deck = DeckController(cfg, candidates)
        self.tracker = GestureTracker(cfg)
        self.dispatcher = ActionDispatcher(cfg, handler, self.notifications)
        self._tasks: Set[asyncio.Task] = set()
        self.animator = self._new_animator()

    # ------------------------------------------------------------------
    @property
    def phase(self) -> str:
        if self.animator.is_exiting:
            return "exiting"
        if self.deck.is_empty:
            return "empty"
        if self.tracker.is_dragging:
            return "dragging"
        if self.animator.is_springing:
            return "springing"
        return "idle"

    def on_exhausted(self, callback: Callable[[], None]) -> None:
        self.deck.on_exhausted(callback)

    # ------------------------------------------------------------------
    def drag_start(self, x: float, y: float, t: float) -> bool:
        """
        Grab the active card.

        Returns:
            False if there is no active card or it is mid-exit
        """
        if self.deck.is_empty or self.animator.is_exiting:
            return False
        self.animator.interrupt_spring_back()
        self.tracker.drag_start(x, y, t)
        return True

    def drag_move(self, x: float, y: float, t: float) -> Optional[CardTransform]:
        if self.animator.is_exiting:
            return None
        return self.tracker.drag_move(x, y, t)

    def drag_end(self, x: float, y: float, t: float) -> Optional[SwipeOutcome]:
        """
        Release the card and either commit it or spring it back.

        Returns:
            The classified outcome, or None if no drag was in progress
        """
        if self.animator.is_exiting:
            return None
        sample = self.tracker.drag_end(x, y, t)
        if sample is None:
            return None

        g = self.cfg.gestures
        outcome = classify(sample.dx, sample.vx, g.threshold_px, g.threshold_velocity_px_s)
        release = self.tracker.transform
        logger.debug("Release dx=%.1f vx=%.1f -> %s", sample.dx, sample.vx, outcome.value)

        if outcome.direction is not None:
            self.animator.commit(outcome.direction, release)
        else:
            self.animator.spring_back(release)
            self.tracker.reset()
        return outcome

    def swipe(self, direction: Direction) -> bool:
        """
        Commit the active card without a drag (like / pass buttons).

        Returns:
            False if there is no active card or it is already exiting
        """
        if self.deck.is_empty or self.animator.is_exiting:
            return False
        release = self.tracker.transform
        self.tracker.cancel()
        return self.animator.commit(direction, release)

    # ------------------------------------------------------------------
    def current_transform(self, now: Optional[float] = None) -> CardTransform:
        """Transform of the active card right now."""
        if self.animator.is_exiting or self.animator.is_springing:
            return self.animator.frame(now)
        return self.tracker.transform

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            cursor=self.deck.cursor,
            exhausted=self.deck.exhausted_fired,
            running_low=self.deck.is_running_low,
            progress=self.deck.progress(),
            window=self.deck.window(),
            active_transform=self.current_transform(),
            indicator=self.tracker.indicator_opacity()
        )

    async def settle(self) -> None:
        """Wait for the in-flight transition and any outstanding effects."""
        await self.animator.wait()
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """Cancel pending timers. Effects already scheduled still run."""
        self.animator.cancel()
        self.tracker.reset()

    # ------------------------------------------------------------------
    def _new_animator(self) -> ExitAnimator:
        candidate = self.deck.active
        return ExitAnimator(
            self.cfg,
            lambda direction: self._on_exit_complete(direction, candidate)
        )

    def _on_exit_complete(self, direction: Direction, candidate: Optional[Candidate]) -> None:
        if candidate is None or candidate is not self.deck.active:
            logger.warning("Stale exit completion for %s ignored", candidate)
            return

        # Dispatch is scheduled before any host listener runs and executes
        # after the deck has moved.
        task = asyncio.get_running_loop().create_task(
            self.dispatcher.dispatch(direction, candidate)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        self.deck.advance()
        self.tracker.reset()
        self.animator = self._new_animator()
