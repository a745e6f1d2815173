"""
Timer-driven exit and spring-back transitions for a single card.

Completion is signalled by an event-loop timer after the configured
duration, not by rendering, so the deck advances at a fixed latency
independent of frame rate.
"""
import asyncio
import logging
from typing import Callable, Optional

from .types import CardTransform, Direction, ExitAnimationState
from .config import Cfg

logger = logging.getLogger(__name__)


class CubicBezier:
    """CSS-style cubic-bezier easing with fixed end points (0,0) and (1,1)."""

    def __init__(self, x1: float, y1: float, x2: float, y2: float):
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2

    @staticmethod
    def _curve(t: float, p1: float, p2: float) -> float:
        u = 1 - t
        return 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t

    @staticmethod
    def _slope(t: float, p1: float, p2: float) -> float:
        u = 1 - t
        return 3 * u * u * p1 + 6 * u * t * (p2 - p1) + 3 * t * t * (1 - p2)

    def __call__(self, progress: float) -> float:
        if progress <= 0:
            return 0.0
        if progress >= 1:
            return 1.0

        # Newton's method on x(t) = progress, bisection if the slope flattens
        t = progress
        for _ in range(8):
            err = self._curve(t, self.x1, self.x2) - progress
            if abs(err) < 1e-6:
                return self._curve(t, self.y1, self.y2)
            slope = self._slope(t, self.x1, self.x2)
            if abs(slope) < 1e-6:
                break
            t -= err / slope

        lo, hi = 0.0, 1.0
        t = progress
        while hi - lo > 1e-6:
            if self._curve(t, self.x1, self.x2) < progress:
                lo = t
            else:
                hi = t
            t = (lo + hi) / 2
        return self._curve(t, self.y1, self.y2)


EASE_OUT = CubicBezier(0.4, 0.0, 0.2, 1.0)
SPRING_BACK = CubicBezier(0.34, 1.56, 0.64, 1.0)  # overshoots past 1


class ExitAnimator:
    """
    Owns the departure of one committed card.

    The completion callback fires at most once for this card, whether the
    timer fires, the transition is re-triggered, or complete() is called
    by hand.

    Parameters
    ----------
    cfg : Cfg
        Animation parameters come from ``cfg.animation``.
    on_complete : callable
        Called with the committed direction once the exit is logically done.
    """

    def __init__(self, cfg: Cfg, on_complete: Callable[[Direction], None]):
        self.cfg = cfg
        self._on_complete = on_complete
        self._phase = "idle"  # idle | exiting | springing | done
        self._direction: Optional[Direction] = None
        self._started_at = 0.0
        self._from = CardTransform()
        self._handle: Optional[asyncio.TimerHandle] = None
        self._waiter: Optional[asyncio.Future] = None
        self._completed = False

    # ------------------------------------------------------------------
    @property
    def is_exiting(self) -> bool:
        return self._phase == "exiting"

    @property
    def is_springing(self) -> bool:
        return self._phase == "springing"

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def state(self) -> Optional[ExitAnimationState]:
        """The in-flight exit, or None outside the exit window."""
        if self._phase != "exiting" or self._direction is None:
            return None
        return ExitAnimationState(
            active=True,
            direction=self._direction,
            elapsed=asyncio.get_running_loop().time() - self._started_at
        )

    # ------------------------------------------------------------------
    def commit(self, direction: Direction, release: Optional[CardTransform] = None) -> bool:
        """
        Start the exit transition toward ``direction``.

        Returns:
            False if this card is already exiting or has completed
        """
        if self._phase in ("exiting", "done"):
            logger.debug("Ignoring %s commit: card already %s", direction, self._phase)
            return False

        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._phase = "exiting"
        self._direction = direction
        self._from = release or CardTransform()
        self._started_at = loop.time()
        self._handle = loop.call_later(self.cfg.animation.exit_duration_s, self.complete)
        return True

    def spring_back(self, release: Optional[CardTransform] = None) -> bool:
        """
        Return the card to rest after a release that did not commit.

        Returns:
            False if the card is exiting or has completed
        """
        if self._phase in ("exiting", "done"):
            return False

        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._phase = "springing"
        self._from = release or CardTransform()
        self._started_at = loop.time()
        self._handle = loop.call_later(
            self.cfg.animation.spring_back_duration_s, self._finish_spring_back
        )
        return True

    def interrupt_spring_back(self) -> None:
        """A new drag grabs the card mid spring-back."""
        if self._phase == "springing":
            self._cancel_timer()
            self._phase = "idle"
            self._resolve_waiter()

    def complete(self) -> None:
        """Finish the exit and notify the owner, at most once per card."""
        if self._completed or self._phase != "exiting" or self._direction is None:
            return
        self._completed = True
        self._cancel_timer()
        self._phase = "done"
        try:
            self._on_complete(self._direction)
        finally:
            self._resolve_waiter()

    def cancel(self) -> None:
        """Stop any pending transition without firing completion."""
        self._cancel_timer()
        if self._phase != "done":
            self._phase = "idle"
        self._resolve_waiter()

    async def wait(self) -> None:
        """Wait until the current transition, if any, has finished."""
        if self._phase not in ("exiting", "springing"):
            return
        if self._waiter is None or self._waiter.done():
            self._waiter = asyncio.get_running_loop().create_future()
        await self._waiter

    # ------------------------------------------------------------------
    def frame(self, now: Optional[float] = None) -> CardTransform:
        """Sample the card transform at loop time ``now``."""
        a = self.cfg.animation
        if self._phase == "exiting" and self._direction is not None:
            if now is None:
                now = asyncio.get_running_loop().time()
            progress = EASE_OUT(self._progress(now, a.exit_duration_s))
            sign = 1 if self._direction == "right" else -1
            return CardTransform(
                x=self._from.x + (sign * a.exit_distance_px - self._from.x) * progress,
                y=self._from.y * (1 - progress),
                rotation=self._from.rotation + (sign * a.exit_rotation_deg - self._from.rotation) * progress,
                opacity=1.0 - progress
            )
        if self._phase == "springing":
            if now is None:
                now = asyncio.get_running_loop().time()
            remaining = 1.0 - SPRING_BACK(self._progress(now, a.spring_back_duration_s))
            return CardTransform(
                x=self._from.x * remaining,
                y=self._from.y * remaining,
                rotation=self._from.rotation * remaining
            )
        if self._phase == "done":
            return CardTransform(opacity=0.0)
        return CardTransform()

    def _progress(self, now: float, duration: float) -> float:
        if duration <= 0:
            return 1.0
        return max(0.0, min(1.0, (now - self._started_at) / duration))

    def _finish_spring_back(self) -> None:
        self._handle = None
        if self._phase == "springing":
            self._phase = "idle"
            self._from = CardTransform()
        self._resolve_waiter()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _resolve_waiter(self) -> None:
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(None)
        self._waiter = None
