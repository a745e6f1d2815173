"""
Deck controller: the ordered queue of candidates and the visible card window.
"""
import logging
from typing import Callable, Iterable, List, Optional

from .types import Candidate, CardTransform, DeckProgress, DeckState, WindowSlot
from .config import Cfg

logger = logging.getLogger(__name__)


class DeckController:
    """
    Tracks which candidate is on top of the stack.

    States are Active (cursor < len(items)) and Empty (cursor == len(items)).
    advance() is the only mutator. Entering Empty raises the exhausted
    signal exactly once; a deck that starts empty never enters it.
    """

    def __init__(self, cfg: Cfg, candidates: Iterable[Candidate]):
        self.cfg = cfg
        self.state = DeckState(items=tuple(candidates), cursor=0)
        self._exhausted_listeners: List[Callable[[], None]] = []
        self._exhausted_fired = False

    # ------------------------------------------------------------------
    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def items(self) -> tuple:
        return self.state.items

    @property
    def active(self) -> Optional[Candidate]:
        return self.state.active

    @property
    def is_empty(self) -> bool:
        return self.state.cursor >= len(self.state.items)

    @property
    def exhausted_fired(self) -> bool:
        return self._exhausted_fired

    @property
    def is_running_low(self) -> bool:
        """True when few enough cards remain that the host should fetch more."""
        remaining = len(self.state.items) - self.state.cursor
        return 0 < remaining <= self.cfg.deck.preload_count

    def on_exhausted(self, callback: Callable[[], None]) -> None:
        """Register a listener for the exhausted signal."""
        self._exhausted_listeners.append(callback)

    # ------------------------------------------------------------------
    def advance(self) -> bool:
        """
        Move past the active candidate.

        Returns:
            True if the cursor moved, False if the deck was already empty
        """
        if self.is_empty:
            return False

        self.state.cursor += 1
        logger.debug("Deck advanced to %d/%d", self.state.cursor, len(self.state.items))

        if self.is_empty and not self._exhausted_fired:
            self._exhausted_fired = True
            logger.info("Deck exhausted after %d candidates", len(self.state.items))
            for callback in list(self._exhausted_listeners):
                try:
                    callback()
                except Exception as e:
                    logger.error("Exhausted listener failed: %s", e)
        return True

    def window(self) -> List[WindowSlot]:
        """
        The active candidate plus the next N-1, each with its depth transform.

        Only position 0 is interactive.
        """
        n = self.cfg.deck.window_size
        visible = self.state.items[self.state.cursor:self.state.cursor + n]
        return [
            WindowSlot(
                candidate=candidate,
                position=i,
                transform=self.depth_transform(i),
                interactive=(i == 0)
            )
            for i, candidate in enumerate(visible)
        ]

    def depth_transform(self, position: int) -> CardTransform:
        """Scale, offset, opacity and stacking order for a window position."""
        d = self.cfg.deck
        return CardTransform(
            y=position * d.y_offset_step,
            scale=1 - position * d.scale_step,
            opacity=max(0.0, 1 - position * d.opacity_step),
            z_index=d.window_size - position
        )

    def progress(self) -> DeckProgress:
        total = len(self.state.items)
        viewed = self.state.cursor
        return DeckProgress(
            viewed=viewed,
            remaining=total - viewed,
            total=total,
            percentage=round(viewed / total * 100) if total else 0
        )
