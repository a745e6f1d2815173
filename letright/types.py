"""
Type definitions for the swipe deck engine.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Optional, Protocol, runtime_checkable


Direction = Literal["left", "right"]


class SwipeOutcome(Enum):
    """Result of classifying a released drag."""
    NONE = "none"
    COMMIT_LEFT = "commit-left"
    COMMIT_RIGHT = "commit-right"

    @property
    def direction(self) -> Optional[Direction]:
        """Committed direction, or None for a spring back."""
        if self is SwipeOutcome.COMMIT_RIGHT:
            return "right"
        if self is SwipeOutcome.COMMIT_LEFT:
            return "left"
        return None

    @property
    def committed(self) -> bool:
        return self is not SwipeOutcome.NONE


@dataclass(frozen=True)
class Candidate:
    """An item shown on a card: a property listing or a renter profile."""
    id: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class GestureSample:
    """Drag offset from the origin plus horizontal velocity."""
    dx: float
    dy: float
    vx: float  # pixels per second


@dataclass
class CardTransform:
    """Visual transform a renderer applies to a card."""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0  # degrees
    scale: float = 1.0
    opacity: float = 1.0
    z_index: int = 0


@dataclass
class WindowSlot:
    """A candidate in the visible window together with its depth transform."""
    candidate: Candidate
    position: int  # 0 = active card
    transform: CardTransform
    interactive: bool


@dataclass
class DeckState:
    """Ordered candidates and the index of the active one."""
    items: tuple
    cursor: int = 0

    @property
    def active(self) -> Optional[Candidate]:
        if self.cursor < len(self.items):
            return self.items[self.cursor]
        return None


@dataclass
class DeckProgress:
    """How far through the deck the user has swiped."""
    viewed: int
    remaining: int
    total: int
    percentage: int


@dataclass
class ExitAnimationState:
    """State of an in-flight exit transition."""
    active: bool
    direction: Direction
    elapsed: float  # seconds


@dataclass
class Toast:
    """A transient notification shown by the host."""
    id: str
    kind: str
    message: str
    title: Optional[str] = None
    duration: float = 3.0


@runtime_checkable
class ActionHandlerProto(Protocol):
    """Abstract protocol for the domain effects behind a committed swipe."""

    async def swipe_right(self, candidate: Candidate) -> None:
        """Positive action: like a property, confirm a renter match."""
        ...

    async def swipe_left(self, candidate: Candidate) -> None:
        """Negative action: pass on a property, decline a renter's interest."""
        ...
