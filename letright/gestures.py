"""
Drag tracking and release classification for swipeable cards.
"""
from collections import deque
from dataclasses import dataclass
from typing import Optional, Tuple

from .types import CardTransform, GestureSample, SwipeOutcome
from .config import Cfg


@dataclass
class VelocitySample:
    """Pointer position at a specific time."""
    timestamp: float
    x_px: float
    y_px: float


def classify(dx: float, vx: float, threshold_px: float, threshold_velocity: float) -> SwipeOutcome:
    """
    Decide what a released drag does.

    Position and velocity are OR-ed: a short fast flick commits exactly
    like a slow long drag.

    Args:
        dx: Horizontal offset from the drag origin in pixels
        vx: Horizontal release velocity in pixels per second
        threshold_px: Offset beyond which the card commits
        threshold_velocity: Velocity beyond which the card commits

    Returns:
        COMMIT_RIGHT, COMMIT_LEFT or NONE (spring back)
    """
    if dx > threshold_px or vx > threshold_velocity:
        return SwipeOutcome.COMMIT_RIGHT
    if dx < -threshold_px or vx < -threshold_velocity:
        return SwipeOutcome.COMMIT_LEFT
    return SwipeOutcome.NONE


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class GestureTracker:
    """
    Converts pointer samples for the active card into offsets, rotation
    and a release velocity.

    Features:
    - Two physics modes, picked by configuration:
      "elastic" rubber-bands both axes and maps x to a clamped rotation,
      "free_x" follows the pointer 1:1 horizontally with linear rotation
    - Release velocity estimated over a short sliding window
    - LIKE / NOPE indicator opacity derived from the current offset
    """

    def __init__(self, cfg: Cfg):
        """Initialize the tracker for the configured physics mode."""
        self.cfg = cfg
        self.mode = cfg.gestures.physics_mode
        self.samples: deque[VelocitySample] = deque()
        self.origin: Optional[Tuple[float, float]] = None
        self.is_dragging = False
        self.transform = CardTransform()

    def drag_start(self, x: float, y: float, t: float) -> None:
        """Record the drag origin and mark the card as being dragged."""
        self.origin = (x, y)
        self.is_dragging = True
        self.samples.clear()
        self.samples.append(VelocitySample(timestamp=t, x_px=x, y_px=y))
        self.transform = CardTransform()

    def drag_move(self, x: float, y: float, t: float) -> Optional[CardTransform]:
        """
        Update the card transform for a pointer move.

        Returns:
            The displayed transform, or None if no drag is in progress
        """
        if not self.is_dragging or self.origin is None:
            return None

        self._add_sample(x, y, t)
        dx = x - self.origin[0]
        dy = y - self.origin[1]
        self.transform = self._displayed(dx, dy)
        return self.transform

    def drag_end(self, x: float, y: float, t: float) -> Optional[GestureSample]:
        """
        Finish the drag and emit the final sample with release velocity.

        Returns:
            GestureSample, or None if no drag is in progress
        """
        if not self.is_dragging or self.origin is None:
            return None

        self._add_sample(x, y, t)
        sample = GestureSample(
            dx=x - self.origin[0],
            dy=y - self.origin[1],
            vx=self._estimate_vx()
        )
        self.transform = self._displayed(sample.dx, sample.dy)
        self.is_dragging = False
        self.origin = None
        self.samples.clear()
        return sample

    def cancel(self) -> None:
        """Drop the current drag without emitting a sample."""
        self.is_dragging = False
        self.origin = None
        self.samples.clear()

    def reset(self) -> None:
        """Return the card to its resting transform."""
        self.cancel()
        self.transform = CardTransform()

    def indicator_opacity(self) -> Tuple[float, float]:
        """
        Opacity of the LIKE and NOPE stamps for the current offset.

        Returns:
            (like_opacity, nope_opacity), each in [0, 1]
        """
        x = self.transform.x
        if self.mode == "elastic":
            ramp = self.cfg.gestures.threshold_px / 2
            if ramp <= 0:
                return (1.0 if x > 0 else 0.0, 1.0 if x < 0 else 0.0)
            return (_clamp(x / ramp, 0.0, 1.0), _clamp(-x / ramp, 0.0, 1.0))
        return (
            _clamp((x - 20) / 60, 0.0, 1.0),
            _clamp((-x - 20) / 60, 0.0, 1.0)
        )

    def _displayed(self, dx: float, dy: float) -> CardTransform:
        """Map the raw pointer offset to what the card shows."""
        g = self.cfg.gestures
        if self.mode == "elastic":
            x = dx * g.elasticity
            y = dy * g.elasticity
            rotation = _clamp(
                x / g.elastic_rotation_range_px * g.elastic_max_rotation_deg,
                -g.elastic_max_rotation_deg,
                g.elastic_max_rotation_deg
            )
        else:
            x = dx
            y = dy * g.free_x_vertical_factor
            rotation = dx * g.free_x_rotation_factor
        return CardTransform(x=x, y=y, rotation=rotation)

    def _add_sample(self, x: float, y: float, t: float) -> None:
        self.samples.append(VelocitySample(timestamp=t, x_px=x, y_px=y))

        # Keep the sampling window, but never fewer than two samples
        cutoff_time = t - self.cfg.gestures.velocity_window_ms / 1000.0
        while len(self.samples) > 2 and self.samples[0].timestamp < cutoff_time:
            self.samples.popleft()

    def _estimate_vx(self) -> float:
        """Horizontal velocity over the last sampling interval in px/s."""
        if len(self.samples) < 2:
            return 0.0
        first = self.samples[0]
        last = self.samples[-1]
        dt = last.timestamp - first.timestamp
        if dt <= 0:
            return 0.0
        return (last.x_px - first.x_px) / dt
