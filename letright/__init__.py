"""
LetRight swipe engine

Swipe-deck interaction model for the renter property deck and the landlord
renter-review deck: drag tracking, release classification, timer-driven exit
transitions, the card stack, and exactly-once domain effects.
"""

__version__ = "0.1.0"

from .types import (
    Candidate,
    CardTransform,
    DeckProgress,
    DeckState,
    GestureSample,
    SwipeOutcome,
    Toast,
    WindowSlot,
    ActionHandlerProto,
)
from .config import load_config, Cfg
from .gestures import GestureTracker, classify
from .animator import ExitAnimator
from .deck import DeckController
from .dispatcher import ActionDispatcher, CallbackActionHandler
from .notifications import NotificationQueue
from .engine import SwipeEngine, EngineSnapshot
from .handler_mock import MockActionHandler
from .compliance import validate_message, sanitize_message, validation_error_message

__all__ = [
    "Candidate",
    "CardTransform",
    "DeckProgress",
    "DeckState",
    "GestureSample",
    "SwipeOutcome",
    "Toast",
    "WindowSlot",
    "ActionHandlerProto",
    "load_config",
    "Cfg",
    "GestureTracker",
    "classify",
    "ExitAnimator",
    "DeckController",
    "ActionDispatcher",
    "CallbackActionHandler",
    "NotificationQueue",
    "SwipeEngine",
    "EngineSnapshot",
    "MockActionHandler",
    "validate_message",
    "sanitize_message",
    "validation_error_message",
]
