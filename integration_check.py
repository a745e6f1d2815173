"""
Integration check to verify all components can be imported and work together.
"""
import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from letright.types import Candidate, SwipeOutcome, ActionHandlerProto
from letright.config import load_config
from letright.handler_mock import MockActionHandler
from letright.engine import SwipeEngine
from letright.compliance import validate_message


async def run_integration():
    """Drive a short renter session through the full pipeline."""
    print("Checking integration of swipe engine components...")

    # 1. Configuration
    print("\n1. Loading configuration...")
    try:
        config = load_config()
        print("✓ Config loaded successfully")
        print(f"  Physics: {config.gestures.physics_mode}, threshold {config.gestures.threshold_px}px")
        print(f"  Exit: {config.animation.exit_distance_px}px over {config.animation.exit_duration_s}s")
        print(f"  Window: {config.deck.window_size} cards")
    except Exception as e:
        print(f"✗ Config loading failed: {e}")
        return False

    # 2. Handler
    print("\n2. Checking mock handler...")
    handler = MockActionHandler()
    assert isinstance(handler, ActionHandlerProto)
    print("✓ MockActionHandler implements ActionHandlerProto")

    # 3. Deck session
    print("\n3. Swiping through a deck...")
    candidates = [
        Candidate(id="prop-1", payload={"address": "12 Mill Lane"}),
        Candidate(id="prop-2", payload={"address": "4 Quay Street"}),
    ]
    engine = SwipeEngine(config, candidates, handler)
    engine.on_exhausted(lambda: print("✓ Deck exhausted"))

    engine.drag_start(0, 0, 0.0)
    engine.drag_move(90, 5, 0.2)
    outcome = engine.drag_end(160, 5, 0.3)
    assert outcome == SwipeOutcome.COMMIT_RIGHT
    await engine.settle()
    print(f"✓ Drag committed {outcome.value}, cursor={engine.deck.cursor}")

    engine.swipe("left")
    await engine.settle()
    print(f"✓ Button swipe, calls={handler.calls}")
    print(f"  Toasts: {[t.message for t in engine.notifications.toasts]}")

    # 4. Compliance
    print("\n4. Checking message compliance...")
    result = validate_message("What's your best offer?", "landlord")
    assert not result.is_valid
    print(f"✓ Blocked phrases: {result.banned_phrases}")

    print("\n🎉 All integration checks passed!")
    print("\nNext steps:")
    print("1. Install dependencies: pip install -r requirements.txt")
    print("2. Run the session server: python -m letright.main")
    print("3. Open http://localhost:8000/docs")

    return True


if __name__ == "__main__":
    success = asyncio.run(run_integration())
    sys.exit(0 if success else 1)
