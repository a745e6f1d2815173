"""
Test cases for the deck controller and its visible window.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from letright.deck import DeckController
from letright.types import Candidate
from letright.config import load_config


def make_candidates(count):
    return [Candidate(id=f"prop-{i}", payload={"rent_pcm": 1000 + i}) for i in range(count)]


class TestDeckWindow(unittest.TestCase):
    """Test the visible window and depth transforms."""

    def setUp(self):
        self.cfg = load_config()

    def test_window_length_invariant(self):
        """len(window) == min(N, M - cursor) for every reachable state."""
        n = self.cfg.deck.window_size
        for m in range(0, 7):
            deck = DeckController(self.cfg, make_candidates(m))
            for cursor in range(m + 1):
                self.assertEqual(deck.cursor, cursor)
                self.assertEqual(len(deck.window()), min(n, m - cursor))
                deck.advance()

    def test_depth_is_strictly_decreasing(self):
        deck = DeckController(self.cfg, make_candidates(5))
        window = deck.window()

        for front, back in zip(window, window[1:]):
            self.assertGreater(front.transform.scale, back.transform.scale)
            self.assertGreater(front.transform.opacity, back.transform.opacity)
            self.assertGreater(front.transform.z_index, back.transform.z_index)
            self.assertLess(front.transform.y, back.transform.y)

    def test_depth_constants(self):
        deck = DeckController(self.cfg, make_candidates(3))
        second = deck.window()[1].transform

        self.assertAlmostEqual(second.scale, 0.96)
        self.assertAlmostEqual(second.y, 10.0)
        self.assertAlmostEqual(second.opacity, 0.72)
        self.assertEqual(second.z_index, 2)

    def test_only_top_card_is_interactive(self):
        deck = DeckController(self.cfg, make_candidates(3))
        self.assertEqual([slot.interactive for slot in deck.window()], [True, False, False])

    def test_window_follows_cursor(self):
        deck = DeckController(self.cfg, make_candidates(4))
        deck.advance()
        ids = [slot.candidate.id for slot in deck.window()]
        self.assertEqual(ids, ["prop-1", "prop-2", "prop-3"])
        self.assertEqual(deck.active.id, "prop-1")


class TestDeckAdvance(unittest.TestCase):
    """Test cursor movement and the exhausted signal."""

    def setUp(self):
        self.cfg = load_config()
        self.exhausted_calls = 0

    def _on_exhausted(self):
        self.exhausted_calls += 1

    def test_exhausted_fires_once(self):
        deck = DeckController(self.cfg, make_candidates(1))
        deck.on_exhausted(self._on_exhausted)

        self.assertTrue(deck.advance())
        self.assertEqual(deck.cursor, 1)
        self.assertTrue(deck.is_empty)
        self.assertEqual(self.exhausted_calls, 1)

        # Further calls are no-ops
        self.assertFalse(deck.advance())
        self.assertFalse(deck.advance())
        self.assertEqual(deck.cursor, 1)
        self.assertEqual(self.exhausted_calls, 1)
        self.assertIsNone(deck.active)

    def test_empty_deck_never_fires(self):
        deck = DeckController(self.cfg, [])
        deck.on_exhausted(self._on_exhausted)

        self.assertTrue(deck.is_empty)
        self.assertFalse(deck.advance())
        self.assertEqual(deck.cursor, 0)
        self.assertEqual(self.exhausted_calls, 0)
        self.assertEqual(deck.window(), [])

    def test_failing_listener_does_not_stop_others(self):
        deck = DeckController(self.cfg, make_candidates(1))

        def broken_listener():
            raise RuntimeError("host crashed")

        deck.on_exhausted(broken_listener)
        deck.on_exhausted(self._on_exhausted)

        with self.assertLogs("letright.deck", level="ERROR"):
            self.assertTrue(deck.advance())
        self.assertTrue(deck.is_empty)
        self.assertEqual(self.exhausted_calls, 1)

    def test_progress(self):
        deck = DeckController(self.cfg, make_candidates(3))
        deck.advance()

        progress = deck.progress()
        self.assertEqual(progress.viewed, 1)
        self.assertEqual(progress.remaining, 2)
        self.assertEqual(progress.total, 3)
        self.assertEqual(progress.percentage, 33)

        self.assertEqual(DeckController(self.cfg, []).progress().percentage, 0)

    def test_running_low(self):
        deck = DeckController(self.cfg, make_candidates(7))
        self.assertFalse(deck.is_running_low)  # 7 left, preload at 5

        deck.advance()
        deck.advance()
        self.assertTrue(deck.is_running_low)

        for _ in range(5):
            deck.advance()
        self.assertFalse(deck.is_running_low)  # nothing left to preload for


if __name__ == "__main__":
    unittest.main()
