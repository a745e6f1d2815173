"""
Test cases for configuration loading.
"""
import unittest
import sys
from pathlib import Path

import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from letright.config import load_config, _dict_to_config

DEFAULT_CONFIG = Path(__file__).parent.parent / "config.default.yaml"


class TestLoadConfig(unittest.TestCase):

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg.gestures.physics_mode, "free_x")
        self.assertEqual(cfg.gestures.threshold_px, 100.0)
        self.assertEqual(cfg.gestures.threshold_velocity_px_s, 500.0)
        self.assertEqual(cfg.deck.window_size, 3)
        self.assertEqual(cfg.animation.exit_distance_px, 550.0)
        self.assertEqual(cfg.notifications.right_message, "♥ SHORTLISTED")

    def test_explicit_path(self):
        cfg = load_config(str(DEFAULT_CONFIG))
        self.assertEqual(cfg.server.port, 8000)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/letright.yaml")

    def test_unknown_physics_mode(self):
        with open(DEFAULT_CONFIG, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        data['gestures']['physics_mode'] = "bouncy"

        with self.assertRaises(ValueError):
            _dict_to_config(data)

    def test_window_size_must_be_positive(self):
        with open(DEFAULT_CONFIG, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        data['deck']['window_size'] = 0

        with self.assertRaises(ValueError):
            _dict_to_config(data)

    def test_opacity_must_stay_visible_in_window(self):
        with open(DEFAULT_CONFIG, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        data['deck']['window_size'] = 5

        with self.assertRaises(ValueError):
            _dict_to_config(data)

        data['deck']['opacity_step'] = 0.2
        cfg = _dict_to_config(data)
        self.assertEqual(cfg.deck.window_size, 5)

    def test_scale_must_stay_positive_in_window(self):
        with open(DEFAULT_CONFIG, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        data['deck']['scale_step'] = 0.5

        with self.assertRaises(ValueError):
            _dict_to_config(data)

    def test_session_limits(self):
        cfg = load_config()
        self.assertEqual(cfg.server.session_ttl_s, 1800.0)
        self.assertEqual(cfg.server.max_sessions, 1000)

        with open(DEFAULT_CONFIG, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        data['server']['max_sessions'] = 0
        with self.assertRaises(ValueError):
            _dict_to_config(data)


if __name__ == "__main__":
    unittest.main()
