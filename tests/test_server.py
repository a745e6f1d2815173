"""
Test cases for the swipe session HTTP API.
"""
import time
import unittest
import sys
from dataclasses import replace
from pathlib import Path

from fastapi.testclient import TestClient

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from letright.server import create_app
from letright.config import load_config


def fast_config(**server):
    cfg = load_config()
    return replace(
        cfg,
        animation=replace(cfg.animation, exit_duration_s=0.01, spring_back_duration_s=0.01),
        notifications=replace(cfg.notifications, swipe_toast_duration_s=30.0),
        server=replace(cfg.server, **server),
    )


CANDIDATES = [
    {"id": "prop-1", "payload": {"address": "12 Mill Lane", "rent_pcm": 950}},
    {"id": "prop-2", "payload": {"address": "4 Quay Street", "rent_pcm": 1200}},
]


class TestSessionAPI(unittest.TestCase):

    def setUp(self):
        self.app = create_app(fast_config())
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def _create(self, **extra):
        response = self.client.post("/sessions", json={"candidates": CANDIDATES, **extra})
        self.assertEqual(response.status_code, 200)
        return response.json()

    def test_health(self):
        data = self.client.get("/").json()
        self.assertEqual(data["sessions"], 0)
        self.assertEqual(data["physics_mode"], "free_x")

    def test_create_session(self):
        data = self._create()
        snapshot = data["snapshot"]

        self.assertEqual(snapshot["phase"], "idle")
        self.assertEqual(snapshot["cursor"], 0)
        self.assertEqual([s["candidate"]["id"] for s in snapshot["window"]], ["prop-1", "prop-2"])
        self.assertTrue(snapshot["window"][0]["interactive"])
        self.assertEqual(snapshot["progress"]["total"], 2)

    def test_drag_to_commit(self):
        session_id = self._create()["session_id"]
        base = f"/sessions/{session_id}/drag"

        self.assertEqual(self.client.post(f"{base}/start", json={"x": 0, "y": 0, "t": 0.0}).status_code, 200)
        moved = self.client.post(f"{base}/move", json={"x": 90, "y": 8, "t": 0.5}).json()
        self.assertEqual(moved["snapshot"]["phase"], "dragging")
        self.assertEqual(moved["snapshot"]["active_transform"]["x"], 90)

        ended = self.client.post(f"{base}/end", json={"x": 160, "y": 8, "t": 1.0}).json()
        self.assertEqual(ended["outcome"], "commit-right")
        self.assertEqual(ended["snapshot"]["cursor"], 1)

        toasts = self.client.get(f"/sessions/{session_id}/notifications").json()["toasts"]
        self.assertEqual([t["kind"] for t in toasts], ["shortlist"])

    def test_spring_back(self):
        session_id = self._create()["session_id"]
        base = f"/sessions/{session_id}/drag"

        self.client.post(f"{base}/start", json={"x": 0, "y": 0, "t": 0.0})
        ended = self.client.post(f"{base}/end", json={"x": 40, "y": 0, "t": 1.0}).json()

        self.assertEqual(ended["outcome"], "none")
        self.assertEqual(ended["snapshot"]["cursor"], 0)
        self.assertEqual(ended["snapshot"]["phase"], "idle")

    def test_buttons_until_empty(self):
        session_id = self._create()["session_id"]

        first = self.client.post(f"/sessions/{session_id}/swipe", json={"direction": "left"}).json()
        self.assertEqual(first["snapshot"]["cursor"], 1)

        last = self.client.post(f"/sessions/{session_id}/swipe", json={"direction": "right"}).json()
        self.assertEqual(last["snapshot"]["phase"], "empty")
        self.assertTrue(last["snapshot"]["exhausted"])

        response = self.client.post(f"/sessions/{session_id}/swipe", json={"direction": "right"})
        self.assertEqual(response.status_code, 409)
        response = self.client.post(f"/sessions/{session_id}/drag/start", json={"x": 0, "y": 0, "t": 0.0})
        self.assertEqual(response.status_code, 409)

        toasts = self.client.get(f"/sessions/{session_id}/notifications").json()["toasts"]
        self.assertIn("info", [t["kind"] for t in toasts])

    def test_elastic_session(self):
        data = self._create(physics_mode="elastic")
        session_id = data["session_id"]
        self.client.post(f"/sessions/{session_id}/drag/start", json={"x": 0, "y": 0, "t": 0.0})
        moved = self.client.post(f"/sessions/{session_id}/drag/move", json={"x": 100, "y": 0, "t": 0.1}).json()
        self.assertAlmostEqual(moved["snapshot"]["active_transform"]["x"], 70.0)

    def test_bad_physics_mode(self):
        response = self.client.post("/sessions", json={"candidates": CANDIDATES, "physics_mode": "wobbly"})
        self.assertEqual(response.status_code, 422)

    def test_unknown_session(self):
        self.assertEqual(self.client.get("/sessions/missing").status_code, 404)
        self.assertEqual(self.client.delete("/sessions/missing").status_code, 404)

    def test_delete_session(self):
        session_id = self._create()["session_id"]
        self.assertTrue(self.client.delete(f"/sessions/{session_id}").json()["success"])
        self.assertEqual(self.client.get(f"/sessions/{session_id}").status_code, 404)


class TestSessionLifetime(unittest.TestCase):
    """Idle sessions expire and the store is capped."""

    def _client(self, cfg):
        client = TestClient(create_app(cfg))
        client.__enter__()
        self.addCleanup(client.__exit__, None, None, None)
        return client

    def _create(self, client):
        return client.post("/sessions", json={"candidates": CANDIDATES}).json()["session_id"]

    def test_idle_session_expires(self):
        client = self._client(fast_config(session_ttl_s=0.05))
        session_id = self._create(client)
        self.assertEqual(client.get(f"/sessions/{session_id}").status_code, 200)

        time.sleep(0.1)

        self.assertEqual(client.get(f"/sessions/{session_id}").status_code, 404)
        self.assertEqual(client.get("/").json()["sessions"], 0)

    def test_oldest_session_evicted_over_cap(self):
        client = self._client(fast_config(max_sessions=2))
        first = self._create(client)
        second = self._create(client)
        third = self._create(client)

        self.assertEqual(client.get(f"/sessions/{first}").status_code, 404)
        self.assertEqual(client.get(f"/sessions/{second}").status_code, 200)
        self.assertEqual(client.get(f"/sessions/{third}").status_code, 200)

    def test_exhausted_message_is_configurable(self):
        cfg = fast_config()
        cfg = replace(cfg, notifications=replace(
            cfg.notifications, exhausted_message="No more renters to review."
        ))
        client = self._client(cfg)
        session_id = self._create(client)

        client.post(f"/sessions/{session_id}/swipe", json={"direction": "left"})
        client.post(f"/sessions/{session_id}/swipe", json={"direction": "left"})

        toasts = client.get(f"/sessions/{session_id}/notifications").json()["toasts"]
        info = [t["message"] for t in toasts if t["kind"] == "info"]
        self.assertEqual(info, ["No more renters to review."])


class TestMessageValidationAPI(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(create_app(fast_config()))

    def test_blocked_message(self):
        response = self.client.post("/messages/validate", json={
            "message": "We have a bidding war, what's your best offer?",
            "sender_type": "landlord",
        })
        data = response.json()
        self.assertFalse(data["is_valid"])
        self.assertIn("best offer", data["banned_phrases"])
        self.assertIn("£7,000", data["display_message"])

    def test_renter_message(self):
        response = self.client.post("/messages/validate", json={
            "message": "Can I offer more?",
            "sender_type": "renter",
        })
        self.assertTrue(response.json()["is_valid"])


if __name__ == "__main__":
    unittest.main()
