"""
LetRight swipe sessions - FastAPI server

Hosts swipe decks in memory so a thin client can forward pointer events
and render the returned card window, progress and toasts.
"""

import os
import logging
import time
import uuid
from dataclasses import asdict, replace
from typing import Optional, Dict, Any, List, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .config import Cfg, load_config, PHYSICS_MODES
from .types import Candidate
from .engine import SwipeEngine
from .handler_mock import MockActionHandler
from .notifications import NotificationQueue
from .compliance import validate_message, validation_error_message

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


# Request/Response models
class CandidateModel(BaseModel):
    id: str
    payload: Dict[str, Any] = Field(default_factory=dict)

class CreateSessionRequest(BaseModel):
    candidates: List[CandidateModel]
    physics_mode: Optional[str] = None

class PointerRequest(BaseModel):
    x: float
    y: float
    t: float

class SwipeRequest(BaseModel):
    direction: Literal["left", "right"]

class ValidateMessageRequest(BaseModel):
    message: str
    sender_type: Literal["landlord", "renter"]
    advertised_rent: Optional[int] = None

class SessionResponse(BaseModel):
    session_id: str
    snapshot: Dict[str, Any]
    outcome: Optional[str] = None

class ValidateMessageResponse(BaseModel):
    is_valid: bool
    error: Optional[str] = None
    banned_phrases: List[str] = Field(default_factory=list)
    display_message: str = ""


class Session:
    """One deck plus the handler and toasts that belong to it."""

    def __init__(self, cfg: Cfg, candidates: List[Candidate]):
        self.handler = MockActionHandler()
        self.notifications = NotificationQueue(cfg)
        self.engine = SwipeEngine(cfg, candidates, self.handler, self.notifications)
        self.engine.on_exhausted(
            lambda: self.notifications.info(cfg.notifications.exhausted_message)
        )
        self.last_used = time.monotonic()

    def touch(self) -> None:
        self.last_used = time.monotonic()

    def close(self) -> None:
        self.engine.close()
        self.notifications.clear()


def create_app(cfg: Optional[Cfg] = None) -> FastAPI:
    """Build the app around ``cfg`` (loaded from LETRIGHT_CONFIG if omitted)."""
    if cfg is None:
        cfg = load_config(os.getenv("LETRIGHT_CONFIG"))

    app = FastAPI(title="LetRight Swipe Sessions", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    sessions: Dict[str, Session] = {}
    app.state.cfg = cfg
    app.state.sessions = sessions

    def prune_sessions(room: int = 0) -> None:
        """Drop idle sessions, then the least recently used ones over the cap."""
        now = time.monotonic()
        for session_id, session in list(sessions.items()):
            if now - session.last_used > cfg.server.session_ttl_s:
                sessions.pop(session_id).close()
                logger.info(f"⌛ Session {session_id} expired")

        overflow = len(sessions) + room - cfg.server.max_sessions
        if overflow > 0:
            for session_id in sorted(sessions, key=lambda sid: sessions[sid].last_used)[:overflow]:
                sessions.pop(session_id).close()
                logger.info(f"♻️ Session {session_id} evicted (limit {cfg.server.max_sessions})")

    def get_session(session_id: str) -> Session:
        prune_sessions()
        session = sessions.get(session_id)
        if session is None:
            raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
        session.touch()
        return session

    def respond(session_id: str, outcome: Optional[str] = None) -> SessionResponse:
        snapshot = asdict(sessions[session_id].engine.snapshot())
        return SessionResponse(session_id=session_id, snapshot=snapshot, outcome=outcome)

    @app.get("/")
    async def root():
        """Health check"""
        return {
            "service": "LetRight Swipe Sessions",
            "sessions": len(sessions),
            "physics_mode": cfg.gestures.physics_mode,
        }

    @app.post("/sessions", response_model=SessionResponse)
    async def create_session(request: CreateSessionRequest):
        """Start a deck from a snapshot of candidates"""
        session_cfg = cfg
        if request.physics_mode is not None:
            if request.physics_mode not in PHYSICS_MODES:
                raise HTTPException(status_code=422, detail=f"Unknown physics mode {request.physics_mode}")
            session_cfg = replace(cfg, gestures=replace(cfg.gestures, physics_mode=request.physics_mode))

        candidates = [Candidate(id=c.id, payload=c.payload) for c in request.candidates]
        prune_sessions(room=1)
        session_id = uuid.uuid4().hex
        sessions[session_id] = Session(session_cfg, candidates)
        logger.info(f"🃏 Session {session_id} created with {len(candidates)} candidates")
        return respond(session_id)

    @app.get("/sessions/{session_id}", response_model=SessionResponse)
    async def get_session_state(session_id: str):
        get_session(session_id)
        return respond(session_id)

    @app.delete("/sessions/{session_id}")
    async def delete_session(session_id: str):
        get_session(session_id)
        sessions.pop(session_id).close()
        logger.info(f"🗑️ Session {session_id} closed")
        return {"success": True}

    @app.post("/sessions/{session_id}/drag/start", response_model=SessionResponse)
    async def drag_start(session_id: str, request: PointerRequest):
        session = get_session(session_id)
        if not session.engine.drag_start(request.x, request.y, request.t):
            raise HTTPException(status_code=409, detail=f"Card not draggable ({session.engine.phase})")
        return respond(session_id)

    @app.post("/sessions/{session_id}/drag/move", response_model=SessionResponse)
    async def drag_move(session_id: str, request: PointerRequest):
        session = get_session(session_id)
        session.engine.drag_move(request.x, request.y, request.t)
        return respond(session_id)

    @app.post("/sessions/{session_id}/drag/end", response_model=SessionResponse)
    async def drag_end(session_id: str, request: PointerRequest):
        """Release the card and wait for the transition to finish"""
        session = get_session(session_id)
        outcome = session.engine.drag_end(request.x, request.y, request.t)
        await session.engine.settle()
        return respond(session_id, outcome.value if outcome is not None else None)

    @app.post("/sessions/{session_id}/swipe", response_model=SessionResponse)
    async def swipe(session_id: str, request: SwipeRequest):
        """Like / pass button"""
        session = get_session(session_id)
        if not session.engine.swipe(request.direction):
            raise HTTPException(status_code=409, detail=f"Card not swipeable ({session.engine.phase})")
        await session.engine.settle()
        return respond(session_id, f"commit-{request.direction}")

    @app.get("/sessions/{session_id}/notifications")
    async def notifications(session_id: str):
        session = get_session(session_id)
        return {"toasts": [asdict(t) for t in session.notifications.toasts]}

    @app.post("/messages/validate", response_model=ValidateMessageResponse)
    async def validate(request: ValidateMessageRequest):
        """RRA 2025 check for an outgoing chat message"""
        result = validate_message(request.message, request.sender_type, request.advertised_rent)
        if not result.is_valid:
            logger.warning(f"⚠️ Blocked {request.sender_type} message: {result.banned_phrases}")
        return ValidateMessageResponse(
            is_valid=result.is_valid,
            error=result.error,
            banned_phrases=result.banned_phrases,
            display_message=validation_error_message(result),
        )

    return app
