"""
Configuration management for the swipe deck engine.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


PHYSICS_MODES = ("elastic", "free_x")


@dataclass
class GesturesConfig:
    """Drag physics and release classification settings."""
    physics_mode: str  # "elastic" or "free_x", one per deployment
    threshold_px: float
    threshold_velocity_px_s: float
    velocity_window_ms: int
    elasticity: float
    elastic_rotation_range_px: float
    elastic_max_rotation_deg: float
    free_x_rotation_factor: float
    free_x_vertical_factor: float


@dataclass
class AnimationConfig:
    """Exit and spring-back transition parameters."""
    exit_distance_px: float
    exit_rotation_deg: float
    exit_duration_s: float
    spring_back_duration_s: float


@dataclass
class DeckConfig:
    """Card stack window and depth constants."""
    window_size: int
    scale_step: float
    y_offset_step: float
    opacity_step: float
    preload_count: int


@dataclass
class NotificationsConfig:
    """Toast durations and swipe feedback messages."""
    default_duration_s: float
    match_duration_s: float
    swipe_toast_duration_s: float
    right_message: str
    left_message: str
    error_message: str
    exhausted_message: str


@dataclass
class ServerConfig:
    """HTTP session server settings."""
    host: str
    port: int
    session_ttl_s: float  # idle sessions older than this are dropped
    max_sessions: int


@dataclass
class Cfg:
    """Main configuration class."""
    gestures: GesturesConfig
    animation: AnimationConfig
    deck: DeckConfig
    notifications: NotificationsConfig
    server: ServerConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    gestures_data = data['gestures']
    physics_mode = gestures_data['physics_mode']
    if physics_mode not in PHYSICS_MODES:
        raise ValueError(
            f"Unknown physics_mode {physics_mode!r}, expected one of {PHYSICS_MODES}"
        )
    gestures = GesturesConfig(
        physics_mode=physics_mode,
        threshold_px=float(gestures_data['threshold_px']),
        threshold_velocity_px_s=float(gestures_data['threshold_velocity_px_s']),
        velocity_window_ms=gestures_data['velocity_window_ms'],
        elasticity=float(gestures_data['elastic']['elasticity']),
        elastic_rotation_range_px=float(gestures_data['elastic']['rotation_range_px']),
        elastic_max_rotation_deg=float(gestures_data['elastic']['max_rotation_deg']),
        free_x_rotation_factor=float(gestures_data['free_x']['rotation_factor']),
        free_x_vertical_factor=float(gestures_data['free_x']['vertical_factor'])
    )

    animation_data = data['animation']
    animation = AnimationConfig(
        exit_distance_px=float(animation_data['exit_distance_px']),
        exit_rotation_deg=float(animation_data['exit_rotation_deg']),
        exit_duration_s=float(animation_data['exit_duration_s']),
        spring_back_duration_s=float(animation_data['spring_back_duration_s'])
    )

    deck_data = data['deck']
    if deck_data['window_size'] < 1:
        raise ValueError("deck.window_size must be at least 1")
    # Back cards must stay visible and non-zero in size
    hidden_at = deck_data['window_size'] - 1
    if hidden_at * float(deck_data['opacity_step']) >= 1:
        raise ValueError("deck.opacity_step fades cards out inside the window")
    if hidden_at * float(deck_data['scale_step']) >= 1:
        raise ValueError("deck.scale_step shrinks cards to nothing inside the window")
    deck = DeckConfig(
        window_size=deck_data['window_size'],
        scale_step=float(deck_data['scale_step']),
        y_offset_step=float(deck_data['y_offset_step']),
        opacity_step=float(deck_data['opacity_step']),
        preload_count=deck_data['preload_count']
    )

    notifications_data = data['notifications']
    notifications = NotificationsConfig(
        default_duration_s=float(notifications_data['default_duration_s']),
        match_duration_s=float(notifications_data['match_duration_s']),
        swipe_toast_duration_s=float(notifications_data['swipe_toast_duration_s']),
        right_message=notifications_data['right_message'] or "",
        left_message=notifications_data['left_message'] or "",
        error_message=notifications_data['error_message'],
        exhausted_message=notifications_data['exhausted_message']
    )

    server_data = data['server']
    if int(server_data['max_sessions']) < 1:
        raise ValueError("server.max_sessions must be at least 1")
    server = ServerConfig(
        host=server_data['host'],
        port=int(server_data['port']),
        session_ttl_s=float(server_data['session_ttl_s']),
        max_sessions=int(server_data['max_sessions'])
    )

    return Cfg(
        gestures=gestures,
        animation=animation,
        deck=deck,
        notifications=notifications,
        server=server
    )
