"""Fallpy: a flap-through-the-pipes arcade game with a deterministic simulation core."""

from .config import ConfigError, GameConfig
from .data_models import GamePhase, InputEvent, Obstacle, Pickup, PlayerBody, SessionState
from .driver import FrameDriver
from .engine import GameEngine
from .record_db import MemoryRecordStore, SqliteRecordStore

__version__ = "0.1.0"

__all__ = [
    "ConfigError", "GameConfig",
    "GamePhase", "InputEvent", "Obstacle", "Pickup", "PlayerBody", "SessionState",
    "FrameDriver", "GameEngine",
    "MemoryRecordStore", "SqliteRecordStore",
]
