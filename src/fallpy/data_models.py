"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .config import GameConfig
from .constants import TILT_FACTOR, TILT_MIN, TILT_MAX


class GamePhase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "over"


class InputEvent(str, Enum):
    """Discrete intents delivered by the input collaborator."""
    FLAP = "flap"
    RESET = "reset"


@dataclass
class PlayerBody:
    """The controllable body. x never changes within a session."""
    x: float
    y: float
    radius: float
    velocity: float = 0.0

    @property
    def tilt(self) -> float:
        """Render angle in radians, nose up while rising."""
        return max(TILT_MIN, min(TILT_MAX, self.velocity * TILT_FACTOR))


@dataclass
class Obstacle:
    """A pipe pair. gap_y is the top of the passable band."""
    x: float
    gap_y: float
    gap_height: float
    width: float
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class Pickup:
    x: float
    y: float
    radius: float
    collected: bool = False


@dataclass
class SessionState:
    """
    The single aggregate mutated by a frame step.
    Owns the obstacle and pickup lists; nothing else holds on to them.
    """
    player: PlayerBody
    obstacles: List[Obstacle] = field(default_factory=list)
    pickups: List[Pickup] = field(default_factory=list)
    score: int = 0
    pickups_collected: int = 0
    speed: float = 0.0
    spawn_timer: int = 0
    frame: int = 0
    phase: GamePhase = GamePhase.IDLE
    best: int = 0
    new_record: bool = False

    @classmethod
    def fresh(cls, config: GameConfig, best: int = 0) -> "SessionState":
        """Initial Idle state: body centred, nothing on screen, short spawn delay."""
        return cls(
            player=PlayerBody(x=config.body_x, y=config.height / 2, radius=config.player_radius),
            speed=config.start_speed,
            spawn_timer=config.initial_spawn_delay,
            best=best,
        )

    def to_snapshot(self) -> dict:
        """Prepares a plain dictionary copy for renderers and the headless CLI."""
        return {
            "phase": self.phase.value,
            "frame": self.frame,
            "score": self.score,
            "best": self.best,
            "new_record": self.new_record,
            "pickups_collected": self.pickups_collected,
            "speed": round(self.speed, 4),
            "player": {
                "x": round(self.player.x, 4),
                "y": round(self.player.y, 4),
                "v": round(self.player.velocity, 4),
                "r": self.player.radius,
                "tilt": round(self.player.tilt, 4),
            },
            "obstacles": [
                {"x": round(o.x, 4), "gap_y": round(o.gap_y, 4), "gap_height": o.gap_height,
                 "width": o.width, "passed": o.passed}
                for o in self.obstacles
            ],
            "pickups": [
                {"x": round(p.x, 4), "y": round(p.y, 4), "r": p.radius}
                for p in self.pickups if not p.collected
            ],
        }
