"""
config.py: Validated game configuration built on top of the defaults in constants.py.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from . import constants as C

log = logging.getLogger(__name__)

DB_ENV_VAR = "FALLPY_DB"


class ConfigError(ValueError):
    """Raised when a configuration cannot produce a legal playfield."""


@dataclass(frozen=True)
class GameConfig:
    """All tunables the simulation reads. Playfield size is never hardcoded in the core."""
    width: float = C.SCREEN_WIDTH
    height: float = C.SCREEN_HEIGHT
    player_x: Optional[float] = None        # None -> width / 3
    player_radius: float = C.PLAYER_RADIUS

    gravity: float = C.GRAVITY
    flap_impulse: float = C.FLAP_IMPULSE

    pipe_width: float = C.PIPE_WIDTH
    gap_height: float = C.PIPE_GAP
    gap_margin: float = C.PIPE_MARGIN
    spawn_x_offset: float = C.PIPE_SPAWN_X_OFFSET
    offscreen_epsilon: float = C.OFFSCREEN_EPSILON

    spawn_interval: int = C.SPAWN_INTERVAL
    spawn_max_ramp: int = C.SPAWN_MAX_RAMP
    spawn_ramp_divisor: int = C.SPAWN_RAMP_DIVISOR
    initial_spawn_delay: int = C.INITIAL_SPAWN_DELAY

    pickup_radius: float = C.PICKUP_RADIUS
    pickup_chance: float = C.PICKUP_CHANCE
    pickup_x_offset: float = C.PICKUP_X_OFFSET
    pickup_jitter_fraction: float = C.PICKUP_JITTER_FRACTION
    pickup_bonus: int = C.PICKUP_BONUS

    start_speed: float = C.START_SPEED
    speed_increment: float = C.SPEED_INCREMENT

    seed: Optional[int] = None

    @property
    def body_x(self) -> float:
        return self.width / 3 if self.player_x is None else self.player_x

    @property
    def gap_band(self) -> float:
        """Vertical room available for the gap offset draw."""
        return self.height - self.gap_height - 2 * self.gap_margin

    def with_overrides(self, **changes) -> "GameConfig":
        """Returns a copy with the non-None keyword overrides applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def validate(self) -> "GameConfig":
        """Fail fast on configurations that would misplace obstacles at runtime."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"playfield must be positive, got {self.width}x{self.height}")
        if self.gap_height <= 0:
            raise ConfigError(f"gap height must be positive, got {self.gap_height}")
        if self.gap_margin < 0:
            raise ConfigError(f"gap margin must be >= 0, got {self.gap_margin}")
        if self.gap_height >= self.height:
            raise ConfigError(
                f"gap height {self.gap_height} leaves no room in playfield height {self.height}")
        if self.gap_band < 0:
            raise ConfigError(
                f"no legal gap band: height {self.height} - gap {self.gap_height} "
                f"- 2 * margin {self.gap_margin} < 0")
        if self.player_radius <= 0 or self.pickup_radius <= 0:
            raise ConfigError("player and pickup radii must be positive")
        if 2 * self.player_radius >= self.height:
            raise ConfigError(f"player radius {self.player_radius} does not fit the playfield")
        if not 0 <= self.body_x <= self.width:
            raise ConfigError(f"player x {self.body_x} lies outside the playfield")
        if self.pipe_width <= 0:
            raise ConfigError(f"pipe width must be positive, got {self.pipe_width}")
        if not 0.0 <= self.pickup_chance <= 1.0:
            raise ConfigError(f"pickup chance must be within [0, 1], got {self.pickup_chance}")
        if self.pickup_jitter_fraction < 0:
            raise ConfigError("pickup jitter fraction must be >= 0")
        if self.spawn_ramp_divisor < 1:
            raise ConfigError(f"spawn ramp divisor must be >= 1, got {self.spawn_ramp_divisor}")
        if self.spawn_max_ramp < 0 or self.spawn_interval - self.spawn_max_ramp < 1:
            raise ConfigError(
                f"spawn interval floor {self.spawn_interval - self.spawn_max_ramp} must be >= 1")
        if self.initial_spawn_delay < 0:
            raise ConfigError("initial spawn delay must be >= 0")
        if self.start_speed < 0 or self.speed_increment < 0:
            raise ConfigError("scroll speed and its increment must be >= 0")
        return self


def default_db_path() -> str:
    """Database file for the persistent record; FALLPY_DB wins over the default."""
    path = os.environ.get(DB_ENV_VAR, C.DB_FILE)
    log.debug("Using record database %s", path)
    return path
