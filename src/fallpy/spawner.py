"""
spawner.py: Procedural pipe and pickup generation driven by a frame countdown.
"""

import logging
import random

from .config import GameConfig
from .data_models import Obstacle, Pickup, SessionState

log = logging.getLogger(__name__)


def spawn_interval(config: GameConfig, score: int) -> int:
    """Frames until the next pipe; shrinks with score down to a hard floor."""
    ramp = min(config.spawn_max_ramp, score // config.spawn_ramp_divisor)
    return config.spawn_interval - ramp


class Spawner:
    """Creates obstacles (and sometimes a pickup) using an injected RNG."""

    def __init__(self, config: GameConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def tick(self, state: SessionState):
        """Counts the timer down and spawns when it runs out."""
        state.spawn_timer -= 1
        if state.spawn_timer > 0:
            return

        state.spawn_timer = spawn_interval(self.config, state.score)
        obstacle = self._spawn_pipe()
        state.obstacles.append(obstacle)

        pickup = self._maybe_attach_pickup(obstacle)
        if pickup is not None:
            state.pickups.append(pickup)

        log.debug("Spawned pipe gap_y=%.1f at frame %d (next in %d, pickup=%s)",
                  obstacle.gap_y, state.frame, state.spawn_timer, pickup is not None)

    def _spawn_pipe(self) -> Obstacle:
        """Generates a new pipe off-screen to the right."""
        cfg = self.config
        gap_y = cfg.gap_margin + self.rng.random() * cfg.gap_band
        return Obstacle(
            x=float(cfg.width + cfg.spawn_x_offset),
            gap_y=gap_y,
            gap_height=cfg.gap_height,
            width=cfg.pipe_width,
        )

    def _maybe_attach_pickup(self, obstacle: Obstacle):
        cfg = self.config
        if self.rng.random() >= cfg.pickup_chance:
            return None

        jitter = cfg.pickup_jitter_fraction * cfg.gap_height
        return Pickup(
            x=obstacle.right + cfg.pickup_x_offset,
            y=obstacle.gap_y + obstacle.gap_height / 2 + self.rng.uniform(-jitter, jitter),
            radius=cfg.pickup_radius,
        )
