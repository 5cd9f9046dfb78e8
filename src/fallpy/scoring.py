"""
scoring.py: Score, difficulty ramp and the persistent record.
"""

import logging
from typing import List

from .config import GameConfig
from .data_models import Pickup, SessionState
from .record_db import RecordStore

log = logging.getLogger(__name__)


class ScoreKeeper:
    def __init__(self, config: GameConfig):
        self.config = config

    def award_passes(self, state: SessionState) -> int:
        """
        Flags every pipe whose trailing edge is fully left of the body's
        leading edge. Each pipe scores once; each pass also speeds up the scroll.
        """
        threshold = state.player.x - state.player.radius
        awarded = 0
        for obstacle in state.obstacles:
            if not obstacle.passed and obstacle.right < threshold:
                obstacle.passed = True
                state.score += 1
                state.speed += self.config.speed_increment
                awarded += 1
        if awarded:
            log.debug("Passed %d pipe(s) at frame %d, score=%d speed=%.2f",
                      awarded, state.frame, state.score, state.speed)
        return awarded

    def award_pickups(self, state: SessionState, collected: List[Pickup]):
        for _ in collected:
            state.pickups_collected += 1
            state.score += self.config.pickup_bonus
        if collected:
            log.debug("Collected %d pickup(s) at frame %d, score=%d",
                      len(collected), state.frame, state.score)

    def settle_record(self, state: SessionState, records: RecordStore) -> bool:
        """Saves the score if it beats the record. The only write path to persistence."""
        previous = records.load_record()
        state.new_record = state.score > previous
        if state.new_record:
            records.save_record(state.score)
            log.info("New record: %d (was %d)", state.score, previous)
        state.best = max(previous, state.score)
        return state.new_record
