"""
engine.py: The game state machine driving one frame of simulation at a time.
"""

import logging
import random
from typing import Iterable, Optional, Union

from .collaborators import AudioSink, NullAudio
from .config import GameConfig
from .data_models import GamePhase, InputEvent, SessionState
from .physics_core import PhysicsCore
from .record_db import MemoryRecordStore, RecordStore
from .scoring import ScoreKeeper
from .spawner import Spawner

log = logging.getLogger(__name__)


class GameEngine:
    """
    Owns the SessionState and sequences Idle -> Playing -> GameOver -> Idle.

    The engine never schedules itself: something outside calls step() once
    per frame, and flap()/reset() whenever input arrives.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 rng: Optional[random.Random] = None,
                 records: Optional[RecordStore] = None,
                 audio: Optional[AudioSink] = None):
        self.config = (config or GameConfig()).validate()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.records = records if records is not None else MemoryRecordStore()
        self.audio = audio if audio is not None else NullAudio()

        self.physics = PhysicsCore(self.config)
        self.spawner = Spawner(self.config, self.rng)
        self.scoring = ScoreKeeper(self.config)

        self.state = SessionState.fresh(self.config, best=self.records.load_record())

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    # -------- Input --------

    def flap(self):
        """Starts a run from Idle, lifts the body while Playing, resets from GameOver."""
        if self.state.phase is GamePhase.GAME_OVER:
            self.reset()
            return

        if self.state.phase is GamePhase.IDLE:
            self.state.phase = GamePhase.PLAYING
            log.info("Session started (best=%d)", self.state.best)

        self.state.player.velocity = self.physics.flap()
        self.audio.on_flap()

    def reset(self):
        """Back to a clean Idle state. Ignored mid-run."""
        if self.state.phase is GamePhase.PLAYING:
            log.debug("Ignoring reset while playing")
            return
        self.state = SessionState.fresh(self.config, best=self.records.load_record())

    def handle(self, event: Union[InputEvent, str]):
        event = InputEvent(event)
        if event is InputEvent.FLAP:
            self.flap()
        elif event is InputEvent.RESET:
            self.reset()

    # -------- Simulation --------

    def step(self, events: Iterable[Union[InputEvent, str]] = ()) -> SessionState:
        """
        Applies the given inputs in order, then advances one frame if Playing.
        Returns the (possibly replaced) SessionState.
        """
        for event in events:
            self.handle(event)

        state = self.state
        if state.phase is not GamePhase.PLAYING:
            return state

        state.frame += 1

        # 1. Physics: body, then the shared scroll
        self.physics.apply_gravity_and_movement(state.player)
        state.obstacles, state.pickups = self.physics.advance_entities(
            state.obstacles, state.pickups, state.speed)

        # 2. Spawning
        self.spawner.tick(state)

        # 3. Collisions; any hit ends the frame
        if self.physics.hits_floor(state.player):
            self._game_over("floor")
            return state
        if self.physics.check_collision(state.player, state.obstacles) is not None:
            self._game_over("pipe")
            return state

        collected = self.physics.collect_pickups(state.player, state.pickups)
        self.scoring.award_pickups(state, collected)

        # 4. Scoring
        self.scoring.award_passes(state)
        return state

    def _game_over(self, cause: str):
        state = self.state
        state.phase = GamePhase.GAME_OVER
        self.scoring.settle_record(state, self.records)
        log.info("Game over (%s) at frame %d: score=%d pickups=%d best=%d",
                 cause, state.frame, state.score, state.pickups_collected, state.best)
