"""
driver.py: Frame scheduling outside the engine.

Frames are requested while the engine is Playing. The step that ends the
run still renders once, then scheduling stops until a reset and the next flap.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence

from .collaborators import NullRenderer, Renderer
from .data_models import GamePhase, InputEvent, SessionState
from .engine import GameEngine

log = logging.getLogger(__name__)


class FrameDriver:
    def __init__(self, engine: GameEngine, renderer: Optional[Renderer] = None):
        self.engine = engine
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.scheduled = False

    def flap(self):
        self.engine.flap()
        if self.engine.phase is GamePhase.PLAYING:
            self.scheduled = True
        elif self.engine.phase is GamePhase.IDLE:
            # flap from GameOver only resets
            self.render()

    def reset(self):
        self.engine.reset()
        if self.engine.phase is GamePhase.IDLE:
            self.scheduled = False
            self.render()

    def render(self):
        self.renderer.render(self.engine.state.to_snapshot())

    def tick(self, events: Iterable[InputEvent] = ()) -> bool:
        """
        Runs one scheduled frame. Returns whether another frame should be requested.
        """
        for event in events:
            if InputEvent(event) is InputEvent.FLAP:
                self.flap()
            else:
                self.reset()

        if not self.scheduled:
            return False

        state = self.engine.step()
        self.render()
        if state.phase is GamePhase.GAME_OVER:
            self.scheduled = False
            log.debug("Frame scheduling halted at frame %d", state.frame)
        return self.scheduled

    def run(self, inputs: Optional[Mapping[int, Sequence[InputEvent]]] = None,
            max_frames: int = 10_000) -> SessionState:
        """
        Headless loop. ``inputs`` maps a loop index to the events delivered
        just before that tick. Stops on GameOver or after ``max_frames`` ticks.
        """
        inputs = inputs or {}
        for index in range(max_frames):
            pending = inputs.get(index, ())
            if not self.tick(pending) and self.engine.phase is GamePhase.GAME_OVER:
                break
        return self.engine.state
