"""
collaborators.py: What the core needs from the presentation side.
"""

from typing import Protocol


class Renderer(Protocol):
    def render(self, snapshot: dict) -> None:
        """Draws one frame from a SessionState snapshot."""


class AudioSink(Protocol):
    def on_flap(self) -> None:
        """Called on every applied flap. The core never learns whether sound played."""


class NullAudio:
    def on_flap(self):
        pass


class NullRenderer:
    """Keeps the latest snapshot; used by headless runs."""

    def __init__(self):
        self.frames = 0
        self.last = None

    def render(self, snapshot: dict):
        self.frames += 1
        self.last = snapshot
