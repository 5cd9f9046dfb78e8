import random

import pytest

from fallpy.config import GameConfig
from fallpy.data_models import GamePhase, Obstacle, Pickup
from fallpy.engine import GameEngine
from fallpy.record_db import MemoryRecordStore


class RecordingAudio:
    def __init__(self):
        self.flaps = 0

    def on_flap(self):
        self.flaps += 1


@pytest.fixture
def config():
    return GameConfig(width=320, height=480, seed=1234)


@pytest.fixture
def records():
    return MemoryRecordStore()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def engine(config, records, audio):
    return GameEngine(config, rng=random.Random(1234), records=records, audio=audio)


def start_without_flap(engine: GameEngine):
    """Puts the engine in Playing without the flap impulse, for free-fall checks."""
    engine.state.phase = GamePhase.PLAYING
    return engine.state


def make_obstacle(x=100.0, gap_y=100.0, gap_height=120.0, width=52.0, passed=False):
    return Obstacle(x=x, gap_y=gap_y, gap_height=gap_height, width=width, passed=passed)


def make_pickup(x=0.0, y=0.0, radius=9.0):
    return Pickup(x=x, y=y, radius=radius)
