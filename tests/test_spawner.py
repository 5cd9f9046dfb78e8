import random

from fallpy.config import GameConfig
from fallpy.data_models import SessionState
from fallpy.spawner import Spawner, spawn_interval


def run_spawner(config, seed, frames=400, score=0):
    state = SessionState.fresh(config)
    state.score = score
    spawner = Spawner(config, random.Random(seed))
    for _ in range(frames):
        state.frame += 1
        spawner.tick(state)
    return state


def test_interval_ramps_down_with_score_to_a_floor():
    config = GameConfig()
    assert spawn_interval(config, 0) == 110
    assert spawn_interval(config, 4) == 110
    assert spawn_interval(config, 5) == 109
    assert spawn_interval(config, 123) == 110 - 24
    assert spawn_interval(config, 250) == 60
    assert spawn_interval(config, 10_000) == 60


def test_first_spawn_waits_for_initial_delay():
    config = GameConfig(width=320, height=480)
    assert run_spawner(config, seed=1, frames=39).obstacles == []
    state = run_spawner(config, seed=1, frames=40)
    assert len(state.obstacles) == 1
    assert state.spawn_timer == 110
    assert state.obstacles[0].x == 340


def test_spawned_gaps_stay_inside_the_legal_band():
    config = GameConfig(width=320, height=480)
    state = run_spawner(config, seed=99, frames=40 + 110 * 60)
    assert len(state.obstacles) == 61
    for obstacle in state.obstacles:
        assert 40 <= obstacle.gap_y <= 480 - 120 - 40
        assert obstacle.gap_height == 120
        assert obstacle.width == 52


def test_pickups_sit_past_the_pipe_near_gap_centre():
    config = GameConfig(width=320, height=480)
    state = SessionState.fresh(config)
    spawner = Spawner(config, random.Random(5))
    attached = 0
    while len(state.obstacles) < 100:
        before = len(state.pickups)
        spawner.tick(state)
        if len(state.pickups) > before:
            attached += 1
            pipe, pickup = state.obstacles[-1], state.pickups[-1]
            centre = pipe.gap_y + pipe.gap_height / 2
            assert pickup.x == pipe.right + 30
            assert abs(pickup.y - centre) <= 15
            assert pickup.radius == 9
    assert 35 <= attached <= 85


def test_same_seed_same_sequence():
    config = GameConfig(width=320, height=480)
    a = run_spawner(config, seed=42, frames=800)
    b = run_spawner(config, seed=42, frames=800)
    assert [o.gap_y for o in a.obstacles] == [o.gap_y for o in b.obstacles]
    assert [(p.x, p.y) for p in a.pickups] == [(p.x, p.y) for p in b.pickups]


def test_pickup_chance_extremes():
    never = GameConfig(width=320, height=480, pickup_chance=0.0)
    always = GameConfig(width=320, height=480, pickup_chance=1.0)
    assert run_spawner(never, seed=3, frames=600).pickups == []
    state = run_spawner(always, seed=3, frames=600)
    assert len(state.pickups) == len(state.obstacles)


def test_high_score_spawns_at_the_floor_interval():
    config = GameConfig(width=320, height=480)
    state = run_spawner(config, seed=8, frames=40 + 60 * 3, score=500)
    assert len(state.obstacles) == 4
    assert state.spawn_timer == 60
