import random

import pytest

from fallpy.config import ConfigError, GameConfig
from fallpy.data_models import GamePhase, InputEvent
from fallpy.engine import GameEngine
from fallpy.record_db import MemoryRecordStore

from conftest import make_obstacle, make_pickup, start_without_flap


def test_starts_idle_and_does_not_advance(engine):
    before = engine.state.player.y
    for _ in range(10):
        engine.step()
    assert engine.phase is GamePhase.IDLE
    assert engine.state.frame == 0
    assert engine.state.player.y == before


def test_first_flap_starts_and_lifts(engine, audio):
    engine.flap()
    assert engine.phase is GamePhase.PLAYING
    assert engine.state.player.velocity == -8.5
    assert audio.flaps == 1


def test_flap_sets_velocity_instead_of_adding(engine):
    engine.flap()
    engine.state.player.velocity = 6.0
    engine.flap()
    assert engine.state.player.velocity == -8.5


def test_free_fall_matches_closed_form_and_ends_on_the_floor(engine):
    state = start_without_flap(engine)
    assert state.player.y == 240

    frames = 0
    while engine.phase is GamePhase.PLAYING:
        engine.step()
        frames += 1
        expected = 240 + sum(0.45 * i for i in range(1, frames + 1))
        assert state.player.y == pytest.approx(expected)

    # first frame with y + 12 > 480
    assert frames == 32
    assert 240 + sum(0.45 * i for i in range(1, 32)) + 12 <= 480
    assert state.frame == 32


def test_ceiling_invariant_holds_while_flapping(engine):
    engine.flap()
    for _ in range(120):
        engine.step([InputEvent.FLAP])
        if engine.phase is not GamePhase.PLAYING:
            break
        assert engine.state.player.y - engine.state.player.radius >= 0


def test_pipe_collision_ends_the_run(engine):
    state = start_without_flap(engine)
    state.obstacles.append(make_obstacle(x=state.player.x - 26, gap_y=300))
    engine.step()
    assert engine.phase is GamePhase.GAME_OVER


def test_gameover_freezes_simulation_and_ignores_step(engine):
    state = start_without_flap(engine)
    state.player.y = 470
    engine.step()
    assert engine.phase is GamePhase.GAME_OVER
    frozen = (state.frame, state.player.y, state.score)
    engine.step()
    assert (state.frame, state.player.y, state.score) == frozen


def test_pickup_scenario(engine):
    state = start_without_flap(engine)
    # velocity -0.45 cancels this frame's gravity, so the body stays at y=240;
    # pickups start one scroll step to the right of the body
    state.player.velocity = -0.45
    miss = make_pickup(x=state.player.x + 2.4, y=240 + 21)
    state.pickups.append(miss)
    engine.step()
    assert state.player.y == 240
    assert not miss.collected
    assert state.score == 0

    state.pickups.clear()
    state.player.velocity = -0.45
    hit = make_pickup(x=state.player.x + 2.4, y=240 + 20)
    state.pickups.append(hit)
    engine.step()
    assert hit.collected
    assert state.score == 2
    assert state.pickups_collected == 1

    engine.step()
    assert hit not in state.pickups
    assert state.score == 2
    assert state.pickups_collected == 1


def test_score_is_monotonic_during_a_run():
    engine = GameEngine(GameConfig(seed=7), rng=random.Random(7))
    engine.flap()
    last = 0
    for frame in range(3000):
        events = [InputEvent.FLAP] if frame % 18 == 0 else []
        state = engine.step(events)
        assert state.score >= last
        last = state.score
        if engine.phase is GamePhase.GAME_OVER:
            break


def test_new_record_saved_on_game_over():
    records = MemoryRecordStore(best=2)
    engine = GameEngine(GameConfig(), records=records)
    state = start_without_flap(engine)
    state.score = 3
    state.player.y = 470
    engine.step()
    assert engine.phase is GamePhase.GAME_OVER
    assert state.new_record
    assert records.best == 3
    assert records.saves == 1


def test_no_record_write_when_not_beaten():
    records = MemoryRecordStore(best=5)
    engine = GameEngine(GameConfig(), records=records)
    state = start_without_flap(engine)
    state.score = 5
    state.player.y = 470
    engine.step()
    assert not state.new_record
    assert records.saves == 0


def test_flap_in_game_over_only_resets(engine, audio):
    state = start_without_flap(engine)
    state.player.y = 470
    engine.step()
    flaps = audio.flaps

    engine.flap()
    assert engine.phase is GamePhase.IDLE
    assert audio.flaps == flaps
    assert engine.state.player.velocity == 0.0


def test_reset_is_ignored_mid_run(engine):
    engine.flap()
    engine.step()
    engine.reset()
    assert engine.phase is GamePhase.PLAYING
    assert engine.state.frame == 1


def test_reset_twice_from_game_over_is_identical(engine):
    engine.flap()
    while engine.phase is GamePhase.PLAYING:
        engine.step()
    assert engine.state.frame > 0

    engine.step([InputEvent.RESET])
    first = engine.state
    engine.reset()
    second = engine.state

    assert first == second
    assert second.phase is GamePhase.IDLE
    assert second.obstacles == [] and second.pickups == []
    assert second.score == 0 and second.pickups_collected == 0
    assert second.speed == 2.4
    assert second.spawn_timer == 40
    assert second.frame == 0
    assert second.player.y == 240 and second.player.velocity == 0.0


def test_same_seed_same_run():
    def play(seed):
        engine = GameEngine(GameConfig(seed=seed))
        engine.flap()
        for frame in range(2000):
            engine.step([InputEvent.FLAP] if frame % 17 == 0 else [])
            if engine.phase is GamePhase.GAME_OVER:
                break
        return engine.state.to_snapshot()

    assert play(11) == play(11)


def test_invalid_config_fails_at_construction():
    with pytest.raises(ConfigError):
        GameEngine(GameConfig(height=200, gap_height=150))


def test_string_events_are_accepted(engine):
    engine.step(["flap"])
    assert engine.phase is GamePhase.PLAYING
    with pytest.raises(ValueError):
        engine.step(["jump"])


def test_pipe_pass_scores_and_speeds_up_once(engine):
    state = start_without_flap(engine)
    threshold = state.player.x - state.player.radius
    # trailing edge one unit right of the threshold, one scroll step takes it past
    pipe = make_obstacle(x=threshold + 1 - 52, gap_y=100)
    state.obstacles.append(pipe)

    engine.step()
    assert engine.phase is GamePhase.PLAYING
    assert pipe.passed
    assert state.score == 1
    assert state.speed == pytest.approx(2.42)

    engine.step()
    assert state.score == 1
    assert state.speed == pytest.approx(2.42)


def test_pickup_is_not_collected_on_the_fatal_frame(engine):
    state = start_without_flap(engine)
    state.player.y = 470
    # lands exactly on the body after this frame's scroll and fall
    pickup = make_pickup(x=state.player.x + 2.4, y=470.45)
    state.pickups.append(pickup)

    engine.step()
    assert engine.phase is GamePhase.GAME_OVER
    assert not pickup.collected
    assert state.score == 0
    assert state.pickups_collected == 0
