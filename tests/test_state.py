import logging
import random

import pytest

from flappy_bird.config import BIRD_X, PIPE_WIDTH
from flappy_bird.entities import pipe_height_range
from flappy_bird.highscore import HighScoreStore
from flappy_bird.state import Command, Phase, SoundEvent, StateMachine


@pytest.fixture
def machine(tmp_path) -> StateMachine:
    return StateMachine(HighScoreStore(tmp_path / "hs.dat"), random.Random(42))


def keep_alive(m: StateMachine) -> None:
    """Hold the bird mid-gap so only scoring and scrolling happen."""
    m.state.bird.y = 300.0
    m.state.bird.velocity = 0.0
    for pipe in m.state.pipes:
        pipe.height = 200


def test_initial_state(machine: StateMachine) -> None:
    s = machine.state
    assert s.phase is Phase.NOT_STARTED
    assert s.score == 0
    assert s.tier == 1
    assert len(s.pipes) == 3
    assert s.bird.y == 300.0


def test_tick_ignored_before_start(machine: StateMachine) -> None:
    before = machine.frame()
    machine.tick()
    assert machine.frame() == before


def test_first_jump_starts_and_lifts(machine: StateMachine) -> None:
    machine.jump()
    assert machine.state.phase is Phase.RUNNING
    assert machine.state.bird.velocity == -10.0
    assert machine.drain_events() == [SoundEvent.MENU_SELECT]


def test_velocity_accumulates_between_jumps(machine: StateMachine) -> None:
    machine.jump()
    start = machine.state.bird.velocity
    previous = start
    for _ in range(10):
        machine.tick()
        assert machine.state.bird.velocity > previous
        previous = machine.state.bird.velocity
    assert machine.state.phase is Phase.RUNNING
    assert machine.state.bird.velocity >= start + 10 * 0.5
    assert machine.state.bird.y == pytest.approx(227.5)


def test_jump_while_running_emits_sound(machine: StateMachine) -> None:
    machine.jump()
    machine.drain_events()
    machine.tick()
    machine.jump()
    assert machine.state.bird.velocity == -10.0
    assert machine.drain_events() == [SoundEvent.JUMP]


def test_pipe_count_is_constant(machine: StateMachine) -> None:
    machine.jump()
    for _ in range(2000):
        keep_alive(machine)
        machine.tick()
        assert len(machine.state.pipes) == 3
        xs = [p.x for p in machine.state.pipes]
        assert xs == sorted(xs)
    assert machine.state.phase is Phase.RUNNING
    assert machine.state.score >= 15
    assert machine.state.tier == 3


def test_each_pipe_scores_once(machine: StateMachine) -> None:
    machine.jump()
    keep_alive(machine)
    first = machine.state.pipes[0]
    first.x = BIRD_X - PIPE_WIDTH - 1
    machine.tick()
    assert first.passed is True
    assert machine.state.score == 1
    keep_alive(machine)
    machine.tick()
    assert machine.state.score == 1
    assert machine.drain_events().count(SoundEvent.SCORE) == 1


def test_offscreen_pipe_is_replaced_behind_last(machine: StateMachine) -> None:
    machine.jump()
    keep_alive(machine)
    for pipe, x in zip(machine.state.pipes, (-79.0, 221.0, 521.0)):
        pipe.x = x
        pipe.passed = pipe.x + PIPE_WIDTH < BIRD_X
    machine.tick()
    pipes = machine.state.pipes
    assert [p.x for p in pipes] == [218.0, 518.0, 818.0]
    assert pipes[-1].passed is False
    lo, hi = pipe_height_range(False)
    assert lo <= pipes[-1].height <= hi


def test_hard_mode_scrolls_faster(machine: StateMachine) -> None:
    machine.toggle_hard_mode()
    machine.jump()
    keep_alive(machine)
    before = machine.state.pipes[0].x
    machine.tick()
    assert before - machine.state.pipes[0].x == pytest.approx(3.9)
    assert machine.state.bird.velocity == pytest.approx(0.6)


def test_tier_up_event(machine: StateMachine) -> None:
    machine.jump()
    machine.drain_events()
    keep_alive(machine)
    machine.state.score = 5
    machine.tick()
    assert machine.state.tier == 2
    assert SoundEvent.TIER_UP in machine.drain_events()
    keep_alive(machine)
    machine.tick()
    assert SoundEvent.TIER_UP not in machine.drain_events()


def test_hitting_ground_ends_game(machine: StateMachine) -> None:
    machine.jump()
    machine.drain_events()
    machine.state.bird.y = 540.0
    machine.state.bird.velocity = 0.0
    machine.tick()
    assert machine.state.phase is Phase.OVER
    assert machine.drain_events() == [SoundEvent.COLLISION]
    # further ticks and jumps are ignored
    y = machine.state.bird.y
    machine.tick()
    machine.jump()
    machine.toggle_pause()
    assert machine.state.bird.y == y
    assert machine.state.phase is Phase.OVER
    assert machine.drain_events() == []


def test_pipe_hit_ends_game(machine: StateMachine) -> None:
    machine.jump()
    machine.state.bird.velocity = 0.0
    pipe = machine.state.pipes[0]
    pipe.x, pipe.height = 163.0, 400
    machine.tick()
    assert machine.state.phase is Phase.OVER


def test_pause_freezes_world(machine: StateMachine) -> None:
    machine.jump()
    machine.toggle_pause()
    assert machine.state.phase is Phase.PAUSED
    before = machine.frame()
    machine.tick()
    machine.jump()
    assert machine.frame() == before
    machine.toggle_pause()
    assert machine.state.phase is Phase.RUNNING


def test_reset_only_from_paused_or_over(machine: StateMachine) -> None:
    machine.reset()
    assert machine.drain_events() == []
    machine.jump()
    machine.reset()
    assert machine.state.phase is Phase.RUNNING
    machine.toggle_pause()
    machine.state.score = 3
    machine.drain_events()
    machine.dispatch(Command.RESET)
    s = machine.state
    assert s.phase is Phase.NOT_STARTED
    assert s.score == 0
    assert s.bird.velocity == 0.0
    assert len(s.pipes) == 3
    assert machine.drain_events() == [SoundEvent.MENU_SELECT]


def test_menu_returns_to_start(machine: StateMachine) -> None:
    machine.jump()
    machine.toggle_pause()
    machine.dispatch(Command.MENU)
    assert machine.state.phase is Phase.NOT_STARTED


def test_menu_toggles_only_before_start(machine: StateMachine) -> None:
    machine.dispatch(Command.TOGGLE_HARD)
    machine.dispatch(Command.TOGGLE_NIGHT)
    machine.dispatch(Command.TOGGLE_SOUND)
    s = machine.state
    assert (s.hard_mode, s.night_mode, s.sound_enabled) == (True, True, False)
    lo, hi = pipe_height_range(True)
    assert all(lo <= p.height <= hi for p in s.pipes)
    machine.dispatch(Command.CLASSIC_MODE)
    assert (s.hard_mode, s.night_mode) == (False, False)
    assert machine.drain_events() == [SoundEvent.MENU_SELECT] * 4

    machine.jump()
    machine.dispatch(Command.TOGGLE_HARD)
    assert s.hard_mode is False


def test_modes_survive_reset(machine: StateMachine) -> None:
    machine.toggle_hard_mode()
    machine.toggle_night_mode()
    machine.jump()
    machine.toggle_pause()
    machine.reset()
    assert machine.state.hard_mode is True
    assert machine.state.night_mode is True


def test_high_score_persists_and_never_drops(tmp_path) -> None:
    store = HighScoreStore(tmp_path / "hs.dat")
    m = StateMachine(store, random.Random(1))
    m.jump()
    for _ in range(700):
        keep_alive(m)
        m.tick()
    earned = m.state.score
    assert earned > 0
    assert m.state.high_score == earned
    m.toggle_pause()
    m.reset()
    assert m.state.score == 0
    assert m.state.high_score == earned

    restarted = StateMachine(HighScoreStore(tmp_path / "hs.dat"), random.Random(2))
    assert restarted.state.high_score == earned


def test_frame_snapshot(machine: StateMachine) -> None:
    frame = machine.frame()
    assert frame.phase is Phase.NOT_STARTED
    assert frame.bird_y == 300.0
    assert len(frame.pipes) == 3
    assert frame.pipes[0][0] == 800.0


def test_failed_high_score_write_does_not_stop_play(tmp_path, caplog) -> None:
    m = StateMachine(HighScoreStore(tmp_path / "missing_dir" / "hs.dat"), random.Random(3))
    m.jump()
    keep_alive(m)
    m.state.pipes[0].x = BIRD_X - PIPE_WIDTH - 1
    with caplog.at_level(logging.WARNING, logger="flappy_bird.highscore"):
        m.tick()
    assert m.state.phase is Phase.RUNNING
    assert m.state.score == 1
    assert m.state.high_score == 1
    assert "Could not save high score" in caplog.text


def test_every_command_dispatches(machine: StateMachine) -> None:
    machine.dispatch(Command.TOGGLE_SOUND)
    assert machine.state.sound_enabled is False
    machine.dispatch(Command.JUMP)
    machine.dispatch(Command.TOGGLE_PAUSE)
    assert machine.state.phase is Phase.PAUSED
    machine.dispatch(Command.TOGGLE_NIGHT)
    assert machine.state.night_mode is False
    machine.dispatch(Command.MENU)
    assert machine.state.phase is Phase.NOT_STARTED
