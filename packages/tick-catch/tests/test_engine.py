"""Tests for the frame loop, pause semantics, snapshots, and game over."""

import pytest

from tick_catch.config import resolve_session
from tick_catch.engine import Engine
from tick_catch.signals import GAME_OVER, SNAPSHOT
from tick_catch.state import Snapshot
from tick_catch.types import Category, GameObject, RunState


def _obj(oid: int, category: Category, x: float = 400.0, y: float = 500.0, speed: float = 0.0) -> GameObject:
    return GameObject(id=oid, x=x, y=y, radius=20.0, speed=speed, category=category, variant="v")


def _collect(engine: Engine, signal: str) -> list[dict]:
    received: list[dict] = []
    engine.bus.subscribe(signal, lambda name, data: received.append(data))
    return received


# --- Initialization ---

def test_engine_init_from_tier():
    engine = Engine(resolve_session(difficulty="easy"), seed=1)
    assert engine.state.lives == 5
    assert engine.state.score == 0
    assert engine.state.objects == []
    assert engine.run_state is RunState.RUNNING
    assert engine.seed == 1


def test_engine_random_seed_when_omitted():
    engine = Engine(resolve_session())
    assert isinstance(engine.seed, int)


# --- frame ---

def test_first_frame_only_anchors_time():
    engine = Engine(resolve_session(), seed=1)
    assert engine.frame(123_456.0) is True
    assert engine.state.elapsed_ms == 0.0
    assert engine.state.spawn_timer_ms == 0.0


def test_elapsed_time_accumulates_frame_deltas():
    engine = Engine(resolve_session(), seed=1)
    for t in (0.0, 16.0, 32.0, 50.0):
        engine.frame(t)
    assert engine.state.elapsed_ms == 50.0
    assert engine.clock.tick_number == 4


def test_pointer_moves_paddle_on_next_frame():
    engine = Engine(resolve_session(), seed=1)
    engine.set_pointer(700.0, 100.0, 800.0)
    engine.frame(0.0)
    assert engine.state.paddle_x == pytest.approx(0.75)
    assert engine.state.detected is True


def test_difficulty_non_decreasing_over_session():
    engine = Engine(resolve_session(), seed=3)
    engine.set_pointer_fraction(0.0)
    values = []
    for i in range(600):
        engine.frame(i * 16.0)
        values.append(engine.state.difficulty)
    assert values == sorted(values)
    assert values[-1] > 1.0


def test_same_seed_reproduces_spawn_sequence():
    def run(seed: int) -> list[tuple]:
        engine = Engine(resolve_session(theme="retro", difficulty="hard"), seed=seed)
        engine.set_pointer_fraction(0.0)
        for i in range(400):
            engine.frame(i * 16.0)
        return [(o.id, o.x, o.y, o.category, o.variant) for o in engine.state.objects]

    assert run(42) == run(42)
    assert run(42) != run(43)


# --- pause / resume ---

def test_paused_frames_mutate_nothing():
    engine = Engine(resolve_session(), seed=1)
    engine.frame(0.0)
    engine.frame(16.0)
    engine.state.objects.append(_obj(99, Category.GOOD, y=100.0, speed=5.0))
    before = (
        engine.state.elapsed_ms,
        engine.state.spawn_timer_ms,
        engine.state.score,
        engine.state.lives,
        engine.state.combo,
        [(o.id, o.y) for o in engine.state.objects],
    )

    engine.pause()
    assert engine.paused
    assert engine.frame(1_000.0) is True
    assert engine.frame(60_000.0) is True

    after = (
        engine.state.elapsed_ms,
        engine.state.spawn_timer_ms,
        engine.state.score,
        engine.state.lives,
        engine.state.combo,
        [(o.id, o.y) for o in engine.state.objects],
    )
    assert after == before
    assert engine.snapshot().paused is True


def test_resume_does_not_apply_catch_up_delta():
    engine = Engine(resolve_session(), seed=1)
    engine.frame(0.0)
    engine.frame(16.0)
    engine.pause()
    engine.frame(30_000.0)
    engine.resume()

    engine.frame(90_000.0)
    assert engine.state.elapsed_ms == 16.0
    engine.frame(90_016.0)
    assert engine.state.elapsed_ms == 32.0
    assert engine.state.spawn_timer_ms == 32.0


def test_resume_with_explicit_anchor():
    engine = Engine(resolve_session(), seed=1)
    engine.frame(0.0)
    engine.pause()
    engine.resume(now_ms=5_000.0)
    engine.frame(5_020.0)
    assert engine.state.elapsed_ms == 20.0


def test_pointer_ignored_while_paused():
    engine = Engine(resolve_session(), seed=1)
    engine.set_pointer_fraction(0.2)
    engine.pause()
    engine.set_pointer_fraction(0.9)
    engine.resume()
    engine.frame(0.0)
    assert engine.state.paddle_x == pytest.approx(0.2)


def test_toggle_pause():
    engine = Engine(resolve_session(), seed=1)
    engine.toggle_pause()
    assert engine.run_state is RunState.PAUSED
    engine.toggle_pause()
    assert engine.run_state is RunState.RUNNING


# --- game over ---

def test_five_hazards_end_the_game_once():
    engine = Engine(resolve_session(difficulty="easy"), seed=1)
    events = _collect(engine, GAME_OVER)
    hook_scores: list[int] = []
    engine.on_game_over(hook_scores.append)

    engine.state.objects.append(_obj(0, Category.GOOD))
    assert engine.frame(0.0) is True
    assert engine.state.score == 5

    results = []
    for i in range(1, 6):
        engine.state.objects.append(_obj(i, Category.BAD))
        results.append(engine.frame(i * 16.0))

    assert results == [True, True, True, True, False]
    assert engine.state.lives == 0
    assert engine.is_over
    assert events == [{"final_score": 5, "elapsed_seconds": pytest.approx(0.08)}]
    assert hook_scores == [5]

    # no further ticks once terminal
    assert engine.frame(200.0) is False
    assert len(events) == 1
    assert engine.state.elapsed_ms == 80.0


def test_final_score_is_floored():
    engine = Engine(resolve_session(difficulty="hard"), seed=1)
    events = _collect(engine, GAME_OVER)
    engine.state.score = 41.9
    engine.state.objects.append(_obj(0, Category.BAD))
    engine.frame(0.0)
    assert events[0]["final_score"] == 41


def test_stop_halts_scheduling():
    engine = Engine(resolve_session(), seed=1)
    events = _collect(engine, GAME_OVER)
    engine.frame(0.0)
    engine.stop()
    assert engine.frame(16.0) is False
    assert engine.state.elapsed_ms == 0.0
    assert not engine.is_over
    assert events == []


def test_restart_resets_state():
    engine = Engine(resolve_session(difficulty="hard"), seed=1)
    engine.state.objects.append(_obj(0, Category.BAD))
    engine.frame(0.0)
    assert engine.is_over

    engine.restart()
    assert engine.is_active
    assert engine.state.lives == 1
    assert engine.state.score == 0
    assert engine.state.objects == []
    assert engine.clock.tick_number == 0
    assert engine.frame(1_000.0) is True
    assert engine.state.elapsed_ms == 0.0


# --- snapshots ---

def test_periodic_snapshots_are_values():
    engine = Engine(resolve_session(), seed=1)
    snapshots = _collect(engine, SNAPSHOT)
    for t in range(0, 201, 20):
        engine.frame(float(t))

    assert len(snapshots) == 2
    first = snapshots[0]["snapshot"]
    assert isinstance(first, Snapshot)
    assert first.elapsed_seconds == pytest.approx(0.1)
    assert snapshots[1]["snapshot"].elapsed_seconds == pytest.approx(0.2)

    engine.state.score = 999.0
    assert first.score == 0


def test_snapshot_on_demand_copies_state():
    engine = Engine(resolve_session(), seed=1)
    engine.frame(0.0)
    snap = engine.snapshot()
    engine.state.lives = 1
    assert snap.lives == 3
    assert snap.difficulty == 1.0


# --- vision input ---

def test_vision_feed_drives_paddle():
    engine = Engine(resolve_session(input_mode="vision"), seed=1)
    engine.feed.publish(0.9, 20)
    engine.frame(0.0)
    assert engine.state.paddle_x == pytest.approx(0.5 + (1.08 / 1.12) * 0.5)
    assert engine.state.detected is True


def test_vision_dropout_freezes_paddle():
    engine = Engine(resolve_session(input_mode="vision"), seed=1)
    engine.feed.publish(0.2, 30)
    engine.frame(0.0)
    held = engine.state.paddle_x

    engine.feed.mark_unavailable()
    for i in range(1, 20):
        assert engine.frame(i * 16.0) is True
    assert engine.state.detected is False
    assert engine.state.paddle_x == held


def test_vision_mode_ignores_pointer():
    engine = Engine(resolve_session(input_mode="vision"), seed=1)
    engine.set_pointer_fraction(0.9)
    engine.frame(0.0)
    assert engine.state.paddle_x == 0.5


# --- run_forever ---

class _FakeTime:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def test_run_forever_until_stopped():
    engine = Engine(resolve_session(), seed=1)
    fake = _FakeTime()
    engine.bus.subscribe(SNAPSHOT, lambda name, data: engine.stop())

    frames = engine.run_forever(now_fn=fake.monotonic, fps=50, sleep_fn=fake.sleep)

    assert not engine.is_active
    assert frames > 1
    assert all(s == pytest.approx(0.02) for s in fake.sleeps)


def test_run_forever_until_game_over():
    engine = Engine(resolve_session(difficulty="hard"), seed=1)
    engine.state.objects.append(_obj(0, Category.BAD))
    fake = _FakeTime()
    frames = engine.run_forever(now_fn=fake.monotonic, sleep_fn=fake.sleep)
    assert frames == 1
    assert engine.is_over


def test_run_forever_rejects_bad_fps():
    engine = Engine(resolve_session(), seed=1)
    with pytest.raises(ValueError):
        engine.run_forever(fps=0)
