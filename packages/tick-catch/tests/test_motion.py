"""Tests for frame stepping and fall integration."""

import random

import pytest

from tick_catch.config import resolve_session
from tick_catch.motion import frame_step, make_motion_system
from tick_catch.state import EngineState
from tick_catch.types import Category, FrameContext, GameObject


def _ctx(dt_ms: float) -> FrameContext:
    return FrameContext(
        dt_ms=dt_ms,
        step=frame_step(dt_ms),
        elapsed_ms=0.0,
        random=random.Random(0),
    )


def _obj(oid: int, y: float, speed: float = 5.0, category: Category = Category.GOOD) -> GameObject:
    return GameObject(id=oid, x=400.0, y=y, radius=20.0, speed=speed, category=category, variant="gem")


# --- frame_step ---

def test_reference_frame_is_one_step():
    assert frame_step(16.67) == pytest.approx(1.0)


def test_slow_frame_is_clamped():
    assert frame_step(250.0) == pytest.approx(32.0 / 16.67)


def test_zero_and_negative_frames_do_not_move():
    assert frame_step(0.0) == 0.0
    assert frame_step(-10.0) == 0.0


# --- motion system ---

def test_motion_scales_by_gravity_and_difficulty():
    session = resolve_session(theme="cosmic")
    system = make_motion_system(session)
    state = EngineState(lives=3, difficulty=2.0, objects=[_obj(0, 100.0)])
    system(state, _ctx(16.67))
    assert state.objects[0].y == pytest.approx(100.0 + 5.0 * 0.9 * 2.0)


def test_motion_y_never_decreases():
    session = resolve_session(theme="urban_rain")
    system = make_motion_system(session)
    state = EngineState(lives=3, objects=[_obj(0, -50.0, speed=4.2)])
    previous = -50.0
    for dt in (16.0, 0.0, 40.0, 8.0, 33.0):
        system(state, _ctx(dt))
        assert state.objects[0].y >= previous
        previous = state.objects[0].y


def test_objects_past_exit_are_removed_without_penalty():
    session = resolve_session()
    system = make_motion_system(session)
    state = EngineState(
        lives=3,
        score=40.0,
        combo=2,
        objects=[_obj(0, 648.0), _obj(1, 648.0, category=Category.BAD), _obj(2, 10.0)],
    )
    system(state, _ctx(16.67))
    assert [o.id for o in state.objects] == [2]
    assert state.lives == 3
    assert state.score == 40.0
    assert state.combo == 2


def test_objects_inside_playfield_are_never_dropped():
    session = resolve_session()
    system = make_motion_system(session)
    state = EngineState(lives=3, objects=[_obj(i, float(i * 50)) for i in range(10)])
    system(state, _ctx(0.0))
    assert len(state.objects) == 10
