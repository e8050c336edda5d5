"""Tests for the difficulty ramp and spawn pacing."""

import pytest

from tick_catch.config import resolve_session
from tick_catch.difficulty import difficulty_multiplier, make_difficulty_system, spawn_interval
from tick_catch.state import EngineState


# --- difficulty_multiplier ---

def test_multiplier_starts_at_one():
    assert difficulty_multiplier(0, 0) == 1.0


def test_multiplier_formula():
    assert difficulty_multiplier(250, 60) == pytest.approx(1 + 250 / 500 + 60 / 120)


def test_multiplier_non_decreasing_in_time():
    values = [difficulty_multiplier(100, t) for t in range(0, 600, 5)]
    assert values == sorted(values)


def test_multiplier_non_decreasing_in_score():
    values = [difficulty_multiplier(s, 30) for s in range(0, 2000, 7)]
    assert values == sorted(values)


def test_multiplier_grows_without_bound_while_idle():
    assert difficulty_multiplier(0, 3600) > 30


# --- spawn_interval ---

def test_spawn_interval_at_zero_score_is_base():
    assert spawn_interval(0, 1000) == 1000


def test_spawn_interval_decays_with_score():
    assert spawn_interval(100, 1000) == pytest.approx(700)


def test_spawn_interval_non_increasing_and_floored_for_medium():
    medium = resolve_session(difficulty="medium")
    intervals = [
        spawn_interval(score, medium.difficulty.spawn_base_ms) for score in range(0, 5000, 3)
    ]
    assert all(b <= a for a, b in zip(intervals, intervals[1:]))
    assert min(intervals) == 200


def test_spawn_interval_custom_floor():
    assert spawn_interval(10_000, 700, floor_ms=350) == 350


# --- tier time divisors ---

def test_medium_tier_uses_base_time_divisor():
    assert resolve_session(difficulty="medium").time_divisor_s == pytest.approx(120.0)


def test_tiers_ramp_at_different_rates():
    easy = resolve_session(difficulty="easy").time_divisor_s
    hard = resolve_session(difficulty="hard").time_divisor_s
    assert easy == pytest.approx(400.0)
    assert hard == pytest.approx(48.0)


# --- system ---

def test_difficulty_system_recomputes_from_state():
    session = resolve_session(difficulty="medium")
    system = make_difficulty_system(session)
    state = EngineState(lives=3, score=500.0, elapsed_ms=120_000.0)
    system(state, None)
    assert state.difficulty == pytest.approx(3.0)

    state.score = 0.0
    state.elapsed_ms = 0.0
    system(state, None)
    assert state.difficulty == 1.0
