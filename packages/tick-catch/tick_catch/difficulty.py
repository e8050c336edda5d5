"""Difficulty ramp and spawn pacing. Pure functions of score and time."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tick_catch.config import SessionConfig
    from tick_catch.state import EngineState
    from tick_catch.types import FrameContext


def difficulty_multiplier(
    score: float,
    elapsed_seconds: float,
    score_divisor: float = 500.0,
    time_divisor: float = 120.0,
) -> float:
    """``1 + score/score_divisor + elapsed/time_divisor``. Unbounded, never below 1."""
    return 1.0 + max(0.0, score) / score_divisor + max(0.0, elapsed_seconds) / time_divisor


def spawn_interval(
    score: float,
    base_ms: float,
    floor_ms: float = 200.0,
    decay_per_point: float = 3.0,
) -> float:
    """Milliseconds between spawns; shrinks with score down to ``floor_ms``."""
    return max(floor_ms, base_ms - score * decay_per_point)


def make_difficulty_system(
    session: SessionConfig,
) -> Callable[[EngineState, FrameContext], None]:
    """Return a system that recomputes ``state.difficulty`` every tick."""
    score_divisor = session.playfield.score_divisor
    time_divisor = session.time_divisor_s

    def difficulty_system(state: EngineState, ctx: FrameContext) -> None:
        state.difficulty = difficulty_multiplier(
            state.score, state.elapsed_seconds, score_divisor, time_divisor
        )

    return difficulty_system
