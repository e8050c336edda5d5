"""tick-catch - Falling-object catch simulation with a Kalman-filtered paddle."""

from tick_catch.clock import FrameClock
from tick_catch.collision import PaddleRect, paddle_rect, point_in_rect
from tick_catch.config import (
    AVATARS,
    DIFFICULTIES,
    THEMES,
    Avatar,
    DifficultyConfig,
    FilterConfig,
    PlayfieldConfig,
    SessionConfig,
    ThemeConfig,
    resolve_session,
)
from tick_catch.difficulty import difficulty_multiplier, spawn_interval
from tick_catch.engine import Engine
from tick_catch.estimator import (
    DirectEstimator,
    EstimatorState,
    FilteredEstimator,
    Measurement,
    MeasurementFeed,
    kalman_update,
    make_estimator,
    remap_edges,
)
from tick_catch.leaderboard import Leaderboard, LeaderboardEntry, LeaderboardError, Rank, rank_for
from tick_catch.motion import frame_step
from tick_catch.signals import GAME_OVER, HAZARD_HIT, OBJECT_COLLECTED, SNAPSHOT, SignalBus
from tick_catch.spawner import spawn_object
from tick_catch.state import EngineState, Snapshot
from tick_catch.types import Category, ConfigError, FrameContext, GameObject, RunState

__all__ = [
    "Engine",
    "EngineState",
    "Snapshot",
    "FrameClock",
    "FrameContext",
    "GameObject",
    "Category",
    "RunState",
    "ConfigError",
    "SessionConfig",
    "ThemeConfig",
    "DifficultyConfig",
    "PlayfieldConfig",
    "FilterConfig",
    "Avatar",
    "THEMES",
    "DIFFICULTIES",
    "AVATARS",
    "resolve_session",
    "EstimatorState",
    "DirectEstimator",
    "FilteredEstimator",
    "Measurement",
    "MeasurementFeed",
    "kalman_update",
    "make_estimator",
    "remap_edges",
    "difficulty_multiplier",
    "spawn_interval",
    "spawn_object",
    "frame_step",
    "PaddleRect",
    "paddle_rect",
    "point_in_rect",
    "SignalBus",
    "OBJECT_COLLECTED",
    "HAZARD_HIT",
    "SNAPSHOT",
    "GAME_OVER",
    "Leaderboard",
    "LeaderboardEntry",
    "LeaderboardError",
    "Rank",
    "rank_for",
]
