"""Mutable engine record and the read-only snapshot handed to displays."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from tick_catch.types import GameObject


@dataclass
class EngineState:
    """The single record the tick pipeline writes. One writer, one thread."""

    lives: int
    score: float = 0.0
    combo: int = 0
    difficulty: float = 1.0
    spawn_timer_ms: float = 0.0
    elapsed_ms: float = 0.0
    objects: list[GameObject] = field(default_factory=list)
    next_object_id: int = 0
    paddle_x: float = 0.5
    detected: bool = True

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000.0

    @property
    def final_score(self) -> int:
        return math.floor(self.score)

    def allocate_id(self) -> int:
        oid = self.next_object_id
        self.next_object_id += 1
        return oid


@dataclass(frozen=True, slots=True)
class Snapshot:
    score: float
    lives: int
    combo: int
    difficulty: float
    elapsed_seconds: float
    detected: bool = True
    paused: bool = False

    @classmethod
    def from_state(cls, state: EngineState, paused: bool = False) -> Snapshot:
        return cls(
            score=state.score,
            lives=state.lives,
            combo=state.combo,
            difficulty=state.difficulty,
            elapsed_seconds=state.elapsed_seconds,
            detected=state.detected,
            paused=paused,
        )

    def to_dict(self) -> dict[str, float | int | bool]:
        return {
            "score": self.score,
            "lives": self.lives,
            "combo": self.combo,
            "difficulty": self.difficulty,
            "elapsed_seconds": self.elapsed_seconds,
            "detected": self.detected,
            "paused": self.paused,
        }
