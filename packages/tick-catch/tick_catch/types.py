"""Shared value types, enums, and errors for the catch simulation."""

from __future__ import annotations

import enum
import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

ObjectId = int


class Category(enum.Enum):
    GOOD = "good"
    BAD = "bad"


class RunState(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(slots=True)
class GameObject:
    """A falling object. ``y`` only ever grows until the object is removed."""

    id: ObjectId
    x: float
    y: float
    radius: float
    speed: float
    category: Category
    variant: str


@dataclass(frozen=True, slots=True)
class FrameContext:
    dt_ms: float
    step: float
    elapsed_ms: float
    random: _random.Random


class ConfigError(KeyError):
    """Raised when a session names an unknown theme, tier, avatar, or input mode."""

    def __init__(self, kind: str, key: str, choices: list[str]) -> None:
        self.kind = kind
        self.key = key
        self.choices = choices
        super().__init__(f"Unknown {kind} {key!r}, expected one of {choices}")


if TYPE_CHECKING:
    from tick_catch.state import EngineState

System = Callable[["EngineState", FrameContext], None]
