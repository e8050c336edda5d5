"""Paddle geometry and hit resolution."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tick_catch.signals import HAZARD_HIT, OBJECT_COLLECTED
from tick_catch.types import Category

if TYPE_CHECKING:
    from tick_catch.config import PlayfieldConfig, SessionConfig
    from tick_catch.signals import SignalBus
    from tick_catch.state import EngineState
    from tick_catch.types import FrameContext, GameObject

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PaddleRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2.0


def paddle_rect(x: float, playfield: PlayfieldConfig) -> PaddleRect:
    """Paddle rectangle centred on normalized ``x``, in playfield pixels."""
    return PaddleRect(
        left=x * playfield.width - playfield.paddle_width / 2.0,
        top=playfield.paddle_top,
        width=playfield.paddle_width,
        height=playfield.paddle_height,
    )


def point_in_rect(px: float, py: float, rect: PaddleRect) -> bool:
    """Half-open test: left and top edges hit, right and bottom edges miss."""
    return rect.left <= px < rect.right and rect.top <= py < rect.bottom


def make_collision_system(
    session: SessionConfig,
    bus: SignalBus,
) -> Callable[[EngineState, FrameContext], None]:
    """Return a system that removes intercepted objects and scores them.

    Every hit is resolved independently in one pass; the surviving objects
    form the next tick's list.
    """
    playfield = session.playfield
    theme_key = session.theme.key
    penalty = session.difficulty.hazard_penalty

    def collect(state: EngineState, obj: GameObject) -> None:
        state.score += playfield.base_score + state.combo // playfield.combo_divisor
        state.combo += 1
        bus.publish(
            OBJECT_COLLECTED,
            theme=theme_key, variant=obj.variant, score=state.score, combo=state.combo,
        )

    def hazard(state: EngineState, obj: GameObject) -> None:
        state.lives -= penalty
        state.combo = 0
        bus.publish(HAZARD_HIT, theme=theme_key, variant=obj.variant, lives=state.lives)

    def collision_system(state: EngineState, ctx: FrameContext) -> None:
        rect = paddle_rect(state.paddle_x, playfield)
        survivors: list[GameObject] = []
        for obj in state.objects:
            if not point_in_rect(obj.x, obj.y, rect):
                survivors.append(obj)
                continue
            if obj.category is Category.GOOD:
                collect(state, obj)
            else:
                hazard(state, obj)
            logger.debug("Object %d (%s) hit paddle", obj.id, obj.category.value)
        state.objects = survivors

    return collision_system
