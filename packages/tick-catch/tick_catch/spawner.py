"""Timer-driven object spawning."""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable

from tick_catch.difficulty import spawn_interval
from tick_catch.types import Category, GameObject

if TYPE_CHECKING:
    from tick_catch.config import PlayfieldConfig, SessionConfig, ThemeConfig
    from tick_catch.state import EngineState
    from tick_catch.types import FrameContext

logger = logging.getLogger(__name__)


def spawn_object(
    rng: random.Random,
    object_id: int,
    theme: ThemeConfig,
    playfield: PlayfieldConfig,
) -> GameObject:
    """Build one object above the visible top. All randomness comes from ``rng``."""
    category = Category.BAD if rng.random() < playfield.hazard_probability else Category.GOOD
    variant = rng.choice(theme.variants(category))
    x = rng.uniform(playfield.spawn_margin, playfield.width - playfield.spawn_margin)
    speed = rng.uniform(playfield.min_speed, playfield.max_speed)
    return GameObject(
        id=object_id,
        x=x,
        y=playfield.spawn_y,
        radius=playfield.object_radius,
        speed=speed,
        category=category,
        variant=variant,
    )


def make_spawn_system(
    session: SessionConfig,
) -> Callable[[EngineState, FrameContext], None]:
    """Return a system that accumulates wall-clock time and emits one object per interval."""
    playfield = session.playfield
    base_ms = session.difficulty.spawn_base_ms

    def spawn_system(state: EngineState, ctx: FrameContext) -> None:
        state.spawn_timer_ms += ctx.dt_ms
        interval = spawn_interval(
            state.score, base_ms, playfield.spawn_floor_ms, playfield.spawn_decay_per_point
        )
        if state.spawn_timer_ms > interval:
            state.spawn_timer_ms = 0.0
            obj = spawn_object(ctx.random, state.allocate_id(), session.theme, playfield)
            state.objects.append(obj)
            logger.debug(
                "Spawned %s object %d (%s) at x=%.1f",
                obj.category.value, obj.id, obj.variant, obj.x,
            )

    return spawn_system
