"""Frame-rate independent fall integration."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tick_catch.config import SessionConfig
    from tick_catch.state import EngineState
    from tick_catch.types import FrameContext


def frame_step(dt_ms: float, max_frame_ms: float = 32.0, reference_ms: float = 16.67) -> float:
    """Express ``dt_ms`` in 60Hz reference frames.

    Clamped at ``max_frame_ms`` so a stalled frame cannot carry an object
    through the paddle in one jump.
    """
    return max(0.0, min(dt_ms, max_frame_ms)) / reference_ms


def make_motion_system(
    session: SessionConfig,
) -> Callable[[EngineState, FrameContext], None]:
    """Return a system that advances every object and drops those past ``exit_y``.

    Leaving the playfield never touches score, lives, or combo.
    """
    gravity = session.theme.gravity
    exit_y = session.playfield.exit_y

    def motion_system(state: EngineState, ctx: FrameContext) -> None:
        scale = ctx.step * gravity * state.difficulty
        for obj in state.objects:
            obj.y += obj.speed * scale
        state.objects = [obj for obj in state.objects if obj.y < exit_y]

    return motion_system
