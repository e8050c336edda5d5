"""Wall-clock frame timing with pause re-anchoring."""

import random

from tick_catch.motion import frame_step
from tick_catch.types import FrameContext


class FrameClock:
    """Turns host frame timestamps (milliseconds) into per-tick deltas.

    The first timestamp after construction, ``reanchor``, or ``reset`` only
    anchors the clock and yields a zero delta, so time spent paused or
    before the first frame is never counted.
    """

    def __init__(self, max_frame_ms: float = 32.0, reference_ms: float = 16.67) -> None:
        if max_frame_ms <= 0 or reference_ms <= 0:
            raise ValueError("frame durations must be positive")
        self._max_frame_ms = max_frame_ms
        self._reference_ms = reference_ms
        self._last_ms: float | None = None
        self._tick_number = 0
        self._elapsed_ms = 0.0

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def anchored(self) -> bool:
        return self._last_ms is not None

    def advance(self, now_ms: float) -> float:
        """Record a frame at ``now_ms`` and return the delta since the previous one."""
        if self._last_ms is None:
            dt = 0.0
        else:
            dt = max(0.0, now_ms - self._last_ms)
        self._last_ms = now_ms
        self._tick_number += 1
        self._elapsed_ms += dt
        return dt

    def step_for(self, dt_ms: float) -> float:
        return frame_step(dt_ms, self._max_frame_ms, self._reference_ms)

    def reanchor(self, now_ms: float | None = None) -> None:
        """Forget the previous timestamp; ``now_ms`` becomes the new reference if given."""
        self._last_ms = now_ms

    def context(self, dt_ms: float, rng: random.Random) -> FrameContext:
        return FrameContext(
            dt_ms=dt_ms,
            step=self.step_for(dt_ms),
            elapsed_ms=self._elapsed_ms,
            random=rng,
        )

    def reset(self) -> None:
        self._last_ms = None
        self._tick_number = 0
        self._elapsed_ms = 0.0
