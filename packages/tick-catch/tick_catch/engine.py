"""Engine - frame loop driver, pause semantics, snapshots, and game over."""

import logging
import os
import random
import time
from typing import Callable

from tick_catch.clock import FrameClock
from tick_catch.collision import make_collision_system
from tick_catch.config import SessionConfig
from tick_catch.difficulty import make_difficulty_system
from tick_catch.estimator import (
    DirectEstimator,
    Estimator,
    FilteredEstimator,
    MeasurementFeed,
    make_estimator,
)
from tick_catch.motion import make_motion_system
from tick_catch.signals import GAME_OVER, SNAPSHOT, SignalBus
from tick_catch.spawner import make_spawn_system
from tick_catch.state import EngineState, Snapshot
from tick_catch.types import FrameContext, RunState, System

logger = logging.getLogger(__name__)


class Engine:
    """Owns the engine record and runs the per-frame pipeline.

    The host calls ``frame(now_ms)`` once per display frame. Each running
    frame reads input, then runs difficulty, motion, spawn, and collision
    in that order, checks for game over, emits a snapshot when one is due,
    and flushes queued signals to subscribers.
    """

    def __init__(
        self,
        session: SessionConfig,
        seed: int | None = None,
        estimator: Estimator | None = None,
        feed: MeasurementFeed | None = None,
        bus: SignalBus | None = None,
    ) -> None:
        self._session = session
        playfield = session.playfield
        self._clock = FrameClock(playfield.max_frame_ms, playfield.reference_frame_ms)
        self._bus = bus if bus is not None else SignalBus()
        self._estimator = estimator if estimator is not None else make_estimator(
            session.input_mode, session.filter
        )
        self._feed = feed if feed is not None else MeasurementFeed()

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

        self._systems: list[System] = [
            self._input_system,
            make_difficulty_system(session),
            make_motion_system(session),
            make_spawn_system(session),
            make_collision_system(session, self._bus),
        ]
        self._game_over_hooks: list[Callable[[int], None]] = []
        self._state = self._new_state()
        self._run_state = RunState.RUNNING
        self._over = False
        self._stopped = False
        self._snapshot_timer_ms = 0.0

        logger.info(
            "Session started: theme=%s difficulty=%s input=%s seed=%d",
            session.theme.key, session.difficulty.key, session.input_mode, seed,
        )

    # --- accessors ---

    @property
    def session(self) -> SessionConfig:
        return self._session

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def bus(self) -> SignalBus:
        return self._bus

    @property
    def feed(self) -> MeasurementFeed:
        return self._feed

    @property
    def estimator(self) -> Estimator:
        return self._estimator

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def paused(self) -> bool:
        return self._run_state is RunState.PAUSED

    @property
    def is_over(self) -> bool:
        return self._over

    @property
    def is_active(self) -> bool:
        return not (self._over or self._stopped)

    def on_game_over(self, hook: Callable[[int], None]) -> None:
        self._game_over_hooks.append(hook)

    # --- input ---

    def set_pointer(self, pointer_x: float, container_left: float, container_width: float) -> None:
        if self.paused or not isinstance(self._estimator, DirectEstimator):
            return
        self._estimator.observe_pointer(pointer_x, container_left, container_width)

    def set_pointer_fraction(self, fraction: float) -> None:
        if self.paused or not isinstance(self._estimator, DirectEstimator):
            return
        self._estimator.observe_fraction(fraction)

    def _input_system(self, state: EngineState, ctx: FrameContext) -> None:
        if isinstance(self._estimator, FilteredEstimator):
            self._estimator.observe(self._feed.take())
        state.paddle_x = self._estimator.value
        state.detected = self._estimator.detected

    # --- lifecycle ---

    def pause(self) -> None:
        if self.paused or not self.is_active:
            return
        self._run_state = RunState.PAUSED
        logger.info("Paused at %.2fs", self._state.elapsed_seconds)

    def resume(self, now_ms: float | None = None) -> None:
        """Resume ticking. The skipped interval is never applied as a delta."""
        if not self.paused:
            return
        self._clock.reanchor(now_ms)
        self._run_state = RunState.RUNNING
        logger.info("Resumed at %.2fs", self._state.elapsed_seconds)

    def toggle_pause(self, now_ms: float | None = None) -> None:
        if self.paused:
            self.resume(now_ms)
        else:
            self.pause()

    def stop(self) -> None:
        """External shutdown: no further frames are processed."""
        if not self._stopped:
            self._stopped = True
            logger.info("Engine stopped")

    def restart(self) -> None:
        self._state = self._new_state()
        self._clock.reset()
        self._estimator.reset()
        self._bus.clear()
        self._run_state = RunState.RUNNING
        self._over = False
        self._stopped = False
        self._snapshot_timer_ms = 0.0
        logger.info("Session restarted")

    def _new_state(self) -> EngineState:
        return EngineState(
            lives=self._session.difficulty.initial_lives,
            paddle_x=self._estimator.value,
            detected=self._estimator.detected,
        )

    # --- frame ---

    def frame(self, now_ms: float) -> bool:
        """Process one host frame. Returns False once no further frames are wanted."""
        if not self.is_active:
            return False
        if self.paused:
            return True

        dt = self._clock.advance(now_ms)
        state = self._state
        state.elapsed_ms = self._clock.elapsed_ms
        ctx = self._clock.context(dt, self._rng)
        for system in self._systems:
            system(state, ctx)

        if state.lives <= 0:
            self._finish()
        else:
            self._snapshot_timer_ms += dt
            if self._snapshot_timer_ms >= self._session.playfield.snapshot_interval_ms:
                self._snapshot_timer_ms = 0.0
                self._bus.publish(SNAPSHOT, snapshot=self.snapshot())

        self._bus.flush()
        return self.is_active

    def _finish(self) -> None:
        self._over = True
        final_score = self._state.final_score
        logger.info(
            "Game over: score=%d after %.1fs", final_score, self._state.elapsed_seconds
        )
        self._bus.publish(
            GAME_OVER, final_score=final_score, elapsed_seconds=self._state.elapsed_seconds
        )
        for hook in self._game_over_hooks:
            hook(final_score)

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state, paused=self.paused)

    def run_forever(
        self,
        now_fn: Callable[[], float] = time.monotonic,
        fps: int = 60,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> int:
        """Drive frames from ``now_fn`` (seconds) until game over or stop.

        Returns the number of frames delivered.
        """
        if fps <= 0:
            raise ValueError("fps must be positive")
        frame_s = 1.0 / fps
        frames = 0
        while True:
            start = now_fn()
            frames += 1
            if not self.frame(start * 1000.0):
                break
            sleep_time = frame_s - (now_fn() - start)
            if sleep_time > 0:
                sleep_fn(sleep_time)
        return frames
