"""Input estimators: pointer passthrough and Kalman-filtered vision measurements.

The paddle's horizontal position is a normalized value in [0, 1]. In
pointer mode the value follows the pointer exactly. In vision mode a
collaborator produces a raw centroid ``z`` plus the number of pixels that
qualified for it; the estimator remaps the camera's edge dead zone and
feeds the result through a one-dimensional Kalman filter. When the
collaborator loses the hand (or the camera entirely) the last estimate is
held and ``detected`` drops to False.
"""
from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Protocol

from tick_catch.config import FilterConfig
from tick_catch.types import ConfigError

logger = logging.getLogger(__name__)


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class EstimatorState:
    x: float = 0.5
    p: float = 1.0
    q: float = 0.08
    r: float = 0.04
    detected: bool = True

    @classmethod
    def from_config(cls, config: FilterConfig) -> EstimatorState:
        return cls(x=config.initial_x, p=config.initial_p, q=config.q, r=config.r)


def kalman_update(state: EstimatorState, z: float) -> float:
    """Fold one measurement into ``state`` and return the new estimate.

    Predict is a random walk (variance grows by ``q``), so the gain stays
    strictly inside (0, 1) and the estimate never overshoots ``z``.
    """
    state.p = state.p + state.q
    k = state.p / (state.p + state.r)
    state.x = state.x + k * (z - state.x)
    state.p = (1.0 - k) * state.p
    return state.x


def remap_edges(z: float, margin: float) -> float:
    """Stretch [margin, 1 - margin] onto [0, 1] so the frame edges are reachable."""
    return _clamp01((z - margin) / (1.0 - 2.0 * margin))


@dataclass(frozen=True)
class Measurement:
    """One vision sample. ``count`` is the number of pixels behind ``z``."""

    z: float
    count: int
    available: bool = True

    @classmethod
    def unavailable(cls) -> Measurement:
        return cls(z=math.nan, count=0, available=False)


class MeasurementFeed:
    """Latest-value mailbox between a vision producer and the tick loop.

    The producer may run on its own thread at camera rate. The consumer
    never waits: ``take`` returns the newest sample it has not seen yet,
    or None when nothing new arrived since the previous call.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: Measurement | None = None
        self._fresh = False

    def publish(self, z: float, count: int) -> None:
        self._put(Measurement(z=z, count=count))

    def mark_unavailable(self) -> None:
        self._put(Measurement.unavailable())

    def _put(self, measurement: Measurement) -> None:
        with self._lock:
            self._latest = measurement
            self._fresh = True

    def take(self) -> Measurement | None:
        with self._lock:
            if not self._fresh:
                return None
            self._fresh = False
            return self._latest


class Estimator(Protocol):
    state: EstimatorState

    @property
    def value(self) -> float: ...

    @property
    def detected(self) -> bool: ...

    def reset(self) -> None: ...


class DirectEstimator:
    """Pointer mode: the pointer fraction is the estimate, always detected."""

    def __init__(self, initial_x: float = 0.5) -> None:
        self.state = EstimatorState(x=_clamp01(initial_x), p=0.0, detected=True)

    @property
    def value(self) -> float:
        return self.state.x

    @property
    def detected(self) -> bool:
        return True

    def reset(self) -> None:
        self.state = EstimatorState(x=self.state.x, p=0.0, detected=True)

    def observe_pointer(
        self, pointer_x: float, container_left: float, container_width: float
    ) -> float:
        if container_width <= 0:
            return self.state.x
        return self.observe_fraction((pointer_x - container_left) / container_width)

    def observe_fraction(self, fraction: float) -> float:
        if not math.isfinite(fraction):
            return self.state.x
        self.state.x = _clamp01(fraction)
        return self.state.x


class FilteredEstimator:
    """Vision mode: Kalman-smoothed estimate with dropout hold."""

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config or FilterConfig()
        self.state = EstimatorState.from_config(self.config)

    @property
    def value(self) -> float:
        return self.state.x

    @property
    def detected(self) -> bool:
        return self.state.detected

    def reset(self) -> None:
        self.state = EstimatorState.from_config(self.config)

    def observe(self, measurement: Measurement | None) -> float:
        """Apply a sample and return the estimate.

        None (no new sample) leaves the state untouched. Lost tracking only
        clears ``detected``; there is no predict-only step, so the variance
        does not balloon during long dropouts.
        """
        if measurement is None:
            return self.state.x
        if not measurement.available:
            self._lose()
            return self.state.x
        if not (math.isfinite(measurement.z) and math.isfinite(measurement.count)):
            logger.warning(
                "Rejected non-finite vision measurement z=%r count=%r", measurement.z, measurement.count
            )
            self._lose()
            return self.state.x
        if measurement.count <= self.config.detection_threshold:
            self._lose()
            return self.state.x

        z = remap_edges(_clamp01(measurement.z), self.config.edge_margin)
        if not self.state.detected:
            logger.debug("Vision tracking reacquired at z=%.3f", z)
        self.state.detected = True
        return kalman_update(self.state, z)

    def _lose(self) -> None:
        if self.state.detected:
            logger.debug("Vision tracking lost, holding x=%.3f", self.state.x)
        self.state.detected = False


def make_estimator(
    input_mode: str, config: FilterConfig | None = None
) -> DirectEstimator | FilteredEstimator:
    config = config or FilterConfig()
    if input_mode == "pointer":
        return DirectEstimator(config.initial_x)
    if input_mode == "vision":
        return FilteredEstimator(config)
    raise ConfigError("input mode", input_mode, ["pointer", "vision"])
