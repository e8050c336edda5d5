"""Simulated vision sensor: noisy, dropping centroid samples from the mouse."""
from __future__ import annotations

import logging
import random
import threading
import time

from tick_catch import MeasurementFeed

logger = logging.getLogger(__name__)


class SimulatedSensor:
    """Publishes mouse-derived measurements to a feed from its own thread.

    Mimics a brightness-centroid tracker: the true hand position is mapped
    into the camera's central band, Gaussian noise is added, and the
    qualifying-pixel count occasionally collapses below threshold.
    """

    def __init__(
        self,
        feed: MeasurementFeed,
        rate_hz: float = 30.0,
        noise: float = 0.04,
        dropout: float = 0.05,
        seed: int | None = None,
    ) -> None:
        self._feed = feed
        self._period = 1.0 / rate_hz
        self._noise = noise
        self._dropout = dropout
        self._rng = random.Random(seed)
        self._state_lock = threading.Lock()
        self._target = 0.5
        self._camera_ok = True
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="simulated-sensor", daemon=True)

    def set_target(self, fraction: float) -> None:
        with self._state_lock:
            self._target = max(0.0, min(1.0, fraction))

    def toggle_camera(self) -> None:
        with self._state_lock:
            self._camera_ok = not self._camera_ok
            camera_ok = self._camera_ok
        logger.info("Simulated camera %s", "online" if camera_ok else "offline")

    def start(self) -> None:
        self._thread.start()

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=1.0)

    def _run(self) -> None:
        while not self._stop.is_set():
            with self._state_lock:
                target, camera_ok = self._target, self._camera_ok
            if not camera_ok:
                self._feed.mark_unavailable()
            elif self._rng.random() < self._dropout:
                self._feed.publish(self._rng.random(), self._rng.randint(0, 8))
            else:
                z = 0.1 + 0.8 * target + self._rng.gauss(0.0, self._noise)
                self._feed.publish(z, self._rng.randint(20, 120))
            time.sleep(self._period)
