"""Signal handlers wiring engine events to the demo's collaborators."""
from __future__ import annotations

import logging
from typing import Any, Callable

from tick_catch import Engine, GAME_OVER, HAZARD_HIT, OBJECT_COLLECTED, SNAPSHOT, Snapshot

logger = logging.getLogger(__name__)


class HudModel:
    """Latest snapshot for the HUD; refreshed ~10 times per second."""

    def __init__(self, engine: Engine) -> None:
        self.reset(engine)

    def reset(self, engine: Engine) -> None:
        self.snapshot: Snapshot = engine.snapshot()
        self.flash: str | None = None
        self.flash_frames = 0

    def on_snapshot(self, signal: str, data: dict[str, Any]) -> None:
        self.snapshot = data["snapshot"]

    def on_collected(self, signal: str, data: dict[str, Any]) -> None:
        self.flash, self.flash_frames = "good", 6

    def on_hazard(self, signal: str, data: dict[str, Any]) -> None:
        self.flash, self.flash_frames = "bad", 12

    def tick(self) -> None:
        if self.flash_frames > 0:
            self.flash_frames -= 1
            if self.flash_frames == 0:
                self.flash = None


def log_audio_cue(signal: str, data: dict[str, Any]) -> None:
    """Stand-in for the theme synthesizer: records which cue would play."""
    logger.debug("audio cue %s for theme %s", signal, data["theme"])


def wire(engine: Engine, hud: HudModel, on_over: Callable[[int], None]) -> None:
    bus = engine.bus
    bus.subscribe(SNAPSHOT, hud.on_snapshot)
    bus.subscribe(OBJECT_COLLECTED, hud.on_collected)
    bus.subscribe(HAZARD_HIT, hud.on_hazard)
    bus.subscribe(OBJECT_COLLECTED, log_audio_cue)
    bus.subscribe(HAZARD_HIT, log_audio_cue)
    bus.subscribe(GAME_OVER, lambda name, data: on_over(data["final_score"]))
