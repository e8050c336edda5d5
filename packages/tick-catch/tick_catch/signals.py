"""In-memory pub/sub event bus with per-tick flush semantics."""
from __future__ import annotations

from typing import Any, Callable

OBJECT_COLLECTED = "object_collected"
HAZARD_HIT = "hazard_hit"
SNAPSHOT = "snapshot"
GAME_OVER = "game_over"

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def flush(self) -> None:
        queued = self._queue
        self._queue = []
        for signal_name, data in queued:
            for handler in list(self._subscribers.get(signal_name, [])):
                handler(signal_name, data)

    def clear(self) -> None:
        self._queue.clear()
