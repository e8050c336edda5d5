"""Top-score table and end-of-run rank evaluation."""
from __future__ import annotations

import json
import logging
import math
import time
import uuid
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10
_LEADERBOARD_VERSION = 1


class LeaderboardError(Exception):
    """Raised when a persisted leaderboard cannot be read."""


@dataclass(frozen=True)
class LeaderboardEntry:
    id: str
    pilot_name: str
    avatar_id: str
    score: int
    theme: str
    difficulty: str
    date: float


@dataclass(frozen=True)
class Rank:
    letter: str
    title: str
    description: str


# Checked top-down; first threshold the score reaches wins.
_RANKS: list[tuple[int, Rank]] = [
    (3000, Rank("S", "Singularity Entity", "Transcended physical constraints.")),
    (1500, Rank("A", "Void Architect", "Mastery of gravitational flux detected.")),
    (750, Rank("B", "Gravity Master", "Superior neural coordination.")),
    (250, Rank("C", "Kinetic Pilot", "Standard operational proficiency.")),
    (0, Rank("D", "Neural Novice", "Neural synchronization failed early.")),
]


def rank_for(score: float) -> Rank:
    for threshold, rank in _RANKS:
        if score >= threshold:
            return rank
    return _RANKS[-1][1]


class Leaderboard:
    """Best ``max_entries`` runs, highest score first."""

    def __init__(self, entries: list[LeaderboardEntry] | None = None, max_entries: int = MAX_ENTRIES) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._entries = self._trim(list(entries or []))

    @property
    def entries(self) -> list[LeaderboardEntry]:
        return list(self._entries)

    @property
    def high_score(self) -> int:
        return self._entries[0].score if self._entries else 0

    def __len__(self) -> int:
        return len(self._entries)

    def _trim(self, entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
        # sorted() is stable: earlier runs keep their place on ties.
        return sorted(entries, key=lambda e: e.score, reverse=True)[: self._max_entries]

    def record(
        self,
        score: float,
        pilot_name: str = "",
        avatar_id: str = "aero",
        theme: str = "cosmic",
        difficulty: str = "medium",
        date: float | None = None,
    ) -> LeaderboardEntry:
        """Add a finished run. The entry is returned even if it did not make the cut."""
        entry = LeaderboardEntry(
            id=uuid.uuid4().hex[:9],
            pilot_name=pilot_name.strip() or "ANONYMOUS",
            avatar_id=avatar_id,
            score=math.floor(score),
            theme=theme,
            difficulty=difficulty,
            date=time.time() if date is None else date,
        )
        self._entries = self._trim(self._entries + [entry])
        return entry

    def is_new_high(self, score: float) -> bool:
        return score > 0 and score >= self.high_score

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": _LEADERBOARD_VERSION,
            "entries": [asdict(e) for e in self._entries],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], max_entries: int = MAX_ENTRIES) -> Leaderboard:
        version = data.get("version")
        if version != _LEADERBOARD_VERSION:
            raise LeaderboardError(
                f"Unsupported leaderboard version {version!r}, expected {_LEADERBOARD_VERSION}"
            )
        try:
            entries = [LeaderboardEntry(**raw) for raw in data["entries"]]
        except (KeyError, TypeError) as exc:
            raise LeaderboardError(f"Malformed leaderboard entries: {exc}") from exc
        return cls(entries, max_entries=max_entries)

    def save(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path, max_entries: int = MAX_ENTRIES) -> Leaderboard:
        """Load from ``path``; a missing file is an empty leaderboard."""
        path = Path(path)
        if not path.exists():
            logger.info("No leaderboard at %s, starting empty", path)
            return cls(max_entries=max_entries)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise LeaderboardError(f"Invalid leaderboard JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise LeaderboardError(f"Invalid leaderboard JSON in {path}: expected an object")
        return cls.from_dict(data, max_entries=max_entries)
