"""Session configuration: themes, difficulty tiers, playfield and filter tunables."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_catch.types import Category, ConfigError

INPUT_MODES = ("pointer", "vision")

# Growth rate at which the time term of the difficulty ramp uses the
# playfield's base time divisor unchanged (the medium tier).
REFERENCE_GROWTH = 0.1


@dataclass(frozen=True)
class ThemeConfig:
    """Visual and physical flavour of a session.

    Attributes:
        key: Lookup key, also reported with audio events.
        gravity: Multiplier applied to every object's fall speed.
        good_variants: Visual tags drawn for GOOD objects.
        bad_variants: Visual tags drawn for BAD objects.
        accent: RGB accent used by renderers for the detected paddle glow.
    """

    key: str
    gravity: float
    good_variants: tuple[str, ...]
    bad_variants: tuple[str, ...]
    accent: tuple[int, int, int] = (255, 255, 255)

    def variants(self, category: Category) -> tuple[str, ...]:
        if category is Category.GOOD:
            return self.good_variants
        return self.bad_variants


@dataclass(frozen=True)
class DifficultyConfig:
    """Per-tier tuning.

    Attributes:
        key: Lookup key.
        initial_lives: Lives at session start.
        growth: Time ramp rate relative to ``REFERENCE_GROWTH``.
        hazard_penalty: Lives lost per BAD hit.
        spawn_base_ms: Spawn interval at score 0.
    """

    key: str
    initial_lives: int
    growth: float
    hazard_penalty: int
    spawn_base_ms: float


@dataclass(frozen=True)
class PlayfieldConfig:
    """Geometry and fixed constants of the simulation, in playfield pixels."""

    width: float = 800.0
    height: float = 600.0
    paddle_width: float = 140.0
    paddle_height: float = 24.0
    paddle_offset: float = 110.0
    exit_y: float = 650.0
    spawn_y: float = -50.0
    spawn_margin: float = 50.0
    object_radius: float = 20.0
    min_speed: float = 4.0
    max_speed: float = 7.0
    hazard_probability: float = 0.22
    spawn_floor_ms: float = 200.0
    spawn_decay_per_point: float = 3.0
    base_score: int = 5
    combo_divisor: int = 4
    score_divisor: float = 500.0
    time_divisor_s: float = 120.0
    max_frame_ms: float = 32.0
    reference_frame_ms: float = 16.67
    snapshot_interval_ms: float = 100.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("playfield width and height must be positive")
        if self.spawn_margin * 2 >= self.width:
            raise ValueError("spawn_margin leaves no room to spawn objects")
        if self.min_speed > self.max_speed:
            raise ValueError("min_speed must not exceed max_speed")
        if not 0.0 <= self.hazard_probability <= 1.0:
            raise ValueError("hazard_probability must be within [0, 1]")
        if self.combo_divisor <= 0:
            raise ValueError("combo_divisor must be positive")
        if self.score_divisor <= 0 or self.time_divisor_s <= 0:
            raise ValueError("difficulty divisors must be positive")
        if self.reference_frame_ms <= 0:
            raise ValueError("reference_frame_ms must be positive")
        if self.snapshot_interval_ms <= 0:
            raise ValueError("snapshot_interval_ms must be positive")

    @property
    def paddle_top(self) -> float:
        return self.height - self.paddle_offset


@dataclass(frozen=True)
class FilterConfig:
    """Tunables of the vision-mode Kalman filter.

    Higher ``q`` follows fast hand movement, higher ``r`` smooths jitter.
    """

    q: float = 0.08
    r: float = 0.04
    initial_x: float = 0.5
    initial_p: float = 1.0
    edge_margin: float = 0.1
    detection_threshold: int = 8

    def __post_init__(self) -> None:
        if self.q <= 0 or self.r <= 0:
            raise ValueError("process and measurement noise must be positive")
        if self.initial_p < 0:
            raise ValueError("initial_p must be non-negative")
        if not 0.0 <= self.edge_margin < 0.5:
            raise ValueError("edge_margin must be within [0, 0.5)")

    @classmethod
    def smooth(cls) -> FilterConfig:
        """Profile for shaky sensors: slower, steadier paddle."""
        return cls(q=0.02, r=0.2)


@dataclass(frozen=True)
class Avatar:
    key: str
    name: str
    color: tuple[int, int, int]


THEMES: dict[str, ThemeConfig] = {
    "cosmic": ThemeConfig(
        "cosmic", 0.9, ("gem", "sparkle", "comet"), ("rock", "dark_moon", "blast"),
        accent=(96, 165, 250),
    ),
    "neon_city": ThemeConfig(
        "neon_city", 1.1, ("disk", "bolt", "battery"), ("invader", "skull", "fire"),
        accent=(244, 114, 182),
    ),
    "nature": ThemeConfig(
        "nature", 0.7, ("apple", "cherry", "sunflower"), ("web", "leaf", "wilted"),
        accent=(74, 222, 128),
    ),
    "urban_rain": ThemeConfig(
        "urban_rain", 1.3, ("umbrella", "coffee", "ring"), ("lightning", "barrier", "crash"),
        accent=(148, 163, 184),
    ),
    "mind_lab": ThemeConfig(
        "mind_lab", 1.0, ("brain", "puzzle", "flask"), ("stop", "warning", "downtrend"),
        accent=(192, 132, 252),
    ),
    "retro": ThemeConfig(
        "retro", 1.2, ("star", "mushroom", "gem"), ("ghost", "bomb", "invader"),
        accent=(251, 191, 36),
    ),
}

DIFFICULTIES: dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig("easy", initial_lives=5, growth=0.03, hazard_penalty=1, spawn_base_ms=1200.0),
    "medium": DifficultyConfig("medium", initial_lives=3, growth=0.1, hazard_penalty=1, spawn_base_ms=1000.0),
    "hard": DifficultyConfig("hard", initial_lives=1, growth=0.25, hazard_penalty=1, spawn_base_ms=700.0),
}

AVATARS: dict[str, Avatar] = {
    "aero": Avatar("aero", "Aero", (96, 165, 250)),
    "nova": Avatar("nova", "Nova", (244, 114, 182)),
    "gears": Avatar("gears", "Gears", (251, 191, 36)),
    "leaf": Avatar("leaf", "Leaf", (74, 222, 128)),
}


@dataclass(frozen=True)
class SessionConfig:
    """Everything resolved once at session start. Read-only afterwards."""

    theme: ThemeConfig
    difficulty: DifficultyConfig
    input_mode: str = "pointer"
    avatar: Avatar = AVATARS["aero"]
    playfield: PlayfieldConfig = field(default_factory=PlayfieldConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)

    @property
    def time_divisor_s(self) -> float:
        """Seconds of play that add 1.0 to the difficulty multiplier."""
        return self.playfield.time_divisor_s * REFERENCE_GROWTH / self.difficulty.growth


def _lookup(kind: str, table: dict, key: str):
    try:
        return table[key]
    except KeyError:
        raise ConfigError(kind, key, sorted(table)) from None


def resolve_session(
    theme: str = "cosmic",
    difficulty: str = "medium",
    input_mode: str = "pointer",
    avatar: str = "aero",
    playfield: PlayfieldConfig | None = None,
    filter_config: FilterConfig | None = None,
) -> SessionConfig:
    """Resolve lookup keys into an immutable SessionConfig."""
    if input_mode not in INPUT_MODES:
        raise ConfigError("input mode", input_mode, list(INPUT_MODES))
    return SessionConfig(
        theme=_lookup("theme", THEMES, theme),
        difficulty=_lookup("difficulty", DIFFICULTIES, difficulty),
        input_mode=input_mode,
        avatar=_lookup("avatar", AVATARS, avatar),
        playfield=playfield or PlayfieldConfig(),
        filter=filter_config or FilterConfig(),
    )
