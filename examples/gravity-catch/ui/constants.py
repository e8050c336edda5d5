"""Layout constants and color definitions."""

# Timing
FPS = 60

# Layout dimensions (the playfield matches PlayfieldConfig defaults)
FIELD_W = 800
FIELD_H = 600
SIDEBAR_W = 200
STATUS_H = 28

SCREEN_W = FIELD_W + SIDEBAR_W
SCREEN_H = FIELD_H + STATUS_H

# Colors
BG_COLOR = (9, 9, 11)
FIELD_BG = (0, 0, 0)
SIDEBAR_BG = (24, 24, 27)
STATUS_BG = (39, 39, 42)
TEXT_COLOR = (228, 228, 231)
TEXT_DIM = (113, 113, 122)
PADDLE_LOST = (51, 51, 51)
PADDLE_DETECTED = (255, 255, 255)
GOOD_COLOR = (74, 222, 128)
BAD_COLOR = (239, 68, 68)
LIFE_COLOR = (244, 63, 94)

RANK_COLORS: dict[str, tuple[int, int, int]] = {
    "S": (192, 132, 252),
    "A": (96, 165, 250),
    "B": (52, 211, 153),
    "C": (250, 204, 21),
    "D": (113, 113, 122),
}
