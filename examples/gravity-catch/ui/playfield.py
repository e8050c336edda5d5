"""Playfield rendering: falling objects, paddle, avatar marker."""
from __future__ import annotations

import pygame

from tick_catch import Category, Engine, paddle_rect

from ui.constants import (
    BAD_COLOR,
    FIELD_BG,
    FIELD_H,
    FIELD_W,
    GOOD_COLOR,
    PADDLE_DETECTED,
    PADDLE_LOST,
)


def draw_playfield(surface: pygame.Surface, font: pygame.font.Font, engine: Engine) -> None:
    session = engine.session
    state = engine.state
    pygame.draw.rect(surface, FIELD_BG, (0, 0, FIELD_W, FIELD_H))

    for obj in state.objects:
        color = GOOD_COLOR if obj.category is Category.GOOD else BAD_COLOR
        center = (int(obj.x), int(obj.y))
        pygame.draw.circle(surface, color, center, int(obj.radius * 0.6))
        label = font.render(obj.variant, True, color)
        surface.blit(label, label.get_rect(midtop=(center[0], center[1] + 14)))

    rect = paddle_rect(state.paddle_x, session.playfield)
    prect = pygame.Rect(int(rect.left), int(rect.top), int(rect.width), int(rect.height))
    if state.detected:
        glow = prect.inflate(12, 12)
        pygame.draw.rect(surface, session.theme.accent, glow, border_radius=16)
        pygame.draw.rect(surface, PADDLE_DETECTED, prect, border_radius=12)
    else:
        pygame.draw.rect(surface, PADDLE_LOST, prect, border_radius=12)

    pygame.draw.circle(surface, session.avatar.color, (prect.centerx, prect.top - 22), 14)
