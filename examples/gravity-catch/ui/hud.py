"""Sidebar HUD, status bar, pause and game-over overlays."""
from __future__ import annotations

import pygame

from tick_catch import Leaderboard, Snapshot, rank_for

from ui.constants import (
    BAD_COLOR,
    FIELD_H,
    FIELD_W,
    GOOD_COLOR,
    LIFE_COLOR,
    RANK_COLORS,
    SCREEN_W,
    SIDEBAR_BG,
    SIDEBAR_W,
    STATUS_BG,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
)


def draw_sidebar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    snap: Snapshot,
    max_lives: int,
    high_score: int,
    input_mode: str,
    flash: str | None,
) -> None:
    """Draw right-side info panel from the latest snapshot."""
    x = FIELD_W
    pygame.draw.rect(surface, SIDEBAR_BG, (x, 0, SIDEBAR_W, FIELD_H))
    if flash is not None:
        color = GOOD_COLOR if flash == "good" else BAD_COLOR
        pygame.draw.rect(surface, color, (x, 0, SIDEBAR_W, FIELD_H), 3)

    cx = x + 12
    cy = 12
    line_h = 24
    rows = [
        ("SCORE", f"{int(snap.score)}"),
        ("BEST", f"{max(high_score, int(snap.score))}"),
        ("COMBO", f"x{snap.combo}"),
        ("FLUX", f"{snap.difficulty:.2f}"),
        ("TIME", f"{snap.elapsed_seconds:.1f}s"),
    ]
    for label, value in rows:
        surface.blit(font.render(label, True, TEXT_DIM), (cx, cy))
        surface.blit(font.render(value, True, TEXT_COLOR), (cx + 80, cy))
        cy += line_h

    cy += 8
    surface.blit(font.render("LIVES", True, TEXT_DIM), (cx, cy))
    cy += line_h
    for i in range(max_lives):
        color = LIFE_COLOR if i < snap.lives else TEXT_DIM
        pygame.draw.circle(surface, color, (cx + 8 + i * 22, cy + 8), 8)
    cy += line_h + 8

    mode = "VISION" if input_mode == "vision" else "POINTER"
    signal = "LOCKED" if snap.detected else "LOST"
    surface.blit(font.render(f"{mode} {signal}", True, GOOD_COLOR if snap.detected else BAD_COLOR), (cx, cy))


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font, input_mode: str) -> None:
    pygame.draw.rect(surface, STATUS_BG, (0, FIELD_H, SCREEN_W, STATUS_H))
    hint = "Space=Pause  R=Restart  Esc=Quit"
    if input_mode == "vision":
        hint += "  C=Toggle camera"
    surface.blit(font.render(hint, True, TEXT_DIM), (10, FIELD_H + 6))


def draw_pause_overlay(surface: pygame.Surface, font: pygame.font.Font) -> None:
    overlay = pygame.Surface((FIELD_W, FIELD_H), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 150))
    surface.blit(overlay, (0, 0))

    big_font = pygame.font.SysFont("monospace", 48, bold=True)
    text = big_font.render("PAUSED", True, (255, 255, 255))
    surface.blit(text, text.get_rect(center=(FIELD_W // 2, FIELD_H // 2)))
    hint = font.render("Space to resume", True, (180, 180, 180))
    surface.blit(hint, hint.get_rect(center=(FIELD_W // 2, FIELD_H // 2 + 40)))


def draw_game_over(
    surface: pygame.Surface,
    font: pygame.font.Font,
    final_score: int,
    leaderboard: Leaderboard,
    new_high: bool,
) -> None:
    overlay = pygame.Surface((FIELD_W, FIELD_H), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 200))
    surface.blit(overlay, (0, 0))

    rank = rank_for(final_score)
    big_font = pygame.font.SysFont("monospace", 56, bold=True)
    cx = FIELD_W // 2
    cy = 70
    title = big_font.render("DE-SYNCED", True, BAD_COLOR)
    surface.blit(title, title.get_rect(center=(cx, cy)))
    cy += 60

    rank_text = big_font.render(rank.letter, True, RANK_COLORS[rank.letter])
    surface.blit(rank_text, rank_text.get_rect(center=(cx, cy)))
    cy += 44
    for line in (rank.title.upper(), rank.description, f"FINAL SCORE {final_score}"):
        text = font.render(line, True, TEXT_COLOR)
        surface.blit(text, text.get_rect(center=(cx, cy)))
        cy += 24
    if new_high:
        text = font.render("NEW RECORD", True, GOOD_COLOR)
        surface.blit(text, text.get_rect(center=(cx, cy)))
        cy += 24

    cy += 16
    for i, entry in enumerate(leaderboard.entries):
        line = f"{i + 1:>2}. {entry.pilot_name:<12} {entry.score:>6}  {entry.theme}/{entry.difficulty}"
        text = font.render(line, True, TEXT_DIM)
        surface.blit(text, text.get_rect(center=(cx, cy)))
        cy += 20

    hint = font.render("R to restart, Esc to quit", True, TEXT_COLOR)
    surface.blit(hint, hint.get_rect(center=(cx, FIELD_H - 24)))
