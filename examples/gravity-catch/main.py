"""Gravity Catch — tick-catch visual demo.

Catch the good objects, dodge the hazards. Pointer mode follows the mouse
directly; vision mode feeds a simulated noisy camera through the Kalman
estimator so the paddle lag and dropout hold can be seen.

Controls:
  Mouse   Move paddle (directly, or via the simulated sensor)
  Space   Pause / resume
  C       Toggle simulated camera (vision mode)
  R       Restart
  Esc     Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from tick_catch import (
    AVATARS,
    DIFFICULTIES,
    THEMES,
    Engine,
    Leaderboard,
    LeaderboardError,
    resolve_session,
)

from game.callbacks import HudModel, wire
from game.sensor import SimulatedSensor
from ui.constants import BG_COLOR, FIELD_W, FPS, SCREEN_H, SCREEN_W
from ui.hud import draw_game_over, draw_pause_overlay, draw_sidebar, draw_status_bar
from ui.playfield import draw_playfield

logger = logging.getLogger("gravity_catch")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Gravity Catch — tick-catch visual demo")
    p.add_argument("--theme", choices=sorted(THEMES), default="cosmic")
    p.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default="medium")
    p.add_argument("--input", dest="input_mode", choices=["pointer", "vision"], default="pointer")
    p.add_argument("--avatar", choices=sorted(AVATARS), default="aero")
    p.add_argument("--pilot", default="PILOT_01", help="Name recorded on the leaderboard")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--leaderboard", default="gravity_catch_leaderboard.json", metavar="FILE")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args()


def load_leaderboard(path: str) -> Leaderboard:
    try:
        return Leaderboard.load(path)
    except LeaderboardError as exc:
        logger.warning("Ignoring unreadable leaderboard: %s", exc)
        return Leaderboard()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    session = resolve_session(args.theme, args.difficulty, args.input_mode, args.avatar)
    engine = Engine(session, seed=args.seed)
    leaderboard = load_leaderboard(args.leaderboard)
    hud = HudModel(engine)
    result: dict[str, int | bool] = {}

    def on_over(final_score: int) -> None:
        result["score"] = final_score
        result["new_high"] = leaderboard.is_new_high(final_score)
        leaderboard.record(
            final_score,
            pilot_name=args.pilot,
            avatar_id=session.avatar.key,
            theme=session.theme.key,
            difficulty=session.difficulty.key,
        )
        leaderboard.save(args.leaderboard)

    wire(engine, hud, on_over)

    sensor: SimulatedSensor | None = None
    if session.input_mode == "vision":
        sensor = SimulatedSensor(engine.feed, seed=args.seed)
        sensor.start()

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption(f"Gravity Catch — {session.theme.key}")
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 16)

    running = True
    while running:
        pg_clock.tick(FPS)
        now_ms = float(pygame.time.get_ticks())

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    engine.toggle_pause(now_ms)
                elif event.key == pygame.K_r:
                    engine.restart()
                    hud.reset(engine)
                    result.clear()
                elif event.key == pygame.K_c and sensor is not None:
                    sensor.toggle_camera()
            elif event.type == pygame.MOUSEMOTION:
                mx = float(event.pos[0])
                if sensor is not None:
                    sensor.set_target(mx / FIELD_W)
                else:
                    engine.set_pointer(mx, 0.0, FIELD_W)

        # --- Update ---
        if engine.is_active:
            engine.frame(now_ms)
        hud.tick()

        # --- Draw ---
        screen.fill(BG_COLOR)
        draw_playfield(screen, font, engine)
        draw_sidebar(
            screen,
            font,
            hud.snapshot,
            max_lives=session.difficulty.initial_lives,
            high_score=leaderboard.high_score,
            input_mode=session.input_mode,
            flash=hud.flash,
        )
        draw_status_bar(screen, font, session.input_mode)
        if engine.paused:
            draw_pause_overlay(screen, font)
        if "score" in result:
            draw_game_over(screen, font, int(result["score"]), leaderboard, bool(result["new_high"]))

        pygame.display.flip()

    engine.stop()
    if sensor is not None:
        sensor.close()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
