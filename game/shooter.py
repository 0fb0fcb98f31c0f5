# game/shooter.py
import time
from typing import Optional, Sequence

import pygame

from config import WIN_W, WIN_H, FPS, SHOW_CAMERA
from game.audio import SoundBoard
from game.engine import ShooterEngine
from game.render import WorldView, PygameScene, draw_crosshair, draw_hud
from game.scoring import ShotResult
from game.targets import TargetRegistry
from gesture.camera import open_camera_or_raise
from gesture.types import GestureState
from gesture.worker import GestureWorker
from logger import get_logger

log = get_logger("Shooter")

OUTCOME_TEXT = {
    ShotResult.HIT: ("HIT!", (0, 255, 136)),
    ShotResult.PERFECT: ("PERFECT!", (255, 0, 255)),
    ShotResult.MISS: ("MISS", (255, 80, 80)),
}
OUTCOME_SHOW_SEC = 0.6


def draw_outcome(screen, font, engine: ShooterEngine, shown_at: float, now: float):
    outcome = engine.last_outcome
    if outcome is None or now - shown_at > OUTCOME_SHOW_SEC:
        return
    text, color = OUTCOME_TEXT[outcome.result]
    if outcome.points and outcome.combo > 1:
        text = f"{text} +{outcome.points}"
    x, y = engine.crosshair.value
    surf = font.render(text, True, color)
    screen.blit(surf, (int(x) - surf.get_width() // 2, int(y) - 60))


def run_game(camera_indices: Optional[Sequence[int]] = None,
             show_camera: bool = SHOW_CAMERA, muted: bool = False):
    # camera first: no camera, no game
    cap, cam_info = open_camera_or_raise(camera_indices)
    log.info(f"Camera opened: {cam_info}")

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("GestureShooter - MediaPipe Hands")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("Consolas", 18)
    big_font = pygame.font.SysFont("Consolas", 36, bold=True)

    state = GestureState()
    worker = GestureWorker(state, cap, cam_info, show_camera=show_camera)
    worker.start()
    log.info(f"GestureWorker started: {worker.is_alive()}")

    view = WorldView(WIN_W, WIN_H)
    scene = PygameScene(view)
    engine = ShooterEngine(view.project_to_screen, (WIN_W, WIN_H),
                           audio=SoundBoard(muted=muted),
                           registry=TargetRegistry(scene=scene))

    try:
        # Start screen
        start = True
        while start:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_RETURN:
                        start = False
                    if event.key == pygame.K_ESCAPE:
                        return

            screen.fill((15, 15, 18))
            t1 = font.render("GestureShooter", True, (220, 220, 220))
            t2 = font.render("ENTER to start | ESC to quit | R to restart", True, (200, 200, 200))
            t3 = font.render("Aim: index finger out, other fingers curled | Fire: drop your thumb",
                             True, (180, 180, 180))
            screen.blit(t1, (20, 40))
            screen.blit(t2, (20, 70))
            screen.blit(t3, (20, 100))
            pygame.display.flip()
            clock.tick(30)

        engine.start(time.monotonic())
        outcome_at = 0.0
        last_outcome = None

        # Game loop
        while True:
            now = time.monotonic()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return
                    if event.key == pygame.K_r:
                        engine.start(now)
                if event.type == pygame.WINDOWMINIMIZED:
                    engine.pause()
                if event.type == pygame.WINDOWRESTORED:
                    engine.resume(now)

            # Consume gesture state
            engine.observe(worker.snapshot(), now)
            engine.frame(now)

            if engine.last_outcome is not last_outcome:
                last_outcome = engine.last_outcome
                outcome_at = now

            # Render
            screen.fill((12, 12, 14))
            s = engine.session
            scene.draw(screen, s.locked_target_id)
            draw_crosshair(screen, engine.crosshair.value, s.locked_target_id is not None, engine.is_aiming)
            draw_outcome(screen, big_font, engine, outcome_at, now)

            g = engine.gesture
            draw_hud(screen, font, s, g.label, g.hand_seen, cam_info, g.confidence)
            if not s.running:
                msg = font.render("PAUSED", True, (255, 255, 120))
                screen.blit(msg, (8, WIN_H - 28))
            if engine.loop.error_count:
                msg = font.render(f"frame errors: {engine.loop.error_count}", True, (255, 120, 120))
                screen.blit(msg, (WIN_W - 220, WIN_H - 28))

            pygame.display.flip()
            clock.tick(FPS)
    finally:
        worker.stop()
        worker.join(timeout=1.0)
        pygame.quit()
        log.info(f"Session over: score={engine.session.score} max_combo=x{engine.session.max_combo}")
