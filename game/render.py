# game/render.py
import math
from dataclasses import dataclass
from typing import Dict, Tuple

import pygame

from config import WIN_W, WIN_H, CAMERA_FOV_DEG, CAMERA_Z, TARGET_RADIUS
from game.session import Session
from game.targets import Target

Point = Tuple[float, float]


class WorldView:
    """
    Perspective camera on the z axis looking at the z=0 plane, where all
    targets live. Maps that plane to window pixels and back.
    """

    def __init__(self, width: int = WIN_W, height: int = WIN_H,
                 fov_deg: float = CAMERA_FOV_DEG, camera_z: float = CAMERA_Z):
        self.resize(width, height)
        self.fov_deg = fov_deg
        self.camera_z = camera_z

    def resize(self, width: int, height: int):
        self.width, self.height = width, height

    @property
    def half_height(self) -> float:
        return self.camera_z * math.tan(math.radians(self.fov_deg) / 2)

    @property
    def half_width(self) -> float:
        return self.half_height * self.width / self.height

    @property
    def pixels_per_unit(self) -> float:
        return self.height / (2 * self.half_height)

    def project_to_screen(self, world: Point) -> Point:
        nx = world[0] / self.half_width
        ny = world[1] / self.half_height
        return ((nx + 1) / 2 * self.width, (1 - ny) / 2 * self.height)

    def unproject_to_world(self, screen: Point) -> Point:
        nx = screen[0] / self.width * 2 - 1
        ny = 1 - screen[1] / self.height * 2
        return (nx * self.half_width, ny * self.half_height)


@dataclass
class TargetVisual:
    color: Tuple[int, int, int]
    center: Point = (0.0, 0.0)
    radius: float = 0.0
    rotation: float = 0.0


class PygameScene:
    """SceneSink that keeps one visual per target id and draws them as rings."""

    def __init__(self, view: WorldView):
        self.view = view
        self.visuals: Dict[int, TargetVisual] = {}

    def _sync(self, v: TargetVisual, t: Target):
        v.center = self.view.project_to_screen(t.position)
        v.radius = TARGET_RADIUS * t.spawn_scale * self.view.pixels_per_unit
        v.rotation = t.rotation

    def entity_created(self, target: Target) -> None:
        v = TargetVisual(target.color)
        self._sync(v, target)
        self.visuals[target.id] = v

    def entity_removed(self, target_id: int) -> None:
        self.visuals.pop(target_id, None)

    def entity_updated(self, target: Target) -> None:
        v = self.visuals.get(target.id)
        if v is not None:
            self._sync(v, target)

    def draw(self, screen: "pygame.Surface", locked_id=None):
        for tid, v in self.visuals.items():
            cx, cy = int(v.center[0]), int(v.center[1])
            r = max(2, int(v.radius))
            pygame.draw.circle(screen, v.color, (cx, cy), r, max(2, r // 4))
            pygame.draw.circle(screen, (255, 255, 255), (cx, cy), max(1, int(r * 0.55)))
            pygame.draw.circle(screen, v.color, (cx, cy), max(1, int(r * 0.3)), 2)
            # spinning notch so rotation is visible
            nx = cx + int(math.cos(v.rotation) * r)
            ny = cy + int(math.sin(v.rotation) * r)
            pygame.draw.circle(screen, (255, 255, 255), (nx, ny), max(2, r // 8))
            if tid == locked_id:
                pygame.draw.circle(screen, (255, 0, 102), (cx, cy), r + 8, 2)


def draw_crosshair(screen, pos: Point, locked: bool, aiming: bool):
    color = (255, 0, 102) if locked else ((0, 245, 255) if aiming else (120, 120, 120))
    x, y = int(pos[0]), int(pos[1])
    size = 14 if locked else 20
    pygame.draw.circle(screen, color, (x, y), size, 2)
    pygame.draw.line(screen, color, (x - size - 6, y), (x - 4, y), 2)
    pygame.draw.line(screen, color, (x + 4, y), (x + size + 6, y), 2)
    pygame.draw.line(screen, color, (x, y - size - 6), (x, y - 4), 2)
    pygame.draw.line(screen, color, (x, y + 4), (x, y + size + 6), 2)


def draw_hud(screen, font, session: Session, label: str, hand_seen: bool, cam_info: str,
             confidence: float):
    acc = "--" if session.accuracy is None else f"{session.accuracy}%"
    lines = [
        (f"Score: {session.score}", (230, 230, 230)),
        (f"Combo: x{session.combo}  (max x{session.max_combo})", (255, 170, 0)),
        (f"Accuracy: {acc}  ({session.hits}/{session.shots})", (200, 200, 200)),
        (f"Gesture: {label}", (200, 200, 200)),
        (f"Hand: {'YES' if hand_seen else 'NO'} | Confidence: {confidence:.0%}", (180, 180, 180)),
        (cam_info, (120, 120, 120)),
    ]
    y = 6
    for text, color in lines:
        screen.blit(font.render(text, True, color), (8, y))
        y += 22
