from __future__ import annotations

import math

import pygame
from pygame import Surface

from wavesurf.game.state import (BirdState, BoatPose, CloudState, FishState,
                                 GameSnapshot, MineState, TransientSignal)

Color = tuple[int, int, int]

SKY_COLOR: Color = (135, 206, 235)
SEA_TOP_COLOR: Color = (0, 119, 190)
SEA_BOTTOM_COLOR: Color = (0, 0, 139)
SUN_COLOR: Color = (255, 255, 0)
HULL_COLOR: Color = (139, 69, 19)
SAIL_COLOR: Color = (255, 255, 255)
WEIGHT_COLOR: Color = (255, 0, 0)
MINE_COLOR: Color = (51, 51, 51)
FISH_COLOR: Color = (255, 140, 0)
TEXT_COLOR: Color = (255, 255, 255)
NICE_JUMP_COLOR: Color = (255, 255, 0)
GREAT_FLIP_COLOR: Color = (255, 0, 255)

GRADIENT_STEPS = 10
BOAT_WIDTH = 70
BOAT_HEIGHT = 25


def interpolate_color(start: Color, end: Color, factor: float) -> Color:
    return (
        round(start[0] + (end[0] - start[0]) * factor),
        round(start[1] + (end[1] - start[1]) * factor),
        round(start[2] + (end[2] - start[2]) * factor),
    )


def rotate_points(
    points: list[tuple[float, float]], angle: float, origin: tuple[float, float]
) -> list[tuple[float, float]]:
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    ox, oy = origin
    return [(ox + x * cos_a - y * sin_a, oy + x * sin_a + y * cos_a) for x, y in points]


class SurfRenderer:
    """Draw a :class:`GameSnapshot` onto a pygame surface."""

    def __init__(self) -> None:
        self._font: pygame.font.Font | None = None
        self._callout_font: pygame.font.Font | None = None

    def _fonts(self) -> tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._callout_font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, 24)
            self._callout_font = pygame.font.Font(None, 36)
        return self._font, self._callout_font

    def render(self, window: Surface, snapshot: GameSnapshot) -> None:
        window.fill(SKY_COLOR)
        width, height = snapshot.width, snapshot.height

        self._draw_sun(window, (width * 0.875, height * 0.125))
        for cloud in sorted(snapshot.hazards.clouds, key=lambda c: c.z_index):
            self._draw_cloud(window, cloud)
        self._draw_sea(window, snapshot)
        for fish in snapshot.hazards.fish:
            self._draw_fish(window, fish)
        self._draw_wake(window, snapshot.boat, snapshot.speed)
        self._draw_boat(window, snapshot.boat, height)
        if snapshot.has_signal(TransientSignal.SPLASH):
            self._draw_splash(window, snapshot.boat.x, snapshot.boat.y + 20)
        for bird in snapshot.hazards.birds:
            self._draw_bird(window, bird)
        for mine in snapshot.hazards.mines:
            self._draw_mine(window, mine)
        self._draw_hud(window, snapshot)

    @staticmethod
    def _draw_sun(window: Surface, center: tuple[float, float]) -> None:
        cx, cy = center
        pygame.draw.circle(window, SUN_COLOR, (round(cx), round(cy)), 30)
        for ray in range(8):
            angle = ray / 8 * 2.0 * math.pi
            start = (cx + math.cos(angle) * 35, cy + math.sin(angle) * 35)
            end = (cx + math.cos(angle) * 45, cy + math.sin(angle) * 45)
            pygame.draw.line(window, SUN_COLOR, start, end, 2)

    @staticmethod
    def _draw_sea(window: Surface, snapshot: GameSnapshot) -> None:
        height = snapshot.height
        baseline = snapshot.baseline
        samples = snapshot.wave_samples
        if len(samples) < 2:
            return

        for step in range(GRADIENT_STEPS):
            ratio = step / (GRADIENT_STEPS - 1)
            color = interpolate_color(SEA_TOP_COLOR, SEA_BOTTOM_COLOR, ratio)
            offset = ratio * (height - baseline)
            outline = [(0.0, float(height))]
            outline.extend(
                (float(x), baseline + float(y) + offset) for x, y in enumerate(samples)
            )
            outline.append((float(len(samples) - 1), float(height)))
            pygame.draw.polygon(window, color, outline)

    @staticmethod
    def _draw_cloud(window: Surface, cloud: CloudState) -> None:
        s = cloud.scale
        puffs = ((0, 0, 20), (15, -10, 15), (-15, -5, 15), (15, 10, 15), (-15, 10, 15))
        for dx, dy, radius in puffs:
            pygame.draw.circle(
                window,
                (255, 255, 255),
                (round(cloud.x + dx * s), round(cloud.y + dy * s)),
                max(1, round(radius * s)),
            )

    @staticmethod
    def _draw_bird(window: Surface, bird: BirdState) -> None:
        left_tip = (bird.x - 10, bird.y + math.sin(bird.wing_phase) * 5)
        right_tip = (bird.x + 10, bird.y + math.cos(bird.wing_phase + math.pi) * 5)
        pygame.draw.line(window, (0, 0, 0), (bird.x, bird.y), left_tip, 2)
        pygame.draw.line(window, (0, 0, 0), (bird.x, bird.y), right_tip, 2)

    @staticmethod
    def _draw_mine(window: Surface, mine: MineState) -> None:
        center = (round(mine.x), round(mine.y))
        pygame.draw.circle(window, MINE_COLOR, center, max(1, round(10 * mine.scale)))
        for spike in range(8):
            angle = spike / 8 * 2.0 * math.pi
            inner = 10 * mine.scale
            outer = 15 * mine.scale
            pygame.draw.line(
                window,
                MINE_COLOR,
                (mine.x + math.cos(angle) * inner, mine.y + math.sin(angle) * inner),
                (mine.x + math.cos(angle) * outer, mine.y + math.sin(angle) * outer),
                2,
            )

    @staticmethod
    def _draw_fish(window: Surface, fish: FishState) -> None:
        if not fish.jumping:
            return
        body = [(0.0, 0.0), (-15.0, 5.0), (-15.0, -5.0)]
        pygame.draw.polygon(
            window, FISH_COLOR, rotate_points(body, fish.rotation, (fish.x, fish.y))
        )

    @staticmethod
    def _draw_wake(window: Surface, boat: BoatPose, speed: float) -> None:
        if boat.capsizing:
            return
        length = min(speed * 2, 100)
        spread = min(speed, 50)
        pygame.draw.polygon(
            window,
            (235, 245, 255),
            [
                (boat.x, boat.y),
                (boat.x - length, boat.y - spread / 2),
                (boat.x - length, boat.y + spread / 2),
            ],
        )

    @staticmethod
    def _draw_boat(window: Surface, boat: BoatPose, screen_height: int) -> None:
        half_w = BOAT_WIDTH / 2
        half_h = BOAT_HEIGHT / 2
        hull = [
            (-half_w, -half_h),
            (half_w, -half_h),
            (half_w + 10, 0.0),
            (half_w, half_h),
            (-half_w, half_h),
            (-half_w - 10, 0.0),
        ]
        sail = [(0.0, -half_h - 20), (15.0, -half_h), (0.0, -half_h)]
        origin = (boat.x, boat.y)

        color = HULL_COLOR
        if boat.capsizing:
            # Fade towards the sea colour as the hull sinks.
            fade = min(1.0, max(0.0, (boat.y - screen_height * 0.5) / (screen_height * 0.5)))
            color = interpolate_color(HULL_COLOR, SEA_BOTTOM_COLOR, fade)

        pygame.draw.polygon(window, color, rotate_points(hull, boat.rotation, origin))
        pygame.draw.polygon(window, SAIL_COLOR, rotate_points(sail, boat.rotation, origin))

        (wx, wy), = rotate_points([(boat.balance * half_w, 0.0)], boat.rotation, origin)
        pygame.draw.circle(window, WEIGHT_COLOR, (round(wx), round(wy)), 5)

    @staticmethod
    def _draw_splash(window: Surface, x: float, y: float) -> None:
        for drop in range(8):
            angle = drop / 8 * 2.0 * math.pi
            pygame.draw.circle(
                window,
                (255, 255, 255),
                (round(x + math.cos(angle) * 14), round(y + math.sin(angle) * 14)),
                4,
            )

    def _draw_hud(self, window: Surface, snapshot: GameSnapshot) -> None:
        font, callout_font = self._fonts()
        lines = (
            f"Score: {math.floor(snapshot.score)}",
            f"Difficulty: {snapshot.difficulty:.1f}",
            f"Speed: {snapshot.speed:.0f}x",
        )
        for index, text in enumerate(lines):
            window.blit(font.render(text, True, TEXT_COLOR), (10, 10 + index * 20))

        center_x = snapshot.width / 2
        center_y = snapshot.height / 2
        if snapshot.has_signal(TransientSignal.NICE_JUMP):
            self._blit_centered(
                window, callout_font.render("Nice Jump!", True, NICE_JUMP_COLOR),
                (center_x, center_y),
            )
        if snapshot.has_signal(TransientSignal.GREAT_FLIP):
            self._blit_centered(
                window, callout_font.render("Great Flip!", True, GREAT_FLIP_COLOR),
                (center_x, center_y - 40),
            )
        if snapshot.game_over:
            summary = (
                "Game Over!",
                "Your boat has capsized!",
                f"Final Score: {math.floor(snapshot.score)}",
                f"Max Difficulty: {snapshot.difficulty:.1f}",
                f"Final Speed: {snapshot.speed:.0f}x",
                "Press Enter to restart",
            )
            for index, text in enumerate(summary):
                self._blit_centered(
                    window,
                    font.render(text, True, (0, 0, 0)),
                    (center_x, center_y - 60 + index * 24),
                )

    @staticmethod
    def _blit_centered(
        window: Surface, text: Surface, center: tuple[float, float]
    ) -> None:
        rect = text.get_rect(center=(round(center[0]), round(center[1])))
        window.blit(text, rect)
