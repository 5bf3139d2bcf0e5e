"""Game entities and rendering helpers.

Contains the bird, the pipes and their generator, and the scenery objects
(clouds, stars, trees) drawn behind them.
"""

from __future__ import annotations

import math
import random

import pygame

from .config import (
    BIRD_COLORS,
    BIRD_HEIGHT,
    BIRD_WIDTH,
    BIRD_X,
    CLOUD_COUNT,
    COL_BEAK,
    COL_WING,
    GROUND_HEIGHT,
    HARD_GAP_SHRINK,
    INITIAL_PIPES,
    PIPE_CAP_HEIGHT,
    PIPE_CAP_OVERHANG,
    PIPE_COLORS_DAY,
    PIPE_COLORS_NIGHT,
    PIPE_GAP,
    PIPE_MIN_HEIGHT,
    PIPE_MIN_HEIGHT_HARD,
    PIPE_SPACING,
    PIPE_WIDTH,
    STAR_COUNT,
    TREE_COUNT,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .utils import clamp, darken


def gap_size(hard_mode: bool) -> int:
    return PIPE_GAP - HARD_GAP_SHRINK if hard_mode else PIPE_GAP


class Bird:
    def __init__(self, y: float = WINDOW_HEIGHT / 2) -> None:
        self.y = float(y)
        self.velocity = 0.0

    def reset(self, y: float = WINDOW_HEIGHT / 2) -> None:
        self.y = float(y)
        self.velocity = 0.0

    def rotation_deg(self) -> float:
        """Nose-up when rising, nose-down when falling."""
        return clamp(self.velocity * 3.0, -90.0, 30.0)

    def draw(self, surf: pygame.Surface, tier: int, wing_frame: int) -> None:
        # Draw onto a padded sprite, then rotate around the body centre
        pad = 40
        sprite = pygame.Surface((BIRD_WIDTH + 2 * pad, BIRD_HEIGHT + 2 * pad), pygame.SRCALPHA)
        ox, oy = pad, pad

        # Speed trail
        if tier > 1:
            for i in range(tier * 2):
                trail = pygame.Rect(ox - i * 5 - 10, oy + BIRD_HEIGHT // 4, BIRD_WIDTH // 2, BIRD_HEIGHT // 2)
                pygame.draw.ellipse(sprite, (255, 255, 0, 100), trail)

        pygame.draw.ellipse(sprite, BIRD_COLORS[tier - 1], (ox, oy, BIRD_WIDTH, BIRD_HEIGHT))

        # Wing flaps faster at higher tiers
        phase = (wing_frame * tier) % 3
        wing_offset = {0: 0, 1: 3, 2: -3}[phase]
        pygame.draw.ellipse(sprite, COL_WING, (ox + 10, oy + 10 + wing_offset, 15, 10))

        pygame.draw.ellipse(sprite, (0, 0, 0), (ox + BIRD_WIDTH - 15, oy + 10, 8, 8))
        pygame.draw.ellipse(sprite, (255, 255, 255), (ox + BIRD_WIDTH - 14, oy + 11, 3, 3))

        mid = oy + BIRD_HEIGHT // 2
        beak = [
            (ox + BIRD_WIDTH - 5, mid),
            (ox + BIRD_WIDTH + 5, mid + 4),
            (ox + BIRD_WIDTH - 5, mid + 8),
        ]
        pygame.draw.polygon(sprite, COL_BEAK, beak)

        # pygame rotates counter-clockwise; screen y points down
        rotated = pygame.transform.rotate(sprite, -self.rotation_deg())
        surf.blit(rotated, rotated.get_rect(center=(BIRD_X, int(self.y))))


class Pipe:
    def __init__(self, x: float, height: int) -> None:
        self.x = float(x)
        self.height = height
        self.passed = False

    @property
    def trailing_edge(self) -> float:
        return self.x + PIPE_WIDTH

    def offscreen(self) -> bool:
        return self.trailing_edge < 0

    def draw(
        self,
        surf: pygame.Surface,
        tier: int,
        hard_mode: bool,
        night_mode: bool,
        font: pygame.font.Font | None = None,
    ) -> None:
        colors = PIPE_COLORS_NIGHT if night_mode else PIPE_COLORS_DAY
        color = colors[tier - 1]
        cap = darken(color, 40)
        x = int(self.x)
        floor = WINDOW_HEIGHT - GROUND_HEIGHT
        bottom_top = self.height + gap_size(hard_mode)

        stripes = pygame.Surface((10, 10), pygame.SRCALPHA)
        stripes.fill((255, 255, 255, 100))

        pygame.draw.rect(surf, color, (x, 0, PIPE_WIDTH, self.height))
        for y in range(0, self.height, 20):
            surf.blit(stripes, (x, y))

        pygame.draw.rect(surf, color, (x, bottom_top, PIPE_WIDTH, floor - bottom_top))
        for y in range(bottom_top, floor, 20):
            surf.blit(stripes, (x, y))

        cap_w = PIPE_WIDTH + 2 * PIPE_CAP_OVERHANG
        pygame.draw.rect(surf, cap, (x - PIPE_CAP_OVERHANG, self.height - PIPE_CAP_HEIGHT, cap_w, PIPE_CAP_HEIGHT))
        pygame.draw.rect(surf, cap, (x - PIPE_CAP_OVERHANG, bottom_top, cap_w, PIPE_CAP_HEIGHT))

        if font is not None:
            label = font.render(f"SPEED {tier}", True, (255, 255, 255))
            surf.blit(label, label.get_rect(bottomleft=(x + 15, self.height - 2)))
            surf.blit(label, label.get_rect(topleft=(x + 15, bottom_top + 3)))


def pipe_height_range(hard_mode: bool) -> tuple[int, int]:
    """Inclusive bounds for the top edge of a pipe opening."""
    inset = PIPE_MIN_HEIGHT_HARD if hard_mode else PIPE_MIN_HEIGHT
    return inset, WINDOW_HEIGHT - PIPE_GAP - GROUND_HEIGHT - inset


def spawn_pipe(x: float, hard_mode: bool, rng: random.Random | None = None) -> Pipe:
    """Create a pipe at x with a random opening for the current difficulty."""
    rng = rng or random
    lo, hi = pipe_height_range(hard_mode)
    return Pipe(x, rng.randint(lo, hi))


def initial_pipes(hard_mode: bool, rng: random.Random | None = None) -> list[Pipe]:
    return [spawn_pipe(WINDOW_WIDTH + i * PIPE_SPACING, hard_mode, rng) for i in range(INITIAL_PIPES)]


class Cloud:
    def __init__(self, rng: random.Random) -> None:
        self.x = rng.randrange(WINDOW_WIDTH * 2)
        self.y = rng.randrange(WINDOW_HEIGHT // 3)
        self.width = 60 + rng.randrange(80)
        self.height = 20 + rng.randrange(30)
        self.speed = 1 + rng.randrange(3)

    def update(self, rng: random.Random) -> None:
        self.x -= self.speed
        if self.x + self.width < 0:
            self.x = WINDOW_WIDTH
            self.y = rng.randrange(WINDOW_HEIGHT // 3)

    def draw(self, surf: pygame.Surface) -> None:
        layer = pygame.Surface((self.width * 2, self.height * 2), pygame.SRCALPHA)
        ox, oy = self.width // 3, self.height // 2
        w, h = self.width, self.height
        pygame.draw.ellipse(layer, (255, 255, 255, 100), (ox + 5, oy + 5, w, h))
        pygame.draw.ellipse(layer, (255, 255, 255, 200), (ox, oy, w, h))
        pygame.draw.ellipse(layer, (255, 255, 255, 200), (ox + w // 3, oy - h // 3, w * 2 // 3, h))
        pygame.draw.ellipse(layer, (255, 255, 255, 200), (ox + w * 2 // 3, oy, w // 2, h))
        surf.blit(layer, (self.x - ox, self.y - oy))


class Star:
    def __init__(self, rng: random.Random) -> None:
        self.x = rng.randrange(WINDOW_WIDTH)
        self.y = rng.randrange(WINDOW_HEIGHT // 2)
        self.size = 1 + rng.randrange(3)
        self.brightness = 0.5 + rng.random() * 0.5

    def draw(self, surf: pygame.Surface, twinkle: bool = False) -> None:
        alpha = int(255 * self.brightness)
        c = int(255 * self.brightness)
        pygame.draw.ellipse(surf, (c, c, c), (self.x, self.y, self.size, self.size))
        if twinkle:
            glow = pygame.Surface((self.size + 2, self.size + 2), pygame.SRCALPHA)
            pygame.draw.ellipse(glow, (255, 255, 255, min(255, alpha + 50)), glow.get_rect())
            surf.blit(glow, (self.x - 1, self.y - 1))


class Tree:
    def __init__(self, index: int, rng: random.Random, night_mode: bool) -> None:
        self.x = (index * 100) % WINDOW_WIDTH
        self.height = 60 + rng.randrange(140)
        self.width = 30 + rng.randrange(20)
        if night_mode:
            self.trunk = (80 + rng.randrange(40), 50 + rng.randrange(30), 20 + rng.randrange(20))
            self.leaves = (0, 60 + rng.randrange(40), 0)
        else:
            self.trunk = (101 + rng.randrange(50), 67 + rng.randrange(40), 33 + rng.randrange(20))
            self.leaves = (30 + rng.randrange(40), 120 + rng.randrange(50), 30 + rng.randrange(40))

    def draw(self, surf: pygame.Surface) -> None:
        horizon = WINDOW_HEIGHT // 2
        top = horizon - self.height
        pygame.draw.rect(surf, self.trunk, (self.x + self.width // 2 - 5, top, 10, self.height))
        pygame.draw.ellipse(surf, self.leaves, (self.x, top - 30, self.width, 60))
        pygame.draw.ellipse(surf, self.leaves, (self.x - 10, top - 10, self.width + 20, 50))


def make_clouds(rng: random.Random) -> list[Cloud]:
    return [Cloud(rng) for _ in range(CLOUD_COUNT)]


def make_stars(rng: random.Random, night_mode: bool) -> list[Star]:
    # Stars only exist at night
    if not night_mode:
        return []
    return [Star(rng) for _ in range(STAR_COUNT)]


def make_trees(rng: random.Random, night_mode: bool) -> list[Tree]:
    return [Tree(i, rng, night_mode) for i in range(TREE_COUNT)]


def bob_offset(ms: int, amplitude: float = 20.0) -> int:
    """Vertical bob used by the menu's demo birds."""
    return int(math.sin(ms * 0.005) * amplitude)
