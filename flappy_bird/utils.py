"""Geometry and color utility functions used across the game."""

from __future__ import annotations

import numpy as np
import pygame


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def spans_overlap(a_lo: float, a_hi: float, b_lo: float, b_hi: float) -> bool:
    """True if the open intervals (a_lo, a_hi) and (b_lo, b_hi) intersect."""
    return a_hi > b_lo and a_lo < b_hi


def darken(color: tuple[int, int, int], amount: int) -> tuple[int, int, int]:
    """Subtract amount from every channel, floored at 0."""
    r, g, b = color
    return (max(0, r - amount), max(0, g - amount), max(0, b - amount))


def gradient_array(
    w: int, h: int, top: tuple[int, int, int], bottom: tuple[int, int, int]
) -> np.ndarray:
    """Vertical RGB gradient as a (w, h, 3) array laid out for surfarray.

    Args:
        w, h: Dimensions.
        top, bottom: Colors at the first and last row.
    """
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    rows = np.asarray(top, dtype=np.float32) * (1.0 - t) + np.asarray(bottom, dtype=np.float32) * t
    column = np.clip(rows, 0, 255).astype(np.uint8)
    return np.repeat(column[None, :, :], w, axis=0)


def gradient_surface(
    w: int, h: int, top: tuple[int, int, int], bottom: tuple[int, int, int]
) -> pygame.Surface:
    """Precompute a vertical gradient as a surface for fast blitting."""
    return pygame.surfarray.make_surface(gradient_array(w, h, top, bottom))


def alpha_overlay(
    w: int, h: int, top: tuple[int, int, int, int], bottom: tuple[int, int, int, int]
) -> pygame.Surface:
    """Translucent vertical gradient, used behind the menu and pause screens."""
    surf = pygame.Surface((w, h), pygame.SRCALPHA)
    for y in range(h):
        t = y / max(1, h - 1)
        color = tuple(int(top[i] * (1 - t) + bottom[i] * t) for i in range(4))
        pygame.draw.line(surf, color, (0, y), (w, y))
    return surf
