"""Score-driven speed tiers and their lookup tables."""

from __future__ import annotations

from typing import Sequence

from .config import JUMP_MODIFIERS, PIPE_SPEEDS, SPEED_THRESHOLDS, TIER_NAMES


def speed_tier(score: int, thresholds: Sequence[int] = SPEED_THRESHOLDS) -> int:
    """Return 1 below the first threshold, 2 below the second, else 3."""
    low, high = thresholds
    if score >= high:
        return 3
    if score >= low:
        return 2
    return 1


def pipe_speed(tier: int) -> float:
    return PIPE_SPEEDS[tier - 1]


def jump_modifier(tier: int) -> float:
    return JUMP_MODIFIERS[tier - 1]


def tier_name(tier: int) -> str:
    return TIER_NAMES[tier - 1]
