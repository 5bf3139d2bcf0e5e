"""Fixed-step vertical integration for the bird."""

from __future__ import annotations

from .config import GRAVITY, HARD_GRAVITY_SCALE, HARD_JUMP_SCALE, JUMP_STRENGTH
from .difficulty import jump_modifier
from .entities import Bird


def gravity_step(hard_mode: bool) -> float:
    return GRAVITY * (HARD_GRAVITY_SCALE if hard_mode else 1.0)


def jump_velocity(tier: int, hard_mode: bool) -> float:
    """Upward velocity set by a jump; weaker at higher tiers and in hard mode."""
    return JUMP_STRENGTH * jump_modifier(tier) * (HARD_JUMP_SCALE if hard_mode else 1.0)


def integrate(bird: Bird, hard_mode: bool) -> None:
    """Advance one tick. Velocity is not clamped; bounds are checked elsewhere."""
    bird.velocity += gravity_step(hard_mode)
    bird.y += bird.velocity


def jump(bird: Bird, tier: int, hard_mode: bool) -> None:
    bird.velocity = jump_velocity(tier, hard_mode)
