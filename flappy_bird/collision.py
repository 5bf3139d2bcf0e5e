"""Bird-versus-pipe and bird-versus-world collision tests.

All comparisons are strict: a bird whose shrunk box touches an edge exactly
is not colliding, so the same inputs always classify the same way.
"""

from __future__ import annotations

from typing import Iterable

from .config import (
    BIRD_HEIGHT,
    BIRD_WIDTH,
    BIRD_X,
    COLLISION_MARGIN,
    GROUND_HEIGHT,
    PIPE_WIDTH,
    WINDOW_HEIGHT,
)
from .entities import Pipe, gap_size
from .utils import spans_overlap


def bird_box(y: float) -> tuple[int, int, int, int]:
    """(left, right, top, bottom) of the bird's hit box, shrunk by the margin."""
    cy = int(y)
    return (
        BIRD_X - BIRD_WIDTH // 2 + COLLISION_MARGIN,
        BIRD_X + BIRD_WIDTH // 2 - COLLISION_MARGIN,
        cy - BIRD_HEIGHT // 2 + COLLISION_MARGIN,
        cy + BIRD_HEIGHT // 2 - COLLISION_MARGIN,
    )


def hits_pipe(y: float, pipe: Pipe, gap: int) -> bool:
    left, right, top, bottom = bird_box(y)
    pipe_left = int(pipe.x) + COLLISION_MARGIN
    pipe_right = int(pipe.x) + PIPE_WIDTH - COLLISION_MARGIN
    if not spans_overlap(left, right, pipe_left, pipe_right):
        return False
    return top < pipe.height or bottom > pipe.height + gap


def out_of_bounds(y: float) -> bool:
    """Below the ground line or above the top of the world."""
    half = BIRD_HEIGHT / 2
    return y + half > WINDOW_HEIGHT - GROUND_HEIGHT or y - half < 0


def first_hit(y: float, pipes: Iterable[Pipe], hard_mode: bool) -> Pipe | None:
    """Return the first pipe in sequence order that the bird strikes."""
    gap = gap_size(hard_mode)
    for pipe in pipes:
        if hits_pipe(y, pipe, gap):
            return pipe
    return None


def detect_collision(y: float, pipes: Iterable[Pipe], hard_mode: bool) -> bool:
    return first_hit(y, pipes, hard_mode) is not None or out_of_bounds(y)
