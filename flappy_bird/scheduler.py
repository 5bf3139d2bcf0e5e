"""Fixed-timestep tick source with a command queue."""

from __future__ import annotations

from collections import deque
from typing import Callable, Generic, TypeVar

from .config import MAX_TICKS_PER_FRAME, TICK_MS

C = TypeVar("C")


class FixedStepScheduler(Generic[C]):
    """Turns variable frame times into whole ticks of `step_ms`.

    Commands queued between frames are applied, in arrival order, before the
    frame's ticks run. Leftover time carries into the next frame; anything
    beyond `max_steps` ticks in one frame is dropped.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        on_command: Callable[[C], None],
        step_ms: int = TICK_MS,
        max_steps: int = MAX_TICKS_PER_FRAME,
    ) -> None:
        self.on_tick = on_tick
        self.on_command = on_command
        self.step_ms = step_ms
        self.max_steps = max_steps
        self.accumulator = 0.0
        self.queue: deque[C] = deque()

    def push(self, command: C) -> None:
        self.queue.append(command)

    def advance(self, elapsed_ms: float) -> int:
        """Apply queued commands, then run due ticks. Returns ticks run."""
        while self.queue:
            self.on_command(self.queue.popleft())

        self.accumulator += elapsed_ms
        steps = 0
        while self.accumulator >= self.step_ms and steps < self.max_steps:
            self.on_tick()
            self.accumulator -= self.step_ms
            steps += 1
        if steps == self.max_steps:
            self.accumulator %= self.step_ms
        return steps
