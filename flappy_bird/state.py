"""Game state machine: owns the bird, the pipes, the score and the mode flags.

Everything here is free of rendering. The window feeds commands and ticks in;
the machine hands back a `Frame` snapshot and a list of sound events.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from . import collision, physics
from .config import ANIMATION_DELAY, BIRD_X, HARD_SPEED_SCALE, PIPE_SPACING, WINDOW_WIDTH, WING_FRAMES
from .difficulty import pipe_speed, speed_tier
from .entities import Bird, Pipe, initial_pipes, spawn_pipe
from .highscore import HighScoreStore

logger = logging.getLogger(__name__)


class Phase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class SoundEvent(Enum):
    JUMP = "jump"
    SCORE = "score"
    COLLISION = "collision"
    MENU_SELECT = "menu_select"
    TIER_UP = "tier_up"


class Command(Enum):
    JUMP = "jump"
    TOGGLE_PAUSE = "toggle_pause"
    RESET = "reset"
    MENU = "menu"
    CLASSIC_MODE = "classic_mode"
    TOGGLE_HARD = "toggle_hard"
    TOGGLE_NIGHT = "toggle_night"
    TOGGLE_SOUND = "toggle_sound"


@dataclass
class GameState:
    bird: Bird = field(default_factory=Bird)
    pipes: list[Pipe] = field(default_factory=list)
    score: int = 0
    high_score: int = 0
    tier: int = 1
    phase: Phase = Phase.NOT_STARTED
    hard_mode: bool = False
    night_mode: bool = False
    sound_enabled: bool = True
    animation_delay: int = 0
    animation_frame: int = 0
    background_offset: int = 0
    events: list[SoundEvent] = field(default_factory=list)


@dataclass(frozen=True)
class Frame:
    """Draw-ready view of one tick."""

    bird_y: float
    bird_velocity: float
    pipes: tuple[tuple[float, int], ...]
    score: int
    high_score: int
    tier: int
    phase: Phase
    animation_frame: int


class StateMachine:
    """NotStarted -> Running <-> Paused, Running -> Over, {Paused, Over} -> NotStarted."""

    def __init__(
        self,
        store: HighScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.rng = rng or random.Random()
        self.state = GameState(high_score=store.load() if store else 0)
        self._handlers = {
            Command.JUMP: self.jump,
            Command.TOGGLE_PAUSE: self.toggle_pause,
            Command.RESET: self.reset,
            Command.MENU: self.return_to_menu,
            Command.CLASSIC_MODE: self.select_classic,
            Command.TOGGLE_HARD: self.toggle_hard_mode,
            Command.TOGGLE_NIGHT: self.toggle_night_mode,
            Command.TOGGLE_SOUND: self.toggle_sound,
        }
        self.reset_world()

    # -- lifecycle ---------------------------------------------------------

    def reset_world(self) -> None:
        """Fresh bird, pipes, score and counters; modes and high score survive."""
        s = self.state
        s.bird.reset()
        s.pipes = initial_pipes(s.hard_mode, self.rng)
        s.score = 0
        s.tier = 1
        s.phase = Phase.NOT_STARTED
        s.animation_delay = 0
        s.animation_frame = 0
        s.background_offset = 0

    def dispatch(self, command: Command) -> None:
        self._handlers[command]()

    def jump(self) -> None:
        s = self.state
        if s.phase is Phase.NOT_STARTED:
            s.phase = Phase.RUNNING
            s.events.append(SoundEvent.MENU_SELECT)
            physics.jump(s.bird, s.tier, s.hard_mode)
        elif s.phase is Phase.RUNNING:
            physics.jump(s.bird, s.tier, s.hard_mode)
            s.events.append(SoundEvent.JUMP)

    def toggle_pause(self) -> None:
        s = self.state
        if s.phase is Phase.RUNNING:
            s.phase = Phase.PAUSED
        elif s.phase is Phase.PAUSED:
            s.phase = Phase.RUNNING
        else:
            return
        s.events.append(SoundEvent.MENU_SELECT)

    def reset(self) -> None:
        if self.state.phase not in (Phase.PAUSED, Phase.OVER):
            return
        self.reset_world()
        self.state.events.append(SoundEvent.MENU_SELECT)

    def return_to_menu(self) -> None:
        # Both lead back to the start screen
        self.reset()

    def _in_menu(self) -> bool:
        if self.state.phase is not Phase.NOT_STARTED:
            return False
        self.state.events.append(SoundEvent.MENU_SELECT)
        return True

    def select_classic(self) -> None:
        if not self._in_menu():
            return
        self.state.hard_mode = False
        self.state.night_mode = False
        self.state.pipes = initial_pipes(False, self.rng)

    def toggle_hard_mode(self) -> None:
        if not self._in_menu():
            return
        self.state.hard_mode = not self.state.hard_mode
        # Openings depend on the difficulty flag
        self.state.pipes = initial_pipes(self.state.hard_mode, self.rng)

    def toggle_night_mode(self) -> None:
        if self._in_menu():
            self.state.night_mode = not self.state.night_mode

    def toggle_sound(self) -> None:
        if self._in_menu():
            self.state.sound_enabled = not self.state.sound_enabled

    # -- per-tick update ---------------------------------------------------

    def tick(self) -> None:
        s = self.state
        if s.phase is not Phase.RUNNING:
            return

        s.animation_delay += 1
        if s.animation_delay >= ANIMATION_DELAY:
            s.animation_frame = (s.animation_frame + 1) % WING_FRAMES
            s.animation_delay = 0
        s.background_offset = (s.background_offset + 1) % WINDOW_WIDTH

        previous = s.tier
        s.tier = speed_tier(s.score)
        if s.tier > previous:
            s.events.append(SoundEvent.TIER_UP)

        physics.integrate(s.bird, s.hard_mode)

        step = pipe_speed(s.tier) * (HARD_SPEED_SCALE if s.hard_mode else 1.0)
        for pipe in s.pipes:
            pipe.x -= step
            if not pipe.passed and pipe.trailing_edge < BIRD_X:
                pipe.passed = True
                self._score_point()

        self._recycle_pipes()

        if collision.detect_collision(s.bird.y, s.pipes, s.hard_mode):
            s.phase = Phase.OVER
            s.events.append(SoundEvent.COLLISION)
            logger.info("Game over: score %d, high score %d", s.score, s.high_score)

    def _score_point(self) -> None:
        s = self.state
        s.score += 1
        if s.score > s.high_score:
            s.high_score = s.score
            if self.store is not None:
                self.store.save(s.high_score)
        s.events.append(SoundEvent.SCORE)

    def _recycle_pipes(self) -> None:
        s = self.state
        while s.pipes and s.pipes[0].offscreen():
            last_x = s.pipes[-1].x
            s.pipes.pop(0)
            s.pipes.append(spawn_pipe(last_x + PIPE_SPACING, s.hard_mode, self.rng))

    # -- outputs -----------------------------------------------------------

    def drain_events(self) -> list[SoundEvent]:
        events, self.state.events = self.state.events, []
        return events

    def frame(self) -> Frame:
        s = self.state
        return Frame(
            bird_y=s.bird.y,
            bird_velocity=s.bird.velocity,
            pipes=tuple((p.x, p.height) for p in s.pipes),
            score=s.score,
            high_score=s.high_score,
            tier=s.tier,
            phase=s.phase,
            animation_frame=s.animation_frame,
        )
