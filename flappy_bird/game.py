"""Game window, input mapping, scenery and screen composition."""

from __future__ import annotations

import logging
import random
import sys

import pygame

from .audio import SoundBoard
from .config import (
    BIRD_HEIGHT,
    BIRD_WIDTH,
    CAPTION,
    COL_DAY_BOTTOM,
    COL_DAY_TOP,
    COL_GRASS_DAY,
    COL_GRASS_NIGHT,
    COL_GROUND_BOTTOM,
    COL_GROUND_DETAIL,
    COL_GROUND_TOP,
    COL_MOON,
    COL_MOON_CRATER,
    COL_NIGHT_BOTTOM,
    COL_NIGHT_TOP,
    COL_SUN,
    COL_SUN_HALO,
    FPS,
    GROUND_HEIGHT,
    HIGH_SCORE_FILE,
    SOUND_DIR,
    SPEED_THRESHOLDS,
    TIER_COLORS,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from .difficulty import tier_name
from .entities import bob_offset, make_clouds, make_stars, make_trees
from .highscore import HighScoreStore
from .scheduler import FixedStepScheduler
from .state import Command, Phase, StateMachine
from .utils import alpha_overlay, gradient_surface

KEY_COMMANDS = {
    pygame.K_SPACE: Command.JUMP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESET,
    pygame.K_m: Command.MENU,
    pygame.K_1: Command.CLASSIC_MODE,
    pygame.K_2: Command.TOGGLE_HARD,
    pygame.K_3: Command.TOGGLE_NIGHT,
    pygame.K_4: Command.TOGGLE_SOUND,
}

WHITE = (255, 255, 255)


def on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


class Game:
    """Top-level game controller: owns the window and wires input, ticks, sound and drawing."""

    def __init__(
        self,
        high_score_file: str = HIGH_SCORE_FILE,
        sound_dir: str = SOUND_DIR,
        seed: int | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(CAPTION)
        self.clock = pygame.time.Clock()
        self.font_title = pygame.font.SysFont("arial", 52, bold=True)
        self.font_big = pygame.font.SysFont("arial", 40, bold=True)
        self.font_mid = pygame.font.SysFont("arial", 24, bold=True)
        self.font_small = pygame.font.SysFont("arial", 18)
        self.font_tiny = pygame.font.SysFont("arial", 14, bold=True)

        self.rng = random.Random(seed)
        self.machine = StateMachine(HighScoreStore(high_score_file), random.Random(self.rng.random()))
        self.scheduler: FixedStepScheduler[Command] = FixedStepScheduler(self.on_tick, self.apply_command)
        self.audio = SoundBoard(sound_dir)

        self._make_overlays()
        self.rebuild_scenery()

    def _make_overlays(self) -> None:
        sky_h = WINDOW_HEIGHT // 2
        self.sky_day = gradient_surface(WINDOW_WIDTH, sky_h, COL_DAY_TOP, COL_DAY_BOTTOM)
        self.sky_night = gradient_surface(WINDOW_WIDTH, sky_h, COL_NIGHT_TOP, COL_NIGHT_BOTTOM)
        self.ground = gradient_surface(WINDOW_WIDTH, GROUND_HEIGHT, COL_GROUND_TOP, COL_GROUND_BOTTOM)
        self.menu_overlay = alpha_overlay(WINDOW_WIDTH, WINDOW_HEIGHT, (0, 0, 0, 180), (0, 0, 0, 100))
        self.pause_overlay = alpha_overlay(WINDOW_WIDTH, WINDOW_HEIGHT, (0, 0, 0, 200), (0, 0, 50, 150))
        self.over_overlay = alpha_overlay(WINDOW_WIDTH, WINDOW_HEIGHT, (100, 0, 0, 200), (50, 0, 0, 150))

    def rebuild_scenery(self) -> None:
        night = self.machine.state.night_mode
        self.clouds = make_clouds(self.rng)
        self.stars = make_stars(self.rng, night)
        self.trees = make_trees(self.rng, night)
        self.grass = [5 + self.rng.randrange(10) for _ in range(0, WINDOW_WIDTH, 10)]

    # -- input and ticks ---------------------------------------------------

    def apply_command(self, command: Command) -> None:
        s = self.machine.state
        was_night, was_phase = s.night_mode, s.phase
        self.machine.dispatch(command)
        returned = s.phase is Phase.NOT_STARTED and was_phase is not Phase.NOT_STARTED
        if returned or s.night_mode != was_night:
            self.rebuild_scenery()

    def on_tick(self) -> None:
        if self.machine.state.phase is Phase.RUNNING:
            for cloud in self.clouds:
                cloud.update(self.rng)
        self.machine.tick()

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            pygame.event.post(pygame.event.Event(pygame.QUIT))
            return
        command = KEY_COMMANDS.get(event.key)
        if command is not None:
            self.scheduler.push(command)

    def update(self, elapsed_ms: float) -> None:
        self.scheduler.advance(elapsed_ms)
        self.audio.play_events(self.machine.drain_events(), self.machine.state.sound_enabled)

    # -- drawing -----------------------------------------------------------

    def draw_background(self, surf: pygame.Surface) -> None:
        s = self.machine.state
        surf.fill(COL_DAY_BOTTOM if not s.night_mode else COL_NIGHT_BOTTOM)
        if s.night_mode:
            surf.blit(self.sky_night, (0, 0))
            for star in self.stars:
                star.draw(surf, twinkle=self.rng.randrange(100) < 5)
            pygame.draw.ellipse(surf, COL_MOON, (650, 50, 70, 70))
            pygame.draw.ellipse(surf, COL_MOON_CRATER, (660, 65, 15, 15))
            pygame.draw.ellipse(surf, COL_MOON_CRATER, (680, 80, 10, 10))
            pygame.draw.ellipse(surf, COL_MOON_CRATER, (665, 90, 8, 8))
        else:
            surf.blit(self.sky_day, (0, 0))
            for cloud in self.clouds:
                cloud.draw(surf)
            pygame.draw.ellipse(surf, COL_SUN_HALO, (700, 30, 60, 60))
            pygame.draw.ellipse(surf, COL_SUN, (705, 35, 50, 50))
        for tree in self.trees:
            tree.draw(surf)

    def draw_ground(self, surf: pygame.Surface) -> None:
        s = self.machine.state
        top = WINDOW_HEIGHT - GROUND_HEIGHT
        surf.blit(self.ground, (0, top))
        grass = COL_GRASS_NIGHT if s.night_mode else COL_GRASS_DAY
        for i, h in enumerate(self.grass):
            pygame.draw.rect(surf, grass, (i * 10, top, 3, h))
        for x in range(0, WINDOW_WIDTH, 15):
            pygame.draw.ellipse(surf, COL_GROUND_DETAIL, ((x + s.background_offset) % WINDOW_WIDTH, top + 20, 8, 4))

    def draw(self) -> None:
        s = self.machine.state
        self.draw_background(self.screen)
        for pipe in s.pipes:
            pipe.draw(self.screen, s.tier, s.hard_mode, s.night_mode, self.font_tiny)
        self.draw_ground(self.screen)
        if s.phase in (Phase.RUNNING, Phase.PAUSED):
            s.bird.draw(self.screen, s.tier, s.animation_frame)
        self._draw_ui(self.screen)

        if s.phase is Phase.NOT_STARTED:
            self._draw_start_screen(self.screen)
        elif s.phase is Phase.PAUSED:
            self._draw_pause_screen(self.screen)
        elif s.phase is Phase.OVER:
            self._draw_game_over_screen(self.screen)
        pygame.display.flip()

    def _blit_centered(self, surf: pygame.Surface, font: pygame.font.Font, text: str, color, y: int) -> None:
        rendered = font.render(text, True, color)
        surf.blit(rendered, rendered.get_rect(midtop=(WINDOW_WIDTH // 2, y)))

    def _draw_ui(self, surf: pygame.Surface) -> None:
        s = self.machine.state
        score = str(s.score)
        shadow = self.font_big.render(score, True, (0, 0, 0))
        surf.blit(shadow, shadow.get_rect(midtop=(WINDOW_WIDTH // 2 + 2, 14)))
        self._blit_centered(surf, self.font_big, score, WHITE, 12)

        surf.blit(self.font_small.render(f"High Score: {s.high_score}", True, WHITE), (20, 12))
        sound_color = (0, 255, 0) if s.sound_enabled else (255, 0, 0)
        sound_text = f"Sound: {'ON' if s.sound_enabled else 'OFF'}"
        surf.blit(self.font_small.render(sound_text, True, sound_color), (20, 32))
        surf.blit(self.font_small.render(f"SPEED: {tier_name(s.tier)}", True, TIER_COLORS[s.tier - 1]), (20, 52))

        if s.hard_mode:
            surf.blit(self.font_small.render("HARD MODE", True, (255, 0, 0)), (WINDOW_WIDTH - 120, 12))
        if s.night_mode:
            surf.blit(self.font_small.render("NIGHT MODE", True, (0, 0, 255)), (WINDOW_WIDTH - 120, 32))

        # Tier bar
        pygame.draw.rect(surf, (128, 128, 128), (WINDOW_WIDTH - 150, 70, 100, 10))
        for i, color in enumerate(TIER_COLORS):
            fill = color if s.tier >= i + 1 else (64, 64, 64)
            pygame.draw.rect(surf, fill, (WINDOW_WIDTH - 150 + i * 33, 70, 33, 10))

        if s.phase in (Phase.RUNNING, Phase.PAUSED):
            button = pygame.Surface((40, 40), pygame.SRCALPHA)
            pygame.draw.rect(button, (255, 255, 255, 150), button.get_rect(), border_radius=10)
            surf.blit(button, (WINDOW_WIDTH - 50, 10))
            pygame.draw.rect(surf, (0, 0, 0), (WINDOW_WIDTH - 40, 20, 5, 20))
            pygame.draw.rect(surf, (0, 0, 0), (WINDOW_WIDTH - 30, 20, 5, 20))

    def _draw_start_screen(self, surf: pygame.Surface) -> None:
        s = self.machine.state
        surf.blit(self.menu_overlay, (0, 0))
        title = "FLAPPY BIRD PRO"
        shadow = self.font_title.render(title, True, (0, 0, 0))
        surf.blit(shadow, shadow.get_rect(midtop=(WINDOW_WIDTH // 2 + 3, 103)))
        self._blit_centered(surf, self.font_title, title, (255, 255, 0), 100)

        menu_y = 225
        options = [
            "1. START GAME",
            f"2. HARD MODE: {on_off(s.hard_mode)}",
            f"3. NIGHT MODE: {on_off(s.night_mode)}",
            f"4. SOUND: {on_off(s.sound_enabled)}",
        ]
        for i, line in enumerate(options):
            surf.blit(self.font_mid.render(line, True, WHITE), (WINDOW_WIDTH // 2 - 100, menu_y + i * 40))

        low, high = SPEED_THRESHOLDS
        self._blit_centered(surf, self.font_small, "SPEED INCREASES WITH SCORE!", (0, 255, 255), menu_y + 145)
        self._blit_centered(surf, self.font_small, f"Score {low}+ : Medium Speed", WHITE, menu_y + 170)
        self._blit_centered(surf, self.font_small, f"Score {high}+: Fast Speed", WHITE, menu_y + 190)
        for i, line in enumerate(("Press SPACE to jump", "Press P to pause", "Press R to restart")):
            self._blit_centered(surf, self.font_small, line, WHITE, menu_y + 230 + i * 30)

        y = 150 + bob_offset(pygame.time.get_ticks())
        x = WINDOW_WIDTH // 2 - 150
        for i, color in enumerate(TIER_COLORS):
            pygame.draw.ellipse(surf, color, (x + i * 30, y, BIRD_WIDTH, BIRD_HEIGHT))
            pygame.draw.ellipse(surf, (0, 0, 0), (x + i * 30 + BIRD_WIDTH - 15, y + 10, 6, 6))

    def _draw_pause_screen(self, surf: pygame.Surface) -> None:
        s = self.machine.state
        surf.blit(self.pause_overlay, (0, 0))
        mid = WINDOW_HEIGHT // 2
        self._blit_centered(surf, self.font_title, "GAME PAUSED", (255, 255, 0), mid - 100)
        self._blit_centered(surf, self.font_mid, f"Current Speed: {tier_name(s.tier)}", (0, 255, 255), mid - 20)
        for i, line in enumerate(("Press P to resume", "Press R to restart", "Press M for menu")):
            self._blit_centered(surf, self.font_mid, line, WHITE, mid + 30 + i * 40)

    def _draw_game_over_screen(self, surf: pygame.Surface) -> None:
        s = self.machine.state
        surf.blit(self.over_overlay, (0, 0))
        mid = WINDOW_HEIGHT // 2
        self._blit_centered(surf, self.font_title, "GAME OVER", (255, 0, 0), mid - 130)
        self._blit_centered(surf, self.font_big, f"Score: {s.score}", WHITE, mid - 60)
        self._blit_centered(surf, self.font_big, f"High Score: {s.high_score}", WHITE, mid - 15)
        self._blit_centered(surf, self.font_mid, f"Maximum Speed Reached: {tier_name(s.tier)}", WHITE, mid + 40)
        self._blit_centered(surf, self.font_small, "Press R to play again", WHITE, mid + 85)
        self._blit_centered(surf, self.font_small, "Press M for main menu", WHITE, mid + 115)

    def run(self) -> None:
        while True:
            elapsed = self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    sys.exit(0)
                self.handle_input(event)

            self.update(elapsed)
            self.draw()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    Game().run()
