from __future__ import annotations

"""Game configuration constants for Flappy Bird: Speed Edition."""

# Game configuration
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
GROUND_HEIGHT = 50
TICK_MS = 16  # fixed timestep period
MAX_TICKS_PER_FRAME = 5
FPS = 60
CAPTION = "Flappy Bird - SPEED EDITION"

# Bird
BIRD_WIDTH = 40
BIRD_HEIGHT = 30
BIRD_X = WINDOW_WIDTH // 4  # horizontal centre, never moves

# Physics (units per tick)
GRAVITY = 0.5
JUMP_STRENGTH = -10.0

# Pipes
PIPE_WIDTH = 80
PIPE_GAP = 200
PIPE_SPACING = 300
INITIAL_PIPES = 3
PIPE_MIN_HEIGHT = 100
PIPE_MIN_HEIGHT_HARD = 50
COLLISION_MARGIN = 5
PIPE_CAP_OVERHANG = 5
PIPE_CAP_HEIGHT = 20

# Hard mode scaling
HARD_GAP_SHRINK = 50
HARD_GRAVITY_SCALE = 1.2
HARD_SPEED_SCALE = 1.3
HARD_JUMP_SCALE = 0.9

# Speed tiers: 1=slow, 2=medium, 3=fast
SPEED_THRESHOLDS = (5, 15)
PIPE_SPEEDS = (3.0, 4.0, 5.0)
JUMP_MODIFIERS = (1.0, 0.9, 0.8)
TIER_NAMES = ("SLOW", "MEDIUM", "FAST")

# Animation
ANIMATION_DELAY = 5  # ticks per wing frame
WING_FRAMES = 3

# Persistence
HIGH_SCORE_FILE = "flappybird_highscore.dat"

# Sound
SOUND_DIR = "."
SAMPLE_RATE = 44100
# name -> (file, fallback frequency Hz, duration ms, volume)
SOUND_SPECS = {
    "jump": ("jump.wav", 800, 100, 0.3),
    "score": ("score.wav", 1200, 150, 0.3),
    "hit": ("hit.wav", 300, 500, 0.5),
    "select": ("select.wav", 600, 100, 0.2),
    "speedup": ("speedup.wav", 1500, 200, 0.4),
}

# Scenery
CLOUD_COUNT = 8
STAR_COUNT = 100
TREE_COUNT = 25

# Palette
COL_DAY_TOP = (100, 180, 255)
COL_DAY_BOTTOM = (176, 226, 255)
COL_NIGHT_TOP = (10, 10, 40)
COL_NIGHT_BOTTOM = (15, 15, 60)
COL_GROUND_TOP = (120, 60, 20)
COL_GROUND_BOTTOM = (160, 100, 50)
COL_GROUND_DETAIL = (140, 90, 40)
COL_GRASS_DAY = (40, 160, 40)
COL_GRASS_NIGHT = (0, 80, 0)
COL_SUN_HALO = (255, 255, 200)
COL_SUN = (255, 255, 0)
COL_MOON = (230, 230, 230)
COL_MOON_CRATER = (210, 210, 210)
COL_WING = (200, 100, 0)
COL_BEAK = (255, 140, 0)

# Per-tier colours, indexed by tier - 1
PIPE_COLORS_DAY = ((0, 180, 0), (220, 160, 0), (220, 0, 0))
PIPE_COLORS_NIGHT = ((0, 100, 0), (150, 120, 0), (150, 0, 0))
BIRD_COLORS = ((255, 255, 0), (255, 200, 0), (255, 0, 0))
TIER_COLORS = ((0, 255, 0), (255, 200, 0), (255, 0, 0))
