"""Project-wide constants for Seeded Orrery."""

import math

# --- Display ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "Seeded Orrery"

# --- Colors (RGB) ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
LIGHT_GREY = (180, 180, 190)
ORBIT_LINE = (68, 68, 68)

# HUD / UI accent colors
AMBER = (255, 191, 0)
CYAN = (0, 200, 220)
HIGHLIGHT = (255, 255, 170)

# --- UI Panel ---
PANEL_BG = (20, 20, 30, 200)
PANEL_BORDER = (60, 60, 80)

# --- Seeds ---
SEED_MASK = 0xFFFFFFFF
DEFAULT_STREAM_STATE = 123456789  # Replaces a zero xorshift state
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
SEED_QUERY_PARAM = "seed"

# --- Star generation ---
STAR_RADIUS_RANGE = (7.0, 16.0)
STAR_HUE_RANGE = (20.0, 65.0)
STAR_SATURATION_RANGE = (0.6, 0.95)
STAR_LIGHTNESS_RANGE = (0.5, 0.7)
STAR_LIGHT_SATURATION = 0.9
STAR_LIGHT_LIGHTNESS = 0.75

# --- Planet generation ---
PLANET_COUNT_RANGE = (4, 10)
ORBIT_GAP_RANGE = (6.0, 12.0)
FIRST_ORBIT_STAR_FACTOR = 2.5
ORBIT_GAP_RADIUS_FACTOR = 1.5
ORBIT_SPEED_SCALE = 12.0
ROTATION_SPEED_RANGE = (0.5, 3.5)
AXIAL_TILT_RANGE = (-0.6, 0.6)
ECCENTRICITY_RANGE = (0.0, 0.35)
INCLINATION_RANGE = (-0.22, 0.22)  # ~ ±12.6°
SURFACE_SEED_RANGE = (0.0, 1000.0)

# --- Orbital mechanics ---
TAU = 2.0 * math.pi
MAX_ECCENTRICITY = 0.95
HIGH_ECCENTRICITY = 0.8  # Above this Newton starts from E0 = pi
KEPLER_ITERATIONS = 6
ORBIT_PATH_SEGMENTS = 512

# --- Viewer ---
TIME_SCALE_STEPS = (0.0625, 0.125, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0)
DEFAULT_TIME_SCALE_INDEX = 4
FPS_SAMPLE_WINDOW = 0.5  # seconds
VIEW_MARGIN = 0.9  # Fraction of the free half-view the farthest apoapsis may fill
HUD_HEIGHT = 40
VIEW_CENTER_OFFSET = 20  # Pushes the star below the HUD bar
SEED_ENTRY_MAX_LENGTH = 64
MIN_PLANET_PIXELS = 3

# --- Star field ---
NUM_BACKGROUND_STARS = 300
