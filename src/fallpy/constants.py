"""
constants.py: Default tuning values for the simulation and the pygame front end.
"""

# -------- Frame Timing --------
FPS = 60                        # Simulation steps per second
TICK_TIME = 1.0 / FPS           # Fixed time step used by the client loop

# -------- Game World Config --------
SCREEN_WIDTH = 320
SCREEN_HEIGHT = 480
PLAYER_X = SCREEN_WIDTH / 3     # Fixed player X position
PLAYER_RADIUS = 12

# -------- Physics Config (units / frame) --------
GRAVITY = 0.45                  # Added to velocity every frame
FLAP_IMPULSE = -8.5             # Velocity is set (not added) on flap

# -------- Pipe Config --------
PIPE_WIDTH = 52
PIPE_GAP = 120
PIPE_MARGIN = 40                # Min distance from gap to top/bottom edge
PIPE_SPAWN_X_OFFSET = 20        # Pipes appear this far past the right edge
OFFSCREEN_EPSILON = -10         # Entities whose right edge passes this are purged

# -------- Spawn Timer (frames) --------
SPAWN_INTERVAL = 110
SPAWN_MAX_RAMP = 50             # Interval never drops below SPAWN_INTERVAL - SPAWN_MAX_RAMP
SPAWN_RAMP_DIVISOR = 5          # One frame shorter per this many points
INITIAL_SPAWN_DELAY = 40

# -------- Pickup Config --------
PICKUP_RADIUS = 9
PICKUP_CHANCE = 0.6
PICKUP_X_OFFSET = 30            # Past the pipe's trailing edge
PICKUP_JITTER_FRACTION = 0.125  # +/- this fraction of the gap height
PICKUP_BONUS = 2

# -------- Scoring / Difficulty --------
START_SPEED = 2.4
SPEED_INCREMENT = 0.02

# -------- Rendering --------
TILT_FACTOR = 0.06
TILT_MIN = -0.6
TILT_MAX = 0.8
GROUND_HEIGHT = 32

COLOR_SKY_TOP = (110, 193, 255)
COLOR_SKY_BOTTOM = (223, 246, 255)
COLOR_HILLS_FAR = (136, 194, 122)
COLOR_HILLS_NEAR = (106, 168, 95)
COLOR_PIPE = (17, 187, 102)
COLOR_PIPE_RIM = (0, 170, 68)
COLOR_GROUND = (204, 68, 136)
COLOR_BODY = (0, 0, 0)
COLOR_EYE = (255, 255, 255)
COLOR_MEAT = (192, 83, 24)
COLOR_MEAT_HIGHLIGHT = (229, 138, 83)
COLOR_BONE = (245, 239, 230)
COLOR_TEXT = (255, 255, 255)
COLOR_TEXT_DIM = (200, 200, 200)
COLOR_RECORD = (255, 210, 60)

# -------- Audio --------
FLAP_FREQ_START = 920.0         # Hz
FLAP_FREQ_END = 540.0           # Hz
FLAP_DURATION = 0.14            # seconds
FLAP_VOLUME = 0.06
AUDIO_SAMPLE_RATE = 22050

# -------- Persistence --------
DB_FILE = "fallpy.db"
