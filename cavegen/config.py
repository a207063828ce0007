"""
Default generation settings and shared constants for cavegen.
"""

# Grid dimensions (tiles)
GRID_HEIGHT = 100
GRID_WIDTH = 100

# Cave automaton
CHANCE_TO_START_ALIVE = 0.39   # probability a cell starts as wall
BIRTH_LIMIT = 3                # floor becomes wall when wall neighbours exceed this
STARVATION_LIMIT = 4           # wall survives when wall neighbours reach this
SIMULATION_STEPS = 5

# Zone validation / spawn-exit selection
ZONE_VALIDITY_THRESHOLD = 0.65
SPAWN_EXIT_MIN_DISTANCE = 60

# Retry schedule for the generation pipeline
MAX_ATTEMPTS = 200
THRESHOLD_RELAXATION = 0.05
MIN_VALIDITY_THRESHOLD = 0.45

# Noise synthesis
NOISE_OCTAVES = 5
NOISE_PERSISTENCE = 0.5
NOISE_INTERPOLATION = "linear"

# Explosions
BLAST_RADIUS = 3

# Hazards: share of each zone's ground tiles that get spikes, and of its
# left-only (and separately right-only) bounded tiles that get turrets
SPIKE_RATIO = 0.25
TURRET_RATIO = 0.125

# Zoned grid markers
WALL_ZONE_ID = 0
UNASSIGNED_ZONE_ID = -1

# Minimap colours (RGBA)
MINIMAP_WALL_COLOR = (0, 0, 0, 255)
MINIMAP_FLOOR_COLOR = (255, 255, 255, 255)
MINIMAP_SPAWN_COLOR = (0, 0, 139, 255)
MINIMAP_EXIT_COLOR = (152, 251, 152, 255)

# Default config file location (relative to the working directory)
DEFAULT_CONFIG_PATH = "config/generation_config.json"
