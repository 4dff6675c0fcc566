# config.py

# --- Global Simulation Settings ---
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
FPS = 60
COLOR_BG = (240, 240, 240)
WORLD_GRID_CELL_SIZE = 100 # For the resource lookup grid

# --- Speed & Population Settings ---
DEFAULT_SPEED = 1.0
MIN_SPEED = 0.1
MAX_SPEED = 5.0
# Raw frame time (seconds) is clamped to this before the speed multiplier.
MAX_FRAME_TIME = 0.25
DEFAULT_POPULATION_SIZE = 20
MIN_POPULATION_SIZE = 1
MAX_POPULATION_SIZE = 200
# Reproduction is refused once the population reaches this size.
POPULATION_CAP = 1000

# --- Organism Settings ---
MIN_SIZE = 5
MAX_SIZE = 30
DEFAULT_ENERGY = 100.0
REPRODUCTION_ENERGY_THRESHOLD = 150.0
ENERGY_TRANSFER_RATIO = 0.8  # How much energy is passed to offspring
MOVEMENT_ENERGY_COST = 0.1
SIZE_UPKEEP_COST = 0.01
SENSOR_RANGE_SCALE = 200.0   # sensorRange 1.0 sees this many pixels
SPEED_SCALE = 50.0           # speed 1.0 moves this many pixels per second
TURN_RATE_SCALE = 2.0        # turnRate 1.0 turns this many radians per second
WANDER_TURN_FRACTION = 0.5
WANDER_MIN_SPEED_FRACTION = 0.8
OFFSPRING_SPAWN_DISTANCE = 20.0
OFFSPRING_SPAWN_JITTER = 5.0
OFFSPRING_VELOCITY_DAMPING = 0.8
OFFSPRING_VELOCITY_JITTER = 5.0

# --- Evolution Settings ---
DEFAULT_MUTATION_RATE = 0.05
MAX_MUTATION_RATE = 0.2
MAX_APPENDAGES = 3
JUMP_MUTATION_CHANCE = 0.05
SIGMA_NORMAL = 0.1
SIGMA_JUMP = 0.3
APPENDAGE_SIGMA_JUMP = 0.25
SPECIALIZATION_CHANCE = 0.2
SPECIALIZATION_SIGMA = 0.4
TYPE_FLIP_CHANCE = 0.1
TYPE_FLIP_CHANCE_JUMP = 0.3
ADD_APPENDAGE_CHANCE = 0.2
ADD_APPENDAGE_CHANCE_JUMP = 0.4
REMOVE_APPENDAGE_CHANCE = 0.1
REMOVE_APPENDAGE_CHANCE_JUMP = 0.15

# --- Resource Settings ---
RESOURCE_VALUE = 25.0
RESOURCE_REGENERATION_RATE = 1.0  # Expected spawns per second while below capacity
MAX_RESOURCES = 50
INITIAL_RESOURCE_RATIO = 0.5
RESOURCE_RADIUS = 3

# --- Statistics Settings ---
STATS_UPDATE_RATE = 60      # Sample history every N ticks
STATS_HISTORY_LENGTH = 100

# --- Logging Settings ---
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
