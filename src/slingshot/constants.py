import math

GRID_ROWS = 8
GRID_COLS = 12
BUBBLE_RADIUS = 22
ROW_HEIGHT = BUBBLE_RADIUS * math.sqrt(3)

# Initial board: only the top rows are seeded, each cell filled with this probability.
SEED_ROWS = 5
SEED_DENSITY = 0.9

# Placement scans past the nominal grid so bubbles stacked below it still snap.
PLACEMENT_EXTRA_ROWS = 5

# Slingshot geometry (pixels). Anchor sits this far above the bottom edge.
SLINGSHOT_BOTTOM_OFFSET = 220
MAX_DRAG_DIST = 180
GRAB_RADIUS = 100
MIN_LAUNCH_STRETCH = 30
SETTLE_FACTOR = 0.15

# Launch power eases quadratically between these multipliers.
MIN_FORCE_MULT = 0.15
MAX_FORCE_MULT = 0.45

GRAVITY = 0.0
FRICTION = 0.998
# Sub-step length and collision distance, both relative to the bubble radius.
SUBSTEP_FACTOR = 0.8
COLLISION_FACTOR = 1.8
FLIGHT_TIMEOUT = 5.0  # seconds of wall-clock time

MATCH_THRESHOLD = 3
COMBO_MULTIPLIER = 1.5

PREVIEW_FRAMES = 60

PARTICLES_PER_POP = 15
PARTICLE_SPEED = 12.0
PARTICLE_DECAY = 0.05
