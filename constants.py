# --- Grid Structure ---
DEFAULT_WIDTH = 5  # Number of rows (y runs 0..width-1)
DEFAULT_LENGTH = 5  # Number of columns (x runs 0..length-1)

# --- Cell Directions ---
DIR_UP = "UP"  # y - 1
DIR_DOWN = "DOWN"  # y + 1
DIR_LEFT = "LEFT"  # x - 1
DIR_RIGHT = "RIGHT"  # x + 1
DIRECTIONS = (DIR_UP, DIR_DOWN, DIR_LEFT, DIR_RIGHT)
OPPOSITE_DIRECTION = {
    DIR_UP: DIR_DOWN,
    DIR_DOWN: DIR_UP,
    DIR_LEFT: DIR_RIGHT,
    DIR_RIGHT: DIR_LEFT,
}

# --- Cell Connection Status ---
STATUS_UNCONNECTED = "UNCONNECTED"
STATUS_CONNECTED = "CONNECTED"

# --- Edge Orientation ---
EDGE_VERTICAL = "VERTICAL"
EDGE_HORIZONTAL = "HORIZONTAL"

# --- Maze Generation ---
# Walk bound is max(MIN_WALK_STEPS, WALK_STEP_FACTOR * cell_count**2) direction draws
WALK_STEP_FACTOR = 50
MIN_WALK_STEPS = 10_000

# --- Layout ---
NODE_SPACING = 0.5  # Distance between neighbouring node centers

# --- Tolerances ---
GEOMETRY_TOLERANCE = 1e-9

# --- 3D STL Model ---
MESH_NODE_SIZE = 0.2  # Side of the square pad placed on each node
MESH_NODE_HEIGHT = 0.3
MESH_TARGET_HEIGHT = 0.6  # Target pad stands taller so it can be found by touch
MESH_EDGE_WIDTH = 0.1
MESH_EDGE_HEIGHT = 0.2
MESH_BASE_THICKNESS = 0.1
MESH_BASE_MARGIN = 0.25  # Base plate extends this far past the outer nodes

# --- Visualization ---
VIS_NODE_COLOR = "white"
VIS_NODE_EDGE_COLOR = "black"
VIS_NODE_MARKER_SIZE = 10
VIS_TARGET_COLOR = (0.5, 0.8, 0.2)
VIS_TARGET_MARKER_SIZE = 14
VIS_EDGE_LINE_STYLE = "k-"
VIS_EDGE_LINE_LW = 4.0
VIS_EDGE_LINE_ALPHA = 0.8
VIS_PATH_LINE_STYLE = "r-"
VIS_PATH_LINE_LW = 2.0
VIS_PATH_LINE_ALPHA = 0.9
VIS_PATH_START_MARKER = "o"
VIS_PATH_START_MFC = "red"
VIS_PATH_START_MARKER_SIZE = 10
VIS_CONN_UNREACHABLE_COLOR = "lightgrey"
