"""
BlockMaze Constants Module

Centralized constants for the BlockMaze generator.
Extracts magic numbers and repeated values from across the codebase.

Usage:
    from mazegen.constants import DEFAULT_WALL_HEIGHT, CONNECTOR_DELAY_TURNS
"""

# =============================================================================
# Grid Layout
# =============================================================================

# Step between two adjacent maze nodes on the doubled grid
NODE_STEP = 2

# The four node-to-node moves on a floor grid (col, row)
NODE_DIRECTIONS = ((-NODE_STEP, 0), (NODE_STEP, 0), (0, -NODE_STEP), (0, NODE_STEP))

# Entry node of the ground floor and the boundary cell opened as the entrance
GROUND_ENTRY = (1, 1)
ENTRANCE_CELL = (0, 1)

# =============================================================================
# Generation Defaults
# =============================================================================

DEFAULT_SIZE_X = 3
DEFAULT_SIZE_Z = 3
DEFAULT_WALL_HEIGHT = 3
DEFAULT_PATH_WIDTH = 1
DEFAULT_FLOORS = 1

# Ranges offered to interactive requesters (inclusive)
SIZE_RANGE = (2, 12)
WALL_HEIGHT_RANGE = (1, 5)
PATH_WIDTH_RANGE = (1, 4)
FLOORS_RANGE = (1, 10)

# Random theme selection keyword
RANDOM_THEME = "random"

# =============================================================================
# Scheduling
# =============================================================================

# Turns to wait before connectors (ladders) are placed between floors
CONNECTOR_DELAY_TURNS = 100

# Safety limit for headless runs of the tick loop
MAX_TICKS_DEFAULT = 100_000

# =============================================================================
# Feedback Messages
# =============================================================================

PLAYERS_ONLY_MESSAGE = "This command can only be executed by players."

# =============================================================================
# File I/O
# =============================================================================

FILE_EXT_GLB = ".glb"
FILE_EXT_JSON = ".json"

DEFAULT_EXPORT_NAME = "maze"
DEFAULT_SAVE_NAME = "world"

# =============================================================================
# Utility Functions
# =============================================================================

def grid_extent(size: int) -> int:
    """
    Number of grid cells along one axis for a footprint of `size` nodes.

    Args:
        size: Node count along the axis

    Returns:
        Cell count including walls between nodes and the outer ring
    """
    return 2 * size + 1


# =============================================================================
# Version Information
# =============================================================================

BLOCKMAZE_VERSION = "0.3.0"
