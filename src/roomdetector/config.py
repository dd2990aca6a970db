"""
Configuration for room detection
"""

# Graph construction
SNAP_THRESHOLD = 0.15  # Endpoints closer than this merge into one node (m)
KEY_DECIMALS = 2  # Decimals kept in the rounded "x,z" node key

# Face tracing
MAX_TRACE_STEPS = 100  # Steps before a single trace gives up
MIN_ROOM_WALLS = 3  # A face needs at least three bounding walls

# Room filtering (m²)
DEFAULT_MIN_AREA = 0.5
DEFAULT_MAX_AREA = 500.0

# On-demand queries
CONNECT_THRESHOLD = 0.3  # Endpoint / T-junction contact distance
MATCH_THRESHOLD = 0.5  # Room edge to wall matching tolerance
MIN_MATCH_WALL_LENGTH = 0.01  # Shorter walls are ignored for sub-segment matching

# Wall records
WALL_ID_PREFIXES = ("wall-", "fsm-")  # User-drawn and preset-generated walls
DEFAULT_WALL_THICKNESS = 0.15
DEFAULT_WALL_HEIGHT = 2.7
