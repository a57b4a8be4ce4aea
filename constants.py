# --- Grid Styles (topologies) ---
STYLE_RECTANGULAR = "rectangular"
STYLE_HEXAGONAL = "hexagonal"
STYLE_TRIANGULAR = "triangular"
STYLE_RADIAL = "radial"
GRID_STYLES = (STYLE_RECTANGULAR, STYLE_HEXAGONAL, STYLE_TRIANGULAR, STYLE_RADIAL)

# --- Shape Silhouettes ---
SHAPE_RECTANGULAR = "rectangular"
SHAPE_CIRCULAR = "circular"
SHAPE_TRIANGULAR = "triangular"
SHAPE_HEXAGONAL = "hexagonal"
SHAPES = (SHAPE_RECTANGULAR, SHAPE_CIRCULAR, SHAPE_TRIANGULAR, SHAPE_HEXAGONAL)

# --- Generation Defaults ---
DEFAULT_ROWS = 21
DEFAULT_COLS = 31
DEFAULT_CELL_SIZE = 18
DEFAULT_STYLE = STYLE_RECTANGULAR
DEFAULT_SHAPE = SHAPE_RECTANGULAR

# --- Radial Grid Structure ---
MIN_RADIAL_RING_CELLS = 4  # Ring 1 never has fewer cells than this

# --- Shape Masking ---
HEX_MASK_LIMIT = 0.866  # ~sqrt(3)/2, vertical half-extent of the hexagon silhouette

# --- History ---
HISTORY_LIMIT = 20

# --- Cell Directions (rectangular) ---
DIR_TOP = "top"
DIR_RIGHT = "right"
DIR_BOTTOM = "bottom"
DIR_LEFT = "left"

# --- Cell Directions (hexagonal) ---
DIR_E = "e"
DIR_W = "w"
DIR_NE = "ne"
DIR_NW = "nw"
DIR_SE = "se"
DIR_SW = "sw"

# --- Cell Directions (triangular; shares left/right with rectangular) ---
DIR_BASE = "base"

# --- Cell Directions (radial) ---
DIR_CW = "cw"  # Clockwise
DIR_CCW = "ccw"  # Counter-Clockwise
DIR_IN = "inward"  # Inward (towards center)
DIR_OUT = "outward"  # Outward (towards edge)
