# grid_core.py
import math
from typing import Dict, List, Optional, Tuple, Union

# Import from other project modules
import constants as const
from utils import polar_to_cartesian, round_half_up, triangle_height, triangle_points

WallValue = Union[bool, List[bool]]


class Neighbour:
    """
    One adjacency relation of a cell.

    Holds the neighbour's id rather than the cell itself; the Grid owns every
    cell. For radial inward/outward relations, ``out_index`` is the slot in the
    inner cell's ``outward`` wall list that this relation crosses.
    """

    def __init__(
        self,
        direction: str,
        opposite: str,
        cell_id: int,
        out_index: Optional[int] = None,
    ):
        self.direction = direction
        self.opposite = opposite
        self.cell_id = cell_id
        self.out_index = out_index

    def __repr__(self) -> str:
        if self.out_index is None:
            return f"Neighbour({self.direction}->{self.cell_id})"
        return f"Neighbour({self.direction}[{self.out_index}]->{self.cell_id})"

    def __eq__(self, other):
        return (
            isinstance(other, Neighbour)
            and self.direction == other.direction
            and self.opposite == other.opposite
            and self.cell_id == other.cell_id
            and self.out_index == other.out_index
        )


class Cell:
    """Represents a single cell of any grid topology."""

    def __init__(self, cell_id: int, row: int, col: int, x: float = 0.0, y: float = 0.0):
        self.id = cell_id
        self.row = row
        self.col = col
        self.x = x
        self.y = y
        self.walls: Dict[str, WallValue] = {}
        self.neighbours: List[Neighbour] = []
        self.active: bool = True

        # Triangular cells only
        self.base_x: float = 0.0
        self.base_y: float = 0.0
        self.is_up: bool = True

        # Radial cells only (ring == row, index == col)
        self.start_angle: float = 0.0
        self.end_angle: float = 0.0
        self.inner_radius: float = 0.0
        self.outer_radius: float = 0.0

        self._visited: bool = False  # Used by maze generation algorithms

    @property
    def ring(self) -> int:
        return self.row

    @property
    def index(self) -> int:
        return self.col

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def mark_visited(self):
        """Marks the cell as visited (for algorithms)."""
        self._visited = True

    def unmark_visited(self):
        """Marks the cell as not visited."""
        self._visited = False

    def is_visited(self) -> bool:
        """Checks if the cell has been marked as visited."""
        return self._visited

    def neighbour_directions(self) -> set:
        return {neighbour.direction for neighbour in self.neighbours}

    def __repr__(self) -> str:
        return f"Cell({self.id}: {self.row},{self.col})"


class Grid:
    """
    Owns every cell of one maze, addressed by dense integer id.

    Wall queries and mutations go through the grid so that they can be
    dispatched on the topology (``style``) and applied to both sides of an edge.
    """

    def __init__(
        self,
        style: str,
        rows: int,
        cols: int,
        cell_size: float,
        cells: Optional[List[Cell]] = None,
        outer_radius: float = 0.0,
    ):
        self.style = style
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size
        self.cells: List[Cell] = cells if cells is not None else []
        self.outer_radius = outer_radius
        self.shape = const.SHAPE_RECTANGULAR  # Silhouette last applied by masking
        # (min_x, min_y, max_x, max_y); filled lazily by geometry.grid_bounds
        self.bounds: Optional[Tuple[float, float, float, float]] = None
        self._index: Dict[Tuple[int, int], Cell] = {
            cell.coords: cell for cell in self.cells
        }

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Retrieves a cell by row/col (ring/index for radial grids)."""
        return self._index.get((row, col))

    def neighbour_cell(self, neighbour: Neighbour) -> Cell:
        return self.cells[neighbour.cell_id]

    def size(self) -> int:
        """Returns the total number of cells in the grid."""
        return len(self.cells)

    def active_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.active]

    # --- Wall model ---

    def has_wall(self, cell: Cell, neighbour: Neighbour) -> bool:
        """Reports whether the wall between ``cell`` and ``neighbour`` is present."""
        if self.style == const.STYLE_RADIAL:
            if neighbour.direction == const.DIR_OUT:
                return cell.walls[const.DIR_OUT][neighbour.out_index]
            return cell.walls[neighbour.direction]
        return cell.walls[neighbour.direction]

    def remove_wall(self, cell: Cell, neighbour: Neighbour):
        """Clears the wall between two adjacent cells on both sides."""
        other = self.neighbour_cell(neighbour)
        if self.style == const.STYLE_RADIAL:
            if neighbour.direction == const.DIR_OUT:
                cell.walls[const.DIR_OUT][neighbour.out_index] = False
                other.walls[const.DIR_IN] = False
                return
            if neighbour.direction == const.DIR_IN:
                cell.walls[const.DIR_IN] = False
                if neighbour.out_index is not None:
                    other.walls[const.DIR_OUT][neighbour.out_index] = False
                return
            if neighbour.direction == const.DIR_CW:
                cell.walls[const.DIR_CW] = False
                other.walls[const.DIR_CCW] = False
                return
            if neighbour.direction == const.DIR_CCW:
                cell.walls[const.DIR_CCW] = False
                other.walls[const.DIR_CW] = False
            return
        cell.walls[neighbour.direction] = False
        other.walls[neighbour.opposite] = False

    def reset_walls(self):
        """Puts every wall back (ring 0 of a radial grid has no cw/ccw/inward walls)."""
        for cell in self.cells:
            for key, value in cell.walls.items():
                if isinstance(value, list):
                    cell.walls[key] = [True] * len(value)
                elif (
                    self.style == const.STYLE_RADIAL
                    and cell.ring == 0
                    and key in (const.DIR_CW, const.DIR_CCW, const.DIR_IN)
                ):
                    cell.walls[key] = False
                else:
                    cell.walls[key] = True
            cell.unmark_visited()

    def prune_inactive_neighbours(self):
        """
        Drops adjacency touching inactive cells: inactive cells lose all of
        their neighbours and active cells forget inactive ones.
        """
        for cell in self.cells:
            if not cell.active:
                cell.neighbours = []
                continue
            cell.neighbours = [
                n for n in cell.neighbours if self.cells[n.cell_id].active
            ]

    def __repr__(self) -> str:
        return f"Grid({self.style}, {self.rows}x{self.cols}, {self.size()} cells)"


# --- Builders ---

_RECTANGULAR_DIRS = [
    (-1, 0, const.DIR_TOP, const.DIR_BOTTOM),
    (0, 1, const.DIR_RIGHT, const.DIR_LEFT),
    (1, 0, const.DIR_BOTTOM, const.DIR_TOP),
    (0, -1, const.DIR_LEFT, const.DIR_RIGHT),
]

# (d_col, d_row, wall, opposite) in axial coordinates
_HEXAGONAL_DIRS = [
    (1, 0, const.DIR_E, const.DIR_W),
    (-1, 0, const.DIR_W, const.DIR_E),
    (0, 1, const.DIR_SE, const.DIR_NW),
    (0, -1, const.DIR_NW, const.DIR_SE),
    (1, -1, const.DIR_NE, const.DIR_SW),
    (-1, 1, const.DIR_SW, const.DIR_NE),
]


def build_rectangular_grid(rows: int, cols: int, cell_size: float) -> Grid:
    """Builds a rows x cols grid of square cells with 4-directional walls."""
    cells: List[Cell] = []
    for r in range(rows):
        for c in range(cols):
            cell = Cell(
                len(cells),
                r,
                c,
                x=c * cell_size + cell_size / 2.0,
                y=r * cell_size + cell_size / 2.0,
            )
            cell.walls = {
                const.DIR_TOP: True,
                const.DIR_RIGHT: True,
                const.DIR_BOTTOM: True,
                const.DIR_LEFT: True,
            }
            cells.append(cell)

    grid = Grid(const.STYLE_RECTANGULAR, rows, cols, cell_size, cells)
    for cell in cells:
        for d_row, d_col, wall, opposite in _RECTANGULAR_DIRS:
            other = grid.get_cell(cell.row + d_row, cell.col + d_col)
            if other:
                cell.neighbours.append(Neighbour(wall, opposite, other.id))
    return grid


def build_hexagonal_grid(rows: int, cols: int, cell_size: float) -> Grid:
    """Builds an axial hex grid; rows are offset by half a cell per row."""
    cells: List[Cell] = []
    root3 = math.sqrt(3)
    for r in range(rows):
        for c in range(cols):
            cell = Cell(
                len(cells),
                r,
                c,
                x=cell_size * root3 * (c + r / 2.0),
                y=cell_size * 1.5 * r,
            )
            cell.walls = {
                const.DIR_E: True,
                const.DIR_W: True,
                const.DIR_SE: True,
                const.DIR_SW: True,
                const.DIR_NE: True,
                const.DIR_NW: True,
            }
            cells.append(cell)

    grid = Grid(const.STYLE_HEXAGONAL, rows, cols, cell_size, cells)
    for cell in cells:
        for d_col, d_row, wall, opposite in _HEXAGONAL_DIRS:
            other = grid.get_cell(cell.row + d_row, cell.col + d_col)
            if other:
                cell.neighbours.append(Neighbour(wall, opposite, other.id))
    return grid


def build_triangular_grid(rows: int, cols: int, cell_size: float) -> Grid:
    """
    Builds a strip of alternating up/down triangles.
    Each triangle has left/right neighbours in its row and a single base
    neighbour (the row below for 'up' triangles, the row above for 'down').
    """
    cells: List[Cell] = []
    tri_height = triangle_height(cell_size)
    for r in range(rows):
        for c in range(cols):
            base_x = c * (cell_size / 2.0)
            base_y = r * tri_height
            is_up = (r + c) % 2 == 0
            center = triangle_points(base_x, base_y, cell_size, tri_height, is_up).mean(
                axis=0
            )
            cell = Cell(len(cells), r, c, x=float(center[0]), y=float(center[1]))
            cell.base_x = base_x
            cell.base_y = base_y
            cell.is_up = is_up
            cell.walls = {const.DIR_LEFT: True, const.DIR_RIGHT: True, const.DIR_BASE: True}
            cells.append(cell)

    grid = Grid(const.STYLE_TRIANGULAR, rows, cols, cell_size, cells)
    for cell in cells:
        left = grid.get_cell(cell.row, cell.col - 1)
        right = grid.get_cell(cell.row, cell.col + 1)
        base = grid.get_cell(cell.row + 1 if cell.is_up else cell.row - 1, cell.col)
        if left:
            cell.neighbours.append(Neighbour(const.DIR_LEFT, const.DIR_RIGHT, left.id))
        if right:
            cell.neighbours.append(Neighbour(const.DIR_RIGHT, const.DIR_LEFT, right.id))
        if base:
            cell.neighbours.append(Neighbour(const.DIR_BASE, const.DIR_BASE, base.id))
    return grid


def calculate_ring_counts(rings: int, cells_per_ring: int, cell_size: float) -> List[int]:
    """
    Number of cells in each ring of a radial grid.

    Ring 0 is the single centre cell. Every ring past the first multiplies the
    previous count by the integer ratio that keeps cells roughly square.
    """
    ring_count = max(1, rings)
    counts = [1]
    if ring_count > 1:
        counts.append(max(const.MIN_RADIAL_RING_CELLS, cells_per_ring))
    ring_height = cell_size
    for r in range(2, ring_count):
        prev_count = counts[r - 1]
        circumference = 2 * math.pi * r * ring_height
        estimated_width = circumference / prev_count
        if ring_height <= 0:
            # Zero-size cells have no geometry to keep square
            ratio = 1
        else:
            ratio = max(1, round_half_up(estimated_width / ring_height))
        counts.append(prev_count * ratio)
    return counts


def build_radial_grid(rings: int, cells_per_ring: int, cell_size: float) -> Grid:
    """Builds concentric rings of cells around a single centre cell."""
    print(f"--- Building Radial Grid (Rings={max(1, rings)}, Ring 1={cells_per_ring}) ---")
    counts = calculate_ring_counts(rings, cells_per_ring, cell_size)
    ring_height = cell_size
    cells: List[Cell] = []
    ring_cells: List[List[Cell]] = []

    print("  Creating cells...")
    for ring_idx, count in enumerate(counts):
        inner_radius = ring_idx * ring_height
        outer_radius = (ring_idx + 1) * ring_height
        step = (2 * math.pi) / count
        this_ring = []
        for i in range(count):
            start_angle = i * step
            end_angle = (i + 1) * step
            mid_angle = (start_angle + end_angle) / 2.0
            mid_radius = (inner_radius + outer_radius) / 2.0
            x, y = polar_to_cartesian(mid_radius, mid_angle)
            cell = Cell(len(cells), ring_idx, i, x=x, y=y)
            cell.start_angle = start_angle
            cell.end_angle = end_angle
            cell.inner_radius = inner_radius
            cell.outer_radius = outer_radius
            cell.walls = {
                const.DIR_CW: True,
                const.DIR_CCW: True,
                const.DIR_IN: ring_idx > 0,
                const.DIR_OUT: [],
            }
            this_ring.append(cell)
            cells.append(cell)
        ring_cells.append(this_ring)

    print("  Linking neighbours...")
    # Ring neighbours and outward wall slots
    for ring_idx, this_ring in enumerate(ring_cells):
        count = counts[ring_idx]
        if ring_idx < len(counts) - 1:
            outward_count = max(1, counts[ring_idx + 1] // count)
        else:
            outward_count = 1
        for cell in this_ring:
            cell.walls[const.DIR_OUT] = [True] * outward_count
            if count > 1:
                cw_cell = this_ring[(cell.index + 1) % count]
                ccw_cell = this_ring[(cell.index - 1 + count) % count]
                cell.neighbours.append(Neighbour(const.DIR_CW, const.DIR_CCW, cw_cell.id))
                cell.neighbours.append(Neighbour(const.DIR_CCW, const.DIR_CW, ccw_cell.id))
            else:
                cell.walls[const.DIR_CW] = False
                cell.walls[const.DIR_CCW] = False

    # Inward: each cell faces exactly one slot of one inner cell
    for ring_idx in range(1, len(ring_cells)):
        ratio = counts[ring_idx] // counts[ring_idx - 1]
        inner_ring = ring_cells[ring_idx - 1]
        for cell in ring_cells[ring_idx]:
            inward_cell = inner_ring[cell.index // ratio]
            cell.neighbours.append(
                Neighbour(const.DIR_IN, const.DIR_OUT, inward_cell.id, cell.index % ratio)
            )

    # Outward: each cell fans out to `ratio` cells of the next ring
    for ring_idx in range(len(ring_cells) - 1):
        ratio = counts[ring_idx + 1] // counts[ring_idx]
        outer_ring = ring_cells[ring_idx + 1]
        for cell in ring_cells[ring_idx]:
            start = cell.index * ratio
            for k in range(ratio):
                outward_cell = outer_ring[start + k]
                cell.neighbours.append(
                    Neighbour(const.DIR_OUT, const.DIR_IN, outward_cell.id, k)
                )

    grid = Grid(
        const.STYLE_RADIAL,
        len(counts),
        counts[1] if len(counts) > 1 else 1,
        cell_size,
        cells,
        outer_radius=len(counts) * ring_height,
    )
    print(f"--- Radial Grid Built: {grid.size()} cells ---")
    return grid


def build_grid(style: str, rows: int, cols: int, cell_size: float) -> Grid:
    """
    Builds a grid of the requested topology. For radial grids ``rows`` is the
    ring count and ``cols`` the cell count of ring 1. Unknown styles fall back
    to rectangular.
    """
    if style == const.STYLE_RADIAL:
        return build_radial_grid(rows, cols, cell_size)
    if style == const.STYLE_HEXAGONAL:
        return build_hexagonal_grid(rows, cols, cell_size)
    if style == const.STYLE_TRIANGULAR:
        return build_triangular_grid(rows, cols, cell_size)
    return build_rectangular_grid(rows, cols, cell_size)
