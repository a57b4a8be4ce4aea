# geometry.py
import numpy as np
from typing import Dict, Tuple

# Import from other project modules
from grid_core import Grid, Cell
import constants as const
from utils import hex_points, triangle_height, triangle_points

HEX_EDGE_VECTORS: Dict[str, np.ndarray] = {
    const.DIR_E: np.array([1.0, 0.0]),
    const.DIR_W: np.array([-1.0, 0.0]),
    const.DIR_NE: np.array([0.5, -0.866]),
    const.DIR_NW: np.array([-0.5, -0.866]),
    const.DIR_SE: np.array([0.5, 0.866]),
    const.DIR_SW: np.array([-0.5, 0.866]),
}

RECTANGULAR_EDGE_VECTORS: Dict[str, np.ndarray] = {
    const.DIR_TOP: np.array([0.0, -1.0]),
    const.DIR_BOTTOM: np.array([0.0, 1.0]),
    const.DIR_LEFT: np.array([-1.0, 0.0]),
    const.DIR_RIGHT: np.array([1.0, 0.0]),
}


def cell_polygon(grid: Grid, cell: Cell) -> np.ndarray:
    """Corner points of a planar (non-radial) cell as an (N, 2) array."""
    size = grid.cell_size
    if grid.style == const.STYLE_HEXAGONAL:
        return hex_points(cell.x, cell.y, size)
    if grid.style == const.STYLE_TRIANGULAR:
        return triangle_points(
            cell.base_x, cell.base_y, size, triangle_height(size), cell.is_up
        )
    half = size / 2.0
    return np.array(
        [
            (cell.x - half, cell.y - half),
            (cell.x + half, cell.y - half),
            (cell.x + half, cell.y + half),
            (cell.x - half, cell.y + half),
        ]
    )


def grid_bounds(grid: Grid) -> Tuple[float, float, float, float]:
    """
    Bounding box (min_x, min_y, max_x, max_y) of every cell, active or not.
    Computed once per grid and cached on it.
    """
    if grid.bounds is not None:
        return grid.bounds
    if grid.style == const.STYLE_RADIAL:
        radius = grid.outer_radius or grid.rows * grid.cell_size
        grid.bounds = (-radius, -radius, radius, radius)
        return grid.bounds
    if not grid.cells:
        grid.bounds = (0.0, 0.0, 0.0, 0.0)
        return grid.bounds

    points = np.vstack([cell_polygon(grid, cell) for cell in grid.cells])
    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)
    grid.bounds = (float(min_x), float(min_y), float(max_x), float(max_y))
    return grid.bounds


def grid_center(grid: Grid) -> np.ndarray:
    min_x, min_y, max_x, max_y = grid_bounds(grid)
    return np.array([(min_x + max_x) / 2.0, (min_y + max_y) / 2.0])


def edge_vector(grid: Grid, cell: Cell, key: str) -> np.ndarray:
    """Unit vector pointing out of ``cell`` through the edge named ``key``."""
    if grid.style == const.STYLE_HEXAGONAL:
        return HEX_EDGE_VECTORS.get(key, np.zeros(2))
    if grid.style == const.STYLE_TRIANGULAR:
        if key == const.DIR_BASE:
            return np.array([0.0, 1.0 if cell.is_up else -1.0])
        return np.array([-1.0, 0.0]) if key == const.DIR_LEFT else np.array([1.0, 0.0])
    return RECTANGULAR_EDGE_VECTORS.get(key, np.zeros(2))


def in_silhouette(shape: str, x_norm: float, y_norm: float, y_top: float) -> bool:
    """
    Membership test for a normalised position.
    ``x_norm``/``y_norm`` are in [-1, 1] about the grid centre, ``y_top`` is
    the fraction of the height measured from the top edge.
    """
    if shape == const.SHAPE_CIRCULAR:
        return x_norm * x_norm + y_norm * y_norm <= 1
    if shape == const.SHAPE_TRIANGULAR:
        return y_top >= abs(x_norm)
    if shape == const.SHAPE_HEXAGONAL:
        ax = abs(x_norm)
        ay = abs(y_norm)
        limit = const.HEX_MASK_LIMIT
        return ay <= limit and ax <= 1 and ax + ay / limit <= 1
    return True


def apply_shape_mask(grid: Grid, shape: str):
    """
    Deactivates cells outside the silhouette ``shape`` and prunes adjacency
    so no active cell keeps an inactive neighbour. Radial grids are left as is.
    """
    if grid.style == const.STYLE_RADIAL:
        return
    print(f"--- Applying '{shape}' Shape Mask ---")
    min_x, min_y, max_x, max_y = grid_bounds(grid)
    center_x = (min_x + max_x) / 2.0
    center_y = (min_y + max_y) / 2.0
    width = (max_x - min_x) or 1.0
    height = (max_y - min_y) or 1.0

    for cell in grid.cells:
        if shape == const.SHAPE_RECTANGULAR:
            cell.active = True
            continue
        x_norm = (cell.x - center_x) / (width / 2.0)
        y_norm = (cell.y - center_y) / (height / 2.0)
        y_top = (cell.y - min_y) / height
        cell.active = in_silhouette(shape, x_norm, y_norm, y_top)

    grid.prune_inactive_neighbours()
    grid.shape = shape
    print(f"  {len(grid.active_cells())}/{grid.size()} cells active.")
