# maze_gen.py
import random
from typing import List, NamedTuple, Optional, Tuple

import numpy as np

# Import from other project modules
import constants as const
from geometry import edge_vector, grid_center
from grid_core import Cell, Grid


class CarveStep(NamedTuple):
    """One wall removal performed while carving, in execution order."""

    from_id: int
    to_id: int


# --- Endpoints ---


def boundary_edges(grid: Grid, cell: Cell) -> List[Tuple[str, object]]:
    """
    Edges of ``cell`` that face outside the grid (or the masked silhouette).

    Returns ``(DIR_OUT, slot)`` pairs for the outermost ring of a radial grid
    and ``("edge", wall_key)`` pairs otherwise.
    """
    if grid.style == const.STYLE_RADIAL:
        if cell.ring != grid.rows - 1:
            return []
        return [(const.DIR_OUT, i) for i in range(len(cell.walls[const.DIR_OUT]))]
    neighbour_dirs = cell.neighbour_directions()
    return [("edge", key) for key in cell.walls if key not in neighbour_dirs]


def is_boundary_cell(grid: Grid, cell: Cell) -> bool:
    if not cell.active:
        return False
    if grid.style == const.STYLE_RADIAL:
        return cell.ring == grid.rows - 1
    if not boundary_edges(grid, cell):
        return False
    # A triangle whose only link is its sole connection into the maze
    # cannot serve as an entrance or exit.
    if grid.style == const.STYLE_TRIANGULAR and len(cell.neighbours) == 1:
        return False
    return True


def pick_endpoints(grid: Grid) -> Tuple[Optional[Cell], Optional[Cell]]:
    """
    Chooses the entry (topmost, then leftmost) and exit (bottommost, then
    rightmost) cells among the boundary cells, falling back to every active
    cell when there is no boundary. Triangle silhouettes prefer the cell
    closest to x=0 on the top row so the entry sits at the apex.
    """
    active = grid.active_cells()
    if not active:
        print("  Warning: No active cells, cannot pick endpoints.")
        return None, None
    boundary = [cell for cell in active if is_boundary_cell(grid, cell)]
    candidates = boundary if boundary else active
    apex_start = grid.shape == const.SHAPE_TRIANGULAR

    start = candidates[0]
    end = candidates[0]
    for cell in candidates[1:]:
        if apex_start:
            if cell.y < start.y or (cell.y == start.y and abs(cell.x) < abs(start.x)):
                start = cell
        elif cell.y < start.y or (cell.y == start.y and cell.x < start.x):
            start = cell
        if cell.y > end.y or (cell.y == end.y and cell.x > end.x):
            end = cell
    print(f"  Entry cell set to: {start.id}, exit cell set to: {end.id}")
    return start, end


def open_boundary_for_cell(grid: Grid, cell: Optional[Cell]):
    """Removes the outward-facing boundary wall of ``cell`` that best faces away from the centre."""
    if cell is None:
        return
    edges = boundary_edges(grid, cell)
    if not edges:
        return
    if grid.style == const.STYLE_RADIAL:
        _, slot = edges[len(edges) // 2]
        cell.walls[const.DIR_OUT][slot] = False
        return

    direction = np.array([cell.x, cell.y]) - grid_center(grid)
    best_key = edges[0][1]
    best_score = -np.inf
    for _, key in edges:
        score = float(np.dot(edge_vector(grid, cell, key), direction))
        if score > best_score:
            best_score = score
            best_key = key
    # Boundary edges have no cell on the other side
    cell.walls[best_key] = False


def open_entrance_exit(grid: Grid, start: Optional[Cell], end: Optional[Cell]):
    open_boundary_for_cell(grid, start)
    open_boundary_for_cell(grid, end)


# --- Carving ---


def generate_maze(grid: Grid, rng=None) -> List[CarveStep]:
    """
    Generates maze passages within the grid using the Recursive Backtracking
    algorithm (iterative, explicit stack) over the active cells.

    Walls are reset first, so a grid can be carved again. ``rng`` may be a
    ``random.Random`` for reproducible mazes; the module-level generator is
    used otherwise. Returns the wall removals in the order they happened.
    """
    print("--- Starting Maze Generation (Recursive Backtracking) ---")
    rng = rng if rng is not None else random
    steps: List[CarveStep] = []

    # Reset previous maze state (if any)
    grid.reset_walls()

    active = grid.active_cells()
    if not active:
        print("ERROR: Grid has no active cells, cannot generate maze.")
        return steps

    start_cell = rng.choice(active)
    print(f"  Starting maze generation at cell: {start_cell.id}")
    start_cell.mark_visited()
    stack: List[Cell] = [start_cell]

    while stack:
        current_cell = stack[-1]
        options = [
            n for n in current_cell.neighbours if not grid.neighbour_cell(n).is_visited()
        ]
        if not options:
            # No unvisited neighbours, backtrack
            stack.pop()
            continue

        rng.shuffle(options)
        chosen = options[0]
        next_cell = grid.neighbour_cell(chosen)
        grid.remove_wall(current_cell, chosen)
        next_cell.mark_visited()
        stack.append(next_cell)
        steps.append(CarveStep(current_cell.id, next_cell.id))

    visited_count = len(steps) + 1
    print(
        f"--- Maze Generation Complete: Linked {visited_count}/{len(active)} active cells. ---"
    )
    if visited_count < len(active):
        print(
            f"  Warning: {len(active) - visited_count} active cells are unreachable from the start and stay walled."
        )
    return steps
