# solver.py
from collections import deque
from typing import Dict, List, Optional

# Import from other project modules
from grid_core import Cell, Grid


def find_solution_path(
    grid: Grid, start_id: Optional[int], end_id: Optional[int]
) -> List[Cell]:
    """
    Finds the shortest path between two cells using Breadth-First Search
    through open walls. Returns the cells from start to end inclusive, or an
    empty list when either id is missing or no open path exists.
    """
    print(f"--- Finding path from {start_id} to {end_id} ---")
    if start_id is None or end_id is None:
        return []
    if not (0 <= start_id < grid.size() and 0 <= end_id < grid.size()):
        print("ERROR: Invalid start or end cell provided.")
        return []

    queue = deque([start_id])
    # Predecessor of every discovered cell; doubles as the visited set
    parent: Dict[int, Optional[int]] = {start_id: None}

    while queue:
        current_id = queue.popleft()
        if current_id == end_id:
            break
        cell = grid.cells[current_id]
        for neighbour in cell.neighbours:
            if grid.has_wall(cell, neighbour):
                continue
            if neighbour.cell_id in parent:
                continue
            parent[neighbour.cell_id] = current_id
            queue.append(neighbour.cell_id)

    if end_id not in parent:
        print("  Path not found!")
        return []

    path: List[Cell] = []
    cursor: Optional[int] = end_id
    while cursor is not None:
        path.append(grid.cells[cursor])
        cursor = parent[cursor]
    path.reverse()

    print(f"  Path length: {len(path)} cells.")
    return path
