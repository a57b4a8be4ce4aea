# tests/helpers.py
# Graph checks shared by the test modules.
from collections import deque


def open_pairs(grid):
    """Set of frozenset({a, b}) for every adjacent pair with no wall between them."""
    pairs = set()
    for cell in grid.active_cells():
        for n in cell.neighbours:
            if not grid.has_wall(cell, n):
                pairs.add(frozenset((cell.id, n.cell_id)))
    return pairs


def reachable_by_adjacency(grid, start_id):
    seen = {start_id}
    queue = deque([start_id])
    while queue:
        cell = grid.cells[queue.popleft()]
        for n in cell.neighbours:
            if n.cell_id not in seen:
                seen.add(n.cell_id)
                queue.append(n.cell_id)
    return seen


def reachable_through_passages(grid, start_id):
    seen = {start_id}
    queue = deque([start_id])
    while queue:
        cell = grid.cells[queue.popleft()]
        for n in cell.neighbours:
            if not grid.has_wall(cell, n) and n.cell_id not in seen:
                seen.add(n.cell_id)
                queue.append(n.cell_id)
    return seen


def assert_walls_bilateral(grid):
    for cell in grid.cells:
        for n in cell.neighbours:
            other = grid.neighbour_cell(n)
            back = [m for m in other.neighbours if m.cell_id == cell.id]
            assert len(back) == 1, f"{cell} -> {other} has no single reciprocal relation"
            assert grid.has_wall(cell, n) == grid.has_wall(other, back[0]), (
                f"wall state differs between {cell} and {other}"
            )


def assert_mask_symmetric(grid):
    for cell in grid.cells:
        if not cell.active:
            assert cell.neighbours == []
            continue
        for n in cell.neighbours:
            assert grid.neighbour_cell(n).active
