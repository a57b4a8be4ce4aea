# history.py
import random
from typing import Any, Dict, List, NamedTuple, Optional

# Import from other project modules
import constants as const
from geometry import apply_shape_mask
from grid_core import Cell, Grid, build_grid
from maze_gen import CarveStep, generate_maze, open_entrance_exit, pick_endpoints
from solver import find_solution_path
from storage import build_payload, restore_grid


class MazeSnapshot(NamedTuple):
    """The complete result of one generation request."""

    grid: Grid
    carve_steps: List[CarveStep]
    solution: List[Cell]
    start_id: Optional[int]
    end_id: Optional[int]
    shape: str
    style: str
    rows: int
    cols: int
    cell_size: float


def resolve_grid_style(shape: str, style: str) -> str:
    """Non-rectangular silhouettes dictate the topology; rectangles keep ``style``."""
    if shape == const.SHAPE_CIRCULAR:
        return const.STYLE_RADIAL
    if shape == const.SHAPE_TRIANGULAR:
        return const.STYLE_TRIANGULAR
    if shape == const.SHAPE_HEXAGONAL:
        return const.STYLE_HEXAGONAL
    return style


def _finish(
    grid: Grid,
    steps: List[CarveStep],
    shape: str,
    style: str,
    rows: int,
    cols: int,
    cell_size: float,
) -> MazeSnapshot:
    start, end = pick_endpoints(grid)
    open_entrance_exit(grid, start, end)
    start_id = start.id if start else None
    end_id = end.id if end else None
    solution = find_solution_path(grid, start_id, end_id)
    return MazeSnapshot(
        grid, steps, solution, start_id, end_id, shape, style, rows, cols, cell_size
    )


def generate_snapshot(
    style: str = const.DEFAULT_STYLE,
    shape: str = const.DEFAULT_SHAPE,
    rows: int = const.DEFAULT_ROWS,
    cols: int = const.DEFAULT_COLS,
    cell_size: float = const.DEFAULT_CELL_SIZE,
    rng: Optional[random.Random] = None,
) -> MazeSnapshot:
    """
    Builds, masks, carves and solves a new maze.

    The entrance and exit are opened after carving because carving resets
    every wall.
    """
    grid = build_grid(style, rows, cols, cell_size)
    if shape != const.SHAPE_RECTANGULAR:
        apply_shape_mask(grid, shape)
    steps = generate_maze(grid, rng)
    return _finish(grid, steps, shape, style, rows, cols, cell_size)


def snapshot_from_payload(payload: Dict[str, Any]) -> MazeSnapshot:
    """Rebuilds a snapshot from ``storage.build_payload`` output. The carve log is not stored."""
    rows = int(payload.get("rows", const.DEFAULT_ROWS))
    cols = int(payload.get("cols", const.DEFAULT_COLS))
    cell_size = payload.get("cell") or const.DEFAULT_CELL_SIZE
    style = payload.get("style") or const.DEFAULT_STYLE
    shape = payload.get("shape") or const.DEFAULT_SHAPE
    grid = restore_grid(style, rows, cols, cell_size, payload.get("cells"), shape)
    return _finish(grid, [], shape, style, rows, cols, cell_size)


class MazeHistory:
    """
    Bounded undo/redo list of generated mazes.

    Pushing after stepping back discards the entries ahead of the cursor,
    and the oldest entry is dropped once ``limit`` is exceeded.
    """

    def __init__(self, limit: int = const.HISTORY_LIMIT):
        if limit <= 0:
            raise ValueError("History limit must be positive.")
        self.limit = limit
        self.entries: List[MazeSnapshot] = []
        self.index = -1

    @property
    def current(self) -> Optional[MazeSnapshot]:
        if self.index < 0:
            return None
        return self.entries[self.index]

    @property
    def can_go_back(self) -> bool:
        return self.index > 0

    @property
    def can_go_forward(self) -> bool:
        return 0 <= self.index < len(self.entries) - 1

    def push(self, snapshot: MazeSnapshot):
        if self.index < len(self.entries) - 1:
            self.entries = self.entries[: self.index + 1]
        self.entries.append(snapshot)
        if len(self.entries) > self.limit:
            self.entries.pop(0)
        self.index = len(self.entries) - 1

    def previous(self) -> Optional[MazeSnapshot]:
        if not self.can_go_back:
            return None
        self.index -= 1
        return self.current

    def next(self) -> Optional[MazeSnapshot]:
        if not self.can_go_forward:
            return None
        self.index += 1
        return self.current

    def payloads(self) -> List[Dict[str, Any]]:
        return [build_payload(snapshot) for snapshot in self.entries]

    @classmethod
    def from_payloads(
        cls, payloads: Any, limit: int = const.HISTORY_LIMIT
    ) -> Optional["MazeHistory"]:
        """Restores a history from stored payloads; ``None`` if there is nothing usable."""
        if not isinstance(payloads, list) or not payloads:
            return None
        history = cls(limit)
        for payload in payloads[-limit:]:
            history.push(snapshot_from_payload(payload))
        return history

    def __len__(self) -> int:
        return len(self.entries)
