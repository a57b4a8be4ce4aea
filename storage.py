# storage.py
"""
In-memory serialization of generated mazes.

Records are plain dicts so that any persistence layer (JSON file, browser
storage, database) can write them without knowing about ``Cell``.
"""
from typing import Any, Dict, List, Optional

# Import from other project modules
import constants as const
from grid_core import Grid, build_grid


def serialize_maze(grid: Grid) -> List[Dict[str, Any]]:
    """Per-cell ``{"active", "walls"}`` records in id order."""
    return [
        {
            "active": cell.active,
            "walls": {
                key: list(value) if isinstance(value, list) else value
                for key, value in cell.walls.items()
            },
        }
        for cell in grid.cells
    ]


def build_payload(snapshot) -> Dict[str, Any]:
    """Everything needed to rebuild a snapshot's grid later."""
    return {
        "rows": snapshot.rows,
        "cols": snapshot.cols,
        "cell": snapshot.cell_size,
        "style": snapshot.style,
        "shape": snapshot.shape,
        "cells": serialize_maze(snapshot.grid) if snapshot.grid else [],
    }


def apply_records(grid: Grid, records: List[Dict[str, Any]]):
    """
    Overrides ``active`` and ``walls`` of a freshly built grid. Stored wall
    keys replace the fresh ones; keys missing from a record keep their
    defaults. Adjacency is then pruned to match the restored active flags.
    """
    for cell, record in zip(grid.cells, records):
        cell.active = bool(record.get("active", True))
        merged = dict(cell.walls)
        for key, value in (record.get("walls") or {}).items():
            merged[key] = list(value) if isinstance(value, list) else value
        cell.walls = merged
    grid.prune_inactive_neighbours()


def restore_grid(
    style: str,
    rows: int,
    cols: int,
    cell_size: float,
    records: Optional[List[Dict[str, Any]]],
    shape: Optional[str] = None,
) -> Grid:
    """
    Rebuilds a grid and applies serialized per-cell state to it.

    When ``records`` is not a list with exactly one entry per cell nothing is
    applied and the fresh, unmasked grid is returned.
    """
    print(f"--- Restoring {style} Grid ({rows}x{cols}) ---")
    grid = build_grid(style, rows, cols, cell_size)
    if isinstance(records, list) and len(records) == grid.size():
        apply_records(grid, records)
        # Radial grids are never masked, so they keep the default silhouette
        if shape and grid.style != const.STYLE_RADIAL:
            grid.shape = shape
    else:
        found = len(records) if isinstance(records, list) else None
        print(
            f"  Warning: Stored cells ({found}) do not match grid size ({grid.size()}), using a fresh grid."
        )
    return grid
