# utils.py
import numpy as np
import math
from typing import Tuple


def round_half_up(value: float) -> int:
    """Rounds to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def polar_to_cartesian(radius: float, angle: float) -> Tuple[float, float]:
    """Converts a polar coordinate (angle in radians) to (x, y)."""
    return radius * math.cos(angle), radius * math.sin(angle)


def triangle_height(cell_size: float) -> float:
    return (math.sqrt(3) / 2.0) * cell_size


def triangle_points(
    base_x: float, base_y: float, cell_size: float, tri_height: float, is_up: bool
) -> np.ndarray:
    """
    Returns the three corners of a triangular cell as a (3, 2) array.
    An 'up' triangle has its apex on top (screen coordinates, y grows down).
    """
    if is_up:
        return np.array(
            [
                (base_x + cell_size / 2.0, base_y),
                (base_x + cell_size, base_y + tri_height),
                (base_x, base_y + tri_height),
            ]
        )
    return np.array(
        [
            (base_x, base_y),
            (base_x + cell_size, base_y),
            (base_x + cell_size / 2.0, base_y + tri_height),
        ]
    )


def hex_points(center_x: float, center_y: float, cell_size: float) -> np.ndarray:
    """Returns the six corners of a pointy-top hexagon as a (6, 2) array."""
    angles = (math.pi / 3.0) * np.arange(6) - math.pi / 6.0
    return np.column_stack(
        (center_x + cell_size * np.cos(angles), center_y + cell_size * np.sin(angles))
    )
