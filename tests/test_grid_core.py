# tests/test_grid_core.py
import math

import constants as const
from grid_core import build_grid, calculate_ring_counts
from helpers import assert_walls_bilateral


def test_ids_are_dense_in_construction_order():
    for style in const.GRID_STYLES:
        grid = build_grid(style, 4, 6, 10)
        assert [cell.id for cell in grid.cells] == list(range(grid.size()))


def test_rectangular_layout_and_neighbours():
    grid = build_grid(const.STYLE_RECTANGULAR, 3, 4, 10)
    assert grid.size() == 12
    corner = grid.get_cell(0, 0)
    assert (corner.x, corner.y) == (5.0, 5.0)
    assert [n.direction for n in corner.neighbours] == ["right", "bottom"]
    middle = grid.get_cell(1, 1)
    assert [n.direction for n in middle.neighbours] == ["top", "right", "bottom", "left"]
    assert all(middle.walls.values())
    assert_walls_bilateral(grid)


def test_hexagonal_layout_and_neighbours():
    grid = build_grid(const.STYLE_HEXAGONAL, 4, 4, 10)
    cell = grid.get_cell(1, 0)
    assert math.isclose(cell.x, 10 * math.sqrt(3) * 0.5)
    assert math.isclose(cell.y, 15.0)
    assert [n.direction for n in grid.get_cell(0, 0).neighbours] == ["e", "se"]
    assert [n.direction for n in grid.get_cell(0, 3).neighbours] == ["w", "se", "sw"]
    assert len(grid.get_cell(1, 1).neighbours) == 6
    assert_walls_bilateral(grid)


def test_triangular_cells_never_have_four_neighbours():
    grid = build_grid(const.STYLE_TRIANGULAR, 4, 4, 10)
    for cell in grid.cells:
        assert cell.is_up == ((cell.row + cell.col) % 2 == 0)
        assert set(cell.walls) == {"left", "right", "base"}
        assert len(cell.neighbours) <= 3
        for n in cell.neighbours:
            if n.direction == const.DIR_BASE:
                other = grid.neighbour_cell(n)
                assert other.row == (cell.row + 1 if cell.is_up else cell.row - 1)
                assert other.col == cell.col
    # Down triangle in the top row: no base neighbour, only a left one
    assert [n.direction for n in grid.get_cell(0, 3).neighbours] == ["left"]
    assert_walls_bilateral(grid)


def test_triangle_position_is_centroid():
    grid = build_grid(const.STYLE_TRIANGULAR, 2, 2, 10)
    h = math.sqrt(3) / 2 * 10
    up = grid.get_cell(0, 0)
    down = grid.get_cell(0, 1)
    assert math.isclose(up.x, 5.0) and math.isclose(up.y, 2 * h / 3)
    assert math.isclose(down.x, 10.0) and math.isclose(down.y, h / 3)


def test_radial_ring_counts():
    assert calculate_ring_counts(1, 8, 10) == [1]
    assert calculate_ring_counts(0, 8, 10) == [1]
    assert calculate_ring_counts(3, 8, 10) == [1, 8, 16]
    assert calculate_ring_counts(3, 4, 10) == [1, 4, 12]
    # Ring 1 is never smaller than four cells
    assert calculate_ring_counts(2, 2, 10) == [1, 4]
    assert calculate_ring_counts(5, 8, 10) == [1, 8, 16, 16, 32]


def test_radial_centre_and_first_ring():
    grid = build_grid(const.STYLE_RADIAL, 3, 8, 10)
    assert grid.rows == 3 and grid.cols == 8
    assert grid.size() == 1 + 8 + 16
    assert grid.outer_radius == 30

    centre = grid.cells[0]
    assert centre.ring == 0
    assert centre.walls[const.DIR_CW] is False
    assert centre.walls[const.DIR_CCW] is False
    assert centre.walls[const.DIR_IN] is False
    assert centre.walls[const.DIR_OUT] == [True] * 8

    for cell in grid.cells[1:9]:
        assert cell.ring == 1
        inward = [n for n in cell.neighbours if n.direction == const.DIR_IN]
        assert len(inward) == 1
        assert inward[0].cell_id == 0
        assert inward[0].out_index == cell.index
        assert cell.walls[const.DIR_OUT] == [True, True]


def test_radial_outward_slots_map_to_outer_cells():
    grid = build_grid(const.STYLE_RADIAL, 3, 8, 10)
    for cell in grid.cells:
        if cell.ring != 1:
            continue
        outward = [n for n in cell.neighbours if n.direction == const.DIR_OUT]
        assert [n.out_index for n in outward] == [0, 1]
        for n in outward:
            outer = grid.neighbour_cell(n)
            assert outer.ring == 2
            assert outer.index == cell.index * 2 + n.out_index
    outermost = [cell for cell in grid.cells if cell.ring == 2]
    assert all(cell.walls[const.DIR_OUT] == [True] for cell in outermost)
    assert_walls_bilateral(grid)


def test_radial_neighbour_order():
    grid = build_grid(const.STYLE_RADIAL, 2, 4, 10)
    cell = grid.get_cell(1, 0)
    assert [n.direction for n in cell.neighbours] == ["cw", "ccw", "inward"]
    assert grid.neighbour_cell(cell.neighbours[0]).index == 1
    assert grid.neighbour_cell(cell.neighbours[1]).index == 3


def test_remove_wall_is_bilateral_for_radial_pairs():
    grid = build_grid(const.STYLE_RADIAL, 3, 4, 10)
    inner = grid.get_cell(1, 2)
    out_rel = [n for n in inner.neighbours if n.direction == const.DIR_OUT][1]
    outer = grid.neighbour_cell(out_rel)
    grid.remove_wall(inner, out_rel)
    assert inner.walls[const.DIR_OUT][1] is False
    assert inner.walls[const.DIR_OUT][0] is True
    assert outer.walls[const.DIR_IN] is False

    other_outer = grid.get_cell(2, outer.index - 1)
    in_rel = [n for n in other_outer.neighbours if n.direction == const.DIR_IN][0]
    assert grid.neighbour_cell(in_rel) is inner
    grid.remove_wall(other_outer, in_rel)
    assert inner.walls[const.DIR_OUT] == [False, False, True]
    assert_walls_bilateral(grid)


def test_reset_walls_restores_every_wall():
    grid = build_grid(const.STYLE_RADIAL, 3, 4, 10)
    for cell in grid.cells:
        for n in cell.neighbours:
            grid.remove_wall(cell, n)
    grid.reset_walls()
    centre = grid.cells[0]
    assert centre.walls[const.DIR_CW] is False
    assert centre.walls[const.DIR_IN] is False
    assert all(centre.walls[const.DIR_OUT])
    for cell in grid.cells[1:]:
        assert cell.walls[const.DIR_CW] and cell.walls[const.DIR_CCW]
        assert cell.walls[const.DIR_IN]
        assert all(cell.walls[const.DIR_OUT])


def test_unknown_style_falls_back_to_rectangular():
    grid = build_grid("mystery", 2, 2, 10)
    assert grid.style == const.STYLE_RECTANGULAR
    assert grid.size() == 4


def test_degenerate_sizes_build_empty_grids():
    for style in (const.STYLE_RECTANGULAR, const.STYLE_HEXAGONAL, const.STYLE_TRIANGULAR):
        assert build_grid(style, 0, 5, 10).size() == 0
        assert build_grid(style, 5, 0, 10).size() == 0
    single = build_grid(const.STYLE_RADIAL, 0, 8, 10)
    assert single.size() == 1
    assert single.cells[0].neighbours == []


def test_zero_cell_size_radial_grid_builds():
    assert calculate_ring_counts(4, 6, 0) == [1, 6, 6, 6]
    grid = build_grid(const.STYLE_RADIAL, 4, 6, 0)
    assert grid.size() == 19
    assert_walls_bilateral(grid)
