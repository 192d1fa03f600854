import pytest

from ghostmaze.maze.builder import MazeBuilder
from ghostmaze.maze.geometry import (
    CELL_SIZE,
    Vec2,
    WallSegment,
    build_layout,
    build_wall_segments,
    cell_center,
    outer_wall_segments,
    world_to_cell,
)


def interior_walls(grid):
    count = 0
    for y in range(grid.height):
        for x in range(grid.width):
            cell = grid.cell(x, y)
            if x < grid.width - 1 and not cell.right:
                count += 1
            if y < grid.height - 1 and not cell.bottom:
                count += 1
    return count


def test_three_by_three_end_to_end():
    grid = MazeBuilder(seed=11).generate(3, 3)
    assert grid.cell(0, 0).open_count >= 1
    assert grid.cell(2, 2).open_count >= 1

    walls = build_wall_segments(grid)
    assert len(walls) == 4 + interior_walls(grid)
    keys = [w.key() for w in walls]
    assert len(keys) == len(set(keys))
    assert list(walls[:4]) == outer_wall_segments(3, 3)


def test_known_layout_segments(in_order_rng):
    grid = MazeBuilder(in_order_rng).generate(3, 3)
    walls = build_wall_segments(grid)
    inner = set(w.key() for w in walls[4:])
    assert inner == {
        WallSegment(-1.5, -0.5, -0.5, -0.5).key(),  # below (0,0)
        WallSegment(-0.5, -0.5, 0.5, -0.5).key(),  # below (1,0)
        WallSegment(0.5, -0.5, 0.5, 0.5).key(),  # right of (1,1)
        WallSegment(-0.5, 0.5, -0.5, 1.5).key(),  # right of (0,2)
    }


def test_outer_boundary_encloses_maze():
    top, right, bottom, left = outer_wall_segments(4, 2)
    assert top == WallSegment(-2.0, -1.0, 2.0, -1.0)
    assert right == WallSegment(2.0, -1.0, 2.0, 1.0)
    assert bottom == WallSegment(-2.0, 1.0, 2.0, 1.0)
    assert left == WallSegment(-2.0, -1.0, -2.0, 1.0)
    assert top.is_horizontal and not top.is_vertical
    assert left.is_vertical


def test_fully_closed_single_cell_has_only_boundary():
    grid = MazeBuilder(seed=0).generate(1, 1)
    assert len(build_wall_segments(grid)) == 4


def test_entry_and_exit_are_symmetric_around_origin():
    layout = build_layout(MazeBuilder(seed=4).generate(10, 10))
    assert layout.entry == Vec2(-4.5, -4.5)
    assert layout.exit == Vec2(4.5, 4.5)
    assert layout.extent == (10 * CELL_SIZE, 10 * CELL_SIZE)


def test_cell_center_and_world_to_cell_agree():
    for x, y in [(0, 0), (3, 1), (6, 4)]:
        center = cell_center(x, y, 7, 5)
        assert world_to_cell(center, 7, 5) == (x, y)
    # Points outside the maze clamp to the nearest cell
    assert world_to_cell(Vec2(-100.0, 100.0), 7, 5) == (0, 4)


def test_segment_helpers():
    seg = WallSegment(1.0, 0.0, -1.0, 0.0)
    assert seg.length == pytest.approx(2.0)
    assert seg.midpoint == Vec2(0.0, 0.0)
    assert seg.key() == WallSegment(-1.0, 0.0, 1.0, 0.0).key()


def test_ascii_rendering_of_single_cell():
    grid = MazeBuilder(seed=0).generate(1, 1)
    assert grid.to_lines() == ["+---+", "|   |", "+---+"]


def test_ascii_rendering_shows_passages(in_order_rng):
    grid = MazeBuilder(in_order_rng).generate(3, 3)
    assert grid.to_lines() == [
        "+---+---+---+",
        "|           |",
        "+---+---+   +",
        "|       |   |",
        "+   +   +   +",
        "|   |       |",
        "+---+---+---+",
    ]
