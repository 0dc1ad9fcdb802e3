"""Tests for corridor-following movement."""

import random

import pytest

from mazewalker.maze import (
    AgentPosition,
    Direction,
    OutOfBoundsError,
    available_directions,
    generate,
    new_grid,
    parse_directions,
    remove_walls,
    resolve_move,
)


def carve(grid, *coords):
    """Open walls along a chain of adjacent coordinates."""
    for first, second in zip(coords, coords[1:]):
        remove_walls(grid.cell(*first), grid.cell(*second))


def corridor_grid():
    """5x5 grid: row-2 corridor (2,1)..(2,4) with a branch up at (2,3)."""
    grid = new_grid(5)
    carve(grid, (2, 1), (2, 2), (2, 3), (2, 4))
    carve(grid, (2, 3), (1, 3))
    return grid


def at(row, col):
    return AgentPosition(pos_x=row, pos_y=col)


def test_corridor_stops_at_branch():
    grid = corridor_grid()

    new_position, _ = resolve_move(grid, at(2, 1), Direction.RIGHT)
    # Straight through (2,2), stops where the corridor branches
    assert new_position.cell == (2, 3)


def test_first_step_ignores_side_openings():
    grid = corridor_grid()

    new_position, _ = resolve_move(grid, at(2, 3), "right")
    assert new_position.cell == (2, 4)


def test_single_open_side_stops_movement():
    grid = new_grid(5)
    carve(grid, (1, 1), (2, 1), (3, 1))
    carve(grid, (2, 1), (2, 2))  # one side open at (2,1), the other closed

    new_position, _ = resolve_move(grid, at(1, 1), Direction.DOWN)
    assert new_position.cell == (2, 1)


def test_blocked_first_step_is_a_no_op():
    grid = corridor_grid()
    position = at(2, 2)

    new_position, delta = resolve_move(grid, position, Direction.DOWN)
    assert new_position == position
    assert len(delta) == 0


def test_unrecognised_direction_is_a_no_op():
    grid = corridor_grid()
    position = at(2, 1)

    new_position, delta = resolve_move(grid, position, "sideways")
    assert new_position == position
    assert len(delta) == 0


def test_move_never_leaves_the_grid():
    grid = new_grid(3)
    carve(grid, (1, 1), (1, 2))
    grid.cell(1, 2).walls.right = False  # open edge wall, nothing beyond it

    new_position, _ = resolve_move(grid, at(1, 2), Direction.RIGHT)
    assert new_position.cell == (1, 2)

    new_position, _ = resolve_move(grid, at(1, 1), Direction.RIGHT)
    assert new_position.cell == (1, 2)


def test_size_argument_bounds_the_walk():
    grid = corridor_grid()

    new_position, _ = resolve_move(grid, at(2, 3), Direction.RIGHT, size=4)
    assert new_position.cell == (2, 3)


def test_position_is_not_mutated_and_facing_is_kept():
    grid = corridor_grid()
    position = AgentPosition(pos_x=2, pos_y=1, facing_x=1, facing_y=0)

    new_position, _ = resolve_move(grid, position, Direction.RIGHT)
    assert position.cell == (2, 1)
    assert new_position.cell == (2, 3)
    assert (new_position.facing_x, new_position.facing_y) == (1, 0)


def test_delta_reveals_around_every_stop():
    grid = corridor_grid()

    _, delta = resolve_move(grid, at(2, 1), Direction.RIGHT)
    # Stops at (2,2) and (2,3): rows 1-3, columns 1-4
    assert len(delta) == 12
    assert (1, 1) in delta
    assert (3, 4) in delta
    assert (2, 0) not in delta


def test_movement_is_deterministic_on_a_fixed_grid():
    grid = generate(9, rng=random.Random(11))
    start = at(4, 4)

    for direction in Direction:
        first, first_delta = resolve_move(grid, start, direction)
        second, second_delta = resolve_move(grid, start, direction)
        assert first == second
        assert first_delta == second_delta


def test_move_from_outside_the_grid_fails():
    grid = new_grid(3)
    with pytest.raises(OutOfBoundsError):
        resolve_move(grid, at(5, 5), Direction.UP)


def test_parse_directions_finds_whole_words_in_order():
    assert parse_directions("Let's go RIGHT, then up, then right again") == [
        Direction.RIGHT,
        Direction.UP,
    ]
    assert parse_directions("I head upstairs and look leftward") == []
    assert parse_directions("") == []


def test_available_directions_lists_open_sides():
    grid = corridor_grid()

    assert available_directions(grid, at(2, 3)) == [
        Direction.UP,
        Direction.LEFT,
        Direction.RIGHT,
    ]
    assert available_directions(grid, at(0, 0)) == []
