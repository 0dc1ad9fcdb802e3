"""Tests for persisted maze and session shapes."""

import random

import pytest
from pydantic import ValidationError

from mazewalker.maze import (
    AgentPosition,
    MazeGridState,
    VisitedSet,
    VisitedSetState,
    generate,
    new_grid,
)
from mazewalker.schemas import SessionState


@pytest.fixture
def grid():
    return generate(4, columns=5, rng=random.Random(12))


def test_grid_payload_uses_stored_keys(grid):
    payload = MazeGridState.from_grid(grid).to_payload()

    assert len(payload) == 4
    assert len(payload[0]) == 5
    assert payload[1][3]["rowNum"] == 1
    assert payload[1][3]["colNum"] == 3
    assert set(payload[1][3]["walls"]) == {"up", "down", "left", "right"}


def test_grid_state_rebuilds_the_same_grid(grid):
    payload = MazeGridState.from_grid(grid).to_payload()
    rebuilt = MazeGridState.model_validate(payload).to_grid()

    assert rebuilt == grid
    assert (rebuilt.rows, rebuilt.columns) == (4, 5)


def test_missing_wall_key_is_rejected_then_repaired(grid):
    payload = MazeGridState.from_grid(grid).to_payload()
    # Outer wall, so opening it on repair cannot unbalance a neighbour
    del payload[2][0]["walls"]["left"]
    payload[2][0]["walls"]["diagonal"] = True

    with pytest.raises(ValidationError):
        MazeGridState.model_validate(payload)

    repaired = MazeGridState.from_partial(payload).to_grid()
    assert repaired.cell(2, 0).walls.left is False
    assert repaired.cell(2, 0).walls.right == grid.cell(2, 0).walls.right


def test_one_sided_walls_are_rejected():
    payload = MazeGridState.from_grid(new_grid(4)).to_payload()
    payload[1][1]["walls"]["right"] = False

    with pytest.raises(ValidationError, match="open on one side only"):
        MazeGridState.model_validate(payload)

    payload[1][1]["walls"]["right"] = True
    payload[2][3]["walls"]["up"] = False
    with pytest.raises(ValidationError, match="open on one side only"):
        MazeGridState.model_validate(payload)


def test_repair_does_not_open_one_sided_walls():
    payload = MazeGridState.from_grid(new_grid(3)).to_payload()
    del payload[1][1]["walls"]["down"]

    with pytest.raises(ValidationError, match="open on one side only"):
        MazeGridState.from_partial(payload)


def test_missing_visited_flag_is_rejected_then_repaired(grid):
    payload = MazeGridState.from_grid(grid).to_payload()
    del payload[0][0]["visited"]

    with pytest.raises(ValidationError):
        MazeGridState.model_validate(payload)

    repaired = MazeGridState.from_partial(payload).to_grid()
    assert repaired.cell(0, 0).visited is False


def test_reordered_rows_are_rejected(grid):
    payload = MazeGridState.from_grid(grid).to_payload()
    payload[0], payload[1] = payload[1], payload[0]

    with pytest.raises(ValidationError, match="claims position"):
        MazeGridState.model_validate(payload)


def test_ragged_and_empty_grids_are_rejected(grid):
    payload = MazeGridState.from_grid(grid).to_payload()
    payload[3].pop()

    with pytest.raises(ValidationError):
        MazeGridState.model_validate(payload)
    with pytest.raises(ValidationError):
        MazeGridState.model_validate([])


def test_visited_state_normalises_rows():
    state = VisitedSetState.model_validate({"rows": {"2": [3, 1, 3], "4": None}})

    assert state.rows == {2: [1, 3], 4: []}
    visited = state.to_visited()
    assert len(visited) == 2
    assert (2, 1) in visited


def test_visited_state_rejects_non_numeric_rows():
    with pytest.raises(ValidationError):
        VisitedSetState.model_validate({"rows": {"north": [1]}})


def test_visited_state_round_trip_keeps_contents():
    visited = VisitedSet()
    visited.reveal(0, 0, 3, 3)

    state = VisitedSetState.from_visited(visited)
    restored = VisitedSetState.model_validate(state.model_dump(mode="json")).to_visited()
    assert restored == visited


def test_agent_position_aliases_and_defaults():
    position = AgentPosition.model_validate({"posX": 3, "posY": 4})

    assert position.cell == (3, 4)
    assert (position.facing_x, position.facing_y) == (0, 1)
    assert position.model_dump(by_alias=True) == {
        "posX": 3,
        "posY": 4,
        "facingX": 0,
        "facingY": 1,
    }

    with pytest.raises(ValidationError):
        AgentPosition(pos_x=-1, pos_y=0)


def test_session_state_accepts_stored_shape(grid):
    payload = {
        "maze": MazeGridState.from_grid(grid).to_payload(),
        "userLocation": {"posX": 1, "posY": 2, "facingX": 0, "facingY": 1},
        "visited": {"rows": {"1": [1, 2, 3]}},
    }

    state = SessionState.model_validate(payload)
    assert state.user_location.cell == (1, 2)
    assert state.image == ""
    assert state.quit is False
    assert "userLocation" in state.model_dump(by_alias=True)
