"""Tests for the chat session adapter."""

import random

import pytest
from pydantic import ValidationError

from mazewalker import QUIT_NOTE, WON_NOTE, MazeSession
from mazewalker.maze import (
    AgentPosition,
    Direction,
    InvalidDimensionError,
    OutOfBoundsError,
    new_grid,
    remove_walls,
)


def corridor_grid():
    """5x5 grid: row-2 corridor (2,1)..(2,4) with a branch up at (2,3)."""
    grid = new_grid(5)
    for first, second in [((2, 1), (2, 2)), ((2, 2), (2, 3)), ((2, 3), (2, 4)), ((2, 3), (1, 3))]:
        remove_walls(grid.cell(*first), grid.cell(*second))
    return grid


@pytest.fixture
def session():
    return MazeSession(
        corridor_grid(),
        AgentPosition(pos_x=2, pos_y=2),
        image_prompt_prefix="PREFIX: ",
        rng=random.Random(0),
        verbose=False,
    )


def test_new_session_starts_in_the_middle():
    session = MazeSession.new(size=7, rng=random.Random(3), verbose=False)

    assert session.position.cell == (3, 3)
    assert (session.position.facing_x, session.position.facing_y) == (0, 1)
    assert len(session.visited) == 9
    assert not session.quit
    assert session.image == ""


def test_new_session_rejects_bad_size():
    with pytest.raises(InvalidDimensionError):
        MazeSession.new(size=0, verbose=False)


def test_position_outside_grid_is_rejected():
    with pytest.raises(OutOfBoundsError):
        MazeSession(new_grid(3), AgentPosition(pos_x=3, pos_y=0), verbose=False)


def test_move_reveals_new_cells(session):
    outcome = session.before_prompt("I walk to the right")

    assert outcome.moved
    assert outcome.directions == [Direction.RIGHT]
    assert outcome.position.cell == (2, 3)
    assert outcome.revealed == 3
    assert outcome.system_note is None
    assert not outcome.won


def test_reaching_the_ring_wins(session):
    session.before_prompt("right")
    outcome = session.before_prompt("right")

    assert outcome.position.cell == (2, 4)
    assert outcome.won
    assert outcome.system_note == WON_NOTE
    assert session.won()


def test_directions_resolve_in_message_order(session):
    outcome = session.before_prompt("Go right and then up")

    assert outcome.directions == [Direction.RIGHT, Direction.UP]
    assert session.position.cell == (1, 3)


def test_text_without_directions_keeps_position(session):
    outcome = session.before_prompt("I climb upstairs and look around")

    assert not outcome.moved
    assert outcome.directions == []
    assert session.position.cell == (2, 2)


def test_blocked_direction_is_ignored(session):
    outcome = session.before_prompt("down")

    assert outcome.directions == [Direction.DOWN]
    assert not outcome.moved
    assert session.position.cell == (2, 2)


def test_quit_reveals_the_way_out(session):
    assert session.solution() is None

    outcome = session.before_prompt("I quit")
    assert outcome.quit
    assert outcome.system_note == QUIT_NOTE
    assert session.solution() == ["2-2", "2-3", "2-4"]
    assert "★ " in session.render()


def test_retry_resumes_the_game(session):
    session.before_prompt("quit")
    outcome = session.before_prompt("retry")

    assert not outcome.quit
    assert outcome.system_note is None
    assert session.solution() is None


def test_directions_note_lists_open_sides(session):
    assert session.directions_note() == "```\nAvailable Directions:\n[ left, right, quit ]\n```"

    session.before_prompt("quit")
    assert session.directions_note().endswith("[ left, right, retry ]\n```")


def test_after_response_extracts_image_prompt(session):
    reply = "A door creaks. <a dark stone corridor> and more\n```\nAvailable Directions:\n```"

    outcome = session.after_response(reply)
    assert outcome.modified_message == "A door creaks. <a dark stone corridor>"
    assert outcome.image_prompt == "PREFIX: a dark stone corridor"
    assert "Available Directions" in outcome.directions_note


def test_after_response_without_markup(session):
    outcome = session.after_response("  The hall stretches on.  ")
    assert outcome.modified_message is None
    assert outcome.image_prompt == "PREFIX: The hall stretches on."

    fenced = session.after_response("The hall stretches on.\n```\nold note\n```")
    assert fenced.modified_message == "The hall stretches on.\n"
    assert fenced.image_prompt == "PREFIX: The hall stretches on."


def test_snapshot_round_trip(session):
    session.before_prompt("right")
    session.set_image("https://images.example/scene.png")
    session.before_prompt("quit")

    restored = MazeSession.from_state(session.snapshot(), verbose=False)
    assert restored.grid == session.grid
    assert restored.position == session.position
    assert restored.visited == session.visited
    assert restored.image == "https://images.example/scene.png"
    assert restored.quit


def test_from_payload_repairs_missing_walls(session):
    payload = session.snapshot().model_dump(mode="json", by_alias=True)
    del payload["maze"][0][0]["walls"]["up"]

    with pytest.raises(ValidationError):
        MazeSession.from_payload(payload, verbose=False)

    restored = MazeSession.from_payload(payload, repair=True, verbose=False)
    assert restored.grid.cell(0, 0).walls.up is False
    assert restored.position.cell == (2, 2)


def replace_cell(maze):
    maze[0][0] = 7


def replace_walls(maze):
    maze[0][0]["walls"] = ["up"]


def replace_row(maze):
    maze[1] = "row"


@pytest.mark.parametrize("corrupt", [replace_cell, replace_walls, replace_row])
def test_repair_rejects_malformed_cells(session, corrupt, monkeypatch, capsys):
    monkeypatch.setenv("MAZEWALKER_NO_COLOR", "1")
    payload = session.snapshot().model_dump(mode="json", by_alias=True)
    corrupt(payload["maze"])

    with pytest.raises(ValidationError):
        MazeSession.from_payload(payload, repair=True)
    assert "[!] [Session] Rejected persisted state" in capsys.readouterr().out


def test_win_is_logged(monkeypatch, capsys):
    monkeypatch.setenv("MAZEWALKER_NO_COLOR", "1")
    session = MazeSession(corridor_grid(), AgentPosition(pos_x=2, pos_y=3))

    session.before_prompt("right")
    out = capsys.readouterr().out
    assert "[•] [Move] right: (2, 3) -> (2, 4)" in out
    assert "[✓] [Maze] Exit reached at (2, 4)" in out
