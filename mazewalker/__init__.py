"""
Mazewalker - perfect-maze engine for chat-driven exploration games.

Generate a maze, walk an agent through it with plain-language direction
commands, and reveal the way out when the player gives up.

No file I/O required. No global state.
Persistence and the chat host are injected by the user.
"""

__version__ = "0.1.0"

# Main session component
from .session import MazeSession, WON_NOTE, QUIT_NOTE

# Persistence
from .persistence import (
    PersistenceStrategy,
    InMemoryPersistence,
    JsonPersistence,
)

# Maze engine
from .maze import (
    Direction,
    Walls,
    MazeCell,
    MazeGrid,
    VisitedSet,
    AgentPosition,
    MazeGridState,
    MazeCellState,
    VisitedSetState,
    WallsState,
    MazeError,
    InvalidDimensionError,
    OutOfBoundsError,
    NonAdjacentWallRemovalError,
    UnreachableBoundaryError,
    new_grid,
    remove_walls,
    generate,
    resolve_move,
    parse_directions,
    available_directions,
    solve,
    solve_path,
    render_maze,
)

# Session schemas
from .schemas import SessionState, TurnOutcome, ResponseOutcome

__all__ = [
    # Main class
    "MazeSession",
    "WON_NOTE",
    "QUIT_NOTE",
    # Persistence
    "PersistenceStrategy",
    "InMemoryPersistence",
    "JsonPersistence",
    # Grid model
    "Direction",
    "Walls",
    "MazeCell",
    "MazeGrid",
    "VisitedSet",
    "AgentPosition",
    "new_grid",
    "remove_walls",
    # Algorithms
    "generate",
    "resolve_move",
    "parse_directions",
    "available_directions",
    "solve",
    "solve_path",
    "render_maze",
    # Persisted shapes
    "MazeGridState",
    "MazeCellState",
    "VisitedSetState",
    "WallsState",
    "SessionState",
    "TurnOutcome",
    "ResponseOutcome",
    # Errors
    "MazeError",
    "InvalidDimensionError",
    "OutOfBoundsError",
    "NonAdjacentWallRemovalError",
    "UnreachableBoundaryError",
]
