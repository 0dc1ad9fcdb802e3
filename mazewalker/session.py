"""
Chat session adapter around the maze engine.

A host chat platform drives a MazeSession with two hooks per exchange:

1. before_prompt(user_message) - resolve direction words into movement,
   handle quit/retry, and report whether the player won or gave up.
2. after_response(bot_message) - pull an image prompt out of the narrator's
   reply and build the "Available Directions" note shown to the player.

The session owns one maze, one agent position and one visited set. It does
not talk to the chat platform or the image generator itself; it returns
plain values (TurnOutcome, ResponseOutcome, SessionState) and the host moves
them around. Persisting between turns is done by handing snapshot() to a
PersistenceStrategy and rebuilding with from_state().

Usage:
    session = MazeSession.new(size=15)
    outcome = session.before_prompt("I walk down the corridor")
    if outcome.system_note:
        ...  # inject into the prompt
    reply = session.after_response(bot_text)
    state = session.snapshot()
"""

from __future__ import annotations

import random
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .config import Config
from .logging_utils import log_deterministic, log_error, log_image, log_info, log_success
from .maze import (
    AgentPosition,
    MazeError,
    MazeGrid,
    MazeGridState,
    VisitedSet,
    VisitedSetState,
    available_directions,
    generate,
    parse_directions,
    render_maze,
    resolve_move,
    solve,
)
from .schemas import ResponseOutcome, SessionState, TurnOutcome

WON_NOTE = (
    "-- Important System Note: the player(s) have reached the exit of The Maze! Game Won! --"
)
QUIT_NOTE = (
    "-- Important System Note: the player(s) have given up and quit. "
    "The way out is now revealed to them, but they have lost forever. --"
)

_QUIT_PATTERN = re.compile(r"\bquit\b", re.IGNORECASE)
_RETRY_PATTERN = re.compile(r"\bretry\b", re.IGNORECASE)
_CODE_FENCE = "```"


class MazeSession:
    """One player's maze game.

    Construct with ``MazeSession.new()`` for a fresh maze or
    ``MazeSession.from_state()`` to resume a persisted one. Either way the
    3x3 block around the agent is revealed on construction.
    """

    def __init__(
        self,
        grid: MazeGrid,
        position: AgentPosition,
        *,
        visited: Optional[VisitedSet] = None,
        image: str = "",
        quit: bool = False,
        image_prompt_prefix: Optional[str] = None,
        rng: Optional[random.Random] = None,
        verbose: bool = True,
    ):
        # Fails fast with OutOfBoundsError on a position outside the grid
        grid.cell(*position.cell)

        self.grid = grid
        self.position = position
        self.visited = visited if visited is not None else VisitedSet()
        self.image = image
        self.quit = quit
        self.image_prompt_prefix = (
            Config.IMAGE_PROMPT_PREFIX if image_prompt_prefix is None else image_prompt_prefix
        )
        self.rng = rng or random.Random()
        self.verbose = verbose
        self._solution: Optional[List[str]] = None

        self._reveal()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        size: Optional[int] = None,
        *,
        rng: Optional[random.Random] = None,
        image_prompt_prefix: Optional[str] = None,
        verbose: bool = True,
    ) -> "MazeSession":
        """Generate a maze and place the agent in its middle cell facing right."""

        size = Config.MAZE_SIZE if size is None else size
        if rng is None and Config.MAZE_SEED is not None:
            rng = random.Random(Config.MAZE_SEED)
        rng = rng or random.Random()

        grid = generate(size, rng=rng)
        middle = size // 2
        position = AgentPosition(pos_x=middle, pos_y=middle, facing_x=0, facing_y=1)
        if verbose:
            log_deterministic(f"[Maze] Generated {size}x{size} maze, agent at {position.cell}")
        return cls(
            grid,
            position,
            image_prompt_prefix=image_prompt_prefix,
            rng=rng,
            verbose=verbose,
        )

    @classmethod
    def from_state(
        cls,
        state: SessionState,
        *,
        rng: Optional[random.Random] = None,
        image_prompt_prefix: Optional[str] = None,
        verbose: bool = True,
    ) -> "MazeSession":
        """Resume a session from a persisted snapshot."""

        return cls(
            state.maze.to_grid(),
            state.user_location.model_copy(),
            visited=state.visited.to_visited(),
            image=state.image,
            quit=state.quit,
            image_prompt_prefix=image_prompt_prefix,
            rng=rng,
            verbose=verbose,
        )

    @classmethod
    def from_payload(
        cls,
        payload: Dict[str, Any],
        *,
        repair: bool = False,
        verbose: bool = True,
        **kwargs: Any,
    ) -> "MazeSession":
        """Resume from raw JSON data.

        With ``repair=True`` cells whose wall maps are missing keys are
        rebuilt with those sides open. Any other malformed data is rejected.

        Raises:
            pydantic.ValidationError: If the payload does not describe a session.
        """

        try:
            if repair and "maze" in payload:
                payload = {**payload, "maze": MazeGridState.from_partial(payload["maze"])}
            state = SessionState.model_validate(payload)
        except ValidationError as exc:
            if verbose:
                log_error(f"[Session] Rejected persisted state: {exc.error_count()} error(s)")
            raise
        return cls.from_state(state, verbose=verbose, **kwargs)

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------

    def before_prompt(self, content: str) -> TurnOutcome:
        """Apply a user message: move, then handle quit/retry.

        Every recognised direction word is resolved in the order it appears.
        Text without direction words leaves the agent where it is.
        """

        directions = parse_directions(content)
        moved = False
        revealed = 0

        for direction in directions:
            start = self.position.cell
            new_position, delta = resolve_move(self.grid, self.position, direction)
            if new_position.cell == start:
                if self.verbose:
                    log_deterministic(f"[Move] Cannot move {direction.value} from {start}")
                continue
            self.position = new_position
            moved = True
            self._solution = None
            fresh = sum(1 for row, col in delta if self.visited.mark(row, col))
            revealed += fresh
            if self.verbose:
                log_deterministic(
                    f"[Move] {direction.value}: {start} -> {new_position.cell} ({fresh} new cells seen)"
                )

        if _QUIT_PATTERN.search(content or ""):
            self.quit = True
        elif _RETRY_PATTERN.search(content or ""):
            self.quit = False
            self._solution = None

        won = self.won()
        system_note = None
        if won:
            system_note = WON_NOTE
            if self.verbose:
                log_success(f"[Maze] Exit reached at {self.position.cell}")
        elif self.quit:
            system_note = QUIT_NOTE
            if self.verbose:
                log_error(f"[Maze] Player quit at {self.position.cell}; revealing the way out")

        return TurnOutcome(
            position=self.position.model_copy(),
            directions=directions,
            moved=moved,
            revealed=revealed,
            won=won,
            quit=self.quit,
            system_note=system_note,
        )

    def after_response(self, content: str) -> ResponseOutcome:
        """Process the narrator's reply.

        Anything from the first code fence on is dropped. Text between ``<``
        and ``>`` becomes the image prompt and the message is cut after the
        closing ``>``; without markup the whole (fence-stripped) reply is the
        prompt.
        """

        content = content or ""
        modified: Optional[str] = None
        if _CODE_FENCE in content:
            modified = content[: content.index(_CODE_FENCE)]
        prompt = modified if modified is not None else content

        if "<" in content:
            start = content.index("<") + 1
            end = len(content)
            if ">" in content[start:]:
                end = content.index(">", start)
                modified = (modified if modified is not None else content)[: end + 1]
            prompt = content[start:end]

        image_prompt = self.image_prompt_prefix + prompt.strip()
        if self.verbose:
            log_image(f"[Image] Prompt ready ({len(image_prompt)} chars)")

        return ResponseOutcome(
            modified_message=modified,
            image_prompt=image_prompt,
            directions_note=self.directions_note(),
        )

    def set_image(self, url: Optional[str]) -> None:
        """Store the image the host's generator produced, whenever it arrives."""

        self.image = url or ""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def won(self) -> bool:
        """True when the agent stands on the outer ring of the maze."""

        return self.grid.is_boundary(*self.position.cell)

    def solution(self) -> Optional[List[str]]:
        """Way out from the agent's cell as ``"row-col"`` keys, once quit."""

        if not self.quit:
            return None
        if self._solution is None:
            try:
                self._solution = solve(self.grid, *self.position.cell, rng=self.rng)
            except MazeError as exc:
                log_error(f"[Solver] {type(exc).__name__}: {exc}")
                raise
        return list(self._solution)

    def directions_note(self) -> str:
        """The "Available Directions" block appended after the narrator."""

        options = [direction.value for direction in available_directions(self.grid, self.position)]
        options.append("retry" if self.quit else "quit")
        return f"{_CODE_FENCE}\nAvailable Directions:\n[ {', '.join(options)} ]\n{_CODE_FENCE}"

    def snapshot(self) -> SessionState:
        """Serializable copy of the session for persistence."""

        return SessionState(
            maze=MazeGridState.from_grid(self.grid),
            user_location=self.position.model_copy(),
            image=self.image,
            quit=self.quit,
            visited=VisitedSetState.from_visited(self.visited),
        )

    def render(self) -> str:
        """Text picture of the maze with fog, agent and (after quit) the way out."""

        return render_maze(
            self.grid,
            self.position,
            visited=self.visited,
            solution=self.solution(),
        )

    def describe(self) -> None:
        """Print a short status line."""

        log_info(
            f"[Session] {self.grid.rows}x{self.grid.columns} maze, agent at {self.position.cell}, "
            f"{len(self.visited)} cells seen, won={self.won()}, quit={self.quit}"
        )

    def _reveal(self) -> None:
        self.visited.reveal(*self.position.cell, self.grid.rows, self.grid.columns)
