"""
Pydantic schemas for Mazewalker sessions.

A chat-hosted maze game keeps three pieces of state between turns:
- the maze itself (generated once, never changes after that)
- the agent's position and the latest scene image (changes every message)
- the visited set (grows for the lifetime of the chat)

SessionState bundles them into one JSON-serializable snapshot that the
persistence backends store. TurnOutcome and ResponseOutcome describe what a
session hands back to the host after each user and bot message.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from mazewalker.maze import (
    AgentPosition,
    Direction,
    MazeGridState,
    VisitedSetState,
)


class SessionState(BaseModel):
    """Complete persisted state of one maze session.

    Dump with ``model_dump(mode="json", by_alias=True)`` to get the stored
    shape (``userLocation``/``posX``/``rowNum`` keys); both aliases and field
    names are accepted on the way back in.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Maze grid as a 2-D list of cells in row order
    maze: MazeGridState = Field(..., description="Generated maze")
    user_location: AgentPosition = Field(
        ..., alias="userLocation", description="Agent position and facing"
    )
    # Image is filled in later by the host once its image generator responds
    image: str = Field("", description="URL of the latest scene image, if any")
    quit: bool = Field(False, description="Whether the player has given up")
    visited: VisitedSetState = Field(
        default_factory=VisitedSetState,
        description="Cells the agent has observed",
    )


class TurnOutcome(BaseModel):
    """Result of handling a user message."""

    position: AgentPosition = Field(..., description="Agent position after the message")
    # Directions recognised in the message, in the order they were resolved
    directions: List[Direction] = Field(default_factory=list)
    moved: bool = Field(False, description="Whether any direction moved the agent")
    revealed: int = Field(0, ge=0, description="Number of newly seen cells")
    won: bool = Field(False, description="Agent stands on the exit ring")
    quit: bool = Field(False, description="Player has given up")
    # Note for the host to inject into the prompt (won / quit announcements)
    system_note: Optional[str] = Field(None)


class ResponseOutcome(BaseModel):
    """Result of handling a bot message."""

    # Bot message with code fences and image markup stripped, None if unchanged
    modified_message: Optional[str] = Field(None)
    # Prompt for the host's image generator, prefix included
    image_prompt: Optional[str] = Field(None)
    directions_note: str = Field(..., description="Available directions block")
