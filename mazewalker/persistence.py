"""
PersistenceStrategy interface for pluggable session storage.

A chat host keeps a maze session alive across many messages, but the session
object itself only lives for one turn. This module stores SessionState
snapshots between turns. Persistence is OPTIONAL - a session can run
entirely in-memory for one process lifetime.

Two included implementations:
1. InMemoryPersistence - Dict-based storage, data lost on exit (testing, prototyping)
2. JsonPersistence - File-based storage, one human-readable JSON file per session

Async design rationale:
- Hosts are usually async web services; storage must not block the event loop
- File I/O runs in a worker thread (asyncio.to_thread)
- initialize() and close() manage backend lifecycle (directories, handles)

Usage pattern:
    persistence = JsonPersistence("maze_sessions")
    await persistence.initialize()

    await persistence.save_session(chat_id, session.snapshot())
    state = await persistence.get_session(chat_id)
    session = MazeSession.from_state(state)

    await persistence.close()
"""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from mazewalker.schemas import SessionState
from .config import Config

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class PersistenceStrategy(ABC):
    """Abstract base class for session state persistence.

    Method categories:
    1. Lifecycle: initialize(), close()
    2. Sessions: save_session(), get_session(), list_sessions(), delete_session()

    Concrete implementations:
    - InMemoryPersistence: Fast, ephemeral, no dependencies (testing/prototyping)
    - JsonPersistence: Human-readable files, easy debugging
    - Custom: Implement this interface for Redis, a database, etc.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the persistence backend.

        Called once before the first session is stored.

        Raises:
            Exception: If initialization fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Close the persistence backend.

        Raises:
            Exception: If cleanup fails
        """
        pass

    @abstractmethod
    async def save_session(self, session_id: str, state: SessionState) -> None:
        """
        Save (or overwrite) the snapshot for a session.

        Args:
            session_id: Host-defined session identifier (e.g., chat id)
            state: Session snapshot to store

        Raises:
            Exception: If save fails
        """
        pass

    @abstractmethod
    async def get_session(self, session_id: str) -> Optional[SessionState]:
        """
        Retrieve the snapshot for a session.

        Args:
            session_id: Session identifier

        Returns:
            SessionState if found, None otherwise

        Raises:
            Exception: If retrieval fails
        """
        pass

    @abstractmethod
    async def list_sessions(self) -> List[str]:
        """
        List stored session identifiers in sorted order.

        Raises:
            Exception: If listing fails
        """
        pass

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """
        Delete a stored session. Safe to call for unknown ids.

        Args:
            session_id: Session identifier

        Raises:
            Exception: If deletion fails
        """
        pass


class InMemoryPersistence(PersistenceStrategy):
    """In-memory persistence using a Python dict (no files).

    Snapshots are deep-copied on the way in and out so later changes to a
    live session never leak into stored state.

    Perfect for:
    - Unit testing (fast, isolated, no cleanup needed)
    - Single-process hosts that do not need to survive restarts
    """

    def __init__(self):
        """Initialize in-memory storage."""
        self.sessions: Dict[str, SessionState] = {}

    async def initialize(self) -> None:
        """No-op for in-memory implementation."""
        pass

    async def close(self) -> None:
        """
        No-op for in-memory: data is NOT cleared on close so callers can
        inspect it afterwards. Use delete_session() for explicit cleanup.
        """
        pass

    async def save_session(self, session_id: str, state: SessionState) -> None:
        self.sessions[session_id] = state.model_copy(deep=True)

    async def get_session(self, session_id: str) -> Optional[SessionState]:
        state = self.sessions.get(session_id)
        return state.model_copy(deep=True) if state is not None else None

    async def list_sessions(self) -> List[str]:
        return sorted(self.sessions)

    async def delete_session(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)


class JsonPersistence(PersistenceStrategy):
    """File-based persistence using JSON for human-readable storage.

    Directory structure:
    ```
    {base_path}/
      {session_id}.json      # SessionState, pretty-printed, aliased keys
    ```

    File format details:
    - Keys use the stored aliases (userLocation, posX, rowNum, ...)
    - Visited rows are stored as {"<row>": [cols...]} since JSON keys are strings
    - Session ids are restricted to letters, digits, "_", "-" and "." so they
      map to a single file inside base_path

    NOT suitable for:
    - Concurrent writers to the same session (no locking)
    """

    def __init__(self, base_path: Path | str | None = None):
        self.base_path = Path(base_path) if base_path is not None else Config.STATE_DIR

    async def initialize(self) -> None:
        await asyncio.to_thread(self.base_path.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        # Nothing to clean up for JSON persistence
        return None

    async def save_session(self, session_id: str, state: SessionState) -> None:
        path = self._session_path(session_id)
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        payload = state.model_dump(mode="json", by_alias=True)
        await asyncio.to_thread(
            path.write_text, json.dumps(payload, indent=2, ensure_ascii=False), "utf-8"
        )

    async def get_session(self, session_id: str) -> Optional[SessionState]:
        path = self._session_path(session_id)
        if not path.exists():
            return None

        payload = await asyncio.to_thread(json.loads, path.read_text("utf-8"))
        return SessionState.model_validate(payload)

    async def list_sessions(self) -> List[str]:
        if not self.base_path.exists():
            return []

        def _scan() -> List[str]:
            return sorted(path.stem for path in self.base_path.glob("*.json"))

        return await asyncio.to_thread(_scan)

    async def delete_session(self, session_id: str) -> None:
        path = self._session_path(session_id)
        if path.exists():
            await asyncio.to_thread(path.unlink)

    def _session_path(self, session_id: str) -> Path:
        if not _SAFE_ID.match(session_id) or session_id in (".", ".."):
            raise ValueError(f"Invalid session id: {session_id!r}")
        return self.base_path / f"{session_id}.json"
