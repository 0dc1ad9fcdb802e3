"""
Mazewalker Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Maze Configuration
    MAZE_SIZE: int = int(os.getenv("MAZE_SIZE", "15"))
    # Fixed seed makes every new session generate the same maze
    MAZE_SEED: int | None = _optional_int("MAZE_SEED")

    # Image prompts handed to the host's image generator
    IMAGE_PROMPT_PREFIX: str = os.getenv(
        "IMAGE_PROMPT_PREFIX", "Highest quality, 8K, digital art\n"
    )

    # Session Storage (JsonPersistence)
    STATE_DIR: Path = Path(os.getenv("MAZE_STATE_DIR", "maze_sessions"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.MAZE_SIZE <= 0:
            raise ValueError(
                f"MAZE_SIZE must be a positive integer, got {cls.MAZE_SIZE}"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Mazewalker Configuration:",
            f"  Maze Size: {cls.MAZE_SIZE}x{cls.MAZE_SIZE}",
            f"  Seed: {cls.MAZE_SEED if cls.MAZE_SEED is not None else 'random'}",
            f"  State Dir: {cls.STATE_DIR}",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
