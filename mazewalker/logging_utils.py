"""Logging utilities for Mazewalker sessions.

Provides color-coded output to distinguish maze engine work from hand-offs to
the host (image prompts) and from outcomes (wins, errors).
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Maze engine (generation, movement, solving)
    YELLOW = "\033[93m"    # Image prompt hand-off to the host
    RED = "\033[91m"       # Errors and quits
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if MAZEWALKER_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("MAZEWALKER_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log a maze engine operation (blue)."""
    print(colored(f"{LOG_TAG_DETERMINISTIC} {message}", Color.BLUE))


def log_image(message: str) -> None:
    """Log an image prompt hand-off (yellow)."""
    print(colored(f"{LOG_TAG_IMAGE} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error or a quit (red)."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"  # Maze engine operation
LOG_TAG_IMAGE = "[IMG]"        # Image prompt
LOG_TAG_ERROR = "[!]"          # Error/quit
LOG_TAG_SUCCESS = "[✓]"        # Success
LOG_TAG_INFO = "[i]"           # Information
