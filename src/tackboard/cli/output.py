"""Colorful CLI output helpers."""

import sys

from ..models import Board

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color() -> bool:
    """Check if terminal supports color output."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    """Apply color to text if terminal supports it."""
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    print(f"{_colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    print(f"{_colorize(BULLET, YELLOW)} {message}")


def header(message: str) -> None:
    """Print header message in blue."""
    print(_colorize(message, BLUE))


def error(message: str) -> None:
    """Print error message with red cross."""
    print(f"{_colorize(CROSS, RED)} {message}")


def render_board(board: Board) -> None:
    """Print a board as indented lists of cards, ids dimmed."""
    header(f"{board.title}  {_colorize(board.id, DIM)}")
    if not board.lists:
        info("No lists yet")
        return
    for board_list in board.lists:
        print()
        header(f"{board_list.title} ({len(board_list.tasks)})  {_colorize(board_list.id, DIM)}")
        for card in board_list.tasks:
            print(f"  {BULLET} {card.title}  {_colorize(card.id, DIM)}")
            if card.content:
                for line in card.content.splitlines():
                    print(f"      {line}")
