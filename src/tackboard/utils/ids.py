"""Identifier generation for lists and cards."""

import uuid


def new_list_id() -> str:
    """Generate a fresh list id (list-<uuid4>)."""
    return f"list-{uuid.uuid4()}"


def new_card_id() -> str:
    """Generate a fresh card id (task-<uuid4>)."""
    return f"task-{uuid.uuid4()}"


def new_board_id() -> str:
    """Generate a fresh board id (board-<uuid4>)."""
    return f"board-{uuid.uuid4()}"
