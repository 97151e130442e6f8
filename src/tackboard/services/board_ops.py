"""Pure board transformations.

Every function takes a Board and returns a Board. Inputs are never mutated.
A reference to a list or card that does not exist is a no-op and the
original board is returned; only invalid input (a blank title) raises.
"""

from __future__ import annotations

import logging

from ..errors import ValidationError
from ..models import Board, BoardList, Card
from ..utils import new_card_id, new_list_id
from .drag_resolver import move_card, move_list

__all__ = [
    "add_card",
    "add_list",
    "delete_card",
    "delete_list",
    "edit_card",
    "edit_list",
    "move_card",
    "move_list",
]

logger = logging.getLogger(__name__)


def _clean_title(title: str, what: str) -> str:
    """Strip a title, rejecting blank ones."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError(f"{what} title cannot be empty")
    return cleaned


def _replace_list(board: Board, updated: BoardList) -> Board:
    lists = [updated if bl.id == updated.id else bl for bl in board.lists]
    return board.model_copy(update={"lists": lists})


# --- Lists ---


def add_list(board: Board, title: str, list_id: str | None = None) -> Board:
    """Append a new, empty list to the end of the board."""
    title = _clean_title(title, "List")
    if list_id is not None and board.find_list(list_id) is not None:
        raise ValidationError(f"List id already in use: {list_id}")
    new_list = BoardList(id=list_id or new_list_id(), title=title, tasks=[])
    return board.model_copy(update={"lists": [*board.lists, new_list]})


def edit_list(board: Board, list_id: str, new_title: str) -> Board:
    """Rename a list."""
    new_title = _clean_title(new_title, "List")
    target = board.find_list(list_id)
    if target is None:
        logger.debug("edit_list: list not found: %s", list_id)
        return board
    return _replace_list(board, target.model_copy(update={"title": new_title}))


def delete_list(board: Board, list_id: str) -> Board:
    """Remove a list together with all of its cards."""
    if board.find_list(list_id) is None:
        logger.debug("delete_list: list not found: %s", list_id)
        return board
    lists = [bl for bl in board.lists if bl.id != list_id]
    return board.model_copy(update={"lists": lists})


# --- Cards ---


def add_card(
    board: Board,
    list_id: str,
    title: str,
    content: str = "",
    card_id: str | None = None,
) -> Board:
    """Append a new card to the end of a list."""
    title = _clean_title(title, "Task")
    if card_id is not None and board.find_card(card_id) is not None:
        raise ValidationError(f"Task id already in use: {card_id}")
    target = board.find_list(list_id)
    if target is None:
        logger.debug("add_card: list not found: %s", list_id)
        return board
    card = Card(id=card_id or new_card_id(), title=title, content=content or "")
    return _replace_list(board, target.model_copy(update={"tasks": [*target.tasks, card]}))


def edit_card(
    board: Board,
    list_id: str,
    card_id: str,
    new_title: str,
    new_content: str = "",
) -> Board:
    """Replace the title and content of a card."""
    new_title = _clean_title(new_title, "Task")
    target = board.find_list(list_id)
    if target is None or target.index_of(card_id) < 0:
        logger.debug("edit_card: card not found: %s in %s", card_id, list_id)
        return board

    tasks = [
        card.model_copy(update={"title": new_title, "content": new_content or ""})
        if card.id == card_id
        else card
        for card in target.tasks
    ]
    return _replace_list(board, target.model_copy(update={"tasks": tasks}))


def delete_card(board: Board, list_id: str, card_id: str) -> Board:
    """Remove a card from a list."""
    target = board.find_list(list_id)
    if target is None or target.index_of(card_id) < 0:
        logger.debug("delete_card: card not found: %s in %s", card_id, list_id)
        return board
    tasks = [card for card in target.tasks if card.id != card_id]
    return _replace_list(board, target.model_copy(update={"tasks": tasks}))

