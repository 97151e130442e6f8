"""In-memory board storage."""

from __future__ import annotations

import logging

from ..errors import NotFoundError, PersistenceError
from ..models import DEFAULT_BOARD_TITLE, Board, BoardOrdering
from ..utils.ids import new_board_id
from .ordering import apply_ordering

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Keeps one board per user in a dict.

    Set fail_with to an exception to make every write raise it; used to
    exercise rollback paths.
    """

    def __init__(self, boards: dict[str, Board] | None = None) -> None:
        self.boards: dict[str, Board] = dict(boards or {})
        self.fail_with: PersistenceError | None = None
        self.calls: list[str] = []

    async def load_board(self, user_id: str) -> Board:
        self.calls.append("load_board")
        board = self.boards.get(user_id)
        if board is None:
            board = Board(id=new_board_id(), title=DEFAULT_BOARD_TITLE, lists=[])
            self.boards[user_id] = board
            logger.info("Created default board for %s", user_id)
        return board.model_copy(deep=True)

    async def save_board(self, user_id: str, board: Board) -> None:
        self.calls.append("save_board")
        if self.fail_with is not None:
            raise self.fail_with
        self.boards[user_id] = board.model_copy(deep=True)

    async def save_ordering(self, user_id: str, ordering: BoardOrdering) -> None:
        self.calls.append("save_ordering")
        if self.fail_with is not None:
            raise self.fail_with
        stored = self.boards.get(user_id)
        if stored is None:
            raise NotFoundError(f"No board stored for {user_id}")
        self.boards[user_id] = apply_ordering(stored, ordering)
