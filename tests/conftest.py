"""Shared fixtures."""

import pytest

from tackboard.models import Board, BoardList, Card
from tackboard.repositories import MemoryStorage, StaticIdentity
from tackboard.services import BoardStore

USER = "user-1"


def make_board() -> Board:
    """Board with a two-card list, a one-card list and an empty list."""
    return Board(
        id="board-1",
        title="Test Board",
        lists=[
            BoardList(
                id="list-1",
                title="To Do",
                tasks=[
                    Card(id="task-1", title="Task 1"),
                    Card(id="task-2", title="Task 2"),
                ],
            ),
            BoardList(
                id="list-2",
                title="In Progress",
                tasks=[Card(id="task-3", title="Task 3", content="Details")],
            ),
            BoardList(id="list-3", title="Done", tasks=[]),
        ],
    )


def ids(board: Board, list_id: str) -> list[str]:
    """Card ids of one list."""
    board_list = board.find_list(list_id)
    assert board_list is not None
    return board_list.card_ids()


@pytest.fixture
def board() -> Board:
    return make_board()


@pytest.fixture
def storage(board: Board) -> MemoryStorage:
    return MemoryStorage({USER: board})


@pytest.fixture
def store(storage: MemoryStorage, board: Board) -> BoardStore:
    """Store with the sample board already loaded."""
    return BoardStore(storage, StaticIdentity(USER), board=board)
