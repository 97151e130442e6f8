"""Tests for applying ordering deltas to stored boards."""

import pytest

from tackboard.errors import InvalidIdError
from tackboard.models import BoardOrdering, ListOrdering
from tackboard.repositories import apply_ordering

from .conftest import ids, make_board


def _ordering(*entries: tuple[str, list[str]]) -> BoardOrdering:
    return BoardOrdering(lists=[ListOrdering(id=i, card_ids=c) for i, c in entries])


class TestApplyOrdering:
    """Tests for apply_ordering."""

    def test_reorders_cards_and_lists(self):
        """Lists and cards follow the delta; card data comes from the store."""
        board = make_board()
        ordering = _ordering(
            ("list-2", ["task-3", "task-1"]),
            ("list-1", ["task-2"]),
            ("list-3", []),
        )

        result = apply_ordering(board, ordering)

        assert result.list_ids() == ["list-2", "list-1", "list-3"]
        assert ids(result, "list-2") == ["task-3", "task-1"]
        assert result.find_card("task-3").content == "Details"
        assert result.find_list("list-2").title == "In Progress"

    def test_identity_ordering(self):
        """Applying the board's own ordering changes nothing."""
        board = make_board()
        assert apply_ordering(board, board.ordering()) == board

    @pytest.mark.parametrize(
        "ordering",
        [
            # unknown card
            _ordering(("list-1", ["task-1", "task-2", "ghost"]), ("list-2", ["task-3"]), ("list-3", [])),
            # unknown list
            _ordering(("list-1", ["task-1", "task-2"]), ("list-2", ["task-3"]), ("list-9", [])),
            # duplicate card
            _ordering(("list-1", ["task-1", "task-2"]), ("list-2", ["task-3", "task-1"]), ("list-3", [])),
            # duplicate list
            _ordering(("list-1", ["task-1", "task-2"]), ("list-1", []), ("list-2", ["task-3"]), ("list-3", [])),
            # card left out
            _ordering(("list-1", ["task-1"]), ("list-2", ["task-3"]), ("list-3", [])),
            # list left out
            _ordering(("list-1", ["task-1", "task-2"]), ("list-2", ["task-3"])),
        ],
    )
    def test_invalid_orderings_raise(self, ordering):
        """Any id problem fails the whole ordering."""
        board = make_board()
        with pytest.raises(InvalidIdError):
            apply_ordering(board, ordering)
        assert board == make_board()
