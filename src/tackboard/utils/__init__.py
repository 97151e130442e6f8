"""Utility functions."""

from .ids import new_board_id, new_card_id, new_list_id
from .ordering import array_move

__all__ = [
    "array_move",
    "new_board_id",
    "new_card_id",
    "new_list_id",
]
