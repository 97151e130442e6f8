"""Data models."""

from .board import DEFAULT_BOARD_TITLE, Board, BoardList, Card
from .drag import CardMove, DragEnd, DragKind, DragRef, ListMove, Move
from .ordering import BoardOrdering, ListOrdering
from .state import BoardState, ErrorPayload, MutationOutcome, MutationResult

__all__ = [
    "DEFAULT_BOARD_TITLE",
    "Board",
    "BoardList",
    "BoardOrdering",
    "BoardState",
    "Card",
    "CardMove",
    "DragEnd",
    "DragKind",
    "DragRef",
    "ErrorPayload",
    "ListMove",
    "ListOrdering",
    "Move",
    "MutationOutcome",
    "MutationResult",
]
