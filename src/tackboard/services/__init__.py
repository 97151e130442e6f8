"""Service layer for board logic."""

from . import board_ops
from .board_store import BoardStore, MutationPolicy
from .drag_resolver import apply_move, move_card, move_list, resolve_drag

__all__ = [
    "BoardStore",
    "MutationPolicy",
    "apply_move",
    "board_ops",
    "move_card",
    "move_list",
    "resolve_drag",
]
