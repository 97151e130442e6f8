"""Resolving drag-and-drop gestures into moves.

A finished drag names the dragged element and the element under the pointer
at release. resolve_drag() turns that into a concrete CardMove or ListMove
against the current board, or None when the drop changes nothing or refers
to something that no longer exists. apply_move() performs the move.

Ordering semantics: for a reorder within one list the card lands at the
index the target card occupied, using array_move's from/to contract. Dropping
a card onto a later card therefore places it after that card, onto an earlier
card places it before. Across lists the card is inserted before the target
card, or appended when dropped on the list itself.
"""

from __future__ import annotations

import logging

from ..models import Board, BoardList, CardMove, DragEnd, DragRef, ListMove, Move
from ..utils import array_move

logger = logging.getLogger(__name__)


def _list_for_target(board: Board, ref: DragRef) -> BoardList | None:
    """The list a drop target belongs to (the list itself or a card's list)."""
    if ref.kind == "list":
        return board.find_list(ref.id)
    return board.find_list_containing(ref.id)


def resolve_drag(board: Board, event: DragEnd) -> Move | None:
    """Resolve a finished drag into a move instruction.

    Returns None when there is nothing to do.
    """
    if event.over is None:
        logger.debug("resolve_drag: dropped outside any target")
        return None
    if event.active.id == event.over.id:
        return None

    if event.active.kind == "list":
        return _resolve_list_drag(board, event.active.id, event.over)
    return _resolve_card_drag(board, event.active.id, event.over, event.source_list_id)


def _resolve_card_drag(
    board: Board, card_id: str, over: DragRef, source_list_id: str | None
) -> CardMove | None:
    if source_list_id is None:
        source = board.find_list_containing(card_id)
    else:
        source = board.find_list(source_list_id)
    if source is None:
        logger.debug("resolve_drag: source list not found: %s", source_list_id)
        return None

    destination = _list_for_target(board, over)
    if destination is None:
        logger.debug("resolve_drag: drop target not found: %s", over.id)
        return None

    from_index = source.index_of(card_id)
    if from_index < 0:
        logger.debug("resolve_drag: card %s not in list %s", card_id, source.id)
        return None

    if source.id == destination.id:
        if over.kind == "list":
            # Dropped on empty space of its own list
            return None
        to_index = destination.index_of(over.id)
        if to_index == from_index:
            return None
    elif over.kind == "list":
        to_index = len(destination.tasks)
    else:
        to_index = destination.index_of(over.id)

    return CardMove(
        card_id=card_id,
        from_list_id=source.id,
        from_index=from_index,
        to_list_id=destination.id,
        to_index=to_index,
    )


def _resolve_list_drag(board: Board, list_id: str, over: DragRef) -> ListMove | None:
    from_index = board.list_index(list_id)
    if from_index < 0:
        logger.debug("resolve_drag: list not found: %s", list_id)
        return None

    destination = _list_for_target(board, over)
    if destination is None:
        logger.debug("resolve_drag: drop target not found: %s", over.id)
        return None

    to_index = board.list_index(destination.id)
    if to_index == from_index:
        return None
    return ListMove(list_id=list_id, from_index=from_index, to_index=to_index)


def apply_move(board: Board, move: Move | None) -> Board:
    """Apply a resolved move, returning a new board."""
    if move is None:
        return board

    if isinstance(move, ListMove):
        lists = array_move(board.lists, move.from_index, move.to_index)
        return board.model_copy(update={"lists": lists})

    source = board.find_list(move.from_list_id)
    destination = board.find_list(move.to_list_id)
    if source is None or destination is None:
        return board

    if move.same_list:
        tasks = array_move(source.tasks, move.from_index, move.to_index)
        updated = {source.id: source.model_copy(update={"tasks": tasks})}
    else:
        card = source.tasks[move.from_index]
        source_tasks = [c for i, c in enumerate(source.tasks) if i != move.from_index]
        destination_tasks = list(destination.tasks)
        destination_tasks.insert(move.to_index, card)
        updated = {
            source.id: source.model_copy(update={"tasks": source_tasks}),
            destination.id: destination.model_copy(update={"tasks": destination_tasks}),
        }

    lists = [updated.get(bl.id, bl) for bl in board.lists]
    return board.model_copy(update={"lists": lists})


def _ref_for(board: Board, element_id: str) -> DragRef | None:
    """Tag an untagged id, checking list ids first."""
    if board.find_list(element_id) is not None:
        return DragRef.for_list(element_id)
    if board.find_card(element_id) is not None:
        return DragRef.for_card(element_id)
    return None


def move_card(board: Board, active_id: str, over_id: str, source_list_id: str | None) -> Board:
    """Move a card dropped on over_id, which may be a card id or a list id."""
    if active_id == over_id:
        return board
    over = _ref_for(board, over_id)
    if over is None:
        logger.debug("move_card: drop target not found: %s", over_id)
        return board
    event = DragEnd(active=DragRef.for_card(active_id), over=over, source_list_id=source_list_id)
    return apply_move(board, resolve_drag(board, event))


def move_list(board: Board, active_list_id: str, over_id: str) -> Board:
    """Move a list dropped on over_id, which may be a list id or a card id."""
    if active_list_id == over_id:
        return board
    over = _ref_for(board, over_id)
    if over is None:
        logger.debug("move_list: drop target not found: %s", over_id)
        return board
    event = DragEnd(active=DragRef.for_list(active_list_id), over=over)
    return apply_move(board, resolve_drag(board, event))
