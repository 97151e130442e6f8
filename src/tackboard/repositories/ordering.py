"""Applying an ordering delta to a stored board."""

from ..errors import InvalidIdError
from ..models import Board, BoardOrdering, Card


def apply_ordering(board: Board, ordering: BoardOrdering) -> Board:
    """Rebuild board in the order given by an ordering delta.

    Each id in the delta is resolved against the stored board. Cards keep
    their stored title and content.

    Raises:
        InvalidIdError: Unknown or duplicate ids, or a stored list or card
            left out of the delta.
    """
    cards: dict[str, Card] = {card.id: card for bl in board.lists for card in bl.tasks}
    stored_lists = {bl.id: bl for bl in board.lists}

    seen_lists: set[str] = set()
    seen_cards: set[str] = set()
    lists = []
    for entry in ordering.lists:
        stored = stored_lists.get(entry.id)
        if stored is None:
            raise InvalidIdError(f"Unknown list id: {entry.id}")
        if entry.id in seen_lists:
            raise InvalidIdError(f"Duplicate list id: {entry.id}")
        seen_lists.add(entry.id)

        tasks = []
        for card_id in entry.card_ids:
            card = cards.get(card_id)
            if card is None:
                raise InvalidIdError(f"Unknown task id: {card_id}")
            if card_id in seen_cards:
                raise InvalidIdError(f"Duplicate task id: {card_id}")
            seen_cards.add(card_id)
            tasks.append(card)
        lists.append(stored.model_copy(update={"tasks": tasks}))

    missing_lists = set(stored_lists) - seen_lists
    if missing_lists:
        raise InvalidIdError(f"Ordering is missing lists: {', '.join(sorted(missing_lists))}")
    missing_cards = set(cards) - seen_cards
    if missing_cards:
        raise InvalidIdError(f"Ordering is missing tasks: {', '.join(sorted(missing_cards))}")

    return board.model_copy(update={"lists": lists})
