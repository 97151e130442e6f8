"""Collaborator protocols for board storage and user identity."""

from typing import Protocol

from ..models import Board, BoardOrdering


class StorageProtocol(Protocol):
    """Interface for board storage backends.

    Implementations raise PersistenceError subclasses (or AuthError) on
    failure and never apply a write partially.
    """

    async def load_board(self, user_id: str) -> Board:
        """Load the board owned by user_id.

        Creates and stores an empty default board if the user has none.
        """
        ...

    async def save_board(self, user_id: str, board: Board) -> None:
        """Replace the stored board with a full snapshot."""
        ...

    async def save_ordering(self, user_id: str, ordering: BoardOrdering) -> None:
        """Apply a new list and card order.

        Every id is resolved against the stored board. An unknown list or
        card id, a duplicate, or a stored card missing from the ordering
        raises InvalidIdError and nothing is written.
        """
        ...


class IdentityProtocol(Protocol):
    """Interface for the current session's user."""

    def current_user_id(self) -> str | None:
        """Return the signed-in user's id, or None when unauthenticated."""
        ...
