"""Board store: optimistic mutations with rollback.

The store owns the current board snapshot. Each mutation computes a new
board with a pure transform, shows it immediately, then persists it. If
persisting fails the pre-mutation snapshot is restored and an error payload
is published instead. Only one mutation is persisting at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Literal

from ..errors import AuthError, BoardError, PersistenceError, ValidationError
from ..models import (
    Board,
    BoardState,
    DragEnd,
    ErrorPayload,
    MutationOutcome,
    MutationResult,
)
from . import board_ops
from .drag_resolver import apply_move, resolve_drag

if TYPE_CHECKING:
    from ..repositories import IdentityProtocol, StorageProtocol

logger = logging.getLogger(__name__)

MutationPolicy = Literal["ignore", "queue"]
Observer = Callable[[BoardState], None]
Transform = Callable[[Board], Board]

# How a committed candidate is written back
PERSIST_BOARD = "board"
PERSIST_ORDERING = "ordering"


class BoardStore:
    """Holds a board and applies mutations to it optimistically.

    Args:
        storage: Backend used to load and persist the board.
        identity: Source of the current user id.
        board: Optional initial board (skips bootstrap).
        policy: What to do with a mutation requested while another one is
            persisting. "ignore" drops it, "queue" runs it afterwards.
    """

    def __init__(
        self,
        storage: StorageProtocol,
        identity: IdentityProtocol,
        board: Board | None = None,
        policy: MutationPolicy = "ignore",
    ) -> None:
        if policy not in ("ignore", "queue"):
            raise ValueError(f"Unknown mutation policy: {policy}")
        self.storage = storage
        self.identity = identity
        self.policy = policy
        self._state = BoardState(board=board)
        self._observers: list[Observer] = []
        self._lock = asyncio.Lock()

    # --- State ---

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def board(self) -> Board | None:
        return self._state.board

    @property
    def is_saving(self) -> bool:
        return self._state.is_saving

    @property
    def error(self) -> ErrorPayload | None:
        return self._state.error

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a callback for state changes. Returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def clear_error(self) -> None:
        """Dismiss the current error message."""
        if self._state.error is not None:
            self._set_state(error=None)

    def _set_state(self, **changes: object) -> None:
        self._state = self._state.model_copy(update=changes)
        for observer in list(self._observers):
            try:
                observer(self._state)
            except Exception:
                logger.exception("Board state observer failed")

    # --- Bootstrap ---

    async def bootstrap(self) -> Board | None:
        """Load the board once. Later calls return the loaded board."""
        if self._state.board is not None:
            return self._state.board

        user_id = self.identity.current_user_id()
        if user_id is None:
            logger.warning("bootstrap: no authenticated user")
            self._set_state(error=_payload(AuthError("Not signed in")))
            return None

        try:
            board = await self.storage.load_board(user_id)
        except BoardError as e:
            logger.error("Failed to load board for %s: %s", user_id, e)
            self._set_state(error=_payload(e, "Failed to load board"))
            return None
        except Exception:
            logger.exception("Unexpected error loading board for %s", user_id)
            self._set_state(error=ErrorPayload(message="Failed to load board", kind="error"))
            return None

        logger.info("Board loaded: %s (%d lists)", board.id, len(board.lists))
        self._set_state(board=board, error=None)
        return board

    # --- Mutations ---

    async def add_list(self, title: str) -> MutationResult:
        return await self._mutate(
            "add list",
            lambda board: board_ops.add_list(board, title),
            "Failed to add list",
        )

    async def edit_list(self, list_id: str, title: str) -> MutationResult:
        return await self._mutate(
            "edit list",
            lambda board: board_ops.edit_list(board, list_id, title),
            "Failed to edit list",
        )

    async def delete_list(self, list_id: str) -> MutationResult:
        return await self._mutate(
            "delete list",
            lambda board: board_ops.delete_list(board, list_id),
            "Failed to delete list",
        )

    async def add_card(self, list_id: str, title: str, content: str = "") -> MutationResult:
        return await self._mutate(
            "add task",
            lambda board: board_ops.add_card(board, list_id, title, content),
            "Failed to add task",
        )

    async def edit_card(
        self, list_id: str, card_id: str, title: str, content: str = ""
    ) -> MutationResult:
        return await self._mutate(
            "edit task",
            lambda board: board_ops.edit_card(board, list_id, card_id, title, content),
            "Failed to edit task",
        )

    async def delete_card(self, list_id: str, card_id: str) -> MutationResult:
        return await self._mutate(
            "delete task",
            lambda board: board_ops.delete_card(board, list_id, card_id),
            "Failed to delete task",
        )

    async def move_card(
        self, active_id: str, over_id: str, source_list_id: str | None
    ) -> MutationResult:
        return await self._mutate(
            "move task",
            lambda board: board_ops.move_card(board, active_id, over_id, source_list_id),
            "Failed to move task",
            persist=PERSIST_ORDERING,
        )

    async def move_list(self, active_list_id: str, over_id: str) -> MutationResult:
        return await self._mutate(
            "move list",
            lambda board: board_ops.move_list(board, active_list_id, over_id),
            "Failed to move list",
            persist=PERSIST_ORDERING,
        )

    async def drag_end(self, event: DragEnd) -> MutationResult:
        """Apply a finished drag gesture."""
        if event.active.kind == "list":
            label, message = "move list", "Failed to move list"
        else:
            label, message = "move task", "Failed to move task"
        return await self._mutate(
            label,
            lambda board: apply_move(board, resolve_drag(board, event)),
            message,
            persist=PERSIST_ORDERING,
        )

    async def _mutate(
        self,
        label: str,
        transform: Transform,
        failure_message: str,
        persist: str = PERSIST_BOARD,
    ) -> MutationResult:
        """Run one mutation through apply, persist and commit or rollback."""
        if self._lock.locked() and self.policy == "ignore":
            logger.debug("%s ignored: another change is still saving", label)
            return MutationResult(outcome=MutationOutcome.IGNORED, board=self._state.board)

        async with self._lock:
            return await self._run(label, transform, failure_message, persist)

    async def _run(
        self,
        label: str,
        transform: Transform,
        failure_message: str,
        persist: str,
    ) -> MutationResult:
        current = self._state.board
        if current is None:
            logger.debug("%s ignored: no board loaded", label)
            return MutationResult(outcome=MutationOutcome.IGNORED)

        original = current.model_copy(deep=True)

        try:
            candidate = transform(current)
        except ValidationError as e:
            logger.info("%s rejected: %s", label, e)
            return self._reject(e)
        except Exception:
            logger.exception("%s failed before any change was applied", label)
            return self._reject(BoardError(failure_message))

        if candidate == original:
            logger.debug("%s: nothing changed", label)
            self._set_state(error=None)
            return MutationResult(outcome=MutationOutcome.NOOP, board=current)

        user_id = self.identity.current_user_id()
        if user_id is None:
            logger.warning("%s rejected: no authenticated user", label)
            return self._reject(AuthError("Not signed in"))

        # Optimistic apply
        self._set_state(board=candidate, is_saving=True, error=None)

        try:
            if persist == PERSIST_ORDERING:
                await self.storage.save_ordering(user_id, candidate.ordering())
            else:
                await self.storage.save_board(user_id, candidate)
        except (PersistenceError, AuthError) as e:
            logger.warning("%s failed, rolling back: %s", label, e)
            error = _payload(e, failure_message)
            self._set_state(board=original, is_saving=False, error=error)
            return MutationResult(
                outcome=MutationOutcome.ROLLED_BACK, board=original, error=error
            )
        except Exception:
            logger.exception("%s failed unexpectedly, rolling back", label)
            error = ErrorPayload(message=failure_message, kind="error")
            self._set_state(board=original, is_saving=False, error=error)
            return MutationResult(
                outcome=MutationOutcome.ROLLED_BACK, board=original, error=error
            )

        logger.info("%s committed", label)
        self._set_state(is_saving=False)
        return MutationResult(outcome=MutationOutcome.COMMITTED, board=candidate)

    def _reject(self, e: BoardError) -> MutationResult:
        error = _payload(e)
        self._set_state(error=error)
        return MutationResult(
            outcome=MutationOutcome.REJECTED, board=self._state.board, error=error
        )


def _payload(e: BoardError, message: str | None = None) -> ErrorPayload:
    """Build the user-visible error for an exception."""
    if isinstance(e, AuthError):
        # Auth failures read the same whatever operation hit them
        return ErrorPayload(message=f"Unauthorized: {e}", kind=e.kind)
    return ErrorPayload(message=message or str(e), kind=e.kind)
