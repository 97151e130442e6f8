"""Observable state of a board store."""

from enum import Enum

from pydantic import BaseModel

from .board import Board


class MutationOutcome(str, Enum):
    """How a mutation request ended."""

    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    REJECTED = "rejected"
    NOOP = "noop"
    IGNORED = "ignored"


class ErrorPayload(BaseModel):
    """User-visible error. The only thing errors surface as."""

    message: str
    kind: str = "error"

    model_config = {"frozen": True}


class BoardState(BaseModel):
    """Snapshot handed to the presentation layer."""

    board: Board | None = None
    is_saving: bool = False
    error: ErrorPayload | None = None

    model_config = {"frozen": True}


class MutationResult(BaseModel):
    """Result of a single BoardStore mutation call."""

    outcome: MutationOutcome
    board: Board | None = None
    error: ErrorPayload | None = None

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        """True when the board ended in the requested state."""
        return self.outcome in (MutationOutcome.COMMITTED, MutationOutcome.NOOP)
