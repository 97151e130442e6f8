"""Drag gesture models.

Drag events carry tagged references so the resolver never has to guess
whether an id names a list or a card.
"""

from typing import Literal

from pydantic import BaseModel

DragKind = Literal["list", "card"]


class DragRef(BaseModel):
    """A dragged element or a drop target."""

    kind: DragKind
    id: str

    model_config = {"frozen": True}

    @classmethod
    def for_card(cls, card_id: str) -> "DragRef":
        return cls(kind="card", id=card_id)

    @classmethod
    def for_list(cls, list_id: str) -> "DragRef":
        return cls(kind="list", id=list_id)


class DragEnd(BaseModel):
    """A finished drag gesture.

    source_list_id is captured at drag start; the card may already have
    been moved by an intermediate render by the time the drag ends.
    """

    active: DragRef
    over: DragRef | None = None
    source_list_id: str | None = None

    model_config = {"frozen": True}


class CardMove(BaseModel):
    """Resolved instruction: relocate one card."""

    card_id: str
    from_list_id: str
    from_index: int
    to_list_id: str
    to_index: int

    model_config = {"frozen": True}

    @property
    def same_list(self) -> bool:
        return self.from_list_id == self.to_list_id


class ListMove(BaseModel):
    """Resolved instruction: relocate one list."""

    list_id: str
    from_index: int
    to_index: int

    model_config = {"frozen": True}


Move = CardMove | ListMove
