"""Board domain models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field

from .ordering import BoardOrdering, ListOrdering

DEFAULT_BOARD_TITLE = "My First Board"


class Card(BaseModel):
    """A single unit of work. Belongs to exactly one list."""

    id: str
    title: str = Field(..., min_length=1)
    content: str = ""


class BoardList(BaseModel):
    """A named column of cards. Order of tasks is display order."""

    id: str
    title: str = Field(..., min_length=1)
    tasks: list[Card] = Field(default_factory=list)

    def index_of(self, card_id: str) -> int:
        """Position of a card in this list, or -1 if not found."""
        for index, card in enumerate(self.tasks):
            if card.id == card_id:
                return index
        return -1

    def card_ids(self) -> list[str]:
        return [card.id for card in self.tasks]


class Board(BaseModel):
    """Top-level container of ordered lists for one user."""

    # The board API returns its database key as _id
    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    title: str
    lists: list[BoardList] = Field(default_factory=list)

    def find_list(self, list_id: str | None) -> BoardList | None:
        """Get a list by id."""
        if list_id is None:
            return None
        for board_list in self.lists:
            if board_list.id == list_id:
                return board_list
        return None

    def list_index(self, list_id: str) -> int:
        """Position of a list on the board, or -1 if not found."""
        for index, board_list in enumerate(self.lists):
            if board_list.id == list_id:
                return index
        return -1

    def find_list_containing(self, card_id: str) -> BoardList | None:
        """Get the list that currently holds a card."""
        for board_list in self.lists:
            if board_list.index_of(card_id) >= 0:
                return board_list
        return None

    def find_card(self, card_id: str) -> Card | None:
        """Get a card by id, searching every list."""
        for board_list in self.lists:
            for card in board_list.tasks:
                if card.id == card_id:
                    return card
        return None

    def list_ids(self) -> list[str]:
        return [board_list.id for board_list in self.lists]

    def card_ids(self) -> list[str]:
        """All card ids on the board, in list then card order."""
        return [card.id for board_list in self.lists for card in board_list.tasks]

    def ordering(self) -> BoardOrdering:
        """Compact ordering of lists and cards, without titles or content."""
        return BoardOrdering(
            lists=[
                ListOrdering(id=board_list.id, card_ids=board_list.card_ids())
                for board_list in self.lists
            ]
        )
