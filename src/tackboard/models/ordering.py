"""Ordering delta models.

An ordering delta carries only ids: every list in board order, each with
its card ids in display order. It is sent instead of the full board for
pure reorders so card content is not re-transmitted on every drag.
"""

from pydantic import BaseModel, Field


class ListOrdering(BaseModel):
    """Ordered card ids of a single list."""

    id: str
    card_ids: list[str] = Field(default_factory=list, alias="cardIds")

    model_config = {
        "populate_by_name": True,
    }


class BoardOrdering(BaseModel):
    """Ordered lists of a board, each with its ordered card ids."""

    lists: list[ListOrdering] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """Wire format, e.g. {"lists": [{"id": "list-1", "cardIds": ["task-1"]}]}."""
        return self.model_dump(by_alias=True)
