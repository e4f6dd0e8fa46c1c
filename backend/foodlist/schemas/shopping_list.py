"""ShoppingList Schemas — create/update/response/display records.

Invariants:
    - name: 1-200 chars, stripped, non-empty
    - Plain responses carry itemIds only
    - The display view embeds items as flat ItemResponse records; items own no
      collections, so the embedding cannot recurse
"""

from datetime import datetime

from pydantic import Field, field_validator

from foodlist.schemas.base import WireRecord, strip_required
from foodlist.schemas.item import ItemResponse


class ShoppingListCreate(WireRecord):
    """ShoppingList creation."""
    name: str = Field(min_length=1, max_length=200)
    is_default: bool = False
    household_id: int | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v, "name")


class ShoppingListUpdate(ShoppingListCreate):
    """ShoppingList update — only fields present in the body are applied."""
    id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=200)


class ShoppingListResponse(WireRecord):
    """ShoppingList response — item ids only."""
    id: int
    name: str
    is_default: bool
    created_at: datetime | None = None
    household_id: int | None = None
    item_ids: list[int] = []


class ShoppingListDisplay(ShoppingListResponse):
    """ShoppingList read view — household name plus its items."""
    household_name: str | None = None
    items: list[ItemResponse] = []
