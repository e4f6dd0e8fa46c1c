"""Item Schemas — create/update/response/display records.

Invariants:
    - name: 1-200 chars, stripped, non-empty
    - quantity >= 0
    - addedByUserId is a non-owning reference; shoppingListId is the owner
"""

from datetime import datetime

from pydantic import Field, field_validator

from foodlist.schemas.base import WireRecord, strip_required


class ItemCreate(WireRecord):
    """Item creation."""
    name: str = Field(min_length=1, max_length=200)
    quantity: int = Field(1, ge=0)
    is_checked: bool = False
    added_by_user_id: int | None = None
    shopping_list_id: int | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v, "name")


class ItemUpdate(ItemCreate):
    """Item update — only fields present in the body are applied."""
    id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=200)


class ItemResponse(WireRecord):
    """Item response — flat ids for both references."""
    id: int
    name: str
    quantity: int
    is_checked: bool
    added_at: datetime | None = None
    added_by_user_id: int | None = None
    shopping_list_id: int | None = None


class ItemDisplay(ItemResponse):
    """Item read view — adds the adder's username and the list's name."""
    added_by_username: str | None = None
    shopping_list_name: str | None = None
