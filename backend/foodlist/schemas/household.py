"""Household Schemas — create/update/response records.

Invariants:
    - name: 1-200 chars, stripped, non-empty
    - userIds / shoppingListIds are flat id lists, never nested records
    - Duplicate ids in a list collapse to one member (membership is a set)
"""

from datetime import datetime

from pydantic import Field, field_validator

from foodlist.schemas.base import WireRecord, strip_required


class HouseholdCreate(WireRecord):
    """Household creation — optional initial members and lists."""
    name: str = Field(min_length=1, max_length=200)
    user_ids: list[int] | None = None
    shopping_list_ids: list[int] | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v, "name")


class HouseholdUpdate(HouseholdCreate):
    """Household update — id comes from the path; lists present replace membership."""
    id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=200)


class HouseholdResponse(WireRecord):
    """Household response — member and list ids only."""
    id: int
    name: str
    created_at: datetime | None = None
    user_ids: list[int] = []
    shopping_list_ids: list[int] = []
