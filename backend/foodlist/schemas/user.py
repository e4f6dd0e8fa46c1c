"""User Schemas — create/update/response records.

Invariants:
    - username: 1-100 chars, stripped, non-empty
    - password is write-only: accepted on create/update, never in any response
    - householdId null means unaffiliated
"""

from datetime import datetime

from pydantic import Field, field_validator

from foodlist.schemas.base import WireRecord, strip_required


class UserCreate(WireRecord):
    """User creation."""
    username: str = Field(min_length=1, max_length=100)
    password: str | None = Field(None, min_length=1, max_length=200)
    name: str | None = Field(None, max_length=200)
    enabled: bool = True
    household_id: int | None = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return strip_required(v, "username")


class UserUpdate(UserCreate):
    """User update — only fields present in the body are applied."""
    id: int | None = None
    username: str | None = Field(None, min_length=1, max_length=100)


class UserResponse(WireRecord):
    """User response — never carries the password hash."""
    id: int
    username: str
    name: str | None = None
    enabled: bool
    created_at: datetime | None = None
    household_id: int | None = None


class UserDisplay(UserResponse):
    """User read view — adds the owning household's name."""
    household_name: str | None = None
