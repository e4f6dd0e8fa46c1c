"""Item ORM — persists one entry of a shopping list.

Invariants:
    - quantity and is_checked are non-nullable
    - shopping_list_id is the owning edge; added_by_user_id is a non-owning reference
    - added_by_user_id is nulled (not cascaded) when the user is deleted

Design Decisions:
    - added_at doubles as the creation timestamp and is never rewritten on update
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from foodlist.db.base import Base


class Item(Base):
    """Item table."""
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_checked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    shopping_list_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("shopping_lists.id"), nullable=True, index=True,
    )
    added_by_user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True, index=True,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
