"""ShoppingList ORM — persists a household's shopping lists.

Invariants:
    - name is non-nullable
    - household_id is nullable; at most one owning household

Design Decisions:
    - Items are not stored here: they are derived from items.shopping_list_id
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from foodlist.db.base import Base


class ShoppingList(Base):
    """ShoppingList table."""
    __tablename__ = "shopping_lists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    household_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("households.id"), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
