"""Household ORM — persists the root aggregate that owns users and shopping lists.

Invariants:
    - name is non-nullable
    - created_at set once on insert, never updated

Design Decisions:
    - Member/list collections are not stored here: they are derived from the
      household_id FK on users and shopping_lists
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from foodlist.db.base import Base


class Household(Base):
    """Household table."""
    __tablename__ = "households"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
