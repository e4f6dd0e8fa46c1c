"""ORM Models — SQLAlchemy declarative models for the four aggregates.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relationship edges are plain FK id columns; no relationship() cascades
    - Integer identity primary keys, assigned by the database on first flush

Design Decisions:
    - One file per entity for locality
    - No ORM-level cascade or lazy proxies: cascades are explicit service routines
      and nodes are loaded eagerly by the SQL stores
    - All models imported here so Base.metadata is complete before create_all/alembic
"""

from foodlist.models.household import Household  # noqa: F401
from foodlist.models.user import User  # noqa: F401
from foodlist.models.shopping_list import ShoppingList  # noqa: F401
from foodlist.models.item import Item  # noqa: F401
