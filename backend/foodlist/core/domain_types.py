"""Domain Types — identity types for node ids and references, plus the entity and edge enums.

Invariants:
    - HouseholdId, UserId, ShoppingListId, ItemId wrap server-assigned ints — never reused
    - Every relationship edge is described once in EDGES (owner, child, attributes, owning flag)
    - All valid entity/edge kinds encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (error envelopes, logs)
    - EdgeSpec table over per-edge functions: the synchronizer stays generic
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

HouseholdId = NewType("HouseholdId", int)
UserId = NewType("UserId", int)
ShoppingListId = NewType("ShoppingListId", int)
ItemId = NewType("ItemId", int)


# ─── Enums ───────────────────────────────────────────────────────

class EntityType(str, Enum):
    """The four aggregates — value is the human-readable name used in errors."""
    HOUSEHOLD = "Household"
    USER = "User"
    SHOPPING_LIST = "ShoppingList"
    ITEM = "Item"


class EdgeType(str, Enum):
    """Relationship edges between aggregates."""
    HOUSEHOLD_USERS = "household_users"
    HOUSEHOLD_SHOPPING_LISTS = "household_shopping_lists"
    SHOPPING_LIST_ITEMS = "shopping_list_items"
    ITEM_ADDED_BY = "item_added_by"


# ─── Edge Table ──────────────────────────────────────────────────

@dataclass(frozen=True)
class EdgeSpec:
    """Shape of one edge in the entity graph.

    collection_attr is None for referencing edges that keep no inverse
    collection on the referenced entity.
    """
    owner_type: EntityType
    child_type: EntityType
    collection_attr: str | None
    back_ref_attr: str
    owning: bool


EDGES: dict[EdgeType, EdgeSpec] = {
    EdgeType.HOUSEHOLD_USERS: EdgeSpec(
        EntityType.HOUSEHOLD, EntityType.USER,
        "user_ids", "household_id", owning=True,
    ),
    EdgeType.HOUSEHOLD_SHOPPING_LISTS: EdgeSpec(
        EntityType.HOUSEHOLD, EntityType.SHOPPING_LIST,
        "shopping_list_ids", "household_id", owning=True,
    ),
    EdgeType.SHOPPING_LIST_ITEMS: EdgeSpec(
        EntityType.SHOPPING_LIST, EntityType.ITEM,
        "item_ids", "shopping_list_id", owning=True,
    ),
    EdgeType.ITEM_ADDED_BY: EdgeSpec(
        EntityType.USER, EntityType.ITEM,
        None, "added_by_user_id", owning=False,
    ),
}
