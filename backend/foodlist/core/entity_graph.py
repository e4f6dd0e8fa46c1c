"""Entity Graph — arena of aggregate nodes addressed by (EntityType, id).

Invariants:
    - Relationship fields hold ids, never object references (no cycles in memory)
    - A node is addressable only once it has an id (assigned by the Identity Store)
    - Dirty tracking records every node whose stored state changed since the last flush

Design Decisions:
    - Arena over ORM back_populates: both sides of an edge are plain data that the
      synchronizer updates explicitly, so consistency is testable without a DB
    - Collection sides are sets: order irrelevant, uniqueness by id for free
    - No IO here: stores load nodes into the arena, services flush dirty nodes out
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from foodlist.core.domain_types import EntityType, HouseholdId, ItemId, ShoppingListId, UserId


@dataclass
class HouseholdNode:
    """Household — owns users and shopping lists."""
    name: str
    id: HouseholdId | None = None
    created_at: datetime | None = None
    user_ids: set[UserId] = field(default_factory=set)
    shopping_list_ids: set[ShoppingListId] = field(default_factory=set)

    entity_type = EntityType.HOUSEHOLD


@dataclass
class UserNode:
    """User — optional back-reference to one household."""
    username: str
    password_hash: str = ""
    name: str | None = None
    enabled: bool = True
    id: UserId | None = None
    created_at: datetime | None = None
    household_id: HouseholdId | None = None

    entity_type = EntityType.USER


@dataclass
class ShoppingListNode:
    """ShoppingList — belongs to one household, owns items."""
    name: str
    is_default: bool = False
    id: ShoppingListId | None = None
    created_at: datetime | None = None
    household_id: HouseholdId | None = None
    item_ids: set[ItemId] = field(default_factory=set)

    entity_type = EntityType.SHOPPING_LIST


@dataclass
class ItemNode:
    """Item — belongs to one shopping list, references the user who added it."""
    name: str
    quantity: int = 1
    is_checked: bool = False
    id: ItemId | None = None
    added_at: datetime | None = None
    shopping_list_id: ShoppingListId | None = None
    added_by_user_id: UserId | None = None

    entity_type = EntityType.ITEM


Node = Union[HouseholdNode, UserNode, ShoppingListNode, ItemNode]


class EntityGraph:
    """In-memory arena for one unit of work."""

    def __init__(self) -> None:
        self._nodes: dict[EntityType, dict[int, Node]] = {
            t: {} for t in EntityType
        }
        self._dirty: dict[tuple[EntityType, int], Node] = {}

    def put(self, node: Node) -> Node:
        """Register a node; returns the arena's instance if one is already loaded."""
        if node.id is None:
            raise ValueError(f"{node.entity_type.value} node has no id yet")
        existing = self._nodes[node.entity_type].get(node.id)
        if existing is not None:
            return existing
        self._nodes[node.entity_type][node.id] = node
        return node

    def get(self, entity_type: EntityType, entity_id: int | None) -> Node | None:
        if entity_id is None:
            return None
        return self._nodes[entity_type].get(entity_id)

    def require(self, entity_type: EntityType, entity_id: int) -> Node:
        node = self.get(entity_type, entity_id)
        if node is None:
            raise KeyError(f"{entity_type.value} {entity_id} not loaded")
        return node

    def contains(self, entity_type: EntityType, entity_id: int) -> bool:
        return entity_id in self._nodes[entity_type]

    def nodes(self, entity_type: EntityType) -> list[Node]:
        return list(self._nodes[entity_type].values())

    def remove(self, node: Node) -> None:
        """Drop a deleted node from the arena (and from the dirty set)."""
        self._nodes[node.entity_type].pop(node.id, None)
        self._dirty.pop((node.entity_type, node.id), None)

    # ─── Dirty tracking ─────────────────────────────────────────

    def mark_dirty(self, node: Node) -> None:
        self._dirty[(node.entity_type, node.id)] = node

    def is_dirty(self, node: Node) -> bool:
        return (node.entity_type, node.id) in self._dirty

    def dirty_nodes(self) -> list[Node]:
        return list(self._dirty.values())

    def clear_dirty(self) -> None:
        self._dirty.clear()
