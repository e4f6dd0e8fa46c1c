"""Unit of Work — one arena, four stores, one transaction per service call.

Invariants:
    - Every node loaded through the unit of work lives in its arena exactly once
    - insert() saves a draft immediately so it has an id before any edge is attached
    - flush() writes every dirty node before any DELETE runs (FKs stay satisfied)
    - commit() is the only place a transaction is committed
    - Used as `async with`: any exception rolls the session back before it propagates,
      so a half-done cascade is never persisted by a later commit on the same session

Design Decisions:
    - Explicit, eager loading only: callers name exactly which nodes they need
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.core.domain_types import EntityType
from foodlist.core.entity_graph import EntityGraph, Node
from foodlist.infrastructure.sql_store import (
    HouseholdStore, ItemStore, ShoppingListStore, SqlEntityStore, UserStore,
)
from foodlist.services.reference_resolver import resolve_reference, resolve_references

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Arena plus stores for a single request."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.graph = EntityGraph()
        self.households = HouseholdStore(db)
        self.users = UserStore(db)
        self.shopping_lists = ShoppingListStore(db)
        self.items = ItemStore(db)
        self._stores: dict[EntityType, SqlEntityStore] = {
            EntityType.HOUSEHOLD: self.households,
            EntityType.USER: self.users,
            EntityType.SHOPPING_LIST: self.shopping_lists,
            EntityType.ITEM: self.items,
        }

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            await self.db.rollback()
            self.graph.clear_dirty()
            logger.debug(f"Unit of work rolled back: {exc_type.__name__}")
        return False

    def store(self, entity_type: EntityType) -> SqlEntityStore:
        return self._stores[entity_type]

    # ─── Loading ────────────────────────────────────────────────

    async def load(self, entity_type: EntityType, entity_id: int | None) -> Node | None:
        """Arena-first lookup; None when the id is None or unknown."""
        if entity_id is None:
            return None
        node = self.graph.get(entity_type, entity_id)
        if node is not None:
            return node
        node = await self.store(entity_type).find_by_id(entity_id)
        return self.graph.put(node) if node is not None else None

    async def load_many(self, entity_type: EntityType, entity_ids) -> list[Node]:
        nodes = []
        for entity_id in sorted(entity_ids):
            node = await self.load(entity_type, entity_id)
            if node is not None:
                nodes.append(node)
        return nodes

    async def load_all(self, entity_type: EntityType) -> list[Node]:
        return [self.graph.put(n) for n in await self.store(entity_type).find_all()]

    async def resolve(
        self, entity_type: EntityType, entity_id: int | None, field: str,
    ) -> Node | None:
        return await resolve_reference(
            self.store(entity_type), entity_type, entity_id, field, self.graph,
        )

    async def resolve_many(
        self, entity_type: EntityType, entity_ids: list[int] | None, field: str,
    ) -> list[Node] | None:
        return await resolve_references(
            self.store(entity_type), entity_type, entity_ids, field, self.graph,
        )

    # ─── Writing ────────────────────────────────────────────────

    async def insert(self, draft: Node) -> Node:
        """Save a new node (assigns id + timestamp) and register it in the arena."""
        await self.store(draft.entity_type).save(draft)
        return self.graph.put(draft)

    async def flush(self) -> None:
        for node in self.graph.dirty_nodes():
            await self.store(node.entity_type).save(node)
        self.graph.clear_dirty()

    async def delete(self, node: Node) -> None:
        await self.flush()
        await self.store(node.entity_type).delete_by_id(node.id)
        self.graph.remove(node)
        logger.debug(
            f"Deleted {node.entity_type.value} {node.id}",
            extra={"entity_type": node.entity_type.value, "entity_id": node.id},
        )

    async def commit(self) -> None:
        await self.flush()
        await self.db.commit()
