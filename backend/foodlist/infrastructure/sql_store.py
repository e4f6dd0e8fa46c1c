"""SQL Identity Stores — EntityStore implementations over an AsyncSession.

Invariants:
    - save() on a node without id inserts and flushes, then writes id + timestamp back onto the node
    - save() on an existing node copies scalars and FK columns only; creation timestamps never change
    - Collection sides (user_ids, shopping_list_ids, item_ids) are loaded eagerly from child FKs,
      one grouped query per collection (no lazy proxies, no N+1)
    - Stores never commit — the calling service owns the transaction

Design Decisions:
    - One small subclass per aggregate over a generic mapper: the row <-> node mapping is
      the only thing that differs
    - Bulk DELETE by id: the service has already detached/deleted dependents explicitly
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.core.domain_types import EntityType
from foodlist.core.entity_graph import HouseholdNode, ItemNode, ShoppingListNode, UserNode
from foodlist.core.errors import ResourceNotFoundError
from foodlist.core.repository_protocols import NodeT
from foodlist.db.base import Base
from foodlist.models.household import Household
from foodlist.models.item import Item
from foodlist.models.shopping_list import ShoppingList
from foodlist.models.user import User

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo on the way back; stored timestamps are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlEntityStore(ABC, Generic[NodeT]):
    """Shared CRUD over one ORM model; subclasses provide the mapping."""

    model: type[Base]
    entity_type: EntityType

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, entity_id: int) -> NodeT | None:
        row = await self.db.get(self.model, entity_id)
        if row is None:
            return None
        nodes = await self._to_nodes([row])
        return nodes[0]

    async def exists_by_id(self, entity_id: int) -> bool:
        result = await self.db.execute(
            select(self.model.id).where(self.model.id == entity_id),
        )
        return result.scalar_one_or_none() is not None

    async def find_all(self) -> list[NodeT]:
        result = await self.db.execute(
            select(self.model).order_by(self.model.id),
        )
        return await self._to_nodes(list(result.scalars().all()))

    async def save(self, node: NodeT) -> NodeT:
        if node.id is None:
            row = self.model()
            self._apply(row, node, inserting=True)
            self.db.add(row)
            await self.db.flush()
            node.id = row.id
            self._copy_generated(row, node)
            logger.debug(
                f"Inserted {self.entity_type.value} {node.id}",
                extra={"entity_type": self.entity_type.value, "entity_id": node.id},
            )
            return node

        row = await self.db.get(self.model, node.id)
        if row is None:
            raise ResourceNotFoundError(self.entity_type.value, node.id)
        self._apply(row, node, inserting=False)
        await self.db.flush()
        return node

    async def delete_by_id(self, entity_id: int) -> None:
        await self.db.execute(
            delete(self.model).where(self.model.id == entity_id),
        )

    # ─── Mapping hooks ──────────────────────────────────────────

    @abstractmethod
    async def _to_nodes(self, rows: list[Any]) -> list[NodeT]:
        """Rows to nodes, collection sides filled from child FKs."""

    @abstractmethod
    def _apply(self, row: Any, node: NodeT, inserting: bool) -> None:
        """Copy node scalars and FK columns onto the row."""

    def _copy_generated(self, row: Any, node: NodeT) -> None:
        node.created_at = _as_utc(row.created_at)

    async def _group_child_ids(
        self, child_model: type[Base], fk_column: Any, owner_ids: list[int],
    ) -> dict[int, set[int]]:
        """Map each owner id to the ids of the child rows pointing at it."""
        grouped: dict[int, set[int]] = {owner_id: set() for owner_id in owner_ids}
        if not owner_ids:
            return grouped
        result = await self.db.execute(
            select(child_model.id, fk_column).where(fk_column.in_(owner_ids)),
        )
        for child_id, owner_id in result.all():
            grouped[owner_id].add(child_id)
        return grouped


class HouseholdStore(SqlEntityStore[HouseholdNode]):
    model = Household
    entity_type = EntityType.HOUSEHOLD

    async def _to_nodes(self, rows: list[Household]) -> list[HouseholdNode]:
        ids = [r.id for r in rows]
        users = await self._group_child_ids(User, User.household_id, ids)
        lists = await self._group_child_ids(
            ShoppingList, ShoppingList.household_id, ids,
        )
        return [
            HouseholdNode(
                id=r.id, name=r.name, created_at=_as_utc(r.created_at),
                user_ids=users[r.id], shopping_list_ids=lists[r.id],
            )
            for r in rows
        ]

    def _apply(self, row: Household, node: HouseholdNode, inserting: bool) -> None:
        row.name = node.name
        if inserting and node.created_at is not None:
            row.created_at = node.created_at


class UserStore(SqlEntityStore[UserNode]):
    model = User
    entity_type = EntityType.USER

    async def find_by_username(self, username: str) -> UserNode | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        row = result.scalar_one_or_none()
        return (await self._to_nodes([row]))[0] if row else None

    async def _to_nodes(self, rows: list[User]) -> list[UserNode]:
        return [
            UserNode(
                id=r.id, username=r.username, password_hash=r.password_hash,
                name=r.name, enabled=r.enabled, created_at=_as_utc(r.created_at),
                household_id=r.household_id,
            )
            for r in rows
        ]

    def _apply(self, row: User, node: UserNode, inserting: bool) -> None:
        row.username = node.username
        row.password_hash = node.password_hash
        row.name = node.name
        row.enabled = node.enabled
        row.household_id = node.household_id
        if inserting and node.created_at is not None:
            row.created_at = node.created_at


class ShoppingListStore(SqlEntityStore[ShoppingListNode]):
    model = ShoppingList
    entity_type = EntityType.SHOPPING_LIST

    async def _to_nodes(self, rows: list[ShoppingList]) -> list[ShoppingListNode]:
        ids = [r.id for r in rows]
        items = await self._group_child_ids(Item, Item.shopping_list_id, ids)
        return [
            ShoppingListNode(
                id=r.id, name=r.name, is_default=r.is_default,
                created_at=_as_utc(r.created_at), household_id=r.household_id,
                item_ids=items[r.id],
            )
            for r in rows
        ]

    def _apply(self, row: ShoppingList, node: ShoppingListNode, inserting: bool) -> None:
        row.name = node.name
        row.is_default = node.is_default
        row.household_id = node.household_id
        if inserting and node.created_at is not None:
            row.created_at = node.created_at


class ItemStore(SqlEntityStore[ItemNode]):
    model = Item
    entity_type = EntityType.ITEM

    async def find_by_added_by(self, user_id: int) -> list[ItemNode]:
        result = await self.db.execute(
            select(Item).where(Item.added_by_user_id == user_id).order_by(Item.id),
        )
        return await self._to_nodes(list(result.scalars().all()))

    async def _to_nodes(self, rows: list[Item]) -> list[ItemNode]:
        return [
            ItemNode(
                id=r.id, name=r.name, quantity=r.quantity,
                is_checked=r.is_checked, added_at=_as_utc(r.added_at),
                shopping_list_id=r.shopping_list_id,
                added_by_user_id=r.added_by_user_id,
            )
            for r in rows
        ]

    def _apply(self, row: Item, node: ItemNode, inserting: bool) -> None:
        row.name = node.name
        row.quantity = node.quantity
        row.is_checked = node.is_checked
        row.shopping_list_id = node.shopping_list_id
        row.added_by_user_id = node.added_by_user_id
        if inserting and node.added_at is not None:
            row.added_at = node.added_at

    def _copy_generated(self, row: Item, node: ItemNode) -> None:
        node.added_at = _as_utc(row.added_at)
