"""Item Service — CRUD for items, their owning list and their adder.

Invariants:
    - shoppingListId and addedByUserId resolved strictly; unknown ids -> 400
    - Either reference present as null clears it (item leaves its list / loses its adder)
    - Read paths return the display view (adder's username, list name)
    - added_at is the creation timestamp and survives every update
"""

from foodlist.core.domain_types import EdgeType, EntityType, ItemId
from foodlist.core.entity_graph import ItemNode
from foodlist.core.errors import FoodlistError
from foodlist.core.sync_relationships import attach, reassign
from foodlist.core.validate_entities import validate_node
from foodlist.schemas.item import ItemCreate, ItemDisplay, ItemResponse, ItemUpdate
from foodlist.services.aggregate_service import AggregateService, utc_now
from foodlist.services.cascade_delete import delete_item
from foodlist.services.map_records import (
    ITEM_SCALARS, apply_scalars, item_display, item_draft, item_record,
)
from foodlist.services.unit_of_work import UnitOfWork


class ItemService(AggregateService):
    """Item aggregate operations."""

    entity_type = EntityType.ITEM

    async def add(self, record: ItemCreate) -> ItemResponse:
        async with self._unit_of_work() as uow:
            try:
                item = item_draft(record)
                validate_node(item)
                shopping_list = await uow.resolve(
                    EntityType.SHOPPING_LIST, record.shopping_list_id, "shoppingListId",
                )
                added_by = await uow.resolve(
                    EntityType.USER, record.added_by_user_id, "addedByUserId",
                )

                item.added_at = utc_now()
                await uow.insert(item)
                if shopping_list is not None:
                    attach(uow.graph, shopping_list, item, EdgeType.SHOPPING_LIST_ITEMS)
                if added_by is not None:
                    attach(uow.graph, added_by, item, EdgeType.ITEM_ADDED_BY)
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("add", e)
                raise
        self._log_change("created", item)
        return item_record(item)

    async def get_all(self) -> list[ItemDisplay]:
        uow = self._unit_of_work()
        items = await uow.load_all(self.entity_type)
        return [await self._display(uow, i) for i in items]

    async def get_by_id(self, item_id: ItemId) -> ItemDisplay:
        uow = self._unit_of_work()
        return await self._display(uow, await self._require(uow, item_id))

    async def update(self, record: ItemUpdate) -> ItemResponse:
        async with self._unit_of_work() as uow:
            try:
                item: ItemNode = await self._require(uow, record.id)
                apply_scalars(item, record, ITEM_SCALARS)
                validate_node(item)
                uow.graph.mark_dirty(item)

                fields = record.model_fields_set
                if "shopping_list_id" in fields:
                    shopping_list = await uow.resolve(
                        EntityType.SHOPPING_LIST, record.shopping_list_id, "shoppingListId",
                    )
                    await uow.load(EntityType.SHOPPING_LIST, item.shopping_list_id)
                    reassign(uow.graph, item, shopping_list, EdgeType.SHOPPING_LIST_ITEMS)
                if "added_by_user_id" in fields:
                    added_by = await uow.resolve(
                        EntityType.USER, record.added_by_user_id, "addedByUserId",
                    )
                    reassign(uow.graph, item, added_by, EdgeType.ITEM_ADDED_BY)
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("update", e)
                raise
        self._log_change("updated", item)
        return item_record(item)

    async def delete_by_id(self, item_id: ItemId) -> None:
        async with self._unit_of_work() as uow:
            await self._require_exists(uow, item_id)
            item = await self._require(uow, item_id)
            await uow.load(EntityType.SHOPPING_LIST, item.shopping_list_id)
            await delete_item(uow, item)
            await uow.commit()
        self._log_change("deleted", item)

    async def _display(self, uow: UnitOfWork, item: ItemNode) -> ItemDisplay:
        added_by = await uow.load(EntityType.USER, item.added_by_user_id)
        shopping_list = await uow.load(EntityType.SHOPPING_LIST, item.shopping_list_id)
        return item_display(item, added_by, shopping_list)
