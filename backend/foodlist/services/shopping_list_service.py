"""ShoppingList Service — CRUD for shopping lists and their household link.

Invariants:
    - householdId resolved strictly (unknown id -> 400); null detaches from the household
    - Read paths return the display view: household name plus the list's items
    - delete cascades to every item of the list, all-or-nothing
"""

from foodlist.core.domain_types import EdgeType, EntityType, ShoppingListId
from foodlist.core.entity_graph import ShoppingListNode
from foodlist.core.errors import FoodlistError
from foodlist.core.sync_relationships import attach, reassign
from foodlist.core.validate_entities import validate_node
from foodlist.schemas.shopping_list import (
    ShoppingListCreate, ShoppingListDisplay, ShoppingListResponse, ShoppingListUpdate,
)
from foodlist.services.aggregate_service import AggregateService, utc_now
from foodlist.services.cascade_delete import delete_shopping_list
from foodlist.services.map_records import (
    SHOPPING_LIST_SCALARS, apply_scalars, shopping_list_display,
    shopping_list_draft, shopping_list_record,
)
from foodlist.services.unit_of_work import UnitOfWork


class ShoppingListService(AggregateService):
    """ShoppingList aggregate operations."""

    entity_type = EntityType.SHOPPING_LIST

    async def add(self, record: ShoppingListCreate) -> ShoppingListResponse:
        async with self._unit_of_work() as uow:
            try:
                shopping_list = shopping_list_draft(record)
                validate_node(shopping_list)
                household = await uow.resolve(
                    EntityType.HOUSEHOLD, record.household_id, "householdId",
                )

                shopping_list.created_at = utc_now()
                await uow.insert(shopping_list)
                if household is not None:
                    attach(uow.graph, household, shopping_list, EdgeType.HOUSEHOLD_SHOPPING_LISTS)
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("add", e)
                raise
        self._log_change("created", shopping_list)
        return shopping_list_record(shopping_list)

    async def get_all(self) -> list[ShoppingListDisplay]:
        uow = self._unit_of_work()
        lists = await uow.load_all(self.entity_type)
        return [await self._display(uow, sl) for sl in lists]

    async def get_by_id(self, shopping_list_id: ShoppingListId) -> ShoppingListDisplay:
        uow = self._unit_of_work()
        return await self._display(uow, await self._require(uow, shopping_list_id))

    async def update(self, record: ShoppingListUpdate) -> ShoppingListResponse:
        async with self._unit_of_work() as uow:
            try:
                shopping_list: ShoppingListNode = await self._require(uow, record.id)
                apply_scalars(shopping_list, record, SHOPPING_LIST_SCALARS)
                validate_node(shopping_list)
                uow.graph.mark_dirty(shopping_list)

                if "household_id" in record.model_fields_set:
                    household = await uow.resolve(
                        EntityType.HOUSEHOLD, record.household_id, "householdId",
                    )
                    await uow.load(EntityType.HOUSEHOLD, shopping_list.household_id)
                    reassign(
                        uow.graph, shopping_list, household, EdgeType.HOUSEHOLD_SHOPPING_LISTS,
                    )
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("update", e)
                raise
        self._log_change("updated", shopping_list)
        return shopping_list_record(shopping_list)

    async def delete_by_id(self, shopping_list_id: ShoppingListId) -> None:
        async with self._unit_of_work() as uow:
            await self._require_exists(uow, shopping_list_id)
            shopping_list = await self._require(uow, shopping_list_id)
            await uow.load(EntityType.HOUSEHOLD, shopping_list.household_id)
            await delete_shopping_list(uow, shopping_list)
            await uow.commit()
        self._log_change("deleted", shopping_list)

    async def _display(
        self, uow: UnitOfWork, shopping_list: ShoppingListNode,
    ) -> ShoppingListDisplay:
        household = await uow.load(EntityType.HOUSEHOLD, shopping_list.household_id)
        items = await uow.load_many(EntityType.ITEM, shopping_list.item_ids)
        return shopping_list_display(shopping_list, household, items)
