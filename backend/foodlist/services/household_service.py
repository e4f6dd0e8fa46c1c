"""Household Service — CRUD for households and their member/list collections.

Invariants:
    - add: userIds / shoppingListIds resolved before anything is written; any miss -> 400
    - update: userIds / shoppingListIds present in the body run replace_all, so users or
      lists dropped from a household are left unaffiliated and newly listed ones are moved in
    - delete: cascades to every owned list (and its items) and every member user;
      a failure at any step rolls back the whole cascade
    - created_at is set once on add and never touched again

Design Decisions:
    - Members/lists taken from another household are removed from it (exclusive ownership)
"""

from foodlist.core.domain_types import EdgeType, EntityType, HouseholdId
from foodlist.core.entity_graph import HouseholdNode
from foodlist.core.errors import FoodlistError
from foodlist.core.sync_relationships import replace_all
from foodlist.core.validate_entities import validate_node
from foodlist.schemas.household import HouseholdCreate, HouseholdResponse, HouseholdUpdate
from foodlist.services.aggregate_service import AggregateService, utc_now
from foodlist.services.cascade_delete import delete_household
from foodlist.services.map_records import (
    HOUSEHOLD_SCALARS, apply_scalars, household_draft, household_record,
)
from foodlist.services.unit_of_work import UnitOfWork


class HouseholdService(AggregateService):
    """Household aggregate operations."""

    entity_type = EntityType.HOUSEHOLD

    async def add(self, record: HouseholdCreate) -> HouseholdResponse:
        async with self._unit_of_work() as uow:
            try:
                household = household_draft(record)
                validate_node(household)
                users = await uow.resolve_many(EntityType.USER, record.user_ids, "userIds")
                lists = await uow.resolve_many(
                    EntityType.SHOPPING_LIST, record.shopping_list_ids, "shoppingListIds",
                )

                household.created_at = utc_now()
                await uow.insert(household)
                await self._sync_collections(uow, household, users, lists)
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("add", e)
                raise
        self._log_change("created", household)
        return household_record(household)

    async def get_all(self) -> list[HouseholdResponse]:
        uow = self._unit_of_work()
        return [household_record(h) for h in await uow.load_all(self.entity_type)]

    async def get_by_id(self, household_id: HouseholdId) -> HouseholdResponse:
        uow = self._unit_of_work()
        return household_record(await self._require(uow, household_id))

    async def update(self, record: HouseholdUpdate) -> HouseholdResponse:
        async with self._unit_of_work() as uow:
            try:
                household: HouseholdNode = await self._require(uow, record.id)
                apply_scalars(household, record, HOUSEHOLD_SCALARS)
                validate_node(household)
                uow.graph.mark_dirty(household)

                users = lists = None
                if "user_ids" in record.model_fields_set:
                    users = await uow.resolve_many(EntityType.USER, record.user_ids, "userIds")
                if "shopping_list_ids" in record.model_fields_set:
                    lists = await uow.resolve_many(
                        EntityType.SHOPPING_LIST, record.shopping_list_ids, "shoppingListIds",
                    )
                await self._sync_collections(uow, household, users, lists)
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("update", e)
                raise
        self._log_change("updated", household)
        return household_record(household)

    async def delete_by_id(self, household_id: HouseholdId) -> None:
        async with self._unit_of_work() as uow:
            await self._require_exists(uow, household_id)
            household = await self._require(uow, household_id)
            await delete_household(uow, household)
            await uow.commit()
        self._log_change("deleted", household)

    async def _sync_collections(
        self, uow: UnitOfWork, household: HouseholdNode, users, lists,
    ) -> None:
        """replace_all for each collection that was supplied (None = leave as is)."""
        if users is not None:
            # Current members must be in the arena so their back-reference is cleared
            await uow.load_many(EntityType.USER, set(household.user_ids))
            replace_all(uow.graph, household, users, EdgeType.HOUSEHOLD_USERS)
        if lists is not None:
            await uow.load_many(EntityType.SHOPPING_LIST, set(household.shopping_list_ids))
            replace_all(uow.graph, household, lists, EdgeType.HOUSEHOLD_SHOPPING_LISTS)
