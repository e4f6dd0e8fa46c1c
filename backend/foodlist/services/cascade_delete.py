"""Cascade Delete — explicit recursive delete routines for owning edges.

Invariants:
    - Household -> every ShoppingList (-> every Item) and every User
    - ShoppingList -> every Item
    - User -> every Item it added keeps existing, with added_by_user_id nulled
    - The deleted node is detached from its owner when the owner is in the arena,
      so the owner's collection never lists a deleted id
    - Routines never commit; the caller commits once so the cascade is all-or-nothing

Design Decisions:
    - Lists before users in a household cascade: items of deleted lists are gone
      before the adder-nulling query for deleted users runs
"""

import logging

from foodlist.core.domain_types import EdgeType, EntityType
from foodlist.core.entity_graph import HouseholdNode, ItemNode, ShoppingListNode, UserNode
from foodlist.core.sync_relationships import detach, reassign
from foodlist.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def delete_item(uow: UnitOfWork, item: ItemNode) -> None:
    owner = uow.graph.get(EntityType.SHOPPING_LIST, item.shopping_list_id)
    if owner is not None:
        detach(uow.graph, owner, item, EdgeType.SHOPPING_LIST_ITEMS)
    await uow.delete(item)


async def delete_shopping_list(uow: UnitOfWork, shopping_list: ShoppingListNode) -> int:
    """Delete the list and its items. Returns the number of items removed."""
    items = await uow.load_many(EntityType.ITEM, set(shopping_list.item_ids))
    for item in items:
        await delete_item(uow, item)

    owner = uow.graph.get(EntityType.HOUSEHOLD, shopping_list.household_id)
    if owner is not None:
        detach(uow.graph, owner, shopping_list, EdgeType.HOUSEHOLD_SHOPPING_LISTS)
    await uow.delete(shopping_list)
    logger.debug(
        f"Cascade: shopping list {shopping_list.id} removed with {len(items)} item(s)",
        extra={"entity_type": EntityType.SHOPPING_LIST.value, "entity_id": shopping_list.id},
    )
    return len(items)


async def delete_user(uow: UnitOfWork, user: UserNode) -> int:
    """Delete the user and null it out as adder. Returns the number of items unlinked."""
    added = [uow.graph.put(i) for i in await uow.items.find_by_added_by(user.id)]
    for item in added:
        reassign(uow.graph, item, None, EdgeType.ITEM_ADDED_BY)

    owner = uow.graph.get(EntityType.HOUSEHOLD, user.household_id)
    if owner is not None:
        detach(uow.graph, owner, user, EdgeType.HOUSEHOLD_USERS)
    await uow.delete(user)
    logger.debug(
        f"Cascade: user {user.id} removed, {len(added)} item(s) lost their adder",
        extra={"entity_type": EntityType.USER.value, "entity_id": user.id},
    )
    return len(added)


async def delete_household(uow: UnitOfWork, household: HouseholdNode) -> None:
    lists = await uow.load_many(
        EntityType.SHOPPING_LIST, set(household.shopping_list_ids),
    )
    for shopping_list in lists:
        await delete_shopping_list(uow, shopping_list)

    users = await uow.load_many(EntityType.USER, set(household.user_ids))
    for user in users:
        await delete_user(uow, user)

    await uow.delete(household)
    logger.debug(
        f"Cascade: household {household.id} removed with "
        f"{len(lists)} list(s) and {len(users)} user(s)",
        extra={"entity_type": EntityType.HOUSEHOLD.value, "entity_id": household.id},
    )
