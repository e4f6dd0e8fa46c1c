"""ShoppingList Service — household link and the items display view."""

import pytest

from foodlist.core.errors import ReferenceNotFoundError, ResourceNotFoundError
from foodlist.schemas.household import HouseholdCreate
from foodlist.schemas.item import ItemCreate
from foodlist.schemas.shopping_list import ShoppingListCreate, ShoppingListUpdate
from foodlist.services.household_service import HouseholdService
from foodlist.services.item_service import ItemService
from foodlist.services.shopping_list_service import ShoppingListService


async def test_add_attaches_to_household(test_db):
    households = HouseholdService(test_db)
    hertsch = await households.add(HouseholdCreate(name="Hertsch"))
    created = await ShoppingListService(test_db).add(
        ShoppingListCreate(name="Einkaufslischde", is_default=True, household_id=hertsch.id),
    )
    assert created.household_id == hertsch.id
    assert created.item_ids == []
    assert (await households.get_by_id(hertsch.id)).shopping_list_ids == [created.id]


async def test_display_embeds_items(test_db):
    service = ShoppingListService(test_db)
    sl = await service.add(ShoppingListCreate(name="Lischte"))
    items = ItemService(test_db)
    milk = await items.add(ItemCreate(name="Milk", quantity=2, shopping_list_id=sl.id))
    bread = await items.add(ItemCreate(name="Bread", shopping_list_id=sl.id))

    shown = await service.get_by_id(sl.id)

    assert shown.item_ids == [milk.id, bread.id]
    assert [i.name for i in shown.items] == ["Milk", "Bread"]
    assert shown.items[0].quantity == 2
    assert shown.household_name is None


async def test_unknown_household_rejected(test_db):
    with pytest.raises(ReferenceNotFoundError):
        await ShoppingListService(test_db).add(
            ShoppingListCreate(name="Lischte", household_id=3),
        )


async def test_update_moves_list_between_households(test_db):
    households = HouseholdService(test_db)
    a = await households.add(HouseholdCreate(name="Hertsch"))
    b = await households.add(HouseholdCreate(name="Schalsky"))
    service = ShoppingListService(test_db)
    sl = await service.add(ShoppingListCreate(name="Lischte", household_id=a.id))

    updated = await service.update(ShoppingListUpdate(id=sl.id, household_id=b.id))

    assert updated.household_id == b.id
    assert (await households.get_by_id(a.id)).shopping_list_ids == []
    assert (await households.get_by_id(b.id)).shopping_list_ids == [sl.id]


async def test_update_scalar_keeps_items_and_timestamp(test_db):
    service = ShoppingListService(test_db)
    sl = await service.add(ShoppingListCreate(name="Lischte"))
    item = await ItemService(test_db).add(ItemCreate(name="Tomato", shopping_list_id=sl.id))

    updated = await service.update(ShoppingListUpdate(id=sl.id, is_default=True))

    assert updated.is_default is True
    assert updated.name == "Lischte"
    assert updated.item_ids == [item.id]
    assert updated.created_at == sl.created_at


async def test_delete_removes_items(test_db):
    service = ShoppingListService(test_db)
    sl = await service.add(ShoppingListCreate(name="Lischte"))
    items = ItemService(test_db)
    tomato = await items.add(ItemCreate(name="Tomato", shopping_list_id=sl.id))

    await service.delete_by_id(sl.id)

    with pytest.raises(ResourceNotFoundError):
        await items.get_by_id(tomato.id)
    with pytest.raises(ResourceNotFoundError):
        await service.get_by_id(sl.id)
