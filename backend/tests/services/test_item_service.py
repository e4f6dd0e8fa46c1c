"""Item Service — owning list, adder reference and scalar updates."""

import pytest

from foodlist.core.errors import EntityValidationError, ReferenceNotFoundError, ResourceNotFoundError
from foodlist.schemas.item import ItemCreate, ItemUpdate
from foodlist.schemas.shopping_list import ShoppingListCreate
from foodlist.schemas.user import UserCreate
from foodlist.services.item_service import ItemService
from foodlist.services.shopping_list_service import ShoppingListService
from foodlist.services.user_service import UserService


@pytest.fixture
async def lischte(test_db):
    return await ShoppingListService(test_db).add(ShoppingListCreate(name="Lischte"))


@pytest.fixture
async def finn(test_db):
    return await UserService(test_db).add(UserCreate(username="finn"))


async def test_add_links_list_and_adder(test_db, lischte, finn):
    items = ItemService(test_db)
    created = await items.add(ItemCreate(
        name="Tomato", quantity=1, is_checked=True,
        shopping_list_id=lischte.id, added_by_user_id=finn.id,
    ))
    assert created.added_at is not None

    shown = await items.get_by_id(created.id)
    assert shown.added_by_username == "finn"
    assert shown.shopping_list_name == "Lischte"
    assert shown.is_checked is True
    assert (await ShoppingListService(test_db).get_by_id(lischte.id)).item_ids == [created.id]


async def test_unknown_adder_rejected(test_db, lischte):
    with pytest.raises(ReferenceNotFoundError) as exc:
        await ItemService(test_db).add(ItemCreate(
            name="Tomato", shopping_list_id=lischte.id, added_by_user_id=42,
        ))
    assert exc.value.entity_type == "User"
    assert exc.value.field == "addedByUserId"


async def test_item_without_list_is_allowed(test_db):
    created = await ItemService(test_db).add(ItemCreate(name="Salt"))
    assert created.shopping_list_id is None
    assert created.quantity == 1


async def test_update_scalars_only_touches_present_fields(test_db, lischte, finn):
    items = ItemService(test_db)
    created = await items.add(ItemCreate(
        name="Tomato", quantity=3, shopping_list_id=lischte.id, added_by_user_id=finn.id,
    ))

    updated = await items.update(ItemUpdate(id=created.id, is_checked=True))

    assert updated.is_checked is True
    assert updated.quantity == 3
    assert updated.name == "Tomato"
    assert updated.shopping_list_id == lischte.id
    assert updated.added_by_user_id == finn.id
    assert updated.added_at == created.added_at


async def test_update_moves_item_to_other_list(test_db, lischte):
    lists = ShoppingListService(test_db)
    other = await lists.add(ShoppingListCreate(name="Einkaufslischde"))
    items = ItemService(test_db)
    created = await items.add(ItemCreate(name="Tomato", shopping_list_id=lischte.id))

    await items.update(ItemUpdate(id=created.id, shopping_list_id=other.id))

    assert (await lists.get_by_id(lischte.id)).item_ids == []
    assert (await lists.get_by_id(other.id)).item_ids == [created.id]


async def test_update_null_adder_clears_it(test_db, lischte, finn):
    items = ItemService(test_db)
    created = await items.add(ItemCreate(
        name="Tomato", shopping_list_id=lischte.id, added_by_user_id=finn.id,
    ))
    updated = await items.update(ItemUpdate(id=created.id, added_by_user_id=None))
    assert updated.added_by_user_id is None


async def test_negative_quantity_rejected_by_service(test_db):
    items = ItemService(test_db)
    created = await items.add(ItemCreate(name="Tomato"))
    update = ItemUpdate(id=created.id)
    update.quantity = -1
    with pytest.raises(EntityValidationError):
        await items.update(update)


async def test_update_missing_item_never_creates(test_db):
    items = ItemService(test_db)
    with pytest.raises(ResourceNotFoundError):
        await items.update(ItemUpdate(id=77, name="Ghost"))
    assert await items.get_all() == []


async def test_update_without_id_is_validation_error(test_db):
    with pytest.raises(EntityValidationError):
        await ItemService(test_db).update(ItemUpdate(name="Tomato"))


async def test_delete_detaches_from_list(test_db, lischte):
    items = ItemService(test_db)
    created = await items.add(ItemCreate(name="Tomato", shopping_list_id=lischte.id))
    await items.delete_by_id(created.id)
    assert (await ShoppingListService(test_db).get_by_id(lischte.id)).item_ids == []


async def test_delete_missing_item_raises(test_db):
    with pytest.raises(ResourceNotFoundError):
        await ItemService(test_db).delete_by_id(5)
