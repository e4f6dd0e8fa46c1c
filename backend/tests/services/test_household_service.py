"""Household Service — membership sync, strict references and cascades.

Invariants:
    - add with userIds/shoppingListIds attaches them on both sides
    - update with userIds replaces membership; dropped users become unaffiliated
    - taking a user from another household removes it from that household
    - unknown member ids fail the whole call with ReferenceNotFoundError
    - update never creates: unknown id -> ResourceNotFoundError
"""

import pytest

from foodlist.core.errors import ReferenceNotFoundError, ResourceNotFoundError
from foodlist.schemas.household import HouseholdCreate, HouseholdUpdate
from foodlist.schemas.shopping_list import ShoppingListCreate
from foodlist.schemas.user import UserCreate
from foodlist.services.household_service import HouseholdService
from foodlist.services.shopping_list_service import ShoppingListService
from foodlist.services.user_service import UserService


async def _users(db, *names):
    service = UserService(db)
    return [await service.add(UserCreate(username=n)) for n in names]


async def test_add_assigns_id_and_timestamp(test_db):
    created = await HouseholdService(test_db).add(HouseholdCreate(name="Hertsch"))
    assert created.id is not None
    assert created.created_at is not None
    assert created.user_ids == []


async def test_add_with_members_sets_back_references(test_db):
    finn, lill = await _users(test_db, "finn", "lill")
    created = await HouseholdService(test_db).add(
        HouseholdCreate(name="Hertsch", user_ids=[lill.id, finn.id]),
    )
    assert created.user_ids == sorted([finn.id, lill.id])
    user = await UserService(test_db).get_by_id(finn.id)
    assert user.household_id == created.id
    assert user.household_name == "Hertsch"


async def test_add_with_unknown_user_fails_and_creates_nothing(test_db):
    service = HouseholdService(test_db)
    with pytest.raises(ReferenceNotFoundError) as exc:
        await service.add(HouseholdCreate(name="Ghost", user_ids=[99]))
    assert exc.value.field == "userIds"
    assert await service.get_all() == []


async def test_update_replaces_membership(test_db):
    finn, lill, tom = await _users(test_db, "finn", "lill", "tom")
    service = HouseholdService(test_db)
    household = await service.add(
        HouseholdCreate(name="Hertsch", user_ids=[finn.id, lill.id]),
    )

    updated = await service.update(
        HouseholdUpdate(id=household.id, user_ids=[lill.id, tom.id]),
    )

    assert updated.user_ids == [lill.id, tom.id]
    assert updated.name == "Hertsch"
    dropped = await UserService(test_db).get_by_id(finn.id)
    assert dropped.household_id is None
    assert (await service.get_by_id(household.id)).user_ids == [lill.id, tom.id]


async def test_update_takes_user_from_other_household(test_db):
    (finn,) = await _users(test_db, "finn")
    service = HouseholdService(test_db)
    first = await service.add(HouseholdCreate(name="Hertsch", user_ids=[finn.id]))
    second = await service.add(HouseholdCreate(name="Schalsky"))

    await service.update(HouseholdUpdate(id=second.id, user_ids=[finn.id]))

    assert (await service.get_by_id(first.id)).user_ids == []
    assert (await service.get_by_id(second.id)).user_ids == [finn.id]


async def test_update_without_collections_keeps_them(test_db):
    (finn,) = await _users(test_db, "finn")
    service = HouseholdService(test_db)
    household = await service.add(HouseholdCreate(name="Hertsch", user_ids=[finn.id]))

    updated = await service.update(HouseholdUpdate(id=household.id, name="Hertsch II"))

    assert updated.name == "Hertsch II"
    assert updated.user_ids == [finn.id]
    assert updated.created_at == household.created_at


async def test_update_with_shopping_lists(test_db):
    lists = ShoppingListService(test_db)
    sl = await lists.add(ShoppingListCreate(name="Lischte"))
    service = HouseholdService(test_db)
    household = await service.add(HouseholdCreate(name="Schalsky"))

    updated = await service.update(
        HouseholdUpdate(id=household.id, shopping_list_ids=[sl.id]),
    )

    assert updated.shopping_list_ids == [sl.id]
    assert (await lists.get_by_id(sl.id)).household_name == "Schalsky"


async def test_update_unknown_household_never_creates(test_db):
    service = HouseholdService(test_db)
    with pytest.raises(ResourceNotFoundError):
        await service.update(HouseholdUpdate(id=404, name="Nowhere"))
    assert await service.get_all() == []


async def test_get_all_ordered_by_id(test_db):
    service = HouseholdService(test_db)
    for name in ("Hertsch", "Schalsky", "Muster"):
        await service.add(HouseholdCreate(name=name))
    assert [h.name for h in await service.get_all()] == ["Hertsch", "Schalsky", "Muster"]


async def test_get_by_unknown_id_raises(test_db):
    with pytest.raises(ResourceNotFoundError) as exc:
        await HouseholdService(test_db).get_by_id(7)
    assert exc.value.message == "Household with id 7 not found"
