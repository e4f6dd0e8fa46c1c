"""User Service — credentials, uniqueness and household membership.

Invariants:
    - Passwords are stored hashed and never appear in any record
    - Usernames are unique on create and on rename (ConflictError), including when
      only the unique index catches the clash
    - householdId resolved strictly; moving households updates both member sets
    - Deleting a user keeps its items with addedByUserId nulled
"""

import pytest
from werkzeug.security import check_password_hash

from foodlist.core.errors import ConflictError, EntityValidationError, ReferenceNotFoundError
from foodlist.models.user import User
from foodlist.schemas.household import HouseholdCreate
from foodlist.schemas.item import ItemCreate
from foodlist.schemas.shopping_list import ShoppingListCreate
from foodlist.schemas.user import UserCreate, UserUpdate
from foodlist.services.household_service import HouseholdService
from foodlist.services.item_service import ItemService
from foodlist.services.shopping_list_service import ShoppingListService
from foodlist.services.user_service import UNUSABLE_PASSWORD, UserService


async def test_password_stored_hashed_and_never_returned(test_db):
    created = await UserService(test_db).add(
        UserCreate(username="finn", password="test"),
    )
    assert "password" not in created.model_dump()
    assert "password_hash" not in created.model_dump()

    row = await test_db.get(User, created.id)
    assert row.password_hash != "test"
    assert check_password_hash(row.password_hash, "test")


async def test_missing_password_stores_unusable_hash(test_db):
    created = await UserService(test_db).add(UserCreate(username="lill"))
    row = await test_db.get(User, created.id)
    assert row.password_hash == UNUSABLE_PASSWORD
    assert not check_password_hash(row.password_hash, "")


async def test_update_password_rehashes(test_db):
    service = UserService(test_db)
    created = await service.add(UserCreate(username="tom", password="old"))
    await service.update(UserUpdate(id=created.id, password="new"))
    row = await test_db.get(User, created.id)
    assert check_password_hash(row.password_hash, "new")


async def test_duplicate_username_conflicts(test_db):
    service = UserService(test_db)
    await service.add(UserCreate(username="finn"))
    with pytest.raises(ConflictError):
        await service.add(UserCreate(username="finn"))


async def test_rename_to_taken_username_conflicts(test_db):
    service = UserService(test_db)
    await service.add(UserCreate(username="finn"))
    sofi = await service.add(UserCreate(username="sofi"))
    with pytest.raises(ConflictError):
        await service.update(UserUpdate(id=sofi.id, username="finn"))


async def test_update_keeps_own_username(test_db):
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn"))
    updated = await service.update(UserUpdate(id=finn.id, username="finn", name="Finn"))
    assert updated.name == "Finn"


async def test_update_null_username_rejected(test_db):
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn"))
    with pytest.raises(EntityValidationError):
        await service.update(UserUpdate(id=finn.id, username=None))


async def test_unknown_household_rejected(test_db):
    with pytest.raises(ReferenceNotFoundError) as exc:
        await UserService(test_db).add(UserCreate(username="finn", household_id=5))
    assert exc.value.field == "householdId"


async def test_move_between_households(test_db):
    households = HouseholdService(test_db)
    hertsch = await households.add(HouseholdCreate(name="Hertsch"))
    schalsky = await households.add(HouseholdCreate(name="Schalsky"))
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn", household_id=hertsch.id))

    await service.update(UserUpdate(id=finn.id, household_id=schalsky.id))

    assert (await households.get_by_id(hertsch.id)).user_ids == []
    assert (await households.get_by_id(schalsky.id)).user_ids == [finn.id]
    assert (await service.get_by_id(finn.id)).household_name == "Schalsky"


async def test_null_household_leaves_it(test_db):
    households = HouseholdService(test_db)
    hertsch = await households.add(HouseholdCreate(name="Hertsch"))
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn", household_id=hertsch.id))

    updated = await service.update(UserUpdate(id=finn.id, household_id=None))

    assert updated.household_id is None
    assert (await households.get_by_id(hertsch.id)).user_ids == []


async def test_absent_household_is_unchanged(test_db):
    hertsch = await HouseholdService(test_db).add(HouseholdCreate(name="Hertsch"))
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn", household_id=hertsch.id))
    updated = await service.update(UserUpdate(id=finn.id, enabled=False))
    assert updated.household_id == hertsch.id
    assert updated.enabled is False


async def test_delete_user_nulls_added_by(test_db):
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn"))
    sl = await ShoppingListService(test_db).add(ShoppingListCreate(name="Lischte"))
    items = ItemService(test_db)
    tomato = await items.add(
        ItemCreate(name="Tomato", shopping_list_id=sl.id, added_by_user_id=finn.id),
    )

    await service.delete_by_id(finn.id)

    kept = await items.get_by_id(tomato.id)
    assert kept.added_by_user_id is None
    assert kept.added_by_username is None
    assert kept.shopping_list_id == sl.id


async def test_unique_index_clash_reported_as_conflict(test_db, monkeypatch):
    service = UserService(test_db)
    finn = await service.add(UserCreate(username="finn"))

    async def check_skipped(self, uow, username):
        return None

    # Two concurrent creates both pass the pre-check; the unique index decides
    monkeypatch.setattr(UserService, "_check_username_free", check_skipped)
    with pytest.raises(ConflictError) as exc_info:
        await service.add(UserCreate(username="finn"))

    assert exc_info.value.context.entity_id == finn.id
    assert [u.username for u in await service.get_all()] == ["finn"]


async def test_unique_index_clash_on_rename_reported_as_conflict(test_db, monkeypatch):
    service = UserService(test_db)
    await service.add(UserCreate(username="finn"))
    sofi = await service.add(UserCreate(username="sofi"))

    async def check_skipped(self, uow, username):
        return None

    monkeypatch.setattr(UserService, "_check_username_free", check_skipped)
    with pytest.raises(ConflictError):
        await service.update(UserUpdate(id=sofi.id, username="finn"))

    assert (await service.get_by_id(sofi.id)).username == "sofi"
