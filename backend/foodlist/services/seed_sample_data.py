"""Sample Data — optional startup seeding for local development.

Invariants:
    - Runs only when the database has no households (never duplicates data)
    - Goes through the aggregate services, so every invariant they enforce holds for seeded data

Design Decisions:
    - Opt-in via settings.seed_sample_data (off by default)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.schemas.household import HouseholdCreate
from foodlist.schemas.item import ItemCreate
from foodlist.schemas.shopping_list import ShoppingListCreate
from foodlist.schemas.user import UserCreate
from foodlist.services.household_service import HouseholdService
from foodlist.services.item_service import ItemService
from foodlist.services.shopping_list_service import ShoppingListService
from foodlist.services.user_service import UserService

logger = logging.getLogger(__name__)

SAMPLE_HOUSEHOLDS = {
    "Hertsch": {"users": ["Finn"], "list": "Einkaufslischde", "items": [("Tomato", 1, True)]},
    "Schalsky": {"users": ["Lill", "Tom", "Sofi"], "list": "Lischte", "items": []},
}


async def seed_sample_data(db: AsyncSession, password: str = "test") -> bool:
    """Create the sample households. Returns False if data already exists."""
    households = HouseholdService(db)
    if await households.get_all():
        logger.info("Sample data skipped: households already present")
        return False

    users = UserService(db)
    lists = ShoppingListService(db)
    items = ItemService(db)
    for household_name, sample in SAMPLE_HOUSEHOLDS.items():
        household = await households.add(HouseholdCreate(name=household_name))
        members = [
            await users.add(UserCreate(
                username=username.lower(), name=username,
                password=password, household_id=household.id,
            ))
            for username in sample["users"]
        ]
        shopping_list = await lists.add(ShoppingListCreate(
            name=sample["list"], is_default=True, household_id=household.id,
        ))
        for name, quantity, checked in sample["items"]:
            await items.add(ItemCreate(
                name=name, quantity=quantity, is_checked=checked,
                shopping_list_id=shopping_list.id, added_by_user_id=members[0].id,
            ))
    logger.info(f"Sample data created: {len(SAMPLE_HOUSEHOLDS)} households")
    return True
