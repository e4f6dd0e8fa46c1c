"""Aggregate Service Base — shared lookup, existence checks and logging for the four services.

Invariants:
    - get/update/delete on a missing id raise ResourceNotFoundError (update never creates)
    - Only classified errors (FoodlistError) are logged as client faults here;
      everything else propagates untouched to the API catch-all
    - Every public operation opens its own UnitOfWork (one transaction); mutating
      operations enter it with `async with`, so a failure rolls back everything they wrote
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from foodlist.core.domain_types import EntityType
from foodlist.core.entity_graph import Node
from foodlist.core.errors import EntityValidationError, FoodlistError, ResourceNotFoundError
from foodlist.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AggregateService:
    """Base for HouseholdService, UserService, ShoppingListService, ItemService."""

    entity_type: EntityType

    def __init__(self, db: AsyncSession):
        self.db = db

    def _unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self.db)

    async def _require(self, uow: UnitOfWork, entity_id: int | None) -> Node:
        if entity_id is None:
            raise EntityValidationError("id is required", "id")
        node = await uow.load(self.entity_type, entity_id)
        if node is None:
            raise ResourceNotFoundError(self.entity_type.value, entity_id)
        return node

    async def _require_exists(self, uow: UnitOfWork, entity_id: int) -> None:
        if not await uow.store(self.entity_type).exists_by_id(entity_id):
            raise ResourceNotFoundError(self.entity_type.value, entity_id)

    def _log_change(self, action: str, node: Node) -> None:
        logger.info(
            f"{self.entity_type.value} {node.id} {action}",
            extra={
                "entity_type": self.entity_type.value,
                "entity_id": node.id,
                "operation": action,
            },
        )

    def _log_rejected(self, action: str, exc: FoodlistError) -> None:
        logger.warning(
            f"{self.entity_type.value} {action} rejected: {exc.message}",
            extra={
                "entity_type": self.entity_type.value,
                "error_code": exc.code,
                "operation": action,
            },
        )
