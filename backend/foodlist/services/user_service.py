"""User Service — CRUD for users and their household membership.

Invariants:
    - householdId resolved strictly: unknown id -> ReferenceNotFoundError, never a silent null
    - Moving a user between households updates both households' member sets
    - Usernames are unique (ConflictError on clash, also when the unique index is what catches it)
    - Passwords are only ever stored hashed; the hash never leaves this layer
    - delete nulls the user out as adder on every item; items are kept

Design Decisions:
    - werkzeug's salted hash: no auth flow lives here, only credential storage
    - Users created without a password get an unusable hash ("!") — they cannot log in
      until a password is set through update
"""

import logging

from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from foodlist.core.domain_types import EdgeType, EntityType, UserId
from foodlist.core.entity_graph import UserNode
from foodlist.core.errors import ConflictError, ErrorContext, FoodlistError
from foodlist.core.sync_relationships import attach, reassign
from foodlist.core.validate_entities import validate_node
from foodlist.schemas.user import UserCreate, UserDisplay, UserResponse, UserUpdate
from foodlist.services.aggregate_service import AggregateService, utc_now
from foodlist.services.cascade_delete import delete_user
from foodlist.services.map_records import (
    USER_SCALARS, apply_scalars, user_display, user_draft, user_record,
)
from foodlist.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

UNUSABLE_PASSWORD = "!"


class UserService(AggregateService):
    """User aggregate operations."""

    entity_type = EntityType.USER

    async def add(self, record: UserCreate) -> UserResponse:
        async with self._unit_of_work() as uow:
            try:
                user = user_draft(record, self._hash_password(record.password, record.username))
                validate_node(user)
                await self._check_username_free(uow, user.username)
                household = await uow.resolve(
                    EntityType.HOUSEHOLD, record.household_id, "householdId",
                )

                user.created_at = utc_now()
                try:
                    await uow.insert(user)
                except IntegrityError as e:
                    await self._raise_if_username_taken(uow, user, e)
                    raise
                if household is not None:
                    attach(uow.graph, household, user, EdgeType.HOUSEHOLD_USERS)
                await uow.commit()
            except FoodlistError as e:
                self._log_rejected("add", e)
                raise
        self._log_change("created", user)
        return user_record(user)

    async def get_all(self) -> list[UserDisplay]:
        uow = self._unit_of_work()
        users = await uow.load_all(self.entity_type)
        return [await self._display(uow, u) for u in users]

    async def get_by_id(self, user_id: UserId) -> UserDisplay:
        uow = self._unit_of_work()
        return await self._display(uow, await self._require(uow, user_id))

    async def update(self, record: UserUpdate) -> UserResponse:
        async with self._unit_of_work() as uow:
            try:
                user: UserNode = await self._require(uow, record.id)
                previous_username = user.username
                apply_scalars(user, record, USER_SCALARS)
                validate_node(user)
                if user.username != previous_username:
                    await self._check_username_free(uow, user.username)
                if "password" in record.model_fields_set and record.password:
                    user.password_hash = generate_password_hash(record.password)
                uow.graph.mark_dirty(user)

                if "household_id" in record.model_fields_set:
                    household = await uow.resolve(
                        EntityType.HOUSEHOLD, record.household_id, "householdId",
                    )
                    # Load the current household so its member set drops this user
                    await uow.load(EntityType.HOUSEHOLD, user.household_id)
                    reassign(uow.graph, user, household, EdgeType.HOUSEHOLD_USERS)
                try:
                    await uow.commit()
                except IntegrityError as e:
                    await self._raise_if_username_taken(uow, user, e)
                    raise
            except FoodlistError as e:
                self._log_rejected("update", e)
                raise
        self._log_change("updated", user)
        return user_record(user)

    async def delete_by_id(self, user_id: UserId) -> None:
        async with self._unit_of_work() as uow:
            await self._require_exists(uow, user_id)
            user = await self._require(uow, user_id)
            await uow.load(EntityType.HOUSEHOLD, user.household_id)
            await delete_user(uow, user)
            await uow.commit()
        self._log_change("deleted", user)

    async def _check_username_free(self, uow: UnitOfWork, username: str) -> None:
        existing = await uow.users.find_by_username(username)
        if existing is not None:
            raise self._username_taken(username, existing.id)

    async def _raise_if_username_taken(
        self, uow: UnitOfWork, user: UserNode, exc: IntegrityError,
    ) -> None:
        """A concurrent writer won the unique index: report it as the clash it is."""
        await uow.db.rollback()
        existing = await uow.users.find_by_username(user.username)
        if existing is not None and existing.id != user.id:
            raise self._username_taken(user.username, existing.id) from exc

    def _username_taken(self, username: str, existing_id: int) -> ConflictError:
        return ConflictError(
            f"Username '{username}' is already taken",
            ErrorContext(entity_type=self.entity_type.value, entity_id=existing_id, field="username"),
        )

    async def _display(self, uow: UnitOfWork, user: UserNode) -> UserDisplay:
        household = await uow.load(EntityType.HOUSEHOLD, user.household_id)
        return user_display(user, household)

    @staticmethod
    def _hash_password(password: str | None, username: str) -> str:
        if not password:
            logger.warning(
                f"No password given for new user '{username}'; storing an unusable hash",
                extra={"entity_type": EntityType.USER.value},
            )
            return UNUSABLE_PASSWORD
        return generate_password_hash(password)
