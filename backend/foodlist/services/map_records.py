"""Record Mapping — converts wire records to draft nodes and nodes back to wire records.

Invariants:
    - Drafts never carry relationships: those are attached by the services after resolution
    - Outward records expose child ids only (sorted), never nested child records,
      except the shopping list display view which embeds flat item records
    - Display views read referenced nodes but never mutate them
    - The password hash never appears in any outward record

Design Decisions:
    - Plain functions over a mapper class: the mapping is stateless
    - apply_scalars copies only fields the client actually sent (model_fields_set), so
      an update never resets unrelated persisted state to schema defaults
"""

from pydantic import BaseModel

from foodlist.core.entity_graph import HouseholdNode, ItemNode, ShoppingListNode, UserNode
from foodlist.schemas.household import HouseholdCreate, HouseholdResponse
from foodlist.schemas.item import ItemCreate, ItemDisplay, ItemResponse
from foodlist.schemas.shopping_list import (
    ShoppingListCreate, ShoppingListDisplay, ShoppingListResponse,
)
from foodlist.schemas.user import UserCreate, UserDisplay, UserResponse

HOUSEHOLD_SCALARS = ("name",)
USER_SCALARS = ("username", "name", "enabled")
SHOPPING_LIST_SCALARS = ("name", "is_default")
ITEM_SCALARS = ("name", "quantity", "is_checked")


def apply_scalars(node: object, record: BaseModel, fields: tuple[str, ...]) -> list[str]:
    """Copy the scalar fields present in record onto node. Returns the fields copied."""
    copied = []
    for name in fields:
        if name in record.model_fields_set:
            setattr(node, name, getattr(record, name))
            copied.append(name)
    return copied


# ─── Household ──────────────────────────────────────────────────

def household_draft(record: HouseholdCreate) -> HouseholdNode:
    return HouseholdNode(name=record.name)


def household_record(node: HouseholdNode) -> HouseholdResponse:
    return HouseholdResponse(
        id=node.id,
        name=node.name,
        created_at=node.created_at,
        user_ids=sorted(node.user_ids),
        shopping_list_ids=sorted(node.shopping_list_ids),
    )


# ─── User ───────────────────────────────────────────────────────

def user_draft(record: UserCreate, password_hash: str) -> UserNode:
    return UserNode(
        username=record.username,
        password_hash=password_hash,
        name=record.name,
        enabled=record.enabled,
    )


def user_record(node: UserNode) -> UserResponse:
    return UserResponse(
        id=node.id,
        username=node.username,
        name=node.name,
        enabled=node.enabled,
        created_at=node.created_at,
        household_id=node.household_id,
    )


def user_display(node: UserNode, household: HouseholdNode | None) -> UserDisplay:
    return UserDisplay(
        **user_record(node).model_dump(),
        household_name=household.name if household else None,
    )


# ─── ShoppingList ───────────────────────────────────────────────

def shopping_list_draft(record: ShoppingListCreate) -> ShoppingListNode:
    return ShoppingListNode(name=record.name, is_default=record.is_default)


def shopping_list_record(node: ShoppingListNode) -> ShoppingListResponse:
    return ShoppingListResponse(
        id=node.id,
        name=node.name,
        is_default=node.is_default,
        created_at=node.created_at,
        household_id=node.household_id,
        item_ids=sorted(node.item_ids),
    )


def shopping_list_display(
    node: ShoppingListNode,
    household: HouseholdNode | None,
    items: list[ItemNode],
) -> ShoppingListDisplay:
    return ShoppingListDisplay(
        **shopping_list_record(node).model_dump(),
        household_name=household.name if household else None,
        items=[item_record(i) for i in sorted(items, key=lambda i: i.id)],
    )


# ─── Item ───────────────────────────────────────────────────────

def item_draft(record: ItemCreate) -> ItemNode:
    return ItemNode(
        name=record.name,
        quantity=record.quantity,
        is_checked=record.is_checked,
    )


def item_record(node: ItemNode) -> ItemResponse:
    return ItemResponse(
        id=node.id,
        name=node.name,
        quantity=node.quantity,
        is_checked=node.is_checked,
        added_at=node.added_at,
        added_by_user_id=node.added_by_user_id,
        shopping_list_id=node.shopping_list_id,
    )


def item_display(
    node: ItemNode,
    added_by: UserNode | None,
    shopping_list: ShoppingListNode | None,
) -> ItemDisplay:
    return ItemDisplay(
        **item_record(node).model_dump(),
        added_by_username=added_by.username if added_by else None,
        shopping_list_name=shopping_list.name if shopping_list else None,
    )
