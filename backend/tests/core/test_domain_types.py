"""Domain Types — verifies identity types, enums and the edge table.

Tests:
    - NewType wrappers exist and are callable
    - Node ids and references are typed with the identity of the node they point at
    - EntityType values are the human-readable names used in error messages
    - EDGES describes every edge once; only ITEM_ADDED_BY is non-owning
"""

from typing import get_args, get_type_hints

from foodlist.core.domain_types import (
    EDGES, EdgeType, EntityType,
    HouseholdId, ItemId, ShoppingListId, UserId,
)
from foodlist.core.entity_graph import HouseholdNode, ItemNode, ShoppingListNode, UserNode


def test_identity_types_wrap_int():
    assert HouseholdId(1) == 1
    assert UserId(2) == 2
    assert ShoppingListId(3) == 3
    assert ItemId(4) == 4


def test_node_references_use_identity_types():
    item = get_type_hints(ItemNode)
    assert ItemId in get_args(item["id"])
    assert ShoppingListId in get_args(item["shopping_list_id"])
    assert UserId in get_args(item["added_by_user_id"])
    assert HouseholdId in get_args(get_type_hints(UserNode)["household_id"])
    assert get_type_hints(HouseholdNode)["user_ids"] == set[UserId]
    assert get_type_hints(ShoppingListNode)["item_ids"] == set[ItemId]


def test_entity_type_values_are_display_names():
    assert [t.value for t in EntityType] == [
        "Household", "User", "ShoppingList", "Item",
    ]


def test_every_edge_type_is_described():
    assert set(EDGES) == set(EdgeType)


def test_owning_edges_keep_a_collection():
    for edge, spec in EDGES.items():
        if spec.owning:
            assert spec.collection_attr is not None, edge


def test_added_by_is_a_referencing_edge():
    spec = EDGES[EdgeType.ITEM_ADDED_BY]
    assert spec.owning is False
    assert spec.collection_attr is None
    assert spec.owner_type == EntityType.USER
    assert spec.child_type == EntityType.ITEM
    assert spec.back_ref_attr == "added_by_user_id"


def test_enums_serialize_to_string():
    assert EntityType.SHOPPING_LIST == "ShoppingList"
    assert EdgeType.SHOPPING_LIST_ITEMS.value == "shopping_list_items"
