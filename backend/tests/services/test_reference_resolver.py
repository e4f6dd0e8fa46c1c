"""Reference Resolver — strict id resolution against a store.

Invariants:
    - None id -> None, store never consulted
    - Unknown id -> ReferenceNotFoundError carrying type, id and field
    - A list fails whole on its first miss; duplicates collapse to one node
    - Arena hits short-circuit the store
"""

import pytest

from foodlist.core.domain_types import EntityType
from foodlist.core.entity_graph import EntityGraph, UserNode
from foodlist.core.errors import ReferenceNotFoundError
from foodlist.services.reference_resolver import resolve_reference, resolve_references


class _FakeUserStore:
    def __init__(self, *ids):
        self.rows = {i: UserNode(username=f"user{i}", id=i) for i in ids}
        self.lookups = []

    async def find_by_id(self, entity_id):
        self.lookups.append(entity_id)
        row = self.rows.get(entity_id)
        return UserNode(username=row.username, id=row.id) if row else None


async def test_none_resolves_to_none_without_lookup():
    store = _FakeUserStore(1)
    assert await resolve_reference(store, EntityType.USER, None) is None
    assert store.lookups == []


async def test_known_id_resolves():
    node = await resolve_reference(_FakeUserStore(1), EntityType.USER, 1)
    assert node.id == 1


async def test_unknown_id_raises_with_field():
    with pytest.raises(ReferenceNotFoundError) as exc:
        await resolve_reference(_FakeUserStore(1), EntityType.USER, 99, "addedByUserId")
    assert exc.value.entity_type == "User"
    assert exc.value.entity_id == 99
    assert exc.value.field == "addedByUserId"


async def test_arena_hit_skips_store():
    graph = EntityGraph()
    loaded = graph.put(UserNode(username="finn", id=1))
    store = _FakeUserStore(1)
    assert await resolve_reference(store, EntityType.USER, 1, graph=graph) is loaded
    assert store.lookups == []


async def test_resolved_node_enters_arena():
    graph = EntityGraph()
    node = await resolve_reference(_FakeUserStore(2), EntityType.USER, 2, graph=graph)
    assert graph.get(EntityType.USER, 2) is node


async def test_list_none_is_none():
    assert await resolve_references(_FakeUserStore(), EntityType.USER, None) is None


async def test_list_deduplicates_in_order():
    nodes = await resolve_references(_FakeUserStore(1, 2, 3), EntityType.USER, [3, 1, 3])
    assert [n.id for n in nodes] == [3, 1]


async def test_list_fails_whole_on_first_miss():
    store = _FakeUserStore(1, 2)
    with pytest.raises(ReferenceNotFoundError) as exc:
        await resolve_references(store, EntityType.USER, [1, 99, 2], "userIds")
    assert exc.value.entity_id == 99
    assert 2 not in store.lookups
