"""Reference Resolver — turns flat ids from a wire record into live entity nodes.

Invariants:
    - None id -> None reference (relationship left unset, not an error)
    - Present id with no stored entity -> ReferenceNotFoundError(entity_type, id, field)
    - A list fails as a whole on its first unresolvable id; nothing is silently dropped
    - Duplicate ids in a list resolve to one node, first occurrence order preserved
    - Resolved nodes are registered in the arena when one is given (one instance per id)

Design Decisions:
    - Async module functions over a class: the only state is the store and the arena,
      both passed in (shell-side because it does IO through the store Protocol)
"""

from foodlist.core.domain_types import EntityType
from foodlist.core.entity_graph import EntityGraph, Node
from foodlist.core.errors import ReferenceNotFoundError
from foodlist.core.repository_protocols import EntityStore


async def resolve_reference(
    store: EntityStore,
    entity_type: EntityType,
    entity_id: int | None,
    field: str | None = None,
    graph: EntityGraph | None = None,
) -> Node | None:
    """Resolve one id or raise ReferenceNotFoundError."""
    if entity_id is None:
        return None
    if graph is not None:
        loaded = graph.get(entity_type, entity_id)
        if loaded is not None:
            return loaded

    node = await store.find_by_id(entity_id)
    if node is None:
        raise ReferenceNotFoundError(entity_type.value, entity_id, field)
    return graph.put(node) if graph is not None else node


async def resolve_references(
    store: EntityStore,
    entity_type: EntityType,
    entity_ids: list[int] | None,
    field: str | None = None,
    graph: EntityGraph | None = None,
) -> list[Node] | None:
    """Resolve every id in the list; any miss fails the whole list."""
    if entity_ids is None:
        return None
    resolved: list[Node] = []
    seen: set[int] = set()
    for entity_id in entity_ids:
        if entity_id in seen:
            continue
        seen.add(entity_id)
        resolved.append(
            await resolve_reference(store, entity_type, entity_id, field, graph),
        )
    return resolved
