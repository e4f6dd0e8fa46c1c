"""Relationship Synchronizer — keeps both sides of an edge consistent in the arena.

Invariants:
    - After attach(owner, child): child.<back_ref> == owner.id and owner.<collection> holds child.id
    - After detach(owner, child): neither holds
    - Ownership is exclusive: attaching a child removes it from its previous owner's collection
    - replace_all only touches members in the symmetric difference; unchanged members stay untouched
    - Every node whose state changed is marked dirty; nothing else is

Design Decisions:
    - Pure functions over the arena (no IO): the services decide when to flush
    - Referencing edges (collection_attr None) only move the back-reference
    - Detached children become unaffiliated, not deleted — deletion is an explicit service routine
"""

from dataclasses import dataclass, field

from foodlist.core.domain_types import EDGES, EdgeSpec, EdgeType
from foodlist.core.entity_graph import EntityGraph, Node


@dataclass
class SyncResult:
    """Ids attached/detached by a replace_all call."""
    attached: list[int] = field(default_factory=list)
    detached: list[int] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.attached or self.detached)


def attach(graph: EntityGraph, owner: Node, child: Node, edge: EdgeType) -> bool:
    """Link child to owner on both sides. Returns True if anything changed."""
    spec = _check_edge(owner, child, edge)
    changed = False

    previous_owner_id = getattr(child, spec.back_ref_attr)
    if previous_owner_id is not None and previous_owner_id != owner.id:
        previous = graph.get(spec.owner_type, previous_owner_id)
        if previous is not None and _discard(previous, spec, child.id):
            graph.mark_dirty(previous)

    if previous_owner_id != owner.id:
        setattr(child, spec.back_ref_attr, owner.id)
        graph.mark_dirty(child)
        changed = True

    if _add(owner, spec, child.id):
        graph.mark_dirty(owner)
        changed = True
    return changed


def detach(graph: EntityGraph, owner: Node, child: Node, edge: EdgeType) -> bool:
    """Unlink child from owner on both sides. Returns True if anything changed."""
    spec = _check_edge(owner, child, edge)
    changed = False

    if getattr(child, spec.back_ref_attr) == owner.id:
        setattr(child, spec.back_ref_attr, None)
        graph.mark_dirty(child)
        changed = True

    if _discard(owner, spec, child.id):
        graph.mark_dirty(owner)
        changed = True
    return changed


def replace_all(
    graph: EntityGraph, owner: Node, new_children: list[Node], edge: EdgeType,
) -> SyncResult:
    """Make owner's collection equal new_children, fixing every back-reference."""
    spec = EDGES[edge]
    if spec.collection_attr is None:
        raise ValueError(f"Edge {edge.value} has no collection side")

    current_ids = set(getattr(owner, spec.collection_attr))
    wanted = {c.id: c for c in new_children}
    result = SyncResult()

    for child_id in sorted(current_ids - wanted.keys()):
        child = graph.get(spec.child_type, child_id)
        if child is None:
            # Not loaded: only the collection side is ours to fix
            if _discard(owner, spec, child_id):
                graph.mark_dirty(owner)
        else:
            detach(graph, owner, child, edge)
        result.detached.append(child_id)

    for child_id in sorted(wanted.keys() - current_ids):
        attach(graph, owner, wanted[child_id], edge)
        result.attached.append(child_id)

    return result


def reassign(
    graph: EntityGraph, child: Node, new_owner: Node | None, edge: EdgeType,
) -> bool:
    """Point child's singular back-reference at new_owner (None clears it)."""
    spec = EDGES[edge]
    if new_owner is not None:
        return attach(graph, new_owner, child, edge)

    current_owner_id = getattr(child, spec.back_ref_attr)
    if current_owner_id is None:
        return False
    current = graph.get(spec.owner_type, current_owner_id)
    if current is not None:
        return detach(graph, current, child, edge)
    setattr(child, spec.back_ref_attr, None)
    graph.mark_dirty(child)
    return True


def _check_edge(owner: Node, child: Node, edge: EdgeType) -> EdgeSpec:
    spec = EDGES[edge]
    if owner.entity_type != spec.owner_type or child.entity_type != spec.child_type:
        raise TypeError(
            f"Edge {edge.value} links {spec.owner_type.value} -> {spec.child_type.value}, "
            f"got {owner.entity_type.value} -> {child.entity_type.value}",
        )
    if owner.id is None or child.id is None:
        raise ValueError("Both ends of an edge must be saved before linking")
    return spec


def _add(owner: Node, spec: EdgeSpec, child_id: int) -> bool:
    if spec.collection_attr is None:
        return False
    collection: set[int] = getattr(owner, spec.collection_attr)
    if child_id in collection:
        return False
    collection.add(child_id)
    return True


def _discard(owner: Node, spec: EdgeSpec, child_id: int) -> bool:
    if spec.collection_attr is None:
        return False
    collection: set[int] = getattr(owner, spec.collection_attr)
    if child_id not in collection:
        return False
    collection.discard(child_id)
    return True
