"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions (sync_relationships, validate_entities) are never async —
      the shell orchestrates the async calls around the pure logic
    - save() assigns the id (and creation timestamp) of a new node in place and returns it
"""

from typing import Protocol, TypeVar

from foodlist.core.entity_graph import Node

NodeT = TypeVar("NodeT", bound=Node)


class EntityStore(Protocol[NodeT]):
    """Identity Store contract for one aggregate type — implemented by shell."""
    async def find_by_id(self, entity_id: int) -> NodeT | None: ...
    async def exists_by_id(self, entity_id: int) -> bool: ...
    async def find_all(self) -> list[NodeT]: ...
    async def save(self, node: NodeT) -> NodeT: ...
    async def delete_by_id(self, entity_id: int) -> None: ...

