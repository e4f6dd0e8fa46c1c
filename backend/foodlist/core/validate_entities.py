"""Entity Validation — scalar constraints checked before any write.

Invariants:
    - Names/usernames are non-empty after stripping whitespace
    - Quantity must be an int; negative values are rejected
    - Raises EntityValidationError (400) — never returns a partial result

Design Decisions:
    - Duplicated at the pydantic boundary on purpose: services are also called
      directly (seeding, tests) without going through request validation
"""

from foodlist.core.entity_graph import HouseholdNode, ItemNode, Node, ShoppingListNode, UserNode
from foodlist.core.errors import EntityValidationError


def require_text(value: str | None, field: str) -> str:
    """Return the stripped value or raise if it is empty."""
    if value is None or not value.strip():
        raise EntityValidationError(f"{field} cannot be empty or whitespace", field)
    return value.strip()


def check_quantity(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EntityValidationError("quantity must be an integer", "quantity")
    if value < 0:
        raise EntityValidationError("quantity cannot be negative", "quantity")
    return value


def validate_node(node: Node) -> None:
    """Check the scalar constraints of any aggregate node in place."""
    if isinstance(node, HouseholdNode):
        node.name = require_text(node.name, "name")
    elif isinstance(node, UserNode):
        node.username = require_text(node.username, "username")
    elif isinstance(node, ShoppingListNode):
        node.name = require_text(node.name, "name")
    elif isinstance(node, ItemNode):
        node.name = require_text(node.name, "name")
        check_quantity(node.quantity)
