"""Wire Record Base — shared pydantic config and field helpers.

Invariants:
    - Every record accepts both camelCase aliases and snake_case field names
    - Text fields are stripped; blank text is rejected

Design Decisions:
    - alias_generator over per-field Field(alias=...): one rule for every record
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireRecord(BaseModel):
    """Base for all request/response records."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True,
    )


def strip_required(value: str | None, field: str) -> str | None:
    """Shared body of the 'strip and reject blank' field validators (None passes through)."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(f"{field} cannot be empty or whitespace")
    return value
