"""Pydantic Schemas — wire records for the four aggregates.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Relationships cross the wire as flat ids only (householdId, userIds, ...)
    - camelCase on the wire, snake_case in Python (alias generator)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Display variants add one human-readable field per referenced entity, read paths only
"""
