"""Services Layer — aggregate services, reference resolution, cascades, unit of work.

Invariants:
    - One service per aggregate (household, user, shopping list, item)
    - Every public service operation is one transaction (one UnitOfWork, one commit)
    - Cascades are explicit routines (cascade_delete.py), never ORM side effects

Design Decisions:
    - Services speak wire records (schemas/) outward and entity nodes (core/) inward
"""
